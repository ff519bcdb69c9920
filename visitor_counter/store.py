"""Counter and recent-visit storage in DynamoDB.

Counters and dedup records share one table keyed on ``pk``:

* ``{"pk": <counter name>, "count": N}`` holds a counter. It is created by the
  first atomic update and never deleted here.
* ``{"pk": "visit#<digest>", "created_at": N, "expires_at": N}`` marks a
  visit fingerprint seen recently. ``expires_at`` is the table's TTL
  attribute. DynamoDB deletes expired items lazily, so reads compare it with
  the clock as well.

Every botocore failure is re-raised as ``StorageUnavailable``. Nothing is
cached and nothing is retried; the client makes exactly one attempt per call.
"""

import logging
import time

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .errors import StorageUnavailable

logger = logging.getLogger(__name__)

KEY_ATTR = "pk"
COUNT_ATTR = "count"
CREATED_ATTR = "created_at"
EXPIRES_ATTR = "expires_at"
VISIT_PREFIX = "visit#"

# DynamoDB normally answers in a few milliseconds; the SDK default 60s
# timeouts would outlive the function's deadline. A single attempt only: the
# counter update is not idempotent, and a resend after a read timeout would
# count a visit twice.
CLIENT_CONFIG = Config(
    connect_timeout=0.5,
    read_timeout=0.5,
    retries={"total_max_attempts": 1, "mode": "standard"},
)


def make_client(**kwargs):
    """Build the low-level DynamoDB client used by both stores."""
    kwargs.setdefault("config", CLIENT_CONFIG)
    return boto3.client("dynamodb", **kwargs)


class CounterStore:
    def __init__(self, client, table_name):
        self.client = client
        self.table_name = table_name

    def increment(self, name):
        """Atomically add one to ``name`` and return the new value."""
        try:
            resp = self.client.update_item(
                TableName=self.table_name,
                Key={KEY_ATTR: {"S": name}},
                UpdateExpression="SET #c = if_not_exists(#c, :zero) + :one",
                ExpressionAttributeNames={"#c": COUNT_ATTR},
                ExpressionAttributeValues={":zero": {"N": "0"}, ":one": {"N": "1"}},
                ReturnValues="UPDATED_NEW",
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("increment of counter %r failed: %s", name, e, exc_info=True)
            raise StorageUnavailable(f"could not increment counter {name!r}") from e
        return int(resp["Attributes"][COUNT_ATTR]["N"])

    def read(self, name):
        """Return the current value of ``name``; a missing counter reads as 0."""
        try:
            resp = self.client.get_item(
                TableName=self.table_name,
                Key={KEY_ATTR: {"S": name}},
                ProjectionExpression="#c",
                ExpressionAttributeNames={"#c": COUNT_ATTR},
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("read of counter %r failed: %s", name, e, exc_info=True)
            raise StorageUnavailable(f"could not read counter {name!r}") from e
        item = resp.get("Item")
        if not item or COUNT_ATTR not in item:
            return 0
        return int(item[COUNT_ATTR]["N"])


class DedupStore:
    def __init__(self, client, table_name, window_seconds):
        self.client = client
        self.table_name = table_name
        self.window_seconds = window_seconds

    @staticmethod
    def _key(fp):
        return {KEY_ATTR: {"S": VISIT_PREFIX + fp}}

    def is_duplicate(self, fp, now=None):
        """True if ``fp`` was recorded and its record hasn't expired yet."""
        now = int(time.time() if now is None else now)
        try:
            resp = self.client.get_item(
                TableName=self.table_name,
                Key=self._key(fp),
                ProjectionExpression="#e",
                ExpressionAttributeNames={"#e": EXPIRES_ATTR},
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("dedup lookup failed: %s", e, exc_info=True)
            raise StorageUnavailable("could not check recent visits") from e
        item = resp.get("Item")
        if not item or EXPIRES_ATTR not in item:
            return False
        return int(item[EXPIRES_ATTR]["N"]) > now

    def record(self, fp, now=None):
        """Write (or overwrite) the dedup record for ``fp``."""
        now = int(time.time() if now is None else now)
        try:
            self.client.put_item(
                TableName=self.table_name,
                Item={
                    **self._key(fp),
                    CREATED_ATTR: {"N": str(now)},
                    EXPIRES_ATTR: {"N": str(now + self.window_seconds)},
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("dedup record failed: %s", e, exc_info=True)
            raise StorageUnavailable("could not record visit") from e
