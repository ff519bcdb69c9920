import pytest
from botocore.exceptions import EndpointConnectionError, ReadTimeoutError

from visitor_counter.errors import StorageUnavailable
from visitor_counter.store import CounterStore, DedupStore, make_client

TABLE = "visitor-counter-test"

T0 = 1_699_999_200


def test_read_missing_counter_is_zero(ddb):
    assert CounterStore(ddb, TABLE).read("default") == 0


def test_increment_creates_and_adds(ddb):
    store = CounterStore(ddb, TABLE)
    assert store.increment("default") == 1
    assert store.increment("default") == 2
    assert store.read("default") == 2
    assert store.read("repo-readme") == 0


def test_counter_item_layout(ddb):
    CounterStore(ddb, TABLE).increment("default")
    item = ddb.get_item(TableName=TABLE, Key={"pk": {"S": "default"}})["Item"]
    assert item == {"pk": {"S": "default"}, "count": {"N": "1"}}


def test_dedup_record_and_lookup(ddb):
    store = DedupStore(ddb, TABLE, 3600)
    assert not store.is_duplicate("abc", T0)
    store.record("abc", T0)
    assert store.is_duplicate("abc", T0)
    assert store.is_duplicate("abc", T0 + 3599)
    assert not store.is_duplicate("def", T0)


def test_dedup_record_expires(ddb):
    store = DedupStore(ddb, TABLE, 3600)
    store.record("abc", T0)
    # TTL deletion is lazy, the item is still there but must read as absent
    assert not store.is_duplicate("abc", T0 + 3600)


def test_dedup_record_overwrites(ddb):
    store = DedupStore(ddb, TABLE, 60)
    store.record("abc", T0)
    store.record("abc", T0 + 50)
    assert store.is_duplicate("abc", T0 + 100)
    item = ddb.get_item(TableName=TABLE, Key={"pk": {"S": "visit#abc"}})["Item"]
    assert item["created_at"] == {"N": str(T0 + 50)}
    assert item["expires_at"] == {"N": str(T0 + 110)}


def test_dedup_records_do_not_touch_counters(ddb):
    DedupStore(ddb, TABLE, 3600).record("default", T0)
    assert CounterStore(ddb, TABLE).read("default") == 0


def test_missing_table_is_storage_unavailable(ddb):
    counters = CounterStore(ddb, "no-such-table")
    dedup = DedupStore(ddb, "no-such-table", 3600)
    with pytest.raises(StorageUnavailable):
        counters.increment("default")
    with pytest.raises(StorageUnavailable):
        counters.read("default")
    with pytest.raises(StorageUnavailable):
        dedup.is_duplicate("abc", T0)
    with pytest.raises(StorageUnavailable):
        dedup.record("abc", T0)


class UnreachableClient:
    def __getattr__(self, name):
        def call(**kwargs):
            raise EndpointConnectionError(endpoint_url="https://dynamodb.us-east-1.amazonaws.com")
        return call


def test_connection_errors_are_storage_unavailable():
    with pytest.raises(StorageUnavailable):
        CounterStore(UnreachableClient(), TABLE).increment("default")
    with pytest.raises(StorageUnavailable):
        DedupStore(UnreachableClient(), TABLE, 3600).is_duplicate("abc")


def test_make_client_uses_short_timeouts(ddb):
    client = make_client(region_name="us-east-1")
    assert client.meta.config.connect_timeout == 0.5
    assert client.meta.config.read_timeout == 0.5
    assert client.meta.config.retries["total_max_attempts"] == 1


class TimesOutOnce:
    """Commits the update, then loses the reply."""

    def __init__(self, client):
        self.client = client
        self.calls = 0

    def update_item(self, **kwargs):
        self.calls += 1
        self.client.update_item(**kwargs)
        raise ReadTimeoutError(endpoint_url="https://dynamodb.us-east-1.amazonaws.com")


def test_lost_increment_reply_is_not_resent(ddb):
    flaky = TimesOutOnce(ddb)
    with pytest.raises(StorageUnavailable):
        CounterStore(flaky, TABLE).increment("default")
    assert flaky.calls == 1
    assert CounterStore(ddb, TABLE).read("default") == 1
