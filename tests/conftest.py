"""Test configuration and fixtures."""

import io

import pytest
import boto3
from moto import mock_aws
from PIL import Image

from visitor_counter import app as app_module
from visitor_counter.config import Settings
from visitor_counter.glyphs import GLYPH_HEIGHT, GLYPH_WIDTH, GLYPHS, glyph_pixels
from visitor_counter.pipeline import Pipeline
from visitor_counter.store import CounterStore, DedupStore

TABLE = "visitor-counter-test"
START = 1_699_999_200  # start of a 3600s window


class FakeClock:
    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def _make_event(name=None, ip="203.0.113.7", ua="Mozilla/5.0 (X11; Linux x86_64) Firefox/118.0", path="/", method="GET"):
    """API Gateway HTTP API / Function URL payload (format 2.0)."""
    event = {
        "version": "2.0",
        "rawPath": path,
        "headers": {"user-agent": ua} if ua is not None else {},
        "requestContext": {"http": {"method": method, "path": path, "sourceIp": ip, "userAgent": ua}},
    }
    if name is not None:
        event["queryStringParameters"] = {"name": name}
    return event


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setattr(app_module, "_pipeline", None)


@pytest.fixture
def ddb():
    with mock_aws():
        client = boto3.client("dynamodb", region_name="us-east-1")
        client.create_table(
            TableName=TABLE,
            KeySchema=[{"AttributeName": "pk", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "pk", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        yield client


@pytest.fixture
def settings():
    return Settings(table_name=TABLE, allowed_names=frozenset({"default", "repo-readme"}), min_width=5)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pipeline(ddb, settings, clock):
    return Pipeline(
        settings,
        CounterStore(ddb, TABLE),
        DedupStore(ddb, TABLE, settings.dedup_window_seconds),
        clock=clock,
    )


@pytest.fixture
def make_event():
    return _make_event


def _read_digits(data, count):
    """Decode ``count`` glyph cells of an ungrouped render back into digits."""
    img = Image.open(io.BytesIO(data)).convert("RGBA")
    alpha = img.getchannel("A")
    out = []
    for i in range(count):
        x0 = 1 + i * (GLYPH_WIDTH + 1)
        cell = [alpha.getpixel((x0 + c, 1 + r)) for r in range(GLYPH_HEIGHT) for c in range(GLYPH_WIDTH)]
        matches = [d for d in GLYPHS if glyph_pixels(d) == cell]
        assert len(matches) == 1, f"cell {i} matched {matches}"
        out.append(matches[0])
    return "".join(out)


@pytest.fixture
def read_digits():
    return _read_digits
