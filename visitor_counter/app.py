import base64, logging

from .config import Settings
from .errors import CounterError, InternalError
from .pipeline import Pipeline
from .store import CounterStore, DedupStore, make_client

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

_pipeline = None


def build_pipeline(settings=None, client=None):
    settings = settings or Settings.from_env()
    client = client or make_client()
    return Pipeline(
        settings,
        CounterStore(client, settings.table_name),
        DedupStore(client, settings.table_name, settings.dedup_window_seconds),
    )


def get_pipeline():
    """Build the pipeline on cold start and reuse it for warm invocations."""
    global _pipeline
    if _pipeline is None:
        _pipeline = build_pipeline()
        logging.getLogger().setLevel(_pipeline.settings.log_level)
        logger.info(
            "cold start: table=%s names=%s min_width=%d window=%ds",
            _pipeline.settings.table_name,
            ",".join(sorted(_pipeline.settings.allowed_names)),
            _pipeline.settings.min_width,
            _pipeline.settings.dedup_window_seconds,
        )
    return _pipeline


def image_response(result):
    return {
        "statusCode": 200,
        "headers": {
            "Content-Type": result.image.content_type,
            "Content-Length": str(len(result.image.data)),
            **NO_CACHE_HEADERS,
            "X-Count-Name": result.name,
            "X-Count": str(result.count),
            "X-Visit": result.outcome.value,
        },
        "body": base64.b64encode(result.image.data).decode("ascii"),
        "isBase64Encoded": True,
    }


def error_response(err):
    return {
        "statusCode": err.status_code,
        "headers": {"Content-Type": "text/plain; charset=utf-8", **NO_CACHE_HEADERS, "X-Error-Kind": err.kind},
        "body": err.message,
        "isBase64Encoded": False,
    }


def handler(event, context):
    try:
        result = get_pipeline().run(event)
    except CounterError as e:
        if e.status_code >= 500:
            logger.error("%s: %s", e.kind, e.message)
        else:
            logger.info("%s: %s", e.kind, e.message)
        return error_response(e)
    except Exception:
        logger.exception("unhandled error")
        return error_response(InternalError("internal error"))
    return image_response(result)
