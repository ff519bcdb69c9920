"""Error taxonomy for the counter pipeline.

Every failure the handler can turn into a response is a ``CounterError``;
``kind`` goes into the ``X-Error-Kind`` header and ``status_code`` becomes
the response status.
"""


class ConfigError(ValueError):
    """Raised at cold start when an environment setting can't be parsed."""


class CounterError(Exception):
    kind = "InternalError"
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.kind)
        self.message = message or self.kind


class InvalidRequest(CounterError):
    kind = "InvalidRequest"
    status_code = 400


class NameNotAllowed(CounterError):
    kind = "NameNotAllowed"
    status_code = 404

    def __init__(self, name):
        super().__init__(f"counter {name!r} is not allowed")
        self.name = name


class NotFound(CounterError):
    kind = "NotFound"
    status_code = 404


class StorageUnavailable(CounterError):
    kind = "StorageUnavailable"
    status_code = 503


class RenderFailure(CounterError):
    kind = "RenderFailure"
    status_code = 500


class InternalError(CounterError):
    pass
