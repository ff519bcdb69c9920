"""Pulls the bits the pipeline needs out of a Lambda HTTP event.

Function URLs and HTTP APIs send payload format 2.0; REST APIs (1.0) are
accepted too.
"""

from dataclasses import dataclass

from .errors import InvalidRequest, NotFound


@dataclass(frozen=True)
class RequestInfo:
    name: str
    source_ip: str
    user_agent: str


def _header(event, key):
    for k, v in (event.get("headers") or {}).items():
        if k.lower() == key:
            return v
    return None


def _method_and_path(event):
    http = (event.get("requestContext") or {}).get("http") or {}
    method = http.get("method") or event.get("httpMethod") or "GET"
    path = event.get("rawPath") or http.get("path") or event.get("path") or "/"
    return method.upper(), path


def _source_ip(event):
    ctx = event.get("requestContext") or {}
    ip = (ctx.get("http") or {}).get("sourceIp") or (ctx.get("identity") or {}).get("sourceIp")
    return ip


def _user_agent(event):
    ctx = event.get("requestContext") or {}
    ua = (ctx.get("http") or {}).get("userAgent") or (ctx.get("identity") or {}).get("userAgent")
    return ua or _header(event, "user-agent") or ""


def _counter_name(event, default_name):
    multi = (event.get("multiValueQueryStringParameters") or {}).get("name")
    if multi is not None and len(multi) > 1:
        raise InvalidRequest("name given more than once")
    name = (event.get("queryStringParameters") or {}).get("name")
    if name is None:
        return default_name
    # v2 events join repeated parameters with commas.
    if "," in name:
        raise InvalidRequest("name given more than once")
    if not name:
        raise InvalidRequest("empty counter name")
    return name


def parse_request(event, default_name):
    """Validate the event shape and return a ``RequestInfo``.

    Raises ``NotFound`` for paths other than ``/`` and ``InvalidRequest`` for
    anything else that isn't a well-formed GET.
    """
    if not isinstance(event, dict):
        raise InvalidRequest("event is not an object")
    method, path = _method_and_path(event)
    if path != "/":
        raise NotFound(f"no such path {path!r}")
    if method != "GET":
        raise InvalidRequest(f"method {method} not supported")
    name = _counter_name(event, default_name)
    source_ip = _source_ip(event)
    if not source_ip:
        raise InvalidRequest("request has no source IP")
    return RequestInfo(name=name, source_ip=source_ip, user_agent=_user_agent(event))
