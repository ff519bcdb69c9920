"""Visit fingerprints used for dedup.

Only the digest is ever stored, so neither the IP nor the user agent leaves
the invocation.
"""

import hashlib


def time_bucket(now, window_seconds):
    """Floor ``now`` (epoch seconds) to a window index."""
    if window_seconds <= 0:
        raise ValueError("window_seconds must be positive")
    return int(now // window_seconds)


def fingerprint(source_ip, user_agent, now, window_seconds, scope=""):
    """SHA-256 hex digest over IP, user agent and the current time bucket.

    ``scope`` (the counter name) keeps one visit from being deduplicated
    across different counters on the same page.
    """
    bucket = time_bucket(now, window_seconds)
    h = hashlib.sha256()
    for part in (scope, source_ip or "", user_agent or "", str(bucket)):
        h.update(part.encode("utf-8"))
        h.update(b"\x00")
    return h.hexdigest()
