"""User-agent based bot detection."""

import re

# Patterns seen in crawler, monitoring and scripted-client user agents.
# "bot" is anchored so phone brands such as CUBOT don't match.
BOT_PATTERNS = (
    r"(?<!cu)bots?(?:\b|_)",
    r"crawl",
    r"spider",
    r"slurp",
    r"archiver",
    r"facebookexternalhit",
    r"embedly",
    r"web preview",
    r"headless",
    r"phantomjs",
    r"puppeteer",
    r"playwright",
    r"selenium",
    r"lighthouse",
    r"pingdom",
    r"statuscake",
    r"site24x7",
    r"uptime-kuma",
    r"\bmonitoring\b",
    r"\bcurl/",
    r"\bwget/",
    r"httpie",
    r"python-requests",
    r"python-urllib",
    r"aiohttp",
    r"python-httpx",
    r"go-http-client",
    r"okhttp",
    r"\bjava/",
    r"libwww",
    r"scrapy",
    r"feedfetcher",
)

_BOT_PATTERN = re.compile("|".join(BOT_PATTERNS), re.IGNORECASE)


def is_bot(user_agent):
    """Return True when the user agent looks automated.

    A missing or blank user agent counts as automated: browsers always send one.
    """
    ua = (user_agent or "").strip()
    if not ua:
        return True
    return _BOT_PATTERN.search(ua) is not None
