"""Per-request orchestration: validate, classify, dedup, count, render."""

import enum
import logging
import time
from dataclasses import dataclass

from .bots import is_bot
from .errors import NameNotAllowed
from .fingerprint import fingerprint
from .render import RenderedImage, render
from .request_info import parse_request

logger = logging.getLogger(__name__)


class VisitOutcome(enum.Enum):
    COUNTED = "counted"
    DUPLICATE = "duplicate"
    BOT = "bot"


@dataclass(frozen=True)
class CounterResult:
    name: str
    count: int
    outcome: VisitOutcome
    image: RenderedImage


class Pipeline:
    """Runs one request against the configured stores.

    The dedup check and the record that follows it are separate calls, so two
    concurrent requests with the same fingerprint can both be counted.
    """

    def __init__(self, settings, counters, dedup, clock=time.time):
        self.settings = settings
        self.counters = counters
        self.dedup = dedup
        self.clock = clock

    def classify(self, info, now):
        if is_bot(info.user_agent):
            return VisitOutcome.BOT
        fp = fingerprint(
            info.source_ip, info.user_agent, now, self.settings.dedup_window_seconds, scope=info.name
        )
        if self.dedup.is_duplicate(fp, now):
            return VisitOutcome.DUPLICATE
        self.dedup.record(fp, now)
        return VisitOutcome.COUNTED

    def count(self, name, outcome):
        if outcome is VisitOutcome.COUNTED:
            return self.counters.increment(name)
        return self.counters.read(name)

    def run(self, event):
        info = parse_request(event, self.settings.default_name)
        if not self.settings.is_allowed(info.name):
            raise NameNotAllowed(info.name)

        now = self.clock()
        outcome = self.classify(info, now)
        count = self.count(info.name, outcome)
        image = render(count, self.settings.min_width, self.settings.group_digits)
        logger.info("counter=%s count=%d visit=%s", info.name, count, outcome.value)
        return CounterResult(info.name, count, outcome, image)
