"""
Run statistics and periodic throughput reporting.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

REPORT_EVERY = 100

Clock = Callable[[], float]


@dataclass
class RunStats:
    """
    Counters for one hunt.

    ``requests`` only ever grows. Elapsed time and rate are derived on demand
    from ``started_at`` and never stored.
    """

    clock: Clock = field(default=time.monotonic, repr=False)
    started_at: float = field(init=False)
    requests: int = 0
    hits: int = 0
    not_found: int = 0
    unexpected: int = 0
    transport_errors: int = 0
    credential_refreshes: int = 0

    def __post_init__(self):
        self.started_at = self.clock()

    def record_request(self) -> int:
        self.requests += 1
        return self.requests

    def should_report(self) -> bool:
        return self.requests > 0 and self.requests % REPORT_EVERY == 0

    def elapsed_seconds(self) -> int:
        """Whole seconds since the hunt started."""
        return int(self.clock() - self.started_at)

    def requests_per_second(self) -> float:
        seconds = self.elapsed_seconds()
        if seconds <= 0:
            # First window finished inside one wall-clock second.
            return math.inf
        return self.requests / seconds

    def format_line(self) -> str:
        total_seconds = self.elapsed_seconds()
        minutes, seconds = divmod(total_seconds, 60)
        rate = self.requests_per_second()
        return f"{self.requests:15} reqs | {minutes:5}m{seconds:02}s | {rate:5.2f} req/s"

    def report(self) -> None:
        logger.info(self.format_line())

    def summary(self) -> str:
        return (
            f"{self.requests} requests, {self.hits} found, {self.not_found} not found, "
            f"{self.unexpected} unexpected, {self.transport_errors} transport errors, "
            f"{self.credential_refreshes} session refreshes"
        )
