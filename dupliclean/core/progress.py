# dupliclean/core/progress.py
import logging
import time
from typing import Callable, Optional

from tqdm import tqdm

from .models import DEFAULT_PROGRESS_INTERVAL

logger = logging.getLogger(__name__)


def estimate_seconds_remaining(elapsed: float, completed: int, total: int) -> float:
    """Linear extrapolation of the time left from the throughput so far."""
    if completed <= 0:
        return 0.0
    return elapsed * (total - completed) / completed


def format_progress(completed: int, total: int, seconds_left: float) -> str:
    return f"Progress: {completed}/{total}\tETA: {tqdm.format_interval(max(0, round(seconds_left)))}"


class ProgressReporter:
    """
    Emits at most one status line per `interval` seconds of wall-clock time,
    however many items are processed in between.

    `clock` and the `now` argument of `update` exist so tests can drive the
    reporter with synthetic timestamps.
    """

    def __init__(
        self,
        interval: float = DEFAULT_PROGRESS_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        emit: Optional[Callable[[str], None]] = None,
    ):
        self.interval = interval
        self._clock = clock
        self._emit = emit or logger.info
        self.start_time = clock()
        self.next_report_at = self.start_time + interval

    def update(self, index: int, total: int, now: Optional[float] = None) -> bool:
        """Returns True when a status line was emitted for this call."""
        if total <= 0:
            return False
        if now is None:
            now = self._clock()
        if now < self.next_report_at:
            return False

        completed = index + 1
        seconds_left = estimate_seconds_remaining(now - self.start_time, completed, total)
        self._emit(format_progress(completed, total, seconds_left))
        self.next_report_at = now + self.interval
        return True
