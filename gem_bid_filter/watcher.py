import os
import time
import logging
from typing import Callable, Optional

from .config import DEBOUNCE_SECONDS, POLL_INTERVAL

logger = logging.getLogger(__name__)


class ChangeDebouncer:
    """Coalesce a burst of change signals into one refresh after a quiet period."""

    def __init__(self, quiet_period: float = DEBOUNCE_SECONDS):
        self.quiet_period = quiet_period
        self.last_change: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self.last_change is not None

    def notify(self, now: Optional[float] = None):
        self.last_change = time.monotonic() if now is None else now

    def due(self, now: Optional[float] = None) -> bool:
        if self.last_change is None:
            return False
        now = time.monotonic() if now is None else now
        return now - self.last_change >= self.quiet_period

    def reset(self):
        self.last_change = None


class DocumentWatcher:
    """
    Poll a saved page for changes and call `on_change` once per burst of writes.

    Args:
        path: HTML file to watch
        on_change: Callback run after the file has been quiet for the debounce window
        poll_interval: Seconds between checks
        debouncer: Optional ChangeDebouncer (defaults to DEBOUNCE_SECONDS)
    """

    def __init__(self, path: str, on_change: Callable[[], None], poll_interval: float = POLL_INTERVAL, debouncer: Optional[ChangeDebouncer] = None):
        self.path = path
        self.on_change = on_change
        self.poll_interval = poll_interval
        self.debouncer = debouncer or ChangeDebouncer()
        self._last_mtime = self._mtime()

    def _mtime(self) -> Optional[float]:
        try:
            return os.path.getmtime(self.path)
        except OSError:
            return None

    def poll_once(self, now: Optional[float] = None) -> bool:
        """One watch step. Returns True when the callback ran."""
        mtime = self._mtime()
        if mtime != self._last_mtime:
            self._last_mtime = mtime
            if mtime is not None:
                self.debouncer.notify(now)

        if self.debouncer.due(now):
            self.debouncer.reset()
            logger.info(f"{self.path} changed, refreshing")
            self.on_change()
            return True
        return False

    def run(self, max_polls: Optional[int] = None):
        logger.info(f"Watching {self.path} (poll every {self.poll_interval}s)")
        polls = 0
        while max_polls is None or polls < max_polls:
            self.poll_once()
            polls += 1
            time.sleep(self.poll_interval)
