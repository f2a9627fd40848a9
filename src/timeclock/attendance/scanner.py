from __future__ import annotations

import logging
import queue
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import ClockOutcome
from ..core.exceptions import DomainError, StorageUnavailableError
from .model import ClockResult
from .service import AttendanceLedger

logger = logging.getLogger(__name__)

OutcomeHandler = Callable[[str, ClockResult], None]


class ScanChannel:
    """Channel between RFID readers and the ledger.

    Readers ``publish`` tags; a worker drains them with ``process_next`` or
    ``run``. Request/response callers use ``submit_scan``. A tag that is
    already queued or being processed is ignored until it finishes. This
    guard only saves round trips: the one-open-shift rule lives in storage.
    """

    def __init__(
        self,
        ledger: AttendanceLedger,
        *,
        clock: Callable[[], datetime] = now_local,
        on_outcome: Optional[OutcomeHandler] = None,
    ):
        self._ledger = ledger
        self._clock = clock
        self._on_outcome = on_outcome
        self._queue: "queue.Queue[str]" = queue.Queue()
        self._pending: set[str] = set()
        self._lock = threading.Lock()

    def _claim(self, tag: str) -> bool:
        with self._lock:
            if tag in self._pending:
                return False
            self._pending.add(tag)
            return True

    def _release(self, tag: str) -> None:
        with self._lock:
            self._pending.discard(tag)

    def is_pending(self, tag: str) -> bool:
        with self._lock:
            return tag.strip() in self._pending

    def publish(self, tag: str) -> bool:
        """Queue a scan. False when the same tag is still pending."""
        tag = (tag or "").strip()
        if not self._claim(tag):
            logger.debug("Ignoring repeated scan of %r while it is pending", tag)
            return False
        self._queue.put(tag)
        return True

    def submit_scan(self, tag: str) -> ClockResult:
        tag = (tag or "").strip()
        if not self._claim(tag):
            logger.debug("Ignoring repeated scan of %r while it is in flight", tag)
            return ClockResult(ClockOutcome.SCAN_IN_PROGRESS, tag=tag)
        try:
            return self._ledger.handle_scan(tag, now=self._clock())
        finally:
            self._release(tag)

    def process_next(self, *, timeout: Optional[float] = None) -> Optional[ClockResult]:
        """Handle one queued scan. None when nothing arrived within ``timeout``."""
        try:
            tag = self._queue.get(timeout=timeout) if timeout is not None else self._queue.get_nowait()
        except queue.Empty:
            return None

        try:
            result = self._ledger.handle_scan(tag, now=self._clock())
        finally:
            self._release(tag)
            self._queue.task_done()

        if self._on_outcome:
            try:
                self._on_outcome(tag, result)
            except Exception:
                logger.exception("Outcome handler failed for scan %r (%s)", tag, result.outcome.value)
        return result

    def run(self, stop: threading.Event, *, poll_interval: float = 0.5) -> None:
        """Worker loop for reader-driven deployments."""
        while not stop.is_set():
            try:
                self.process_next(timeout=poll_interval)
            except StorageUnavailableError:
                # The scan is dropped; the employee re-scans to retry.
                logger.exception("Storage unavailable while processing a scan")
            except DomainError:
                logger.exception("Scan rejected while processing")
