"""Per-report mutual exclusion for ledger and tag mutations."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager

__all__ = ["ReportLockRegistry"]


class _Entry:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class ReportLockRegistry:
    """Hand out one lock per report id.

    Entries are reference counted and dropped once no caller holds or waits on
    them, so the registry does not grow with the number of reports ever touched.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[int, _Entry] = {}

    def _checkout(self, report_id: int) -> _Entry:
        with self._guard:
            entry = self._entries.get(report_id)
            if entry is None:
                entry = self._entries[report_id] = _Entry()
            entry.holders += 1
            return entry

    def _checkin(self, report_id: int, entry: _Entry) -> None:
        with self._guard:
            entry.holders -= 1
            if entry.holders == 0:
                self._entries.pop(report_id, None)

    @contextmanager
    def hold(self, report_id: int) -> Iterator[None]:
        """Serialize the enclosed block against other holders of ``report_id``."""
        entry = self._checkout(report_id)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(report_id, entry)

    @contextmanager
    def hold_many(self, report_ids: Iterable[int]) -> Iterator[None]:
        """Hold several report locks, acquired in ascending id order."""
        with ExitStack() as stack:
            for report_id in sorted(set(report_ids)):
                stack.enter_context(self.hold(report_id))
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
