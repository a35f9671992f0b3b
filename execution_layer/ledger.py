"""Call ledger - bounded in-process log of API call attempts and its statistics."""

from collections import deque
from typing import Optional

from core.domain.enums import CallStatus

from .models import CallLogEntry, IntegrationCallStats, LedgerStats

DEFAULT_LEDGER_CAPACITY = 1000


class CallLedger:
    """
    Newest-first ring buffer of CallLogEntry records.

    Entries are added at the head; once ``capacity`` is reached the oldest
    entry falls off the tail. Appends are single deque operations, so the
    ledger can be shared by concurrent calls without a lock.
    """

    def __init__(self, capacity: int = DEFAULT_LEDGER_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._entries: deque[CallLogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: CallLogEntry) -> None:
        self._entries.appendleft(entry)

    def entries(self, integration_id: Optional[str] = None) -> list[CallLogEntry]:
        """
        Snapshot of the ledger, newest first.

        Args:
            integration_id: Only return entries for this integration

        Returns:
            List of entries (a copy; mutating it does not affect the ledger)
        """
        snapshot = list(self._entries)
        if integration_id:
            return [e for e in snapshot if e.integration_id == integration_id]
        return snapshot

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> LedgerStats:
        """
        Fold the ledger into aggregate statistics.

        Rates are percentages; every average is 0 for an empty ledger.
        """
        snapshot = list(self._entries)
        totals: dict[str, list[int]] = {}  # id -> [total, success, duration]
        success_count = 0
        duration_sum = 0

        for entry in snapshot:
            bucket = totals.setdefault(entry.integration_id, [0, 0, 0])
            bucket[0] += 1
            bucket[2] += entry.duration_ms
            if entry.status == CallStatus.SUCCESS:
                bucket[1] += 1
                success_count += 1
            duration_sum += entry.duration_ms

        total = len(snapshot)
        return LedgerStats(
            total_calls=total,
            success_rate=_ratio(success_count, total) * 100,
            average_duration_ms=_ratio(duration_sum, total),
            by_integration={
                integration_id: IntegrationCallStats(
                    total=count,
                    success=successes,
                    success_rate=_ratio(successes, count) * 100,
                    average_duration_ms=_ratio(durations, count),
                )
                for integration_id, (count, successes, durations) in totals.items()
            },
        )


def _ratio(numerator: float, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0
