from __future__ import annotations

from typing import Protocol, Sequence

from .model import HoldLedgerEntry, SalaryHistoryEntry


class SalaryRepository(Protocol):
    def exists(self, employee_id: int, month: str) -> bool:
        raise NotImplementedError

    def commit(self, *, entry: SalaryHistoryEntry, hold_event: HoldLedgerEntry) -> int:
        """Persist the history entry and its hold event as one atomic unit.

        Returns the new entry id. Raises AlreadyProcessedError when an entry
        for (employee_id, month) exists at write time, PersistenceFailure when
        storage fails. On any error neither row is visible.
        """

        raise NotImplementedError

    def list_history(self, employee_id: int) -> Sequence[SalaryHistoryEntry]:
        raise NotImplementedError

    def list_hold_events(self, employee_id: int) -> Sequence[HoldLedgerEntry]:
        raise NotImplementedError
