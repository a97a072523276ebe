from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollBreakdown, PayrollSubject


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, subject: PayrollSubject, month: str) -> PayrollBreakdown:
        """Compute the breakdown for ``month`` ("YYYY-MM"). Must not mutate anything."""
        raise NotImplementedError
