class DomainError(Exception):
    """Base exception for business rule violations."""


class InvalidInputError(DomainError):
    """Raised when input data is malformed or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or record does not exist."""


class AlreadyProcessedError(DomainError):
    """Raised when salary for an (employee, month) pair was already committed."""

    def __init__(self, employee_id: int, month: str):
        super().__init__(f"Salary already processed for employee {employee_id} in {month}")
        self.employee_id = employee_id
        self.month = month


class PersistenceFailure(DomainError):
    """Raised when the storage layer fails to save a salary commit.

    The commit is rolled back, so neither the history entry nor the hold
    ledger event is visible.
    """
