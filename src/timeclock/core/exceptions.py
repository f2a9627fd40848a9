class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmployeeNotFoundError(DomainError):
    """Raised when an operation needs an employee that does not exist."""


class ReferentialIntegrityError(DomainError):
    """Raised when deleting a row that other rows still reference."""


class OpenShiftConflictError(DomainError):
    """Raised by storage when an employee already has an open shift."""


class AssessmentServiceError(DomainError):
    """Raised by the anomaly client when the reasoning service fails."""


class StorageUnavailableError(Exception):
    """Transient storage failure. Callers may retry (e.g. re-scan the tag)."""
