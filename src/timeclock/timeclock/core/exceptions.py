class DomainError(Exception):
    """Base exception for business rule violations (reported as client errors)."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AlreadyPunchedIn(DomainError):
    def __init__(self, message: str = "Already punched in"):
        super().__init__(message)


class AlreadyPunchedOut(DomainError):
    def __init__(self, message: str = "Already punched out"):
        super().__init__(message)


class NoPunchInRecord(DomainError):
    def __init__(self, message: str = "No punch in record for today"):
        super().__init__(message)


class InfrastructureError(Exception):
    """Base exception for failures that surface as server errors."""


class StoreError(InfrastructureError):
    """Raised when the persistence layer fails."""


class ConflictError(InfrastructureError):
    """Raised when a create hits the (employee, date) uniqueness constraint."""


class ConfigError(InfrastructureError):
    """Raised when business-hours configuration is malformed."""
