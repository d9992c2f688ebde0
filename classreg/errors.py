"""Domain error codes and exceptions.

Every error carries a user-safe message. Internal details (driver errors,
provider responses) are chained as ``__cause__`` and only ever logged.
"""
from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"
    UPSTREAM_PROVIDER_FAILED = "UPSTREAM_PROVIDER_FAILED"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when input fails a schema; ``fields`` maps each bad field to its rule message."""

    def __init__(self, fields: dict[str, str]) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message="Invalid input")
        self.fields = fields

    def __str__(self) -> str:
        summary = ", ".join(f"{k}: {v}" for k, v in self.fields.items())
        return f"{self.code.value}: {summary}"


class PersistenceError(DomainError):
    """Raised when the store is unreachable or rejects an operation."""

    def __init__(self, operation: str, table: str) -> None:
        super().__init__(
            code=ErrorCode.PERSISTENCE_FAILED,
            message=f"Store operation '{operation}' on '{table}' failed",
        )
        self.operation = operation
        self.table = table


class PartialFailureError(DomainError):
    """A payment was recorded but its registration could not be marked paid."""

    def __init__(self, payment_id: str, registration_id: str) -> None:
        super().__init__(
            code=ErrorCode.PARTIAL_FAILURE,
            message="Payment recorded but registration status was not updated",
        )
        self.payment_id = payment_id
        self.registration_id = registration_id


class UpstreamProviderError(DomainError):
    """Raised when the hosted-checkout provider fails."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.UPSTREAM_PROVIDER_FAILED,
            message="Failed to create checkout session",
        )


class RegistrationNotFoundError(DomainError):
    """Raised when a payment references a registration that does not exist."""

    def __init__(self, registration_id: str) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_FOUND,
            message="Registration not found. Please register again.",
        )
        self.registration_id = registration_id
