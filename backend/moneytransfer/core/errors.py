from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class MoneyTransferError(Exception):
    """Base class for every error surfaced to callers of the service.

    `kind` is a stable tag callers can switch on; the message is meant for
    humans and never contains raw driver output.
    """

    kind = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MoneyTransferError):
    kind = "validation"

    def __init__(self, message: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])

    @classmethod
    def from_errors(cls, errors: list[FieldError]) -> ValidationError:
        return cls("; ".join(str(e) for e in errors), errors)


class AmountParseError(ValidationError):
    kind = "parse"

    def __init__(self, message: str, value: str | None = None) -> None:
        super().__init__(message, [FieldError("amount", message)])
        self.value = value


class AmountOverflowError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "total transfer amount exceeds maximum allowed value",
            [FieldError("transfers", "total exceeds maximum allowed value")],
        )


class InsufficientFundsError(MoneyTransferError):
    kind = "insufficient_funds"

    def __init__(self, required: int, available: int) -> None:
        super().__init__("insufficient funds")
        self.required = required
        self.available = available


class AccountNotFoundError(MoneyTransferError):
    kind = "not_found"

    def __init__(self, reference: str) -> None:
        super().__init__(f"bank account {reference} not found")
        self.reference = reference


class StorageErrorKind(str, Enum):
    SERIALIZATION_CONFLICT = "serialization_conflict"
    TRANSIENT = "transient"
    TRANSACTION_CLOSED = "transaction_closed"
    FATAL = "fatal"

    @property
    def retryable(self) -> bool:
        return self is not StorageErrorKind.FATAL


class StorageError(MoneyTransferError):
    kind = "storage"

    def __init__(
        self,
        storage_kind: StorageErrorKind,
        operation: str,
        *,
        account_ref: str | None = None,
    ) -> None:
        message = f"{operation} failed ({storage_kind.value})"
        if account_ref:
            message = f"{operation} failed for account {account_ref} ({storage_kind.value})"
        super().__init__(message)
        self.storage_kind = storage_kind
        self.operation = operation
        self.account_ref = account_ref

    @property
    def retryable(self) -> bool:
        return self.storage_kind.retryable


class RetryExhaustedError(MoneyTransferError):
    kind = "retry_exhausted"

    def __init__(self, attempts: int, last_error: StorageError | None = None) -> None:
        super().__init__(f"bulk transfer failed after {attempts} attempts")
        self.attempts = attempts
        self.last_error = last_error


class OperationCancelledError(MoneyTransferError):
    kind = "cancelled"

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(OperationCancelledError):
    def __init__(self) -> None:
        super().__init__("operation deadline exceeded")
