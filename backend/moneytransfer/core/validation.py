from __future__ import annotations

from typing import TYPE_CHECKING

from moneytransfer.core.errors import FieldError, ValidationError

if TYPE_CHECKING:
    from moneytransfer.models.bank_account import BankAccount
    from moneytransfer.models.transfer import Transfer
    from moneytransfer.services.transfer_service import BulkTransferRequest, TransferIntent


def _require_text(errors: list[FieldError], field: str, value: str | None) -> None:
    if value is None or not value.strip():
        errors.append(FieldError(field, "is required"))


def validate_bank_account(account: BankAccount) -> list[FieldError]:
    errors: list[FieldError] = []
    _require_text(errors, "organization_name", account.organization_name)
    _require_text(errors, "iban", account.iban)
    _require_text(errors, "bic", account.bic)
    if account.balance_cents is None or account.balance_cents < 0:
        errors.append(FieldError("balance_cents", "must not be negative"))
    return errors


def _validate_counterparty(
    errors: list[FieldError],
    *,
    name: str | None,
    iban: str | None,
    bic: str | None,
    amount_cents: int | None,
    description: str | None,
    prefix: str = "",
) -> None:
    _require_text(errors, f"{prefix}counterparty_name", name)
    _require_text(errors, f"{prefix}counterparty_iban", iban)
    _require_text(errors, f"{prefix}counterparty_bic", bic)
    _require_text(errors, f"{prefix}description", description)
    if amount_cents is None or amount_cents <= 0:
        errors.append(FieldError(f"{prefix}amount_cents", "must be positive"))


def validate_transfer(transfer: Transfer) -> list[FieldError]:
    errors: list[FieldError] = []
    _validate_counterparty(
        errors,
        name=transfer.counterparty_name,
        iban=transfer.counterparty_iban,
        bic=transfer.counterparty_bic,
        amount_cents=transfer.amount_cents,
        description=transfer.description,
    )
    if not transfer.bank_account_id:
        errors.append(FieldError("bank_account_id", "is required"))
    return errors


def validate_transfer_intent(intent: TransferIntent, *, index: int | None = None) -> list[FieldError]:
    errors: list[FieldError] = []
    _validate_counterparty(
        errors,
        name=intent.counterparty_name,
        iban=intent.counterparty_iban,
        bic=intent.counterparty_bic,
        amount_cents=intent.amount_cents,
        description=intent.description,
        prefix=f"transfers[{index}]." if index is not None else "",
    )
    return errors


def validate_bulk_transfer_request(request: BulkTransferRequest) -> list[FieldError]:
    errors: list[FieldError] = []
    _require_text(errors, "organization_name", request.organization_name)
    _require_text(errors, "organization_bic", request.organization_bic)
    _require_text(errors, "organization_iban", request.organization_iban)
    if not request.transfers:
        errors.append(FieldError("transfers", "at least one transfer is required"))
    for i, intent in enumerate(request.transfers):
        errors.extend(validate_transfer_intent(intent, index=i))
    return errors


def ensure_valid(errors: list[FieldError]) -> None:
    if errors:
        raise ValidationError.from_errors(errors)
