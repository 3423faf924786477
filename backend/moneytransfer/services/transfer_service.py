from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from moneytransfer.core.amounts import MAX_AMOUNT_CENTS
from moneytransfer.core.backoff import RetryConfig, calculate_backoff
from moneytransfer.core.context import OperationContext
from moneytransfer.core.errors import (
    AmountOverflowError,
    FieldError,
    InsufficientFundsError,
    RetryExhaustedError,
    StorageError,
    ValidationError,
)
from moneytransfer.core.validation import ensure_valid, validate_bulk_transfer_request, validate_transfer
from moneytransfer.db.transactions import SERIALIZABLE, TransactionManager
from moneytransfer.models.transfer import Transfer
from moneytransfer.repositories.accounts import AccountRepository
from moneytransfer.repositories.transfers import TransferRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TransferIntent:
    amount_cents: int
    counterparty_name: str
    counterparty_iban: str
    counterparty_bic: str
    description: str


@dataclass(frozen=True)
class BulkTransferRequest:
    organization_name: str
    organization_bic: str
    organization_iban: str
    transfers: Sequence[TransferIntent] = field(default_factory=tuple)


@dataclass(frozen=True)
class BulkTransferResult:
    account_id: int
    total_cents: int
    transfer_count: int
    balance_cents: int
    attempts: int


def calculate_total(transfers: Sequence[TransferIntent]) -> int:
    total = 0
    for i, intent in enumerate(transfers):
        if intent.amount_cents <= 0:
            raise ValidationError(
                "transfer amount must be positive",
                [FieldError(f"transfers[{i}].amount_cents", "must be positive")],
            )
        if total > MAX_AMOUNT_CENTS - intent.amount_cents:
            raise AmountOverflowError()
        total += intent.amount_cents
    return total


class TransferService:
    """Applies bulk transfers atomically against one organization account.

    Each attempt runs in a serializable transaction. Serialization conflicts
    and other retryable storage failures are retried with exponential
    backoff; every other error is returned to the caller straight away.
    """

    def __init__(
        self,
        transactions: TransactionManager,
        account_repo: AccountRepository,
        transfer_repo: TransferRepository,
        retry_config: RetryConfig,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._transactions = transactions
        self._accounts = account_repo
        self._transfers = transfer_repo
        self._retry = retry_config
        self._rng = rng

    def bulk_transfer(
        self, request: BulkTransferRequest, ctx: OperationContext | None = None
    ) -> BulkTransferResult:
        ctx = ctx or OperationContext.background()
        log = logger.bind(
            organization_bic=request.organization_bic,
            organization_iban=request.organization_iban,
            transfer_count=len(request.transfers),
        )
        log.info("processing bulk transfer request")

        ensure_valid(validate_bulk_transfer_request(request))

        last_error: StorageError | None = None
        for attempt in range(1, self._retry.max_retries + 1):
            ctx.check()
            try:
                result = self._execute(request, ctx, attempt, log)
            except StorageError as exc:
                if not exc.retryable:
                    log.error("non-retryable error during bulk transfer", error=exc.message, attempt=attempt)
                    raise
                last_error = exc
                if attempt == self._retry.max_retries:
                    break

                # attempt is 1-based; the first retry waits base_delay
                delay = calculate_backoff(self._retry.base_delay, self._retry.max_delay, attempt - 1, self._rng)
                log.warning(
                    "retryable error during bulk transfer, retrying",
                    error=exc.message,
                    attempt=attempt,
                    retry_after=delay,
                )
                ctx.wait(delay)
                continue

            log.info(
                "bulk transfer processed successfully",
                attempt=attempt,
                total_cents=result.total_cents,
            )
            return result

        log.error("bulk transfer failed after maximum retries", max_retries=self._retry.max_retries)
        raise RetryExhaustedError(self._retry.max_retries, last_error) from last_error

    def _execute(
        self,
        request: BulkTransferRequest,
        ctx: OperationContext,
        attempt: int,
        log: structlog.stdlib.BoundLogger,
    ) -> BulkTransferResult:
        with self._transactions.begin(ctx, isolation_level=SERIALIZABLE) as txn:
            account = self._accounts.get_by_iban(request.organization_iban, txn)
            if account.bic != request.organization_bic:
                log.warning("organization bic does not match account", account_bic=account.bic)

            total = calculate_total(request.transfers)
            log.debug("transfer details", total_cents=total, balance_cents=account.balance_cents)

            if account.balance_cents < total:
                log.warning("insufficient funds", required=total, available=account.balance_cents)
                raise InsufficientFundsError(required=total, available=account.balance_cents)

            transfers = [
                Transfer(
                    counterparty_name=intent.counterparty_name,
                    counterparty_iban=intent.counterparty_iban,
                    counterparty_bic=intent.counterparty_bic,
                    amount_cents=intent.amount_cents,
                    bank_account_id=account.id,
                    description=intent.description,
                )
                for intent in request.transfers
            ]
            for transfer in transfers:
                ensure_valid(validate_transfer(transfer))

            self._transfers.create_bulk(ctx, txn, transfers)

            account.balance_cents = account.balance_cents - total
            self._accounts.update(account, txn)

            result = BulkTransferResult(
                account_id=account.id,
                total_cents=total,
                transfer_count=len(transfers),
                balance_cents=account.balance_cents,
                attempts=attempt,
            )
        return result
