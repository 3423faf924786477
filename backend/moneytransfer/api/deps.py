from __future__ import annotations

from moneytransfer.core.config import settings
from moneytransfer.core.context import OperationContext
from moneytransfer.db.session import get_session_factory
from moneytransfer.db.transactions import SqlAlchemyTransactionManager
from moneytransfer.repositories.accounts import SqlAlchemyAccountRepository
from moneytransfer.repositories.transfers import SqlAlchemyTransferRepository
from moneytransfer.services.transfer_service import TransferService


def get_transactions() -> SqlAlchemyTransactionManager:
    return SqlAlchemyTransactionManager(get_session_factory())


def get_transfer_service() -> TransferService:
    return TransferService(
        get_transactions(),
        SqlAlchemyAccountRepository(),
        SqlAlchemyTransferRepository(),
        settings.retry_config,
    )


def get_operation_context() -> OperationContext:
    return OperationContext(timeout=settings.transfer_timeout_seconds)
