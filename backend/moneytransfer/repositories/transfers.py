from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from moneytransfer.core.context import OperationContext
from moneytransfer.db.errors import translate_storage_errors
from moneytransfer.models.transfer import Transfer


class TransferRepository(Protocol):
    def create_bulk(self, ctx: OperationContext, txn: Session, transfers: list[Transfer]) -> None: ...


class SqlAlchemyTransferRepository:
    def create_bulk(self, ctx: OperationContext, txn: Session, transfers: list[Transfer]) -> None:
        ctx.check()
        if not transfers:
            return
        account_ref = str(transfers[0].bank_account_id)
        with translate_storage_errors("create bulk transfers", account_ref=account_ref):
            txn.add_all(transfers)
            txn.flush()

    def list_by_account(self, account_id: int, txn: Session) -> list[Transfer]:
        with translate_storage_errors("list transfers", account_ref=str(account_id)):
            rows = txn.scalars(
                select(Transfer).where(Transfer.bank_account_id == account_id).order_by(Transfer.id)
            ).all()
        return list(rows)
