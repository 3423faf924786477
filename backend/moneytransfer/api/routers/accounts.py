from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from moneytransfer.api.deps import get_transactions
from moneytransfer.core.errors import AccountNotFoundError, StorageError
from moneytransfer.db.transactions import TransactionManager
from moneytransfer.repositories.accounts import SqlAlchemyAccountRepository
from moneytransfer.repositories.transfers import SqlAlchemyTransferRepository
from moneytransfer.schemas.bank_account import BankAccountOut
from moneytransfer.schemas.transfer import TransferOut

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("/{iban}", response_model=BankAccountOut)
def get_account(iban: str, transactions: TransactionManager = Depends(get_transactions)) -> BankAccountOut:
    accounts = SqlAlchemyAccountRepository()
    transfers = SqlAlchemyTransferRepository()

    def load(session: Session) -> BankAccountOut:
        account = accounts.get_by_iban(iban, session)
        rows = transfers.list_by_account(account.id, session)
        return BankAccountOut(
            id=account.id,
            organization_name=account.organization_name,
            iban=account.iban,
            bic=account.bic,
            balance_cents=account.balance_cents,
            transfers=[
                TransferOut(
                    id=r.id,
                    counterparty_name=r.counterparty_name,
                    counterparty_iban=r.counterparty_iban,
                    counterparty_bic=r.counterparty_bic,
                    amount_cents=r.amount_cents,
                    description=r.description,
                    created_at=r.created_at,
                )
                for r in rows
            ],
        )

    try:
        return transactions.run(load)
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error loading bank account")
