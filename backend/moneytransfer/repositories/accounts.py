from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from moneytransfer.core.errors import AccountNotFoundError
from moneytransfer.core.validation import ensure_valid, validate_bank_account
from moneytransfer.db.errors import translate_storage_errors
from moneytransfer.models.bank_account import BankAccount


class AccountRepository(Protocol):
    def get_by_iban(self, iban: str, txn: Session) -> BankAccount: ...

    def update(self, account: BankAccount, txn: Session) -> None: ...


class SqlAlchemyAccountRepository:
    def create(self, account: BankAccount, txn: Session) -> BankAccount:
        ensure_valid(validate_bank_account(account))
        with translate_storage_errors("create bank account", account_ref=account.iban):
            txn.add(account)
            txn.flush()
        return account

    def get(self, account_id: int, txn: Session) -> BankAccount:
        with translate_storage_errors("get bank account", account_ref=str(account_id)):
            account = txn.get(BankAccount, account_id)
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account

    def get_by_iban(self, iban: str, txn: Session) -> BankAccount:
        with translate_storage_errors("get bank account by iban", account_ref=iban):
            account = txn.scalars(select(BankAccount).where(BankAccount.iban == iban)).one_or_none()
        if account is None:
            raise AccountNotFoundError(iban)
        return account

    def update(self, account: BankAccount, txn: Session) -> None:
        ensure_valid(validate_bank_account(account))
        with translate_storage_errors("update bank account", account_ref=account.iban):
            txn.add(account)
            txn.flush()
