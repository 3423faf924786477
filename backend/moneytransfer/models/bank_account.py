from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from moneytransfer.models.base import Base, IdType


class BankAccount(Base):
    __tablename__ = "bank_accounts"
    __table_args__ = (CheckConstraint("balance_cents >= 0", name="ck_bank_accounts_balance_non_negative"),)

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)

    organization_name: Mapped[str] = mapped_column(String(200))
    iban: Mapped[str] = mapped_column(String(34), unique=True, index=True)
    bic: Mapped[str] = mapped_column(String(11))

    # minor units; only the bulk transfer debit mutates it
    balance_cents: Mapped[int] = mapped_column(BigInteger, default=0)
