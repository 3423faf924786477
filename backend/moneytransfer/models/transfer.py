from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from moneytransfer.models.base import Base, IdType


class Transfer(Base):
    __tablename__ = "transfers"
    __table_args__ = (CheckConstraint("amount_cents > 0", name="ck_transfers_amount_positive"),)

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)

    counterparty_name: Mapped[str] = mapped_column(String(200))
    counterparty_iban: Mapped[str] = mapped_column(String(34))
    counterparty_bic: Mapped[str] = mapped_column(String(11))

    amount_cents: Mapped[int] = mapped_column(BigInteger)
    bank_account_id: Mapped[int] = mapped_column(IdType, ForeignKey("bank_accounts.id"), index=True)
    description: Mapped[str] = mapped_column(String(1000))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.current_timestamp(),
    )
