from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CreditTransfer(BaseModel):
    amount: str = Field(min_length=1)
    counterparty_name: str = Field(min_length=1)
    counterparty_bic: str = Field(min_length=1)
    counterparty_iban: str = Field(min_length=1)
    description: str = Field(min_length=1)


class BulkTransferFile(BaseModel):
    """Content of the JSON file uploaded to POST /transfers."""

    organization_name: str = Field(min_length=1)
    organization_bic: str = Field(min_length=1)
    organization_iban: str = Field(min_length=1)
    credit_transfers: list[CreditTransfer] = Field(min_length=1)


class BulkTransferResponse(BaseModel):
    message: str
    transfer_count: int
    total_cents: int


class TransferOut(BaseModel):
    id: int
    counterparty_name: str
    counterparty_iban: str
    counterparty_bic: str
    amount_cents: int
    description: str
    created_at: datetime | None
