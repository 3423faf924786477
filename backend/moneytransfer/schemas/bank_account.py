from __future__ import annotations

from pydantic import BaseModel

from moneytransfer.schemas.transfer import TransferOut


class BankAccountOut(BaseModel):
    id: int
    organization_name: str
    iban: str
    bic: str
    balance_cents: int
    transfers: list[TransferOut]
