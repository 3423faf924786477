from __future__ import annotations

import pydantic
import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from moneytransfer.api.deps import get_operation_context, get_transfer_service
from moneytransfer.core.amounts import parse_amount
from moneytransfer.core.context import OperationContext
from moneytransfer.core.errors import (
    AccountNotFoundError,
    AmountParseError,
    InsufficientFundsError,
    MoneyTransferError,
    OperationCancelledError,
    ValidationError,
)
from moneytransfer.schemas.transfer import BulkTransferFile, BulkTransferResponse
from moneytransfer.services.transfer_service import BulkTransferRequest, TransferIntent, TransferService

router = APIRouter(prefix="/transfers", tags=["transfers"])

logger = structlog.get_logger(__name__)


def _to_request(content: BulkTransferFile) -> BulkTransferRequest:
    intents: list[TransferIntent] = []
    for ct in content.credit_transfers:
        try:
            amount = parse_amount(ct.amount)
        except AmountParseError as exc:
            logger.error(
                "invalid amount for transfer",
                error=exc.message,
                counterparty=ct.counterparty_name,
                amount=ct.amount,
            )
            raise HTTPException(status_code=400, detail=f"Invalid amount for transfer to {ct.counterparty_name}")
        intents.append(
            TransferIntent(
                amount_cents=amount,
                counterparty_name=ct.counterparty_name,
                counterparty_iban=ct.counterparty_iban,
                counterparty_bic=ct.counterparty_bic,
                description=ct.description,
            )
        )

    return BulkTransferRequest(
        organization_name=content.organization_name,
        organization_bic=content.organization_bic,
        organization_iban=content.organization_iban,
        transfers=tuple(intents),
    )


@router.post("", response_model=BulkTransferResponse, status_code=201)
def bulk_transfer(
    file: UploadFile | None = File(default=None),
    service: TransferService = Depends(get_transfer_service),
    ctx: OperationContext = Depends(get_operation_context),
) -> BulkTransferResponse:
    if file is None:
        raise HTTPException(status_code=400, detail="Error retrieving the file")

    try:
        content = BulkTransferFile.model_validate_json(file.file.read())
    except pydantic.ValidationError as exc:
        logger.error("invalid bulk transfer file", error=str(exc))
        raise HTTPException(status_code=400, detail="Invalid request")

    log = logger.bind(organization=content.organization_name, transfer_count=len(content.credit_transfers))
    log.info("processing bulk transfer upload")

    request = _to_request(content)

    try:
        result = service.bulk_transfer(request, ctx)
    except InsufficientFundsError as exc:
        log.warning("insufficient funds for bulk transfer")
        raise HTTPException(status_code=422, detail=exc.message)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    except OperationCancelledError as exc:
        log.warning("bulk transfer cancelled", error=exc.message)
        raise HTTPException(status_code=503, detail=exc.message)
    except MoneyTransferError as exc:
        log.error("failed to process bulk transfer", kind=exc.kind, error=exc.message)
        raise HTTPException(status_code=500, detail="Error processing bulk transfer")

    return BulkTransferResponse(
        message="Bulk transfer processed successfully",
        transfer_count=result.transfer_count,
        total_cents=result.total_cents,
    )
