"""Transfer endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from bank_ledger.interfaces.http.deps import get_transfer_service
from bank_ledger.interfaces.http.errors import status_for_error
from bank_ledger.modules.transfers import (
    TransferNotFoundError,
    TransferRequest,
    TransferResponse,
    TransferService,
    TransferStatus,
)
from bank_ledger.schemas import ErrorResponse, TransferCreateRequest, TransferRecordResponse, TransferResultResponse

router = APIRouter()


def _to_result(result: TransferResponse) -> TransferResultResponse:
    return TransferResultResponse(
        id=result.id,
        source_account_number=result.source_account_number,
        destination_account_number=result.destination_account_number,
        amount=result.amount,
        description=result.description,
        status=result.status,
        created_at=result.created_at,
        message=result.message,
        error_type=type(result.error).__name__ if result.error is not None else None,
    )


@router.post(
    "",
    response_model=TransferResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": TransferResultResponse},
        409: {"model": TransferResultResponse},
        503: {"model": ErrorResponse},
    },
    summary="Move money between two accounts",
)
async def create_transfer(
    payload: TransferCreateRequest,
    service: TransferService = Depends(get_transfer_service),
):
    result = await service.perform_transfer(
        TransferRequest(
            source_account_number=payload.source_account_number,
            destination_account_number=payload.destination_account_number,
            amount=payload.amount,
            description=payload.description,
        )
    )
    body = _to_result(result)
    if result.error is not None:
        # Failed attempts keep the same body; the status code tells the kind of failure
        return JSONResponse(status_code=status_for_error(result.error), content=jsonable_encoder(body))
    return body


@router.get("", response_model=list[TransferRecordResponse], summary="List transfers")
async def list_transfers(
    status_filter: Optional[TransferStatus] = Query(default=None, alias="status"),
    service: TransferService = Depends(get_transfer_service),
):
    if status_filter is not None:
        transfers = await service.get_transfers_by_status(status_filter)
    else:
        transfers = await service.get_all_transfers()
    return [TransferRecordResponse.model_validate(transfer) for transfer in transfers]


@router.get(
    "/history/{account_number}",
    response_model=list[TransferRecordResponse],
    summary="Outgoing then incoming transfers of an account",
)
async def transfer_history(account_number: str, service: TransferService = Depends(get_transfer_service)):
    transfers = await service.get_transfer_history(account_number)
    return [TransferRecordResponse.model_validate(transfer) for transfer in transfers]


@router.get(
    "/{transfer_id}",
    response_model=TransferRecordResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get one transfer",
)
async def get_transfer(transfer_id: int, service: TransferService = Depends(get_transfer_service)):
    transfer = await service.get_transfer_by_id(transfer_id)
    if transfer is None:
        raise TransferNotFoundError(transfer_id)
    return TransferRecordResponse.model_validate(transfer)


@router.patch("/{transfer_id}/cancel", response_model=TransferRecordResponse, summary="Cancel a pending transfer")
async def cancel_transfer(transfer_id: int, service: TransferService = Depends(get_transfer_service)):
    transfer = await service.cancel_transfer(transfer_id)
    return TransferRecordResponse.model_validate(transfer)


@router.delete("/{transfer_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a failed transfer")
async def delete_transfer(transfer_id: int, service: TransferService = Depends(get_transfer_service)) -> Response:
    await service.delete_transfer(transfer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
