"""Account endpoints."""

from fastapi import APIRouter, Depends, Response, status

from bank_ledger.interfaces.http.deps import get_transfer_service
from bank_ledger.modules.accounts import UNSET, AccountNotFoundError, AccountUpdateInput
from bank_ledger.modules.transfers import TransferService
from bank_ledger.schemas import AccountResponse, AccountUpdateRequest, ErrorResponse

router = APIRouter()


@router.get("", response_model=list[AccountResponse], summary="List accounts")
async def list_accounts(service: TransferService = Depends(get_transfer_service)):
    accounts = await service.get_all_accounts()
    return [AccountResponse.model_validate(account) for account in accounts]


@router.get(
    "/{account_number}",
    response_model=AccountResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get an account by number",
)
async def get_account(account_number: str, service: TransferService = Depends(get_transfer_service)):
    account = await service.get_account_by_number(account_number)
    if account is None:
        raise AccountNotFoundError(account_number)
    return AccountResponse.model_validate(account)


@router.put("/{account_number}", response_model=AccountResponse, summary="Update owner name and/or balance")
async def update_account(
    account_number: str,
    payload: AccountUpdateRequest,
    service: TransferService = Depends(get_transfer_service),
):
    provided = payload.model_fields_set
    account = await service.update_account(
        account_number,
        AccountUpdateInput(
            owner_name=payload.owner_name if "owner_name" in provided else UNSET,
            balance=payload.balance if "balance" in provided else UNSET,
        ),
    )
    return AccountResponse.model_validate(account)


@router.delete("/{account_number}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an empty account")
async def delete_account(account_number: str, service: TransferService = Depends(get_transfer_service)) -> Response:
    await service.delete_account(account_number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
