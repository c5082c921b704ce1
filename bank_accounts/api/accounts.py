"""
Account lifecycle and movement endpoints
"""

from typing import List
from fastapi import APIRouter, HTTPException, Depends, Response, status

from .dependencies import BankAccountsSystem, get_system
from .schemas import (
    AccountModel, CreateAccountRequest, MessageModel, MovementRequest,
    OperationResultModel, UpdateAccountRequest
)
from ..account_types import UnknownAccountTypeError
from ..errors import AccountNotFoundError, DownstreamServiceError
from ..models import OperationResult


router = APIRouter()


@router.get("", response_model=List[AccountModel])
async def list_accounts(system: BankAccountsSystem = Depends(get_system)):
    """List all accounts"""
    accounts = await system.account_manager.get_all()
    return [AccountModel.from_account(account) for account in accounts]


@router.get("/customer/{customer_id}", response_model=List[AccountModel])
async def list_customer_accounts(
    customer_id: str,
    system: BankAccountsSystem = Depends(get_system)
):
    """List the accounts of a customer"""
    accounts = await system.account_manager.get_customer_accounts(customer_id)
    return [AccountModel.from_account(account) for account in accounts]


@router.get("/{account_id}", response_model=AccountModel)
async def get_account(
    account_id: str,
    system: BankAccountsSystem = Depends(get_system)
):
    """Get account details"""
    account = await system.account_manager.get_account(account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return AccountModel.from_account(account)


def _creation_response(result: OperationResult, response: Response) -> OperationResultModel:
    """201 when an account was opened, 200 for a rejection message"""
    response.status_code = status.HTTP_201_CREATED if result.succeeded else status.HTTP_200_OK
    return OperationResultModel.from_result(result)


@router.post("/person", response_model=OperationResultModel)
async def create_person_account(
    request: CreateAccountRequest,
    response: Response,
    system: BankAccountsSystem = Depends(get_system)
):
    """Open an account for a personal customer"""
    try:
        result = await system.account_manager.create_person_account(request.to_request())
    except UnknownAccountTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DownstreamServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return _creation_response(result, response)


@router.post("/company", response_model=OperationResultModel)
async def create_company_account(
    request: CreateAccountRequest,
    response: Response,
    system: BankAccountsSystem = Depends(get_system)
):
    """Open an account for a company customer"""
    try:
        result = await system.account_manager.create_company_account(request.to_request())
    except UnknownAccountTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DownstreamServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return _creation_response(result, response)


@router.put("", response_model=AccountModel)
async def update_account(
    request: UpdateAccountRequest,
    system: BankAccountsSystem = Depends(get_system)
):
    """Overwrite an existing account"""
    try:
        account = await system.account_manager.update_account(request.to_request())
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnknownAccountTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AccountModel.from_account(account)


@router.delete("/{account_id}", response_model=MessageModel)
async def delete_account(
    account_id: str,
    system: BankAccountsSystem = Depends(get_system)
):
    """Delete an account"""
    message = await system.account_manager.delete_account(account_id)
    return MessageModel.from_message(message)


@router.post("/deposit", response_model=OperationResultModel)
async def deposit(
    request: MovementRequest,
    system: BankAccountsSystem = Depends(get_system)
):
    """Deposit into an account"""
    try:
        result = await system.transaction_processor.deposit(request.account_id, request.amount)
    except DownstreamServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return OperationResultModel.from_result(result)


@router.post("/withdrawal", response_model=OperationResultModel)
async def withdraw(
    request: MovementRequest,
    system: BankAccountsSystem = Depends(get_system)
):
    """Withdraw from an account"""
    try:
        result = await system.transaction_processor.withdraw(request.account_id, request.amount)
    except DownstreamServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return OperationResultModel.from_result(result)


@router.post("/restart-transactions", response_model=MessageModel)
async def restart_transactions(system: BankAccountsSystem = Depends(get_system)):
    """Reset the monthly movement allowance of every account"""
    message = await system.account_manager.restart_transactions()
    return MessageModel.from_message(message)
