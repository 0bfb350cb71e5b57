"""
Account endpoints
"""

from fastapi import APIRouter, Depends, Query

from .dependencies import get_bank, to_http_exception, to_jsonable
from .schemas import AmountRequest
from ..bank import Bank
from ..errors import BankingError


router = APIRouter()


@router.get("/{account_number}")
async def get_account(account_number: int, bank: Bank = Depends(get_bank)):
    """Get account details"""
    try:
        account = bank.find_account(account_number)
    except BankingError as e:
        raise to_http_exception(e)

    return to_jsonable(account.account_info())


@router.get("/{account_number}/transactions")
async def get_account_transactions(
    account_number: int,
    limit: int = Query(10, ge=1),
    bank: Bank = Depends(get_bank)
):
    """Most recent transactions first"""
    try:
        account = bank.find_account(account_number)
    except BankingError as e:
        raise to_http_exception(e)

    recent = list(reversed(account.transactions))[:limit]
    return {"transactions": to_jsonable([txn.to_dict() for txn in recent])}


@router.post("/{account_number}/deposit")
async def deposit(
    account_number: int,
    request: AmountRequest,
    bank: Bank = Depends(get_bank)
):
    try:
        account = bank.find_account(account_number)
        balance = account.deposit(request.amount)
    except BankingError as e:
        raise to_http_exception(e)

    return {"account_number": account_number, "balance": str(balance)}


@router.post("/{account_number}/withdraw")
async def withdraw(
    account_number: int,
    request: AmountRequest,
    bank: Bank = Depends(get_bank)
):
    try:
        account = bank.find_account(account_number)
        balance = account.withdraw(request.amount)
    except BankingError as e:
        raise to_http_exception(e)

    return {"account_number": account_number, "balance": str(balance)}
