"""
Customer endpoints
"""

from fastapi import APIRouter, Depends, status

from .dependencies import get_bank, to_http_exception, to_jsonable
from .schemas import AuthenticateRequest, OpenAccountRequest, RegisterCustomerRequest, TransferRequest
from ..bank import Bank
from ..errors import BankingError


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_customer(
    request: RegisterCustomerRequest,
    bank: Bank = Depends(get_bank)
):
    """Register a new customer"""
    try:
        customer = bank.register_customer(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password
        )
    except BankingError as e:
        raise to_http_exception(e)

    return {"customer_id": customer.customer_id, "message": "Customer registered successfully"}


@router.get("")
async def list_customers(bank: Bank = Depends(get_bank)):
    """List all customers in registration order"""
    return {"customers": to_jsonable(bank.list_all_customers())}


@router.post("/authenticate")
async def authenticate(
    request: AuthenticateRequest,
    bank: Bank = Depends(get_bank)
):
    """Check a customer's email and password"""
    try:
        customer = bank.authenticate(request.email, request.password)
    except BankingError as e:
        raise to_http_exception(e)

    return {"customer_id": customer.customer_id, "name": customer.full_name}


@router.get("/{customer_id}")
async def get_customer(customer_id: int, bank: Bank = Depends(get_bank)):
    """Get customer details with their accounts"""
    try:
        customer = bank.get_customer(customer_id)
    except BankingError as e:
        raise to_http_exception(e)

    info = customer.customer_info()
    info["accounts"] = [account.account_info() for account in customer.get_accounts()]
    return to_jsonable(info)


@router.post("/{customer_id}/accounts", status_code=status.HTTP_201_CREATED)
async def open_account(
    customer_id: int,
    request: OpenAccountRequest,
    bank: Bank = Depends(get_bank)
):
    """Open a savings or checking account"""
    try:
        customer = bank.get_customer(customer_id)
        account = customer.open_account(request.account_type, request.initial_deposit)
    except BankingError as e:
        raise to_http_exception(e)

    return {
        "account_number": account.account_number,
        "account_type": account.account_type.value,
        "balance": str(account.balance),
        "message": "Account opened successfully"
    }


@router.post("/{customer_id}/transfers")
async def transfer(
    customer_id: int,
    request: TransferRequest,
    bank: Bank = Depends(get_bank)
):
    """Transfer money between two of the customer's accounts"""
    try:
        customer = bank.get_customer(customer_id)
        result = customer.transfer(
            request.from_account_number, request.to_account_number, request.amount
        )
    except BankingError as e:
        raise to_http_exception(e)

    return {"from_balance": str(result.from_balance), "to_balance": str(result.to_balance)}
