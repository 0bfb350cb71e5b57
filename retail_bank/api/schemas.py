"""
Pydantic schemas for API requests
"""

from decimal import Decimal
from pydantic import BaseModel, Field


class RegisterCustomerRequest(BaseModel):
    first_name: str
    last_name: str
    email: str
    password: str


class AuthenticateRequest(BaseModel):
    email: str
    password: str


class OpenAccountRequest(BaseModel):
    account_type: str = Field(..., description="Account type (savings, checking)")
    initial_deposit: Decimal = Field(Decimal("0"), description="Opening balance")


class AmountRequest(BaseModel):
    amount: Decimal = Field(..., description="Decimal amount, e.g. \"125.50\"")


class TransferRequest(BaseModel):
    from_account_number: int
    to_account_number: int
    amount: Decimal
