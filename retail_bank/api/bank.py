"""
Bank-wide reporting and batch endpoints
"""

from fastapi import APIRouter, Depends

from .dependencies import get_bank, to_jsonable
from ..bank import Bank


router = APIRouter()


@router.get("/report")
async def bank_report(bank: Bank = Depends(get_bank)):
    """Summary of customers, deposits and capital"""
    return to_jsonable(bank.generate_bank_report().to_dict())


@router.get("/deposits")
async def total_deposits(bank: Bank = Depends(get_bank)):
    return {"total_deposits": str(bank.calculate_total_deposits())}


@router.post("/interest")
async def apply_interest(bank: Bank = Depends(get_bank)):
    """Credit one month of interest to every savings account"""
    total_interest = bank.apply_interest_to_all_savings_accounts()
    return {"total_interest": str(total_interest), "bank_balance": str(bank.bank_balance)}


@router.post("/fees")
async def charge_fees(bank: Bank = Depends(get_bank)):
    """Charge the monthly fee on every checking account that can cover it"""
    fees_collected = bank.charge_monthly_fees()
    return {"fees_collected": str(fees_collected), "bank_balance": str(bank.bank_balance)}
