"""
Account and balance endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from .deps import get_simulator
from .schemas import AccountModel, TotalsModel
from ..currency import format_amount
from ..simulator import TreasurySimulator


router = APIRouter()


@router.get("", response_model=List[AccountModel])
async def list_accounts(simulator: TreasurySimulator = Depends(get_simulator)):
    """List accounts with current balances"""
    return [AccountModel.from_account(account) for account in simulator.accounts()]


@router.get("/totals", response_model=TotalsModel)
async def get_totals(simulator: TreasurySimulator = Depends(get_simulator)):
    """Total balance per currency"""
    totals = simulator.totals()
    return TotalsModel(
        totals={currency.code: str(amount) for currency, amount in totals.items()},
        formatted={currency.code: format_amount(amount, currency) for currency, amount in totals.items()}
    )


@router.get("/currencies", response_model=List[str])
async def list_currencies(simulator: TreasurySimulator = Depends(get_simulator)):
    """Currencies held by at least one account"""
    return [currency.code for currency in simulator.currencies()]


@router.get("/{identifier}", response_model=AccountModel)
async def get_account(identifier: str, simulator: TreasurySimulator = Depends(get_simulator)):
    """Get a single account"""
    account = simulator.get_account(identifier)
    if account is None:
        raise HTTPException(status_code=404, detail=f"Account {identifier} not found")
    return AccountModel.from_account(account)
