"""
Transaction log endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .deps import get_simulator
from .schemas import TransactionModel
from ..currency import Currency
from ..simulator import TreasurySimulator


router = APIRouter()


@router.get("", response_model=List[TransactionModel])
async def list_transactions(
    account: Optional[str] = Query(None, description="Sender or receiver account"),
    currency: Optional[str] = Query(None, description="Source or target currency code"),
    simulator: TreasurySimulator = Depends(get_simulator)
):
    """Completed transactions, newest first"""
    currency_filter = None
    if currency:
        try:
            currency_filter = Currency.from_code(currency)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    return [
        TransactionModel.from_transaction(transaction)
        for transaction in simulator.transactions(account=account, currency=currency_filter)
    ]
