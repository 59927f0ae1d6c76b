"""
Transfer and scheduler endpoints
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .deps import get_simulator
from .schemas import (
    FailedScheduledTransferModel, ScheduledTransferModel, TickResponse,
    TransferRequestModel, TransferResponse
)
from ..simulator import TreasurySimulator


router = APIRouter()


@router.post("", response_model=TransferResponse)
async def submit_transfer(
    request: TransferRequestModel,
    simulator: TreasurySimulator = Depends(get_simulator)
):
    """Execute a transfer now, or schedule it when dated in the future"""
    outcome = simulator.submit(request.to_request())
    response = TransferResponse.from_outcome(outcome)
    status_code = 202 if outcome.is_scheduled else 200
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


@router.get("/scheduled", response_model=List[ScheduledTransferModel])
async def list_scheduled(simulator: TreasurySimulator = Depends(get_simulator)):
    """Pending scheduled transfers, most recently scheduled first"""
    return [ScheduledTransferModel.from_entry(entry) for entry in simulator.pending()]


@router.get("/scheduled/failed", response_model=List[FailedScheduledTransferModel])
async def list_failed_scheduled(simulator: TreasurySimulator = Depends(get_simulator)):
    """Scheduled transfers dropped at their due date, with the reason"""
    return [FailedScheduledTransferModel.from_failure(f) for f in simulator.failed_scheduled()]


@router.post("/tick", response_model=TickResponse)
async def run_scheduler(simulator: TreasurySimulator = Depends(get_simulator)):
    """Execute scheduled transfers due today"""
    return TickResponse.from_result(simulator.tick())
