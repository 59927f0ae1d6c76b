"""
Pydantic schemas for API requests and responses
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field

from ..accounts import Account
from ..currency import format_amount
from ..scheduler import FailedScheduledTransfer, PendingScheduledTransfer, TickResult
from ..transactions import CompletedTransaction
from ..transfers import TransferOutcome, TransferRequest


class TransferRequestModel(BaseModel):
    from_account: str = Field(..., min_length=1)
    to_account: str = Field(..., min_length=1)
    amount: Union[str, Decimal] = Field(
        ..., description="Amount in the source account's currency, as a decimal string or JSON number"
    )
    note: str = ""
    execute_on: Optional[date] = Field(None, description="Omit for today; a future date schedules the transfer")

    def to_request(self) -> TransferRequest:
        return TransferRequest(
            from_account=self.from_account,
            to_account=self.to_account,
            amount=self.amount,
            note=self.note,
            execute_on=self.execute_on
        )


class AccountModel(BaseModel):
    identifier: str
    currency: str
    balance: str
    formatted_balance: str

    @classmethod
    def from_account(cls, account: Account) -> 'AccountModel':
        return cls(
            identifier=account.identifier,
            currency=account.currency.code,
            balance=str(account.balance),
            formatted_balance=format_amount(account.balance, account.currency)
        )


class TotalsModel(BaseModel):
    totals: Dict[str, str]
    formatted: Dict[str, str]


class TransactionModel(BaseModel):
    id: str
    from_account: str
    to_account: str
    amount: str
    converted_amount: str
    from_currency: str
    to_currency: str
    rate: str
    note: str
    date: date
    scheduled_id: Optional[str] = None

    @classmethod
    def from_transaction(cls, transaction: CompletedTransaction) -> 'TransactionModel':
        return cls(**transaction.to_dict())


class ScheduledTransferModel(BaseModel):
    id: str
    sequence: int
    scheduled_on: date
    from_account: str
    to_account: str
    amount: str
    note: str
    execute_on: date

    @classmethod
    def from_entry(cls, entry: PendingScheduledTransfer) -> 'ScheduledTransferModel':
        return cls(**entry.to_dict())


class FailedScheduledTransferModel(BaseModel):
    reason: str
    message: str
    attempted_on: date
    entry: ScheduledTransferModel

    @classmethod
    def from_failure(cls, failure: FailedScheduledTransfer) -> 'FailedScheduledTransferModel':
        return cls(
            reason=failure.reason.value,
            message=failure.message,
            attempted_on=failure.attempted_on,
            entry=ScheduledTransferModel.from_entry(failure.entry)
        )


class TransferResponse(BaseModel):
    status: str
    message: str
    transaction: Optional[TransactionModel] = None
    scheduled: Optional[ScheduledTransferModel] = None

    @classmethod
    def from_outcome(cls, outcome: TransferOutcome) -> 'TransferResponse':
        if outcome.is_scheduled:
            return cls(
                status=outcome.status.value,
                message="Scheduled transfer saved",
                scheduled=ScheduledTransferModel.from_entry(outcome.scheduled)
            )
        return cls(
            status=outcome.status.value,
            message="Transfer processed successfully",
            transaction=TransactionModel.from_transaction(outcome.transaction)
        )


class TickResponse(BaseModel):
    today: date
    executed: List[TransactionModel]
    failed: List[FailedScheduledTransferModel]
    remaining: int

    @classmethod
    def from_result(cls, result: TickResult) -> 'TickResponse':
        return cls(
            today=result.today,
            executed=[TransactionModel.from_transaction(t) for t in result.completed],
            failed=[FailedScheduledTransferModel.from_failure(f) for f in result.failed],
            remaining=result.remaining
        )


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Dict[str, str] = {}
