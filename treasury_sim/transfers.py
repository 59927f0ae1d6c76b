"""
Transfer Engine Module

Validates and executes a single transfer between two treasury accounts,
converting currency through the FX rate table. Validation runs in a fixed
order and the first failure wins; nothing is mutated until every check
has passed, and then the debit, the credit and the log entry are applied
as one atomic commit.
"""

from decimal import Decimal
from datetime import date
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING
from enum import Enum
import uuid

from .accounts import Account
from .currency import format_amount, is_positive_amount, to_decimal
from .errors import (
    AccountNotFoundError, InsufficientFundsError, InvalidAmountError,
    PastDateError, SameAccountError, TransferError
)
from .events import DomainEvent, EventDispatcher
from .fx import FxRateTable
from .logging_config import get_logger, log_action
from .state import TreasuryState
from .transactions import CompletedTransaction

if TYPE_CHECKING:
    from .scheduler import PendingScheduledTransfer


@dataclass(frozen=True)
class TransferRequest:
    """
    Request to move `amount` (source currency) between two accounts
    `execute_on` of None means today
    """
    from_account: str
    to_account: str
    amount: Any
    note: str = ""
    execute_on: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from_account": self.from_account,
            "to_account": self.to_account,
            "amount": str(self.amount),
            "note": self.note,
            "execute_on": self.execute_on.isoformat() if self.execute_on else None,
        }


class TransferStatus(Enum):
    """What happened to an accepted transfer request"""
    COMPLETED = "completed"  # Committed to the ledger
    SCHEDULED = "scheduled"  # Deferred to its execution date


@dataclass(frozen=True)
class TransferOutcome:
    status: TransferStatus
    request: TransferRequest
    transaction: Optional[CompletedTransaction] = None
    scheduled: Optional['PendingScheduledTransfer'] = None

    @property
    def is_completed(self) -> bool:
        return self.status == TransferStatus.COMPLETED

    @property
    def is_scheduled(self) -> bool:
        return self.status == TransferStatus.SCHEDULED


class TransferEngine:
    """
    Executes transfers against the shared treasury state
    """

    def __init__(
        self,
        state: TreasuryState,
        fx_rates: FxRateTable,
        event_dispatcher: Optional[EventDispatcher] = None
    ):
        self.state = state
        self.fx_rates = fx_rates
        self._event_dispatcher = event_dispatcher
        self.logger = get_logger("treasury.transfers")

    def execute(self, request: TransferRequest, today: date) -> TransferOutcome:
        """
        Validate and execute an interactive transfer

        A request dated after `today` is not checked for funds or FX
        routes; it comes back as a SCHEDULED outcome for the scheduler.

        Args:
            request: Transfer request
            today: Current date from the clock

        Returns:
            TransferOutcome, COMPLETED with the transaction or SCHEDULED

        Raises:
            TransferError: On the first failed check; state is untouched
        """
        try:
            from_account, to_account, amount = self._validate_parties(request)

            if request.execute_on is not None:
                if request.execute_on < today:
                    raise PastDateError(
                        f"Execution date {request.execute_on.isoformat()} is before {today.isoformat()}",
                        {"execute_on": request.execute_on.isoformat(), "today": today.isoformat()}
                    )
                if request.execute_on > today:
                    return TransferOutcome(status=TransferStatus.SCHEDULED, request=request)

            transaction = self._convert_and_commit(request, from_account, to_account, amount, today)
        except TransferError as e:
            self._reject(request, e)
            raise

        return TransferOutcome(
            status=TransferStatus.COMPLETED,
            request=request,
            transaction=transaction
        )

    def commit(
        self,
        request: TransferRequest,
        today: date,
        scheduled_id: Optional[str] = None
    ) -> CompletedTransaction:
        """
        Execute a transfer without date checks (the scheduler's path)

        Raises:
            TransferError: On the first failed check; state is untouched
        """
        from_account, to_account, amount = self._validate_parties(request)
        return self._convert_and_commit(
            request, from_account, to_account, amount, today, scheduled_id=scheduled_id
        )

    def _validate_parties(self, request: TransferRequest) -> Tuple[Account, Account, Decimal]:
        """Account existence, distinct accounts and a positive finite amount"""
        ledger = self.state.ledger
        for identifier in (request.from_account, request.to_account):
            if identifier not in ledger:
                raise AccountNotFoundError(
                    f"Account {identifier} not found",
                    {"account": identifier}
                )

        if request.from_account == request.to_account:
            raise SameAccountError(
                "Cannot transfer to the same account",
                {"account": request.from_account}
            )

        try:
            amount = to_decimal(request.amount)
        except ValueError:
            raise InvalidAmountError(
                f"Amount {request.amount!r} is not a number",
                {"amount": str(request.amount)}
            )
        if not is_positive_amount(amount):
            raise InvalidAmountError(
                f"Amount must be a finite number greater than zero, got {amount}",
                {"amount": str(amount)}
            )

        return ledger.require_account(request.from_account), ledger.require_account(request.to_account), amount

    def _convert_and_commit(
        self,
        request: TransferRequest,
        from_account: Account,
        to_account: Account,
        amount: Decimal,
        today: date,
        scheduled_id: Optional[str] = None
    ) -> CompletedTransaction:
        converted_amount, rate = self.fx_rates.convert(
            amount, from_account.currency, to_account.currency
        )

        # Funds are checked in the source currency, before conversion
        if not from_account.can_cover(amount):
            raise InsufficientFundsError(
                f"Insufficient funds in {from_account.identifier}: "
                f"balance {format_amount(from_account.balance, from_account.currency)}, "
                f"requested {format_amount(amount, from_account.currency)}",
                {"account": from_account.identifier,
                 "balance": str(from_account.balance),
                 "requested": str(amount)}
            )

        transaction = CompletedTransaction(
            id=str(uuid.uuid4()),
            from_account=from_account.identifier,
            to_account=to_account.identifier,
            amount=amount,
            converted_amount=converted_amount,
            from_currency=from_account.currency,
            to_currency=to_account.currency,
            note=request.note,
            date=request.execute_on or today,
            rate=rate,
            scheduled_id=scheduled_id
        )

        with self.state.ledger.atomic():
            self.state.ledger.apply_transfer(
                from_account.identifier, to_account.identifier, amount, converted_amount
            )
            self.state.log.record(transaction)

        totals = self.state.aggregator.refresh()

        log_action(
            self.logger, "info", f"Transfer committed: {transaction.describe()}",
            action="commit_transfer", resource=f"transaction:{transaction.id}",
            extra=transaction.to_dict()
        )
        self._emit(DomainEvent.TRANSFER_COMPLETED, "transaction", transaction.id, transaction.to_dict())
        self._emit(
            DomainEvent.BALANCES_RECOMPUTED, "totals", transaction.id,
            {currency.code: str(total) for currency, total in totals.items()}
        )
        return transaction

    def _reject(self, request: TransferRequest, error: TransferError) -> None:
        log_action(
            self.logger, "warning", f"Transfer rejected: {error.message}",
            action="reject_transfer", resource=f"account:{request.from_account}",
            extra={"reason": error.kind.value, **request.to_dict()}
        )
        self._emit(
            DomainEvent.TRANSFER_REJECTED, "transfer_request", request.from_account,
            {"reason": error.kind.value, "message": error.message, **request.to_dict()}
        )

    def _emit(self, event_type: DomainEvent, entity_type: str, entity_id: str, data: Dict[str, Any]) -> None:
        if self._event_dispatcher:
            self._event_dispatcher.emit(event_type, entity_type, entity_id, data)
