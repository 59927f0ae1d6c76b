"""
Treasury Simulator

Wires the ledger, FX table, transfer engine, scheduler and reporting into
one object for the presentation layer. Every public call runs under a
single lock spanning validation and commit, so an embedding multi-threaded
host cannot interleave two transfers against the same ledger.
"""

from datetime import date
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, List, Optional
from threading import RLock

from .accounts import Account
from .clock import Clock, FixedClock
from .currency import Currency
from .events import EventDispatcher, EventPayload
from .fx import FxRateTable
from .logging_config import get_logger
from .reporting import CurrencyTotals
from .scheduler import (
    FailedScheduledTransfer, PendingScheduledTransfer, TickResult, TransferScheduler
)
from .seed import seed_accounts, seed_fx_rates
from .state import TreasuryState
from .transactions import CompletedTransaction
from .transfers import TransferEngine, TransferOutcome, TransferRequest


class TreasurySimulator:

    def __init__(
        self,
        accounts: Iterable[Account],
        fx_rates: FxRateTable,
        clock: Clock,
        event_dispatcher: Optional[EventDispatcher] = None,
        log_events: bool = False
    ):
        self.clock = clock
        self.fx_rates = fx_rates
        self.state = TreasuryState.with_accounts(accounts)
        self.events = event_dispatcher or EventDispatcher()
        self.engine = TransferEngine(self.state, fx_rates, self.events)
        self.scheduler = TransferScheduler(self.engine, self.events)
        self._lock = RLock()
        self.logger = get_logger("treasury.simulator")

        if log_events:
            self.events.subscribe_all(self._log_event)

        self.state.aggregator.refresh()

    @classmethod
    def from_seed(
        cls,
        clock: Optional[Clock] = None,
        event_dispatcher: Optional[EventDispatcher] = None,
        log_events: bool = False
    ) -> 'TreasurySimulator':
        """Simulator over the demo accounts and FX table"""
        return cls(
            seed_accounts(), seed_fx_rates(), clock or FixedClock(),
            event_dispatcher=event_dispatcher, log_events=log_events
        )

    def today(self) -> date:
        return self.clock.today()

    def submit(self, request: TransferRequest) -> TransferOutcome:
        """
        Submit a transfer request

        Today-dated (or undated) requests are executed immediately;
        future-dated ones are added to the scheduler.

        Raises:
            TransferError: If the request is rejected; nothing is mutated
        """
        with self._lock:
            today = self.today()
            outcome = self.engine.execute(request, today)
            if outcome.is_scheduled:
                entry = self.scheduler.schedule(request, today)
                outcome = replace(outcome, scheduled=entry)
            return outcome

    def transfer(
        self,
        from_account: str,
        to_account: str,
        amount: Decimal,
        note: str = "",
        execute_on: Optional[date] = None
    ) -> TransferOutcome:
        """Convenience wrapper around submit()"""
        return self.submit(TransferRequest(
            from_account=from_account,
            to_account=to_account,
            amount=amount,
            note=note,
            execute_on=execute_on
        ))

    def tick(self) -> TickResult:
        """Run the scheduler for the clock's current date"""
        with self._lock:
            return self.scheduler.tick(self.today())

    def advance_to(self, new_date: date) -> TickResult:
        """
        Move a FixedClock forward and run the scheduler

        Raises:
            TypeError: If the clock is not a FixedClock
        """
        if not isinstance(self.clock, FixedClock):
            raise TypeError("advance_to() needs a FixedClock")
        with self._lock:
            self.clock.set(new_date)
            return self.scheduler.tick(new_date)

    def accounts(self) -> List[Account]:
        with self._lock:
            return self.state.ledger.list_accounts()

    def get_account(self, identifier: str) -> Optional[Account]:
        with self._lock:
            return self.state.ledger.get_account(identifier)

    def currencies(self) -> List[Currency]:
        with self._lock:
            return self.state.ledger.currencies()

    def totals(self) -> CurrencyTotals:
        with self._lock:
            return self.state.aggregator.totals()

    def transactions(
        self,
        account: Optional[str] = None,
        currency: Optional[Currency] = None
    ) -> List[CompletedTransaction]:
        """Completed transactions, newest first, optionally filtered"""
        with self._lock:
            return list(self.state.log.query(account=account, currency=currency))

    def pending(self) -> List[PendingScheduledTransfer]:
        with self._lock:
            return self.scheduler.pending()

    def failed_scheduled(self) -> List[FailedScheduledTransfer]:
        with self._lock:
            return self.scheduler.failed()

    def _log_event(self, event: EventPayload) -> None:
        self.logger.debug(
            f"{event.event_type.value} {event.entity_type}:{event.entity_id}",
            extra={"action": "domain_event", "extra": event.to_dict()}
        )
