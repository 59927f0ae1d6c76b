"""
Scheduled Transfer Module

Holds future-dated transfers until their execution date. Each clock tick
runs every due entry through the transfer engine exactly once and removes
it from the pending set whatever the result. Failures are not raised to
the caller: they are kept on a failed-scheduled log with the reason, so
the accounting behaviour stays "one attempt, then gone" while the drop
remains observable.
"""

from datetime import date
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import itertools

from .errors import TransferError, TransferErrorKind
from .events import DomainEvent, EventDispatcher
from .logging_config import get_logger, log_action
from .transactions import CompletedTransaction
from .transfers import TransferEngine, TransferRequest


@dataclass(frozen=True)
class PendingScheduledTransfer:
    """Transfer request waiting for its execution date"""
    id: str
    sequence: int  # Monotonic creation counter
    request: TransferRequest
    scheduled_on: date

    @property
    def execute_on(self) -> date:
        return self.request.execute_on

    def is_due(self, today: date) -> bool:
        return self.execute_on <= today

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sequence": self.sequence,
            "scheduled_on": self.scheduled_on.isoformat(),
            **self.request.to_dict(),
        }


@dataclass(frozen=True)
class FailedScheduledTransfer:
    """Due entry whose single execution attempt was rejected"""
    entry: PendingScheduledTransfer
    reason: TransferErrorKind
    message: str
    attempted_on: date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reason": self.reason.value,
            "message": self.message,
            "attempted_on": self.attempted_on.isoformat(),
            "entry": self.entry.to_dict(),
        }


@dataclass
class TickResult:
    """What one scheduler tick did"""
    today: date
    completed: List[CompletedTransaction] = field(default_factory=list)
    failed: List[FailedScheduledTransfer] = field(default_factory=list)
    remaining: int = 0

    @property
    def attempted(self) -> int:
        return len(self.completed) + len(self.failed)


class TransferScheduler:
    """
    Pending set of scheduled transfers, keyed by id
    """

    def __init__(
        self,
        engine: TransferEngine,
        event_dispatcher: Optional[EventDispatcher] = None
    ):
        self.engine = engine
        self._event_dispatcher = event_dispatcher
        self._pending: Dict[str, PendingScheduledTransfer] = {}
        self._failed: List[FailedScheduledTransfer] = []
        self._sequence = itertools.count(1)
        self._last_tick: Optional[date] = None
        self.logger = get_logger("treasury.scheduler")

    def schedule(self, request: TransferRequest, today: date) -> PendingScheduledTransfer:
        """
        Add a future-dated request to the pending set

        The request is not checked for funds or FX routes here; that
        happens once, on the first tick at or after its execution date.

        Raises:
            ValueError: If the request has no execution date, or it is not after today
        """
        if request.execute_on is None:
            raise ValueError("Scheduled transfers need an execution date")
        if request.execute_on <= today:
            raise ValueError(
                f"Scheduled execution date {request.execute_on.isoformat()} must be after {today.isoformat()}"
            )

        sequence = next(self._sequence)
        entry = PendingScheduledTransfer(
            id=f"SCH-{sequence:06d}",
            sequence=sequence,
            request=request,
            scheduled_on=today
        )
        self._pending[entry.id] = entry

        log_action(
            self.logger, "info", f"Transfer scheduled for {request.execute_on.isoformat()}",
            action="schedule_transfer", resource=f"scheduled:{entry.id}",
            extra=entry.to_dict()
        )
        self._emit(DomainEvent.TRANSFER_SCHEDULED, entry.id, entry.to_dict())
        return entry

    def tick(self, today: date) -> TickResult:
        """
        Execute every entry due on or before `today`

        Due entries run most recently scheduled first. Each is attempted
        once and removed from the pending set whether it succeeds or not.
        """
        if self._last_tick and today < self._last_tick:
            self.logger.warning(
                f"Clock moved backwards: tick for {today.isoformat()} after {self._last_tick.isoformat()}"
            )
        self._last_tick = today

        due = sorted(
            (entry for entry in self._pending.values() if entry.is_due(today)),
            key=lambda entry: entry.sequence,
            reverse=True
        )
        result = TickResult(today=today)

        for entry in due:
            # Removed before the attempt: one attempt only
            del self._pending[entry.id]
            try:
                transaction = self.engine.commit(entry.request, today, scheduled_id=entry.id)
            except TransferError as e:
                failure = FailedScheduledTransfer(
                    entry=entry,
                    reason=e.kind,
                    message=e.message,
                    attempted_on=today
                )
                self._failed.append(failure)
                result.failed.append(failure)
                log_action(
                    self.logger, "warning", f"Scheduled transfer {entry.id} dropped: {e.message}",
                    action="drop_scheduled_transfer", resource=f"scheduled:{entry.id}",
                    extra=failure.to_dict()
                )
                self._emit(DomainEvent.SCHEDULED_FAILED, entry.id, failure.to_dict())
            else:
                result.completed.append(transaction)
                self._emit(
                    DomainEvent.SCHEDULED_EXECUTED, entry.id,
                    {"transaction_id": transaction.id, **entry.to_dict()}
                )

        result.remaining = len(self._pending)
        if due:
            log_action(
                self.logger, "info",
                f"Scheduler tick {today.isoformat()}: {len(result.completed)} executed, "
                f"{len(result.failed)} dropped, {result.remaining} pending",
                action="scheduler_tick", resource="scheduler"
            )
        return result

    def pending(self) -> List[PendingScheduledTransfer]:
        """Pending entries, most recently scheduled first"""
        return sorted(self._pending.values(), key=lambda entry: entry.sequence, reverse=True)

    def get(self, entry_id: str) -> Optional[PendingScheduledTransfer]:
        return self._pending.get(entry_id)

    def failed(self) -> List[FailedScheduledTransfer]:
        """Failed-scheduled log, most recent attempt first"""
        return list(reversed(self._failed))

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    def _emit(self, event_type: DomainEvent, entity_id: str, data: Dict[str, Any]) -> None:
        if self._event_dispatcher:
            self._event_dispatcher.emit(event_type, "scheduled_transfer", entity_id, data)
