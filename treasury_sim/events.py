"""
Event System Module

Publish/subscribe dispatcher for treasury events. Handlers observe what
happened (completed, rejected, scheduled and failed transfers); they never
take part in the accounting itself.
"""

from enum import Enum
from typing import Callable, Dict, List, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid
import logging
from threading import RLock


class DomainEvent(Enum):
    """Events emitted by the treasury engine"""

    # Transfer events
    TRANSFER_COMPLETED = "transfer.completed"
    TRANSFER_REJECTED = "transfer.rejected"
    TRANSFER_SCHEDULED = "transfer.scheduled"

    # Scheduler events
    SCHEDULED_EXECUTED = "scheduled.executed"
    SCHEDULED_FAILED = "scheduled.failed"

    # Reporting events
    BALANCES_RECOMPUTED = "balances.recomputed"


@dataclass
class EventPayload:
    """Payload for domain events"""
    event_type: DomainEvent
    entity_type: str
    entity_id: str
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'event_type': self.event_type.value,
            'entity_type': self.entity_type,
            'entity_id': self.entity_id,
            'data': self.data,
            'timestamp': self.timestamp.isoformat(),
            'event_id': self.event_id
        }


Handler = Callable[[EventPayload], None]


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__name__", repr(handler))


class EventDispatcher:
    """Central event dispatcher, publish/subscribe pattern"""

    def __init__(self):
        self._handlers: Dict[DomainEvent, List[Handler]] = {}
        self._global_handlers: List[Handler] = []
        self._lock = RLock()
        self.logger = logging.getLogger("treasury.events")

    def subscribe(self, event_type: DomainEvent, handler: Handler) -> None:
        """Subscribe to a specific event type"""
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
            self.logger.debug(f"Subscribed handler {_handler_name(handler)} to {event_type.value}")

    def subscribe_all(self, handler: Handler) -> None:
        """Subscribe to ALL events"""
        with self._lock:
            self._global_handlers.append(handler)

    def unsubscribe(self, event_type: DomainEvent, handler: Handler) -> None:
        """Unsubscribe from a specific event type"""
        with self._lock:
            try:
                self._handlers.get(event_type, []).remove(handler)
            except ValueError:
                self.logger.warning(
                    f"Handler {_handler_name(handler)} was not subscribed to {event_type.value}"
                )

    def publish(self, event: EventPayload) -> None:
        """Publish event to all subscribers"""
        with self._lock:
            handlers = list(self._handlers.get(event.event_type, [])) + list(self._global_handlers)

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                # Log but don't break the main operation
                self.logger.error(
                    f"Error in event handler {_handler_name(handler)} for {event.event_type.value}: {e}"
                )

    def emit(
        self,
        event_type: DomainEvent,
        entity_type: str,
        entity_id: str,
        data: Optional[Dict[str, Any]] = None
    ) -> EventPayload:
        """Build and publish an event in one call"""
        event = EventPayload(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=entity_id,
            data=data or {}
        )
        self.publish(event)
        return event

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()
            self._global_handlers.clear()

    def get_handler_count(self, event_type: Optional[DomainEvent] = None) -> int:
        """Get count of handlers for a specific event type or all"""
        with self._lock:
            if event_type:
                return len(self._handlers.get(event_type, []))
            total = sum(len(handlers) for handlers in self._handlers.values())
            return total + len(self._global_handlers)
