"""In-process change feed for view refreshes."""

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from threading import Lock
from uuid import UUID, uuid4

from shoot_coordinator.domain.changes import ChangeAction, ChangeEvent

logger = logging.getLogger(__name__)

TRACKED_TABLES = frozenset({"profiles", "availability", "shoots"})
DEFAULT_BUFFER_SIZE = 256
DEFAULT_IDLE_TIMEOUT = timedelta(minutes=15)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class Subscription:
    """Pending change events for one mounted view."""

    id: UUID
    tables: frozenset[str]
    buffer: deque[ChangeEvent]
    lock: Lock
    owner_id: UUID | None = None
    last_seen_at: datetime = field(default_factory=_utcnow)

    def poll(self) -> list[ChangeEvent]:
        """Drain and return every pending event."""
        with self.lock:
            events = list(self.buffer)
            self.buffer.clear()
        return events


@dataclass
class ChangeFeed:
    """Fan committed writes out to explicit subscribers.

    Subscriptions that go unpolled for ``idle_timeout`` are dropped, so a
    client that disappears without unsubscribing does not hold a buffer.
    """

    buffer_size: int = DEFAULT_BUFFER_SIZE
    idle_timeout: timedelta = DEFAULT_IDLE_TIMEOUT
    clock: Callable[[], datetime] = field(default=_utcnow)
    _subscriptions: dict[UUID, Subscription] = field(default_factory=dict)
    _sequence: int = 0
    _lock: Lock = field(default_factory=Lock)

    def subscribe(
        self, tables: Iterable[str] | None = None, owner_id: UUID | None = None
    ) -> Subscription:
        """Register a subscriber for the given tables (all when omitted)."""
        selected = frozenset(tables) if tables else TRACKED_TABLES
        unknown = selected - TRACKED_TABLES
        if unknown:
            raise ValueError(f"Unknown tables: {', '.join(sorted(unknown))}")
        now = self.clock()
        subscription = Subscription(
            id=uuid4(),
            tables=selected,
            buffer=deque(maxlen=self.buffer_size),
            lock=self._lock,
            owner_id=owner_id,
            last_seen_at=now,
        )
        with self._lock:
            self._evict_idle(now)
            self._subscriptions[subscription.id] = subscription
        return subscription

    def unsubscribe(self, subscription_id: UUID, owner_id: UUID | None = None) -> None:
        """Stop delivering events to a subscriber."""
        with self._lock:
            self._lookup(subscription_id, owner_id)
            del self._subscriptions[subscription_id]

    def get(self, subscription_id: UUID, owner_id: UUID | None = None) -> Subscription:
        """Return an active subscription and mark it as seen."""
        now = self.clock()
        with self._lock:
            self._evict_idle(now)
            subscription = self._lookup(subscription_id, owner_id)
            subscription.last_seen_at = now
            return subscription

    def publish(self, table: str, action: ChangeAction, record_id: UUID) -> None:
        """Record a committed write and queue it for matching subscribers."""
        now = self.clock()
        with self._lock:
            self._evict_idle(now)
            self._sequence += 1
            event = ChangeEvent(
                sequence=self._sequence,
                table=table,
                action=action,
                record_id=record_id,
                occurred_at=now,
            )
            for subscription in self._subscriptions.values():
                if table in subscription.tables:
                    subscription.buffer.append(event)
        logger.debug("Published %s on %s", action, table)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _lookup(self, subscription_id: UUID, owner_id: UUID | None) -> Subscription:
        subscription = self._subscriptions.get(subscription_id)
        if subscription is None:
            raise KeyError(subscription_id)
        # Another user's subscription is reported as missing.
        if owner_id is not None and subscription.owner_id != owner_id:
            raise KeyError(subscription_id)
        return subscription

    def _evict_idle(self, now: datetime) -> None:
        cutoff = now - self.idle_timeout
        idle = [
            subscription_id
            for subscription_id, subscription in self._subscriptions.items()
            if subscription.last_seen_at < cutoff
        ]
        for subscription_id in idle:
            del self._subscriptions[subscription_id]
        if idle:
            logger.info("Dropped %d idle subscriptions", len(idle))
