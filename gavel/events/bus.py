"""Event bus connecting the auction engine to its observers."""

import logging
from collections import defaultdict
from typing import Callable, TypeVar

from gavel.events.types import AuctionEvent

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=AuctionEvent)
EventHandler = Callable[[AuctionEvent], None]


class EventBus:
    """
    Dispatches auction events to handlers registered by event class.

    A handler registered for a class also receives its subclasses, so
    subscribing to AuctionEvent observes the whole auction. Handlers for
    the most specific class run first; errors propagate to the emitter.

    Example:
        bus = EventBus()
        bus.subscribe(LotSoldEvent, lambda e: print(e.buyer_id, e.price))
        engine = AuctionEngine(lots, teams, event_bus=bus)
    """

    def __init__(self) -> None:
        self._handlers: dict[type[AuctionEvent], list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        """Register a handler for event_type and its subclasses."""
        if not (isinstance(event_type, type) and issubclass(event_type, AuctionEvent)):
            raise TypeError(f"Not an auction event type: {event_type!r}")
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        self.subscribe(AuctionEvent, handler)

    def emit(self, event: AuctionEvent) -> None:
        for event_type in type(event).__mro__:
            if event_type not in self._handlers:
                continue
            for handler in self._handlers[event_type]:
                handler(event)
            if event_type is AuctionEvent:
                break
        logger.debug(f"Emitted {type(event).__name__} (lot {event.lot_number}/{event.catalog_size})")
