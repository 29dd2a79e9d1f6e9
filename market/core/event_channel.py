"""Event Channel: typed publish/subscribe between lifecycle transitions and observers.

Invariants:
    - Handlers run synchronously, on the publishing thread, in registration order
    - A failing handler is logged and skipped; the remaining handlers still run
    - publish() never raises because of a handler and never undoes the state change
      that triggered it (publishers call it after the store write)
    - Events are descriptive only, never a gate on the transition that produced them
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Union

from market.core.domain_types import EventKind, OrderStatus, ProductStatus
from market.core.entities import Order, Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderStatusChanged:
    order: Order
    previous: OrderStatus | None
    current: OrderStatus
    kind: EventKind = EventKind.ORDER_STATUS_CHANGED


@dataclass(frozen=True)
class ProductStatusChanged:
    product: Product
    previous: ProductStatus
    current: ProductStatus
    kind: EventKind = EventKind.PRODUCT_STATUS_CHANGED


Event = Union[OrderStatusChanged, ProductStatusChanged]
EventHandler = Callable[[Event], None]


class EventChannel:
    """Subscriber registry keyed by EventKind."""

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[EventHandler]] = {}
        self._lock = threading.RLock()

    def subscribe(self, kind: EventKind, handler: EventHandler) -> None:
        with self._lock:
            self._handlers.setdefault(kind, []).append(handler)

    def unsubscribe(self, kind: EventKind, handler: EventHandler) -> bool:
        with self._lock:
            handlers = self._handlers.get(kind, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
            return True

    def subscriber_count(self, kind: EventKind) -> int:
        with self._lock:
            return len(self._handlers.get(kind, []))

    def publish(self, event: Event) -> None:
        with self._lock:
            handlers = list(self._handlers.get(event.kind, []))
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.warning(
                    f"Event handler {getattr(handler, '__name__', handler)!r} failed: {e}",
                    extra={"event_kind": event.kind.value},
                    exc_info=True,
                )
