"""Notification Subscribers: react to lifecycle events with log records and terminal notices.

Invariants:
    - Subscribers only observe; they never write to the store
    - Every order status change is logged with order_id and event_kind extras
    - Order notices go to the terminal through the injected emitter
"""

import logging

from market.core.collaborator_protocols import Emitter
from market.core.domain_types import EventKind
from market.core.event_channel import (
    EventChannel, OrderStatusChanged, ProductStatusChanged,
)

logger = logging.getLogger(__name__)


def describe_order_change(event: OrderStatusChanged) -> str:
    if event.previous is None:
        return f"[notice] Order {event.order.id} created: {event.current.display_name}"
    return (
        f"[notice] Order {event.order.id}: "
        f"{event.previous.display_name} -> {event.current.display_name}"
    )


class OrderNotifier:
    """ORDER_STATUS_CHANGED subscriber."""

    def __init__(self, emit: Emitter):
        self.emit = emit

    def __call__(self, event: OrderStatusChanged) -> None:
        logger.info(
            f"Order status changed: "
            f"{event.previous.value if event.previous else 'new'} -> {event.current.value}",
            extra={
                "order_id": event.order.id,
                "product_id": event.order.product_id,
                "event_kind": event.kind.value,
            },
        )
        self.emit(describe_order_change(event))


def log_product_change(event: ProductStatusChanged) -> None:
    logger.info(
        f"Product status changed: {event.previous.value} -> {event.current.value}",
        extra={"product_id": event.product.id, "event_kind": event.kind.value},
    )


def register_subscribers(events: EventChannel, emit: Emitter) -> None:
    events.subscribe(EventKind.ORDER_STATUS_CHANGED, OrderNotifier(emit))
    events.subscribe(EventKind.PRODUCT_STATUS_CHANGED, log_product_change)
