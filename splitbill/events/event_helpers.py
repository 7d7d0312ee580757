"""Event helper utilities.

Builds the payloads for bill events and publishes them on a given bus
(the global one by default).

Quick import:
    from splitbill.events.event_helpers import (
        publish_bill_changed, publish_person_removed,
        publish_split_type_changed, publish_section_removed
    )
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    BILL_CHANGED, BILL_PERSON_REMOVED, BILL_SPLIT_TYPE_CHANGED, BILL_SECTION_REMOVED
)

__all__ = [
    'publish_bill_changed', 'publish_person_removed',
    'publish_split_type_changed', 'publish_section_removed',
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_bill_changed(command: str, bill: Any, bus: Optional[EventBus] = None):
    """Publish a bill.changed event."""
    _bus(bus).publish(BILL_CHANGED, {
        'command': command,
        'bill': bill
    })


def publish_person_removed(person_id: str, items_affected: int, bus: Optional[EventBus] = None):
    """Publish a bill.person_removed event."""
    _bus(bus).publish(BILL_PERSON_REMOVED, {
        'person_id': person_id,
        'items_affected': items_affected
    })


def publish_split_type_changed(item_id: str, split_type: str, cleared: int, bus: Optional[EventBus] = None):
    """Publish a bill.split_type_changed event (cleared = number of dropped allocations)."""
    _bus(bus).publish(BILL_SPLIT_TYPE_CHANGED, {
        'item_id': item_id,
        'split_type': split_type,
        'cleared': cleared
    })


def publish_section_removed(section_id: str, items_reassigned: int, bus: Optional[EventBus] = None):
    """Publish a bill.section_removed event."""
    _bus(bus).publish(BILL_SECTION_REMOVED, {
        'section_id': section_id,
        'items_reassigned': items_reassigned
    })
