"""Simple Event Bus / Observer implementation for bill changes.

Event names used so far:
  bill.changed -> payload {"command": str, "bill": Bill}
  bill.person_removed -> payload {"person_id": str, "items_affected": int}
  bill.split_type_changed -> payload {"item_id": str, "split_type": str, "cleared": int}
  bill.section_removed -> payload {"section_id": str, "items_reassigned": int}

Subscribers are callables taking (event_name, payload). The surrounding
application hooks its persistence adapter onto bill.changed.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
BILL_CHANGED = "bill.changed"
BILL_PERSON_REMOVED = "bill.person_removed"
BILL_SPLIT_TYPE_CHANGED = "bill.split_type_changed"
BILL_SECTION_REMOVED = "bill.section_removed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception(f"Error delivering {event_name} to {cb}")


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()

__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'BILL_CHANGED', 'BILL_PERSON_REMOVED', 'BILL_SPLIT_TYPE_CHANGED', 'BILL_SECTION_REMOVED'
]
