"""Simple Event Bus / Observer implementation for meal-plan changes.

Event names:
  meal_plan.meal_added -> payload {"meal": PlannedMeal}
  meal_plan.meal_removed -> payload {"meal": PlannedMeal}
  meal_plan.week_cleared -> payload {"week_start": date, "removed": int}
  meal_plan.unresolved_recipes -> payload {"meal_ids": [str], "recipe_ids": [id]}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from threading import Lock
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
MEAL_ADDED = "meal_plan.meal_added"
MEAL_REMOVED = "meal_plan.meal_removed"
WEEK_CLEARED = "meal_plan.week_cleared"
UNRESOLVED_RECIPES = "meal_plan.unresolved_recipes"

ALL_EVENTS = (MEAL_ADDED, MEAL_REMOVED, WEEK_CLEARED, UNRESOLVED_RECIPES)


Subscriber = Callable[[str, Any], None]


class EventBus:
	"""Delivers meal-plan events to subscribers in subscription order.

	The store publishes from API worker threads while observers may
	subscribe or unsubscribe, so the subscriber table is guarded by a lock.
	Callbacks run outside the lock on a snapshot of the list.
	"""

	def __init__(self):
		self._lock = Lock()
		self._subscribers: Dict[str, List[Subscriber]] = {}

	def subscribe(self, event_name: str, callback: Subscriber) -> Subscriber:
		with self._lock:
			listeners = self._subscribers.setdefault(event_name, [])
			if callback not in listeners:
				listeners.append(callback)
		return callback

	def unsubscribe(self, event_name: str, callback: Subscriber) -> bool:
		with self._lock:
			listeners = self._subscribers.get(event_name)
			if not listeners or callback not in listeners:
				return False
			listeners.remove(callback)
			if not listeners:
				del self._subscribers[event_name]
		return True

	def subscriber_count(self, event_name: str) -> int:
		with self._lock:
			return len(self._subscribers.get(event_name, ()))

	def publish(self, event_name: str, payload: Any) -> int:
		"""Returns how many subscribers handled the event without raising."""
		with self._lock:
			listeners = tuple(self._subscribers.get(event_name, ()))
		delivered = 0
		for cb in listeners:
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Subscriber %r failed on %s", cb, event_name)
			else:
				delivered += 1
		return delivered


GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'Subscriber',
	'MEAL_ADDED', 'MEAL_REMOVED', 'WEEK_CLEARED', 'UNRESOLVED_RECIPES', 'ALL_EVENTS'
]
