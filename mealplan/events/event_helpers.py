"""Event helper utilities.

Helpers for publishing meal-plan events on a bus (the global one by default).

Quick import:
    from mealplan.events.event_helpers import (
        publish_meal_added, publish_meal_removed, publish_week_cleared,
        publish_unresolved_recipes
    )
"""
from __future__ import annotations
from datetime import date
from typing import Any, Optional, Sequence
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    MEAL_ADDED, MEAL_REMOVED, WEEK_CLEARED, UNRESOLVED_RECIPES
)

__all__ = [
    'publish_meal_added', 'publish_meal_removed', 'publish_week_cleared',
    'publish_unresolved_recipes'
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_meal_added(meal: Any, bus: Optional[EventBus] = None):
    return _bus(bus).publish(MEAL_ADDED, {'meal': meal})


def publish_meal_removed(meal: Any, bus: Optional[EventBus] = None):
    return _bus(bus).publish(MEAL_REMOVED, {'meal': meal})


def publish_week_cleared(week_start: date, removed: int, bus: Optional[EventBus] = None):
    return _bus(bus).publish(WEEK_CLEARED, {'week_start': week_start, 'removed': removed})


def publish_unresolved_recipes(meal_ids: Sequence[str], recipe_ids: Sequence[Any], bus: Optional[EventBus] = None):
    """Publish the planned meals left out of a grocery list.

    Payload structure:
        {
          'count': <int>,
          'meal_ids': [ ... ],
          'recipe_ids': [ ... ]   # deduplicated, first-seen order
        }
    """
    return _bus(bus).publish(UNRESOLVED_RECIPES, {
        'count': len(meal_ids),
        'meal_ids': list(meal_ids),
        'recipe_ids': list(dict.fromkeys(recipe_ids)),
    })
