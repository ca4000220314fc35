"""Web-facing observers for meal-plan events.

This module subscribes to an EventBus (GLOBAL_EVENT_BUS by default) for every
meal-plan event and stores a lightweight in-memory ring buffer of recent
events that the HTTP API exposes for polling.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * Thread-safety ensured with a simple Lock; FastAPI runs sync endpoints in
    a thread pool.
  * A MAX_EVENTS cap prevents unbounded memory growth.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import date, datetime, timezone

from mealplan.logic.scheduling.week_window import format_iso_date
from mealplan.utilities.constants import MAX_EVENTS
from .Event_Bus import ALL_EVENTS, EventBus, GLOBAL_EVENT_BUS

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
_started_on: Optional[EventBus] = None


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    evt: Dict[str, Any] = {
        'type': event_name,
        'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
    }
    # Normalize payload fields we care about for UI
    if isinstance(payload, dict):
        meal = payload.get('meal')
        if meal is not None and hasattr(meal, 'to_dict'):
            evt['meal'] = meal.to_dict()
        week_start = payload.get('week_start')
        if isinstance(week_start, date):
            evt['week_start'] = format_iso_date(week_start)
        for k in ('removed', 'count', 'meal_ids', 'recipe_ids'):
            if k in payload:
                evt[k] = payload[k]
    with _lock:
        evt['id'] = _next_id
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start(bus: Optional[EventBus] = None):
    """Idempotent start: subscribe observers once per bus."""
    global _started_on
    bus = bus if bus is not None else GLOBAL_EVENT_BUS
    if _started_on is bus:
        return
    if _started_on is not None:
        stop()
    for name in ALL_EVENTS:
        bus.subscribe(name, _record)
    _started_on = bus
    logger.debug("Web observers subscribed to %d meal-plan events", len(ALL_EVENTS))


def stop():
    global _started_on
    if _started_on is None:
        return
    for name in ALL_EVENTS:
        _started_on.unsubscribe(name, _record)
    _started_on = None


def clear():
    """Drop buffered events (the cursor keeps counting)."""
    with _lock:
        _events.clear()


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the last N (up to MAX_EVENTS) events.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'stop', 'clear', 'get_events']
