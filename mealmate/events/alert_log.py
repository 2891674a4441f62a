"""Recent-alert buffer for a polling presentation layer.

``AlertLog`` subscribes to the alert events of an EventBus and keeps a
bounded list of recent alerts so a UI can ask only for what it has not
shown yet.

Design:
  * Each alert stored with an auto-increment integer id (cursor); clients
    call get_alerts(since=<last_id_seen>).
  * A Lock guards the buffer so a UI thread can poll while network code
    publishes.
  * max_alerts caps memory use; oldest entries are dropped first.
"""
from __future__ import annotations
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Optional

from .Event_Bus import ALL_ALERTS, EventBus

DEFAULT_MAX_ALERTS = 100


class AlertLog:
    def __init__(self, max_alerts: int = DEFAULT_MAX_ALERTS):
        self.max_alerts = max_alerts
        self._lock = Lock()
        self._alerts: List[Dict[str, Any]] = []
        self._next_id = 1

    def attach(self, bus: EventBus) -> None:
        bus.subscribe_all(ALL_ALERTS, self.record)

    def detach(self, bus: EventBus) -> None:
        for name in ALL_ALERTS:
            bus.unsubscribe(name, self.record)

    def record(self, event_name: str, payload: Any) -> None:  # signature expected by EventBus
        with self._lock:
            entry = {
                'id': self._next_id,
                'type': event_name,
                'ts': datetime.now(timezone.utc).isoformat(),
                'title': getattr(payload, 'title', ''),
                'message': getattr(payload, 'message', ''),
            }
            self._alerts.append(entry)
            self._next_id += 1
            if len(self._alerts) > self.max_alerts:
                del self._alerts[: len(self._alerts) - self.max_alerts]

    def get_alerts(self, since: Optional[int] = None) -> Dict[str, Any]:
        """Return alerts newer than 'since' (exclusive) plus the cursor to poll with next."""
        with self._lock:
            if since is None:
                data = list(self._alerts)
            else:
                data = [a for a in self._alerts if a['id'] > since]
            next_cursor = self._alerts[-1]['id'] if self._alerts else since or 0
        return {'alerts': data, 'next_cursor': next_cursor}


__all__ = ['AlertLog']
