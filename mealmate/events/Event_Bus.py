"""Simple Event Bus / Observer implementation for user-facing alerts.

Event names used so far:
  alert.error   -> payload AlertOptions
  alert.success -> payload AlertOptions
  alert.info    -> payload AlertOptions
  alert.confirm -> payload ConfirmOptions

Subscribers are callables taking (event_name, payload). A bus is created by
whoever owns the presentation layer and handed to the code that needs to
raise alerts; there is no process-wide instance.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
ALERT_ERROR = "alert.error"
ALERT_SUCCESS = "alert.success"
ALERT_INFO = "alert.info"
ALERT_CONFIRM = "alert.confirm"
ALL_ALERTS = (ALERT_ERROR, ALERT_SUCCESS, ALERT_INFO, ALERT_CONFIRM)

Subscriber = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Subscriber):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def subscribe_all(self, event_names, callback: Subscriber):
		for name in event_names:
			self.subscribe(name, callback)

	def unsubscribe(self, event_name: str, callback: Subscriber):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None) -> int:
		"""Deliver to every subscriber; returns how many received it without raising."""
		delivered = 0
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
				delivered += 1
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)
		return delivered


__all__ = [
	'EventBus', 'Subscriber',
	'ALERT_ERROR', 'ALERT_SUCCESS', 'ALERT_INFO', 'ALERT_CONFIRM', 'ALL_ALERTS',
]
