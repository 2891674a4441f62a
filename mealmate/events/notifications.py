"""Notification service used by workflow code to surface alerts.

Each dialog is configured at show time with one immutable options value
(``AlertOptions`` or ``ConfirmOptions``) published on an injected EventBus.

Quick use:
    bus = EventBus()
    notifier = Notifier(bus)
    notifier.error("Oops!", "Something went wrong")
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .Event_Bus import EventBus, ALERT_ERROR, ALERT_SUCCESS, ALERT_INFO, ALERT_CONFIRM

__all__ = ['AlertOptions', 'ConfirmOptions', 'Notifier']


@dataclass(frozen=True)
class AlertOptions:
    title: str
    message: str
    button_text: str = "OK"
    icon: Optional[str] = None
    on_close: Optional[Callable[[], None]] = None


@dataclass(frozen=True)
class ConfirmOptions:
    title: str
    message: str
    confirm_text: str = "Confirm"
    cancel_text: str = "Cancel"
    destructive: bool = False
    icon: Optional[str] = None
    on_confirm: Optional[Callable[[], Any]] = None
    on_cancel: Optional[Callable[[], None]] = None


class Notifier:
    def __init__(self, bus: EventBus):
        self.bus = bus

    def error(self, title: str, message: str, **options) -> AlertOptions:
        """Publish an alert.error event."""
        alert = AlertOptions(title=title, message=message, **options)
        self.bus.publish(ALERT_ERROR, alert)
        return alert

    def success(self, title: str, message: str, **options) -> AlertOptions:
        alert = AlertOptions(title=title, message=message, **options)
        self.bus.publish(ALERT_SUCCESS, alert)
        return alert

    def info(self, title: str, message: str, **options) -> AlertOptions:
        alert = AlertOptions(title=title, message=message, **options)
        self.bus.publish(ALERT_INFO, alert)
        return alert

    def confirm(self, title: str, message: str, **options) -> ConfirmOptions:
        """Publish an alert.confirm event; the subscriber calls on_confirm/on_cancel."""
        request = ConfirmOptions(title=title, message=message, **options)
        self.bus.publish(ALERT_CONFIRM, request)
        return request
