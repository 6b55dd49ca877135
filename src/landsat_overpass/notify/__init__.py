"""Overpass reminders."""

from .reminders import Reminder, ReminderScheduler, ReminderState, log_notifier

__all__ = [
    "Reminder",
    "ReminderScheduler",
    "ReminderState",
    "log_notifier",
]
