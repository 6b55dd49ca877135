"""Overpass reminders fired shortly before a predicted pass.

Reminders live in process memory only. Pending reminders are lost when the
process exits.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from ..core.passes import OverpassResult

logger = logging.getLogger(__name__)

DEFAULT_LEAD_TIME = timedelta(minutes=30)
DEFAULT_HISTORY_SIZE = 100


class ReminderState(Enum):
    """Lifecycle of a reminder. Only SCHEDULED can change."""

    SCHEDULED = "scheduled"
    FIRED = "fired"
    CANCELLED = "cancelled"


@dataclass
class Reminder:
    """A pending or finished overpass reminder.

    Attributes:
        reminder_id: Unique id
        recipient: Address the notification goes to
        satellite_name: Satellite of the predicted pass
        overpass_time: Predicted pass time (UTC)
        fire_at: When the notification is sent
        state: Current lifecycle state
    """
    reminder_id: str
    recipient: str
    satellite_name: str
    overpass_time: datetime
    fire_at: datetime
    state: ReminderState = ReminderState.SCHEDULED

    def message(self) -> str:
        return (
            f"{self.satellite_name} passes over your location at "
            f"{self.overpass_time.strftime('%Y-%m-%d %H:%M UTC')}"
        )


Notifier = Callable[[Reminder], None]


def log_notifier(reminder: Reminder) -> None:
    """Default notifier: log instead of delivering."""
    logger.info(f"Reminder for {reminder.recipient}: {reminder.message()}")


class ReminderScheduler:
    """Schedules one-shot notifications ahead of predicted overpasses."""

    def __init__(
        self,
        notifier: Notifier = log_notifier,
        lead_time: timedelta = DEFAULT_LEAD_TIME,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        history_size: int = DEFAULT_HISTORY_SIZE,
    ):
        """Initialize the scheduler.

        Args:
            notifier: Delivers a reminder (email, push, ...)
            lead_time: How long before the pass to notify
            clock: Source of the current time
            history_size: Fired and cancelled reminders kept for lookup,
                oldest dropped first
        """
        self.notifier = notifier
        self.lead_time = lead_time
        self.clock = clock
        self._lock = threading.Lock()
        self.history_size = history_size
        self._reminders: dict[str, Reminder] = {}
        self._history: OrderedDict[str, Reminder] = OrderedDict()
        self._timers: dict[str, threading.Timer] = {}

    def schedule(self, recipient: str, overpass: OverpassResult) -> Reminder:
        """Schedule a reminder for a predicted overpass.

        A reminder whose fire time has already passed fires immediately.

        Raises:
            ValueError: If the overpass has no predicted time
        """
        if overpass.predicted_time is None:
            raise ValueError(f"No predicted overpass for {overpass.satellite_name}")

        reminder = Reminder(
            reminder_id=uuid.uuid4().hex,
            recipient=recipient,
            satellite_name=overpass.satellite_name,
            overpass_time=overpass.predicted_time,
            fire_at=overpass.predicted_time - self.lead_time,
        )
        delay = max((reminder.fire_at - self.clock()).total_seconds(), 0.0)

        timer = threading.Timer(delay, self._fire, args=(reminder.reminder_id,))
        timer.daemon = True
        with self._lock:
            self._reminders[reminder.reminder_id] = reminder
            self._timers[reminder.reminder_id] = timer
        timer.start()

        logger.info(
            f"Reminder {reminder.reminder_id} for {overpass.satellite_name} "
            f"scheduled at {reminder.fire_at.isoformat()}"
        )
        return reminder

    def _retire(self, reminder: Reminder, state: ReminderState) -> None:
        """Move a reminder to its final state. Caller holds the lock."""
        reminder.state = state
        del self._reminders[reminder.reminder_id]
        self._timers.pop(reminder.reminder_id, None)
        self._history[reminder.reminder_id] = reminder
        while len(self._history) > self.history_size:
            self._history.popitem(last=False)

    def _fire(self, reminder_id: str) -> None:
        with self._lock:
            reminder = self._reminders.get(reminder_id)
            if reminder is None:
                return
            self._retire(reminder, ReminderState.FIRED)

        try:
            self.notifier(reminder)
        except Exception as e:
            logger.error(f"Failed to deliver reminder {reminder_id}: {e}")

    def cancel(self, reminder_id: str) -> bool:
        """Cancel a scheduled reminder.

        Returns:
            True if the reminder was pending and is now cancelled
        """
        with self._lock:
            reminder = self._reminders.get(reminder_id)
            if reminder is None:
                return False
            timer = self._timers.get(reminder_id)
            self._retire(reminder, ReminderState.CANCELLED)
        if timer is not None:
            timer.cancel()
        logger.info(f"Reminder {reminder_id} cancelled")
        return True

    def get(self, reminder_id: str) -> Reminder | None:
        """Look up a pending reminder or one still in the finished history."""
        with self._lock:
            return self._reminders.get(reminder_id) or self._history.get(reminder_id)

    def pending(self) -> list[Reminder]:
        """Reminders still waiting to fire, soonest first."""
        with self._lock:
            waiting = list(self._reminders.values())
        return sorted(waiting, key=lambda r: r.fire_at)

    def shutdown(self) -> None:
        """Cancel every pending reminder."""
        for reminder in self.pending():
            self.cancel(reminder.reminder_id)
