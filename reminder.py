# reminder.py
#
# Description:
# Due-time bookkeeping for an active session. It answers "which reminders
# are due right now?" and, through ReminderManager, "which of them have we
# not reported yet?". How the user is actually alerted is up to the caller.
#

import datetime
from typing import List, Optional, Set, Tuple

from app_logging import logger
from clock import Clock, SystemClock
from reminder_model import DueReminder, Reminder, Session


def is_due(reminder: Reminder, now: datetime.datetime) -> bool:
    return reminder.next_due is not None and reminder.next_due <= now


def time_until_due(reminder: Reminder, now: datetime.datetime) -> Optional[datetime.timedelta]:
    """Time left in the current cycle; negative once overdue, None if unscheduled."""
    if reminder.next_due is None:
        return None
    return reminder.next_due - now


def due_reminders(session: Session, now: datetime.datetime) -> List[DueReminder]:
    """
    Lists every reminder and child reminder whose due time has passed.

    Parents come before their child, in session order. An inactive session
    has nothing due: its due times are left over from the last run.
    """
    if not session.is_active:
        return []

    due = []
    for index, reminder in enumerate(session.reminders):
        if is_due(reminder, now):
            due.append(DueReminder(index=index, is_child=False, reminder=reminder))
        if reminder.child and is_due(reminder.child, now):
            due.append(DueReminder(index=index, is_child=True, reminder=reminder.child))
    return due


class ReminderManager:
    """Reports each due cycle of each reminder exactly once."""

    def __init__(self, clock: Optional[Clock] = None):
        """
        Initializes the ReminderManager.

        Args:
            clock: Source of the current time; the wall clock by default.
        """
        self.clock = clock or SystemClock()
        self.notified: Set[Tuple[int, bool, datetime.datetime]] = set()

    def check_reminders(self, session: Session) -> List[DueReminder]:
        """
        Returns the due reminders that have not been reported yet.

        A reminder is reported again only once its due time has moved, i.e.
        after its checklist rolled over or the session was restarted.
        """
        self._forget_moved(session)
        fresh = []
        for item in due_reminders(session, self.clock.now()):
            key = (item.index, item.is_child, item.reminder.next_due)
            if key in self.notified:
                continue
            self.notified.add(key)
            fresh.append(item)
            logger.info(
                "reminder_due",
                name=item.reminder.name,
                index=item.index,
                child=item.is_child,
                due=item.reminder.next_due.isoformat(),
            )
        return fresh

    def _forget_moved(self, session: Session) -> None:
        """Drops reports whose reminder has since moved on to another due time."""
        live = set()
        for index, reminder in enumerate(session.reminders):
            live.add((index, False, reminder.next_due))
            if reminder.child:
                live.add((index, True, reminder.child.next_due))
        self.notified &= live

    def reset(self) -> None:
        """Forgets what was reported, e.g. when a new session starts."""
        self.notified.clear()
