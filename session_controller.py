# session_controller.py
#
# Description:
# Holds the one current Session snapshot and the validity flags that go with
# it, and moves them forward in response to user actions. This is the only
# place where state changes; every change goes through the pure functions in
# scheduling.py and replaces the snapshot wholesale.
#

from typing import List, Optional, Protocol

import scheduling
from app_logging import logger
from clock import Clock, SystemClock
from reminder_model import ReminderConfig, Session, default_config
from validation import can_start_session, config_changed, is_valid_config


class WakeLock(Protocol):
    """Keeps the display awake while a session runs."""

    @property
    def is_enabled(self) -> bool:
        ...

    def enable(self) -> None:
        ...

    def disable(self) -> None:
        ...


class NullWakeLock:
    """A wake lock that only remembers whether it was asked to hold."""

    def __init__(self):
        self._enabled = False

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False


class SessionController:
    """
    Owns the current session snapshot and the per-reminder validity flags.

    `validities[i]` says whether `session.reminders[i]` is configured well
    enough to start a session. The flags live here, not on the reminders.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        wake_lock: Optional[WakeLock] = None,
        defaults: Optional[ReminderConfig] = None,
    ):
        self.clock = clock or SystemClock()
        self.wake_lock = wake_lock or NullWakeLock()
        self.defaults = defaults or default_config()
        self.session = Session()
        self.validities: List[bool] = []

    @property
    def is_active(self) -> bool:
        return self.session.is_active

    @property
    def can_start(self) -> bool:
        return not self.is_active and can_start_session(self.session, self.validities)

    # --- Configuration ---

    def add_reminder(self, config: Optional[ReminderConfig] = None) -> Session:
        config = config or self.defaults
        self.session = scheduling.add_reminder(self.session, config.to_reminder())
        self.validities.append(is_valid_config(config))
        logger.debug("reminder_added", name=config.name, count=len(self.session.reminders))
        return self.session

    def mark_invalid(self, index: int) -> None:
        self.validities[index] = False
        logger.debug("reminder_marked_invalid", index=index)

    def update_reminder(self, index: int, config: ReminderConfig) -> Session:
        """
        Applies an edited configuration to the reminder at `index`.

        An invalid configuration is not applied; the reminder is only flagged
        so that the session cannot be started until it is fixed.
        """
        if not is_valid_config(config):
            self.mark_invalid(index)
            return self.session

        if config_changed(config, self.session.reminders[index]):
            self.session = scheduling.update_reminder_config(
                self.session, index, config.name, config.interval, config.todos, config.child
            )
            logger.info("reminder_updated", index=index, name=config.name)
        self.validities[index] = True
        return self.session

    # --- Lifecycle ---

    def start(self) -> bool:
        """Starts the session if allowed. Returns whether it started."""
        if not self.can_start:
            logger.warning(
                "session_start_refused",
                reminders=len(self.session.reminders),
                invalid=[i for i, valid in enumerate(self.validities) if not valid],
                active=self.is_active,
            )
            return False

        self.session = scheduling.start_session(self.session, self.clock)
        if not self.wake_lock.is_enabled:
            self.wake_lock.enable()
        logger.info("session_started", reminders=len(self.session.reminders))
        return True

    def stop(self) -> Session:
        self.session = scheduling.stop_session(self.session, self.clock)
        if self.wake_lock.is_enabled:
            self.wake_lock.disable()
        logger.info("session_stopped")
        return self.session

    # --- Checklists ---

    def _apply(self, transition, index: int, todo_name: str) -> Session:
        before = self.session.reminders[index]
        self.session = transition(self.session, index, todo_name, self.clock)
        after = self.session.reminders[index]
        if after.completed != before.completed:
            logger.info("cycle_completed", name=after.name, completed=after.completed)
        if before.child and after.child and after.child.completed != before.child.completed:
            logger.info("cycle_completed", name=after.child.name, completed=after.child.completed)
        return self.session

    def complete_todo(self, index: int, todo_name: str) -> Session:
        return self._apply(scheduling.complete_todo, index, todo_name)

    def uncomplete_todo(self, index: int, todo_name: str) -> Session:
        return self._apply(scheduling.uncomplete_todo, index, todo_name)

    def complete_child_todo(self, index: int, todo_name: str) -> Session:
        return self._apply(scheduling.complete_child_todo, index, todo_name)

    def uncomplete_child_todo(self, index: int, todo_name: str) -> Session:
        return self._apply(scheduling.uncomplete_child_todo, index, todo_name)

    def toggle_todo(self, index: int, todo_name: str) -> Session:
        return self._apply(scheduling.toggle_todo, index, todo_name)

    def toggle_child_todo(self, index: int, todo_name: str) -> Session:
        return self._apply(scheduling.toggle_child_todo, index, todo_name)
