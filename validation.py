# validation.py
#
# Description:
# Rules for telling whether a reminder configuration is usable, whether an
# edit actually changed anything, and whether a session may be started.
# Validity is never stored on the reminders themselves; the caller keeps a
# list of flags parallel to session.reminders.
#

from typing import Optional, Sequence

from reminder_model import Reminder, ReminderConfig, Session


def _valid_interval(interval) -> bool:
    # bool is an int subclass, but True minutes is not an interval.
    return isinstance(interval, int) and not isinstance(interval, bool) and interval > 0


def _valid_todo_names(names: Sequence[str]) -> bool:
    if not names:
        return False
    if any(not name or not name.strip() for name in names):
        return False
    return len(set(names)) == len(names)


def is_valid_config(config: Optional[ReminderConfig]) -> bool:
    """
    A configuration is valid when it has a non-blank name, a positive integer
    interval, at least one todo with unique non-blank names, and a valid
    child (if it has one).
    """
    if config is None:
        return False
    if not config.name or not config.name.strip():
        return False
    if not _valid_interval(config.interval):
        return False
    if not _valid_todo_names(config.todos):
        return False
    return config.child is None or is_valid_config(config.child)


def is_valid_reminder(reminder: Reminder) -> bool:
    return is_valid_config(ReminderConfig.from_reminder(reminder))


def config_changed(config: Optional[ReminderConfig], reminder: Optional[Reminder]) -> bool:
    """True when applying `config` to `reminder` would change its configuration."""
    if config is None or reminder is None:
        return (config is None) != (reminder is None)
    if config.name != reminder.name or config.interval != reminder.interval:
        return True
    if tuple(config.todos) != tuple(t.name for t in reminder.todos):
        return True
    return config_changed(config.child, reminder.child)


def can_start_session(session: Session, validities: Sequence[bool]) -> bool:
    """A session may start when it has reminders and none is flagged invalid."""
    if not session.reminders:
        return False
    return all(validities)
