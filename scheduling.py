# scheduling.py
#
# Description:
# The scheduling engine. Every function here takes the current Session
# snapshot plus an event and returns a new snapshot; nothing is modified in
# place and nothing reads the wall clock directly. Callers pass a Clock for
# any transition that needs "now".
#
# These functions are deliberately permissive: invalid configurations are
# accepted so that half-edited reminders never crash the model. Whether a
# session may be started is decided upstream (see validation.py).
#

import datetime
from dataclasses import replace
from typing import Callable, Optional, Sequence

from clock import Clock
from reminder_model import Reminder, ReminderConfig, Session, Todo, make_todos
from validation import config_changed


def due_after(now: datetime.datetime, interval: int) -> datetime.datetime:
    """The due time of a cycle of `interval` minutes anchored at `now`."""
    return now + datetime.timedelta(minutes=interval)


def _schedule(reminder: Reminder, now: datetime.datetime) -> Reminder:
    """Gives a reminder and every nested child its own due time."""
    child = _schedule(reminder.child, now) if reminder.child else None
    return replace(reminder, next_due=due_after(now, reminder.interval), child=child)


def _replace_at(session: Session, index: int, reminder: Reminder) -> Session:
    reminders = list(session.reminders)
    reminders[index] = reminder
    return replace(session, reminders=tuple(reminders))


def _reminder_at(session: Session, index: int) -> Reminder:
    # Negative indices would silently address from the end.
    if index < 0 or index >= len(session.reminders):
        raise IndexError(f"no reminder at index {index}")
    return session.reminders[index]


# --- Session lifecycle ---

def start_session(session: Session, clock: Clock) -> Session:
    """Marks the session as started now and schedules every reminder."""
    now = clock.now()
    return replace(
        session,
        reminders=tuple(_schedule(r, now) for r in session.reminders),
        started=now,
        stopped=None,
    )


def stop_session(session: Session, clock: Clock) -> Session:
    """Marks the session as stopped. Due times are kept as they were."""
    return replace(session, stopped=clock.now())


def add_reminder(session: Session, reminder: Reminder) -> Session:
    """Appends a reminder with no due time and a zeroed cycle counter."""
    fresh = replace(reminder, next_due=None, completed=0)
    return replace(session, reminders=session.reminders + (fresh,))


def update_reminder_config(
    session: Session,
    index: int,
    name: str,
    interval: int,
    todo_names: Sequence[str],
    child_config: Optional[ReminderConfig] = None,
) -> Session:
    """
    Replaces the reminder at `index` with a new configuration.

    If the configuration is unchanged the session is returned as is, keeping
    the reminder's counter and due time. Otherwise the reminder is rebuilt
    from scratch: fresh incomplete todos, a rebuilt child, no due time.

    Raises:
        IndexError: If `index` does not address an existing reminder.
    """
    current = _reminder_at(session, index)
    config = ReminderConfig.create(name, interval, todo_names, child_config)
    if not config_changed(config, current):
        return session
    return _replace_at(session, index, config.to_reminder())


# --- Checklist completion ---

def _roll_over(reminder: Reminder, now: datetime.datetime) -> Reminder:
    """Closes a finished cycle: count it, reset the checklist, re-anchor the due time."""
    return replace(
        reminder,
        completed=reminder.completed + 1,
        todos=make_todos([t.name for t in reminder.todos]),
        next_due=due_after(now, reminder.interval),
    )


def _set_todo(reminder: Reminder, todo_name: str, complete: bool, clock: Clock) -> Reminder:
    """Sets the flag of the first todo called `todo_name`, rolling over if that finishes the list."""
    todo = reminder.find_todo(todo_name)
    if todo is None or todo.complete == complete:
        return reminder

    todos = list(reminder.todos)
    position = todos.index(todo)
    todos[position] = Todo(name=todo.name, complete=complete)
    updated = replace(reminder, todos=tuple(todos))

    if updated.all_complete:
        return _roll_over(updated, clock.now())
    return updated


def _update_reminder(
    session: Session, index: int, change: Callable[[Reminder], Reminder]
) -> Session:
    current = _reminder_at(session, index)
    updated = change(current)
    if updated is current:
        return session
    return _replace_at(session, index, updated)


def _update_child(
    session: Session, index: int, change: Callable[[Reminder], Reminder]
) -> Session:
    def on_child(reminder: Reminder) -> Reminder:
        if reminder.child is None:
            return reminder
        child = change(reminder.child)
        if child is reminder.child:
            return reminder
        return replace(reminder, child=child)

    return _update_reminder(session, index, on_child)


def complete_todo(session: Session, reminder_index: int, todo_name: str, clock: Clock) -> Session:
    return _update_reminder(
        session, reminder_index, lambda r: _set_todo(r, todo_name, True, clock)
    )


def uncomplete_todo(session: Session, reminder_index: int, todo_name: str, clock: Clock) -> Session:
    return _update_reminder(
        session, reminder_index, lambda r: _set_todo(r, todo_name, False, clock)
    )


def complete_child_todo(session: Session, reminder_index: int, todo_name: str, clock: Clock) -> Session:
    """Like complete_todo, on the child's checklist. No child means no change."""
    return _update_child(
        session, reminder_index, lambda r: _set_todo(r, todo_name, True, clock)
    )


def uncomplete_child_todo(session: Session, reminder_index: int, todo_name: str, clock: Clock) -> Session:
    return _update_child(
        session, reminder_index, lambda r: _set_todo(r, todo_name, False, clock)
    )


def toggle_todo(session: Session, reminder_index: int, todo_name: str, clock: Clock) -> Session:
    """Completes the todo if it is open, reopens it otherwise."""
    todo = _reminder_at(session, reminder_index).find_todo(todo_name)
    if todo is None:
        return session
    if todo.complete:
        return uncomplete_todo(session, reminder_index, todo_name, clock)
    return complete_todo(session, reminder_index, todo_name, clock)


def toggle_child_todo(session: Session, reminder_index: int, todo_name: str, clock: Clock) -> Session:
    child = _reminder_at(session, reminder_index).child
    todo = child.find_todo(todo_name) if child else None
    if todo is None:
        return session
    if todo.complete:
        return uncomplete_child_todo(session, reminder_index, todo_name, clock)
    return complete_child_todo(session, reminder_index, todo_name, clock)
