# reminder_model.py
#
# Description:
# This file defines the data structures of the reminder domain: Todo items,
# Reminders (with an optional nested child Reminder) and the Session that
# owns them. All of them are immutable; the scheduling engine builds new
# snapshots instead of editing old ones.
#

import datetime
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

DEFAULT_REMINDER_NAME = "New reminder"
DEFAULT_INTERVAL_MINUTES = 30
DEFAULT_TODO_NAMES = ("Look away from screen", "Drink water", "Desk yoga")


@dataclass(frozen=True)
class Todo:
    """A single checklist item, identified by its name within one checklist."""
    name: str
    complete: bool = False


@dataclass(frozen=True)
class Reminder:
    """
    A named, interval-driven unit of work.

    Attributes:
        name: Display name of the reminder.
        interval: Recurrence period in minutes.
        todos: The ordered checklist for one cycle.
        child: An optional nested reminder, scheduled independently.
        next_due: When the current cycle is due; None until a session starts.
        completed: How many full checklist cycles have been finished.
    """
    name: str
    interval: int
    todos: Tuple[Todo, ...] = ()
    child: Optional["Reminder"] = None
    next_due: Optional[datetime.datetime] = None
    completed: int = 0

    @property
    def all_complete(self) -> bool:
        return bool(self.todos) and all(t.complete for t in self.todos)

    def find_todo(self, todo_name: str) -> Optional[Todo]:
        """Returns the first todo called `todo_name`, if any."""
        for todo in self.todos:
            if todo.name == todo_name:
                return todo
        return None


@dataclass(frozen=True)
class Session:
    """An ordered set of reminders plus the start/stop stamps of the last run."""
    reminders: Tuple[Reminder, ...] = ()
    started: Optional[datetime.datetime] = None
    stopped: Optional[datetime.datetime] = None

    @property
    def is_active(self) -> bool:
        return self.started is not None and self.stopped is None

    @property
    def has_run(self) -> bool:
        return self.started is not None and self.stopped is not None


@dataclass(frozen=True)
class ReminderConfig:
    """
    The editable shape of a reminder: what a form collects from the user.

    Unlike Reminder it carries no runtime state, only names and the interval.
    """
    name: str
    interval: int
    todos: Tuple[str, ...] = ()
    child: Optional["ReminderConfig"] = None

    @classmethod
    def create(
        cls,
        name: str,
        interval: int,
        todos: Iterable[str],
        child: Optional["ReminderConfig"] = None,
    ) -> "ReminderConfig":
        return cls(name=name, interval=interval, todos=tuple(todos), child=child)

    @classmethod
    def from_reminder(cls, reminder: Reminder) -> "ReminderConfig":
        child = cls.from_reminder(reminder.child) if reminder.child else None
        return cls(
            name=reminder.name,
            interval=reminder.interval,
            todos=tuple(t.name for t in reminder.todos),
            child=child,
        )

    def to_reminder(self) -> Reminder:
        """Builds a fresh reminder: all todos incomplete, no due time, no cycles."""
        return Reminder(
            name=self.name,
            interval=self.interval,
            todos=make_todos(self.todos),
            child=self.child.to_reminder() if self.child else None,
        )


@dataclass(frozen=True)
class DueReminder:
    """A reminder (or a reminder's child) whose due time has passed."""
    index: int
    is_child: bool
    reminder: Reminder = field(compare=False)


def make_todos(names: Sequence[str]) -> Tuple[Todo, ...]:
    """Each name becomes a fresh, incomplete Todo, order preserved."""
    return tuple(Todo(name=name) for name in names)


def default_config() -> ReminderConfig:
    return ReminderConfig(
        name=DEFAULT_REMINDER_NAME,
        interval=DEFAULT_INTERVAL_MINUTES,
        todos=DEFAULT_TODO_NAMES,
    )
