# views.py
#
# Description:
# This file contains the terminal UI, built with the Textual TUI framework.
# It only renders the current session snapshot and forwards key presses to
# the SessionController; all reminder logic lives in the model.
#

import datetime
from dataclasses import dataclass
from typing import Optional, Tuple

from rich.panel import Panel
from rich.style import Style
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import Footer, Header, Input, Label, Static, Tree

from clock import Clock
from config import CONFIG
from keybindings import (
    APP_BINDINGS,
    EDIT_SCREEN_BINDINGS,
    REMINDER_TREE_BINDINGS,
    SESSION_SCREEN_BINDINGS,
)
from reminder import ReminderManager, time_until_due
from reminder_model import Reminder, ReminderConfig
from session_controller import SessionController, WakeLock
from validation import is_valid_config


@dataclass(frozen=True)
class NodeRef:
    """What a tree node points at: a reminder, its child, or one of their todos."""
    index: int
    is_child: bool = False
    todo_name: Optional[str] = None


# --- Form helpers ---

def split_todos(text: str) -> Tuple[str, ...]:
    """Todos are typed comma separated; surrounding blanks are dropped."""
    return tuple(part.strip() for part in text.split(",") if part.strip())


def config_from_form(
    name: str,
    interval: str,
    todos: str,
    child_name: str = "",
    child_interval: str = "",
    child_todos: str = "",
) -> Tuple[Optional[ReminderConfig], bool]:
    """
    Turns the raw text of the edit form into a ReminderConfig.

    Returns the config (None when it cannot even be built) and whether it is
    valid. A child is only built when any of its fields is filled in.
    """
    try:
        parsed_interval = int(interval.strip())
    except ValueError:
        return None, False

    child = None
    if child_name.strip() or child_interval.strip() or child_todos.strip():
        try:
            parsed_child_interval = int(child_interval.strip())
        except ValueError:
            return None, False
        child = ReminderConfig.create(child_name.strip(), parsed_child_interval, split_todos(child_todos))

    config = ReminderConfig.create(name.strip(), parsed_interval, split_todos(todos), child)
    return config, is_valid_config(config)


def format_due(reminder: Reminder, now: datetime.datetime) -> str:
    left = time_until_due(reminder, now)
    if left is None:
        return "not scheduled"
    minutes = int(abs(left.total_seconds()) // 60)
    due_at = reminder.next_due.strftime("%H:%M")
    if left.total_seconds() < 0:
        return f"overdue {minutes}m (was {due_at})"
    return f"due in {minutes}m ({due_at})"


# --- Custom Widgets ---

class ReminderTree(Tree):
    """A Tree widget showing reminders, their checklists and child reminders."""

    BINDINGS = REMINDER_TREE_BINDINGS

    def __init__(self, controller: SessionController, **kwargs):
        super().__init__("Reminders", **kwargs)
        self.controller = controller
        self.guide_style = "dim"
        self.show_root = False

    def action_toggle_todo(self) -> None:
        """Toggles the highlighted todo while a session runs; folds nodes otherwise."""
        if self.controller.is_active:
            self.screen.action_toggle_todo()
        else:
            self.action_toggle_node()

    def _reminder_label(self, reminder: Reminder, valid: bool, active: bool) -> Text:
        label = Text()
        label.append(reminder.name or "(unnamed)", style="bold")
        label.append(f"  every {reminder.interval}m", style="dim")
        if active:
            label.append(f"  {format_due(reminder, self.controller.clock.now())}", style="yellow")
            label.append(f"  done {reminder.completed}x", style="green")
        elif not valid:
            label.append("  invalid", style="bold red")
        return label

    def _todo_label(self, name: str, complete: bool) -> Text:
        if complete:
            return Text(f"✔ {name}", style=Style(strike=True, color="rgb(100,100,100)"))
        return Text(f"○ {name}")

    def _add_reminder(self, parent_node, reminder: Reminder, ref: NodeRef, valid: bool, active: bool):
        node = parent_node.add(self._reminder_label(reminder, valid, active), data=ref)
        for todo in reminder.todos:
            node.add_leaf(
                self._todo_label(todo.name, todo.complete),
                data=NodeRef(ref.index, ref.is_child, todo.name),
            )
        return node

    def reload(self):
        """Clear and rebuild the tree from the controller's current snapshot."""
        cursor = self.cursor_line
        self.clear()
        active = self.controller.is_active
        for index, reminder in enumerate(self.controller.session.reminders):
            valid = self.controller.validities[index]
            node = self._add_reminder(self.root, reminder, NodeRef(index), valid, active)
            if reminder.child:
                self._add_reminder(node, reminder.child, NodeRef(index, is_child=True), valid, active)
        self.root.expand_all()
        self.cursor_line = cursor


class SessionStatus(Static):
    """Panel saying whether a session runs and whether it can start."""

    def refresh_status(self, controller: SessionController):
        session = controller.session
        if controller.is_active:
            text = Text(f"Session running since {session.started.strftime('%H:%M')}", style="bold green")
            border = "green"
        else:
            text = Text()
            if session.has_run:
                text.append(
                    f"Last run {session.started.strftime('%H:%M')} to {session.stopped.strftime('%H:%M')}\n",
                    style="dim",
                )
            if controller.can_start:
                text.append("Ready. Press 's' to start.", style="bold")
            elif not session.reminders:
                text.append("Add a reminder with 'a' to get started.")
            else:
                text.append("Fix the invalid reminders before starting.", style="red")
            border = "dim"
        self.update(Panel(text, title="Session", border_style=border))


# --- Modal Screens for Input ---

class EditReminderScreen(ModalScreen):
    """A form for editing one reminder and its optional child."""

    BINDINGS = EDIT_SCREEN_BINDINGS

    def __init__(self, config: ReminderConfig):
        super().__init__()
        self.config = config

    def compose(self) -> ComposeResult:
        child = self.config.child
        yield Vertical(
            Label("Reminder"),
            Input(self.config.name, placeholder="Name", id="name"),
            Input(str(self.config.interval), placeholder="Interval (minutes)", id="interval"),
            Input(", ".join(self.config.todos), placeholder="Todos, comma separated", id="todos"),
            Label("Child reminder (leave blank for none)"),
            Input(child.name if child else "", placeholder="Name", id="child_name"),
            Input(str(child.interval) if child else "", placeholder="Interval (minutes)", id="child_interval"),
            Input(", ".join(child.todos) if child else "", placeholder="Todos, comma separated", id="child_todos"),
            Label("ctrl+s to save, escape to cancel", classes="hint"),
            id="edit_dialog",
        )

    def _value(self, field_id: str) -> str:
        return self.query_one(f"#{field_id}", Input).value

    def action_save(self) -> None:
        config, valid = config_from_form(
            self._value("name"),
            self._value("interval"),
            self._value("todos"),
            self._value("child_name"),
            self._value("child_interval"),
            self._value("child_todos"),
        )
        self.dismiss({"config": config, "valid": valid})

    def action_cancel(self) -> None:
        self.dismiss(None)


# --- Main Application Screen ---

class SessionScreen(Screen):
    """Configures reminders while idle and works through checklists while active."""

    BINDINGS = SESSION_SCREEN_BINDINGS

    def compose(self) -> ComposeResult:
        self.reminder_tree = ReminderTree(self.app.controller, id="reminder_tree")
        self.status = SessionStatus(id="status")
        yield Header()
        yield Horizontal(
            VerticalScroll(self.reminder_tree, id="left-pane"),
            VerticalScroll(self.status, id="right-pane"),
        )
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_view()
        self.reminder_tree.focus()

    def refresh_view(self) -> None:
        """Re-derive everything shown from the latest snapshot."""
        self.reminder_tree.reload()
        self.status.refresh_status(self.app.controller)
        self.refresh_bindings()

    def check_action(self, action: str, parameters) -> Optional[bool]:
        active = self.app.controller.is_active
        if action in ("add_reminder", "edit_reminder"):
            return not active
        if action == "toggle_todo":
            return active
        return True

    def _selected(self) -> Optional[NodeRef]:
        node = self.reminder_tree.cursor_node
        return node.data if node else None

    def action_cursor_down(self) -> None:
        self.reminder_tree.action_cursor_down()

    def action_cursor_up(self) -> None:
        self.reminder_tree.action_cursor_up()

    def action_add_reminder(self) -> None:
        self.app.controller.add_reminder()
        self.refresh_view()

    def action_edit_reminder(self) -> None:
        ref = self._selected()
        if ref is None:
            return
        index = ref.index
        reminder = self.app.controller.session.reminders[index]

        def after_edit(result: Optional[dict]):
            if not result:
                return
            if result["valid"]:
                self.app.controller.update_reminder(index, result["config"])
            else:
                self.app.controller.mark_invalid(index)
                self.app.notify("Reminder is not valid and was not saved.", title="Invalid", severity="error")
            self.refresh_view()

        self.app.push_screen(EditReminderScreen(ReminderConfig.from_reminder(reminder)), after_edit)

    def action_toggle_session(self) -> None:
        controller = self.app.controller
        if controller.is_active:
            controller.stop()
        elif controller.start():
            self.app.reminder_manager.reset()
        else:
            self.app.notify("Nothing to start, or some reminders are invalid.", title="Cannot start", severity="error")
        self.refresh_view()

    def action_toggle_todo(self) -> None:
        ref = self._selected()
        if ref is None or ref.todo_name is None:
            return
        if ref.is_child:
            self.app.controller.toggle_child_todo(ref.index, ref.todo_name)
        else:
            self.app.controller.toggle_todo(ref.index, ref.todo_name)
        self.refresh_view()


# --- The Main App ---

class RestCycleApp(App):
    """A terminal app for recurring break reminders with checklists."""

    BINDINGS = APP_BINDINGS
    TITLE = "RestCycle"

    CSS = """
    #left-pane {
        width: 65%;
        border-right: heavy $primary-darken-2;
    }
    #right-pane {
        width: 35%;
        padding: 0 1;
    }
    Tree {
        padding: 1;
    }
    EditReminderScreen {
        align: center middle;
    }
    #edit_dialog {
        border: thick $primary;
        padding: 1 2;
        width: 70;
        height: auto;
        background: $surface;
    }
    .hint {
        color: $text-muted;
    }
    """

    def __init__(self, clock: Optional[Clock] = None, wake_lock: Optional[WakeLock] = None):
        super().__init__()
        self.controller = SessionController(
            clock=clock,
            wake_lock=wake_lock,
            defaults=CONFIG.reminder_defaults.to_config(),
        )
        self.reminder_manager = ReminderManager(self.controller.clock)

    def on_mount(self) -> None:
        self.push_screen(SessionScreen())
        self.set_interval(CONFIG.ui.check_interval_seconds, self.check_reminders)

    def check_reminders(self) -> None:
        """Callback to show newly due reminders and refresh countdowns."""
        due = self.reminder_manager.check_reminders(self.controller.session)
        for item in due:
            kind = "Child reminder" if item.is_child else "Reminder"
            self.notify(
                f"'{item.reminder.name}' is due!",
                title=kind,
                severity="warning",
            )
        if isinstance(self.screen, SessionScreen):
            self.screen.refresh_view()
