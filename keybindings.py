# keybindings.py
#
# Description:
# This file defines the keybindings for the application.
# Keeping them in a separate file makes them easier to manage and customize.
#

from textual.binding import Binding

# Bindings that are active across all screens
APP_BINDINGS = [
    Binding("q", "quit", "Quit"),
]

# Bindings of the main session screen. Which of them do anything depends on
# whether a session is running (see SessionScreen.check_action).
SESSION_SCREEN_BINDINGS = [
    Binding("a", "add_reminder", "Add Reminder"),
    Binding("e", "edit_reminder", "Edit"),
    Binding("s", "toggle_session", "Start/Stop"),
    Binding("x", "toggle_todo", "Toggle Todo"),
    Binding("j", "cursor_down", "Cursor Down", show=False),
    Binding("k", "cursor_up", "Cursor Up", show=False),
]

# Bindings of the reminder tree. Tree binds space to expand/collapse and the
# focused widget wins over the screen, so the todo toggle has to live here.
REMINDER_TREE_BINDINGS = [
    Binding("space", "toggle_todo", "Toggle Todo", show=False),
]

# Bindings of the edit form
EDIT_SCREEN_BINDINGS = [
    Binding("ctrl+s", "save", "Save"),
    Binding("escape", "cancel", "Cancel"),
]
