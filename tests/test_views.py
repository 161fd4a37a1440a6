import datetime
from dataclasses import replace

from reminder_model import ReminderConfig
from views import config_from_form, format_due, split_todos
from tests.helpers import T0


def test_split_todos_drops_blanks() -> None:
    assert split_todos(" Drink water, , Desk yoga ,") == ("Drink water", "Desk yoga")
    assert split_todos("") == ()


def test_form_without_child() -> None:
    config, valid = config_from_form("Break", " 30 ", "A, B")

    assert valid
    assert config == ReminderConfig.create("Break", 30, ["A", "B"])


def test_form_with_child() -> None:
    config, valid = config_from_form("Break", "30", "A", "Stretch", "10", "Neck, Wrists")

    assert valid
    assert config.child == ReminderConfig.create("Stretch", 10, ["Neck", "Wrists"])


def test_form_with_bad_interval() -> None:
    assert config_from_form("Break", "soon", "A") == (None, False)
    assert config_from_form("Break", "30", "A", "Stretch", "", "Neck") == (None, False)


def test_form_builds_but_flags_invalid() -> None:
    config, valid = config_from_form("Break", "0", "A")

    assert config.interval == 0
    assert not valid


def test_format_due(abc_config: ReminderConfig) -> None:
    reminder = abc_config.to_reminder()
    assert format_due(reminder, T0) == "not scheduled"

    scheduled = replace(reminder, next_due=T0 + datetime.timedelta(minutes=30))
    assert format_due(scheduled, T0) == "due in 30m (09:30)"
    assert format_due(scheduled, T0 + datetime.timedelta(minutes=42)) == "overdue 12m (was 09:30)"


def test_app_wires_controller_to_manager(clock) -> None:
    from views import RestCycleApp

    app = RestCycleApp(clock=clock)

    assert app.controller.clock is clock
    assert app.reminder_manager.clock is clock
    app.controller.add_reminder()
    assert app.controller.session.reminders[0].name == "New reminder"
