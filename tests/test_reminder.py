import datetime

from reminder import ReminderManager, due_reminders, is_due, time_until_due
from reminder_model import Session
from scheduling import complete_child_todo, complete_todo, start_session, stop_session
from tests.helpers import T0


def test_nothing_due_before_start(nested_session: Session) -> None:
    reminder = nested_session.reminders[0]

    assert not is_due(reminder, T0)
    assert time_until_due(reminder, T0) is None
    assert due_reminders(nested_session, T0 + datetime.timedelta(days=1)) == []


def test_time_until_due_counts_down(session: Session, clock) -> None:
    session = start_session(session, clock)
    reminder = session.reminders[0]

    assert time_until_due(reminder, T0 + datetime.timedelta(minutes=10)) == datetime.timedelta(minutes=20)
    assert time_until_due(reminder, T0 + datetime.timedelta(minutes=40)) == datetime.timedelta(minutes=-10)


def test_child_becomes_due_first(nested_session: Session, clock) -> None:
    session = start_session(nested_session, clock)

    due = due_reminders(session, T0 + datetime.timedelta(minutes=10))
    assert [(d.index, d.is_child) for d in due] == [(0, True)]

    due = due_reminders(session, T0 + datetime.timedelta(minutes=30))
    assert [(d.index, d.is_child) for d in due] == [(0, False), (0, True)]


def test_stopped_session_has_nothing_due(session: Session, clock) -> None:
    session = stop_session(start_session(session, clock), clock)

    assert due_reminders(session, T0 + datetime.timedelta(hours=2)) == []


def test_manager_reports_each_cycle_once(session: Session, clock) -> None:
    manager = ReminderManager(clock)
    session = start_session(session, clock)

    assert manager.check_reminders(session) == []

    clock.advance(minutes=30)
    first = manager.check_reminders(session)
    assert [d.reminder.name for d in first] == ["Break"]
    assert manager.check_reminders(session) == []

    for name in ("A", "B", "C"):
        session = complete_todo(session, 0, name, clock)
    assert manager.check_reminders(session) == []

    clock.advance(minutes=30)
    assert len(manager.check_reminders(session)) == 1


def test_manager_tracks_child_separately(nested_session: Session, clock) -> None:
    manager = ReminderManager(clock)
    session = start_session(nested_session, clock)

    clock.advance(minutes=10)
    assert [d.is_child for d in manager.check_reminders(session)] == [True]

    session = complete_child_todo(session, 0, "Neck", clock)
    session = complete_child_todo(session, 0, "Wrists", clock)
    clock.advance(minutes=20)

    assert [d.is_child for d in manager.check_reminders(session)] == [False, True]


def test_manager_reset_forgets(session: Session, clock) -> None:
    manager = ReminderManager(clock)
    session = start_session(session, clock)
    clock.advance(minutes=31)
    assert manager.check_reminders(session)

    manager.reset()

    assert manager.check_reminders(session)


def test_manager_forgets_rolled_over_cycles(session: Session, clock) -> None:
    manager = ReminderManager(clock)
    session = start_session(session, clock)

    for _ in range(5):
        clock.advance(minutes=30)
        assert len(manager.check_reminders(session)) == 1
        for name in ("A", "B", "C"):
            session = complete_todo(session, 0, name, clock)

    manager.check_reminders(session)
    assert manager.notified == set()
