import pytest

from clock import FixedClock
from reminder_model import ReminderConfig, Session
from scheduling import add_reminder
from tests.helpers import T0


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(T0)


@pytest.fixture
def abc_config() -> ReminderConfig:
    return ReminderConfig.create("Break", 30, ["A", "B", "C"])


@pytest.fixture
def nested_config() -> ReminderConfig:
    child = ReminderConfig.create("Stretch", 10, ["Neck", "Wrists"])
    return ReminderConfig.create("Break", 30, ["A", "B", "C"], child)


@pytest.fixture
def session(abc_config: ReminderConfig) -> Session:
    return add_reminder(Session(), abc_config.to_reminder())


@pytest.fixture
def nested_session(nested_config: ReminderConfig) -> Session:
    return add_reminder(Session(), nested_config.to_reminder())
