from textwrap import dedent

import pytest

from config import CONFIG_FILE_ENV, LoggingLevel, load_config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "restcycle.yaml"
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    return path


def test_defaults_without_file(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)

    config = load_config()

    assert config.reminder_defaults.name == "New reminder"
    assert config.reminder_defaults.interval == 30
    assert config.monitoring.logging.app_level == LoggingLevel.INFO
    assert config.ui.check_interval_seconds > 0


def test_values_from_yaml(config_file) -> None:
    config_file.write_text(
        dedent(
            """
            reminder_defaults:
              name: Eye break
              interval: 20
              todos:
                - Look 20 feet away
            monitoring:
              logging:
                app_level: DEBUG
            """
        ),
        encoding="utf-8",
    )

    config = load_config()

    defaults = config.reminder_defaults.to_config()
    assert defaults.name == "Eye break"
    assert defaults.interval == 20
    assert defaults.todos == ("Look 20 feet away",)
    assert config.monitoring.logging.app_level == LoggingLevel.DEBUG


def test_env_overrides_yaml(config_file, monkeypatch) -> None:
    config_file.write_text("reminder_defaults:\n  interval: 20\n", encoding="utf-8")
    monkeypatch.setenv("RESTCYCLE_REMINDER_DEFAULTS__INTERVAL", "45")

    config = load_config()

    assert config.reminder_defaults.interval == 45


def test_invalid_values_are_reported(config_file) -> None:
    config_file.write_text("reminder_defaults:\n  interval: 0\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Config values are not valid"):
        load_config()
