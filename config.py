# config.py
#
# Description:
# Application settings. Values come, in order of precedence, from
# RESTCYCLE_* environment variables, then from an optional restcycle.yaml
# found in the working directory or one of its parents, then from the
# defaults below.
#

from enum import Enum
from os import environ
from typing import List, Optional

import yaml
from dotenv import find_dotenv
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from reminder_model import (
    DEFAULT_INTERVAL_MINUTES,
    DEFAULT_REMINDER_NAME,
    DEFAULT_TODO_NAMES,
    ReminderConfig,
)

CONFIG_FILE = "restcycle.yaml"
CONFIG_FILE_ENV = "RESTCYCLE_CONFIG_FILE"


class LoggingLevel(str, Enum):
    CRITICAL = "CRITICAL"
    DEBUG = "DEBUG"
    ERROR = "ERROR"
    INFO = "INFO"
    WARNING = "WARNING"


class LoggingModel(BaseModel):
    app_level: LoggingLevel = LoggingLevel.INFO
    sys_level: LoggingLevel = LoggingLevel.WARNING


class MonitoringModel(BaseModel):
    logging: LoggingModel = LoggingModel()  # Object is fully defined by default


class ReminderDefaultsModel(BaseModel):
    """What the 'add reminder' action starts from."""
    name: str = DEFAULT_REMINDER_NAME
    interval: int = Field(default=DEFAULT_INTERVAL_MINUTES, gt=0)
    todos: List[str] = Field(default_factory=lambda: list(DEFAULT_TODO_NAMES), min_length=1)

    def to_config(self) -> ReminderConfig:
        return ReminderConfig.create(self.name, self.interval, self.todos)


class UiModel(BaseModel):
    check_interval_seconds: float = Field(default=15.0, gt=0)


class RootModel(BaseSettings):
    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        env_nested_delimiter="__",
        env_prefix="RESTCYCLE_",
    )

    reminder_defaults: ReminderDefaultsModel = ReminderDefaultsModel()  # Object is fully defined by default
    monitoring: MonitoringModel = MonitoringModel()  # Object is fully defined by default
    ui: UiModel = UiModel()  # Object is fully defined by default

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        """
        Environment variables win over values read from the YAML file, which
        are passed in as init settings.
        """
        return env_settings, init_settings


def _find_config_file() -> Optional[str]:
    if CONFIG_FILE_ENV in environ:
        return environ[CONFIG_FILE_ENV]
    return find_dotenv(filename=CONFIG_FILE, usecwd=True) or None


def load_config() -> RootModel:
    """
    Builds the settings from the YAML file (if any) overlaid by the environment.

    Raises:
        ValueError: If a value does not validate, listing every failing field.
    """
    path = _find_config_file()
    data = {}
    if path:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    try:
        return RootModel(**data)

    # Pretty print validation errors
    except ValidationError as e:
        err = "Config values are not valid:"
        for i, error in enumerate(e.errors()):
            err += f"\n{i + 1}. At {'.'.join(str(loc) for loc in error['loc'])}: {error['msg']} (input value: {error['input']})"
        raise ValueError(err)


CONFIG = load_config()
