# app_logging.py
#
# Description:
# Structured logging setup. Import `logger` from here; the scheduling engine
# itself stays silent and only the stateful layers around it log.
#

import sys
from logging import _nameToLevel, basicConfig

from structlog import (
    PrintLoggerFactory,
    configure_once,
    get_logger as structlog_get_logger,
    make_filtering_bound_logger,
)
from structlog.contextvars import merge_contextvars
from structlog.dev import ConsoleRenderer
from structlog.processors import (
    StackInfoRenderer,
    TimeStamper,
    UnicodeDecoder,
    add_log_level,
)
from structlog.stdlib import PositionalArgumentsFormatter

from config import CONFIG

# Default logging level for all the dependencies
basicConfig(level=CONFIG.monitoring.logging.sys_level.value)

# Log to stderr so the terminal UI on stdout stays clean when redirected
configure_once(
    cache_logger_on_first_use=True,
    context_class=dict,
    logger_factory=PrintLoggerFactory(file=sys.stderr),
    wrapper_class=make_filtering_bound_logger(
        _nameToLevel[CONFIG.monitoring.logging.app_level.value]
    ),
    processors=[
        merge_contextvars,
        add_log_level,
        # Enable %s-style formatting
        PositionalArgumentsFormatter(),
        TimeStamper(fmt="iso", utc=False),
        StackInfoRenderer(),
        UnicodeDecoder(),
        ConsoleRenderer(),
    ],
)
logger = structlog_get_logger("restcycle")
