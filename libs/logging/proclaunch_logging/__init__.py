"""Proclaunch centralized logging with logfmt format."""

from proclaunch_logging.logger import (
    ProclaunchLogger,
    configure,
    configure_from_config,
    get_logger,
)
from proclaunch_logging.formatters import LogfmtFormatter
from proclaunch_logging.handlers import (
    create_file_handler,
    create_console_handler,
    create_syslog_handler
)

__all__ = [
    "ProclaunchLogger",
    "get_logger",
    "configure",
    "configure_from_config",
    "LogfmtFormatter",
    "create_file_handler",
    "create_console_handler",
    "create_syslog_handler",
]
