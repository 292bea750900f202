"""Proclaunch centralized logger."""

import logging
from pathlib import Path
from typing import Any

from proclaunch_logging.formatters import LogfmtFormatter
from proclaunch_logging.handlers import (
    create_console_handler,
    create_file_handler,
    create_syslog_handler,
)

LOGGER_PREFIX = 'proclaunch'


class ProclaunchLogger:
    """Logger for proclaunch components that accepts keyword context.

    Usage:
        logger = get_logger('attempt')
        logger.info("Process started", os_pid=4242, attempt_no=1)
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        level: str = "INFO",
        max_file_size: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        enable_file: bool = True,
        enable_console: bool = True,
        enable_syslog: bool = False
    ):
        """Initialize the logger.

        Args:
            name: Logger name (will be prefixed with 'proclaunch.')
            log_dir: Directory for log files
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            max_file_size: Maximum log file size before rotation
            backup_count: Number of rotated files to keep
            enable_file: Whether to write a rotating log file
            enable_console: Whether to log to stderr
            enable_syslog: Whether to forward to syslog
        """
        self.name = f'{LOGGER_PREFIX}.{name}'
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.propagate = False

        self.log_dir = log_dir or Path.home() / '.proclaunch' / 'logs'
        self.formatter = LogfmtFormatter()

        self.logger.handlers.clear()

        if enable_file:
            log_file = self.log_dir / f'{self.name}.log'
            self.logger.addHandler(create_file_handler(
                log_file,
                max_bytes=max_file_size,
                backup_count=backup_count,
                formatter=self.formatter
            ))

        if enable_console:
            self.logger.addHandler(create_console_handler(formatter=self.formatter))

        if enable_syslog:
            handler = create_syslog_handler(formatter=self.formatter)
            if handler:
                self.logger.addHandler(handler)

    def _log(self, level: int, msg: str, exc_info: Any = None, **context):
        self.logger.log(level, msg, extra=context, exc_info=exc_info, stacklevel=3)

    def debug(self, msg: str, **context):
        """Log debug message."""
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context):
        """Log info message."""
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, exc_info: Any = None, **context):
        """Log warning message, optionally with exception info."""
        self._log(logging.WARNING, msg, exc_info=exc_info, **context)

    def error(self, msg: str, exc_info: Any = None, **context):
        """Log error message, optionally with exception info."""
        self._log(logging.ERROR, msg, exc_info=exc_info, **context)

    def exception(self, msg: str, **context):
        """Log error with the current exception's traceback."""
        self._log(logging.ERROR, msg, exc_info=True, **context)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)


# Global logger cache
_loggers: dict[str, ProclaunchLogger] = {}

# Defaults applied to loggers created after configure_from_config()
_defaults: dict[str, Any] = {
    'log_dir': Path.home() / '.proclaunch' / 'logs',
    'level': 'INFO',
    'enable_file': True,
    'enable_console': True,
    'enable_syslog': False,
}


def get_logger(name: str, **kwargs) -> ProclaunchLogger:
    """Get or create a proclaunch logger.

    Args:
        name: Logger name
        **kwargs: Overrides for the configured defaults

    Returns:
        Cached logger instance
    """
    if name not in _loggers:
        _loggers[name] = ProclaunchLogger(name, **{**_defaults, **kwargs})
    return _loggers[name]


def configure(**defaults) -> None:
    """Replace logger defaults and drop cached loggers so they pick them up.

    Args:
        **defaults: Any ProclaunchLogger keyword argument
    """
    unknown = set(defaults) - set(_defaults)
    if unknown:
        raise ValueError(f"Unknown logging options: {', '.join(sorted(unknown))}")
    _defaults.update(defaults)
    _loggers.clear()


def configure_from_config(config: Any):
    """Configure logging from a proclaunch config object.

    Args:
        config: Config object with a ``logging`` section
    """
    log_config = getattr(config, 'logging', None)
    if log_config is None:
        return

    configure(
        log_dir=Path(log_config.log_dir).expanduser(),
        level=log_config.level,
        enable_file=log_config.enable_file,
        enable_console=log_config.enable_console,
        enable_syslog=log_config.enable_syslog,
    )
