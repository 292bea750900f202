"""Log handlers for proclaunch."""

import logging
import logging.handlers
import sys
from pathlib import Path

# Where local syslog daemons usually listen, tried in order.
SYSLOG_SOCKETS = ('/dev/log', '/var/run/syslog')


def create_file_handler(
    log_file: Path,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
    formatter: logging.Formatter | None = None
) -> logging.Handler:
    """Create a rotating file handler, creating the log directory if missing.

    Args:
        log_file: Path to log file
        max_bytes: Maximum file size before rotation
        backup_count: Number of rotated files to keep
        formatter: Log formatter to use

    Returns:
        Configured file handler
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8',
        delay=True,
    )
    if formatter:
        handler.setFormatter(formatter)
    return handler


def create_console_handler(
    formatter: logging.Formatter | None = None,
    stream=None
) -> logging.Handler:
    """Create a console handler writing to ``stream`` (stderr by default)."""
    handler = logging.StreamHandler(stream or sys.stderr)
    if formatter:
        handler.setFormatter(formatter)
    return handler


def create_syslog_handler(
    address: str | tuple | None = None,
    facility: int = logging.handlers.SysLogHandler.LOG_USER,
    formatter: logging.Formatter | None = None
) -> logging.Handler | None:
    """Create a syslog handler.

    When no address is given the local syslog sockets are tried first and
    UDP on localhost:514 is the last resort.

    Args:
        address: Syslog address (socket path or (host, port) tuple)
        facility: Syslog facility
        formatter: Log formatter to use

    Returns:
        Configured syslog handler or None if syslog is not reachable
    """
    if address is None:
        address = next(
            (path for path in SYSLOG_SOCKETS if Path(path).exists()),
            ('localhost', 514),
        )

    try:
        handler = logging.handlers.SysLogHandler(address=address, facility=facility)
    except OSError:
        return None

    if formatter:
        handler.setFormatter(formatter)
    return handler
