"""Log formatters for proclaunch."""

import logging
from datetime import datetime

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName',
    'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'taskName'
})


def format_value(value: object) -> str:
    """Render a single logfmt value, quoting it when needed.

    Args:
        value: Value to render

    Returns:
        Logfmt-safe string
    """
    if value is None:
        return '""'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        value = ' '.join(str(item) for item in value)

    text = str(value)
    if text == '' or any(c in text for c in ' "=\n\t'):
        text = text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
        return f'"{text}"'
    return text


class LogfmtFormatter(logging.Formatter):
    """Logfmt formatter: level=INFO ts=2025-01-01T12:00:00.000 component=proclaunch.x msg="message" key=value"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as logfmt key=value pairs.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        ts = datetime.fromtimestamp(record.created).isoformat(timespec='milliseconds')
        parts = [
            f'level={record.levelname}',
            f'ts={ts}',
            f'component={record.name}',
            f'msg={format_value(record.getMessage())}',
        ]

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith('_'):
                continue
            parts.append(f'{key}={format_value(value)}')

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            if exc_text:
                parts.append(f'error={format_value(exc_text)}')

        return ' '.join(parts)
