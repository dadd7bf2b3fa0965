"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at process start-up (before the
first `LinkRegistry` is built) so that registry logs come out as JSON lines.

Logging format:
{
    "timestamp": "2026-01-12T12:00:00.000Z",
    "level": "INFO",
    "logger": "shortlinks.registry.key_assignment",
    "message": "Retrying with a different key.",
    "attempt": 1
}

Structured fields passed through `extra={...}` are attached at the top level.
Values JSON can't encode (datetimes, OwnerRef, ...) are rendered with str().
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Optional

from shortlinks.constants import ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec='milliseconds') \
                            .replace('+00:00', 'Z')
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging(level: Optional[str] = None) -> None:
    """Route all logging to stdout as JSON lines.

    Args:
        level (Optional[str]):
            Root log level. Defaults to `LOG_LEVEL` from the environment, then 'INFO'.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, 'INFO')).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
