"""Process-wide logging setup.

Standard :mod:`logging` everywhere; modules log dotted event names
(``grant.apply.created``) and pass details through ``extra=``. The console
formatter renders one line per record with the extras appended as ``key=value``.
"""

import logging
from datetime import UTC, datetime
from typing import Any

# Attributes set by logging itself; everything else on a record came from `extra=`.
_STANDARD_ATTRS: set[str] = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
    "taskName",
    "color_message",
}

_CONFIGURED_FLAG = "_nsacl_configured"


class ConsoleLogFormatter(logging.Formatter):
    """Single-line console output.

        2026-03-02T10:15:00.120Z INFO  nsacl.application... grant.apply.created grantor=ns1 grant=g1
    """

    _time_format = "%Y-%m-%dT%H:%M:%S"

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-5s %(name)s %(message)s",
            datefmt=self._time_format,
        )

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=UTC)
        return f"{dt.strftime(datefmt or self._time_format)}.{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = [
            f"{key}={_format_extra_value(value)}"
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        ]
        if extras:
            return f"{base} " + " ".join(extras)
        return base


def configure_logging(level: str = "INFO") -> None:
    """Install the console handler on the root logger.

    Safe to call more than once: later calls only adjust the level.
    """
    root_logger = logging.getLogger()
    numeric = getattr(logging, level.upper(), logging.INFO)

    if getattr(root_logger, _CONFIGURED_FLAG, False):
        root_logger.setLevel(numeric)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(ConsoleLogFormatter())
    root_logger.handlers = [handler]
    root_logger.setLevel(numeric)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "alembic"):
        third_party = logging.getLogger(name)
        third_party.handlers.clear()
        third_party.propagate = True

    setattr(root_logger, _CONFIGURED_FLAG, True)


def _format_extra_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)
