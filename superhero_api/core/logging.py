"""Loguru configuration.

``setup_logging`` installs a single stdout sink in one of two shapes:

``console``
    One coloured line per record. Context bound with ``logger.bind`` or
    ``logger.contextualize`` is shown between the location and the
    message, request identifiers and superhero ID first::

        ... | INFO     | ...:create:42 | [3f2a9c1d] [POST] [4] | Superhero created

``json``
    One JSON object per line, context fields merged in at the top level.

Standard library loggers, uvicorn's included, are redirected into Loguru by
``InterceptHandler``.
"""

from __future__ import annotations

import inspect
import json
import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, cast

from loguru import logger

if TYPE_CHECKING:
    from superhero_api.core.config import Settings

DEFAULT_LOG_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> | {message}"
)
CORRELATION_ID_DISPLAY_LENGTH: Final[int] = 8
MAX_FIELD_VALUE_LENGTH: Final[int] = 100

# Shown unlabelled and in this order; everything else as key=value
PRIORITY_FIELDS: Final[tuple[str, ...]] = (
    "correlation_id",
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "superhero_id",
)
# Markup tags per status class, keyed by the first digit
STATUS_TAGS: Final[dict[str, tuple[str, ...]]] = {
    "2": ("green",),
    "3": ("yellow",),
    "4": ("red",),
    "5": ("red", "bold"),
}
# Copied unchanged from the Loguru record into each JSON line
JSON_RECORD_FIELDS: Final[tuple[str, ...]] = ("function", "line", "message")
STDLIB_LOGGERS: Final[tuple[str, ...]] = ("uvicorn", "uvicorn.error", "uvicorn.access")


@dataclass
class _LoggingState:
    configured: bool = False


_state = _LoggingState()


def _escape_braces(value: object) -> str:
    # The console format is itself a Loguru format string
    return str(value).replace("{", "{{").replace("}", "}}")


def _format_priority_field(field: str, value: object) -> str:
    text = _escape_braces(value)
    if field == "correlation_id":
        return text[:CORRELATION_ID_DISPLAY_LENGTH]
    if field == "duration_ms":
        return f"{text}ms"
    if field == "status_code":
        tags = STATUS_TAGS.get(text[:1], ())
        opening = "".join(f"<{tag}>" for tag in tags)
        closing = "".join(f"</{tag}>" for tag in reversed(tags))
        return f"{opening}{text}{closing}"
    return text


def _format_extra_field(key: str, value: object) -> str:
    text = str(value)
    if len(text) > MAX_FIELD_VALUE_LENGTH:
        text = text[: MAX_FIELD_VALUE_LENGTH - 3] + "..."
    return f"{_escape_braces(key)}={_escape_braces(text)}"


def _context_parts(extra: dict[str, Any]) -> list[str]:
    parts = [
        f"[<yellow>{_format_priority_field(field, extra[field])}</yellow>]"
        for field in PRIORITY_FIELDS
        if extra.get(field) is not None
    ]
    parts.extend(
        f"[<dim>{_format_extra_field(key, value)}</dim>]"
        for key, value in extra.items()
        if key not in PRIORITY_FIELDS and not key.startswith("_") and value is not None
    )
    return parts


def format_console_with_context(record: dict[str, Any]) -> str:
    """Return the Loguru format string for one console record.

    Falls back to ``DEFAULT_LOG_FORMAT`` when the record is missing fields.
    """
    try:
        timestamp = record["time"].strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        location = f"{record['name']}:{record['function']}:{record['line']}"
        columns = [
            f"<green>{timestamp}</green>",
            f"<level>{record['level'].name: <8}</level>",
            f"<cyan>{_escape_braces(location)}</cyan>",
        ]
    except (AttributeError, KeyError, TypeError, ValueError):
        return DEFAULT_LOG_FORMAT + "\n{exception}"

    if context := _context_parts(record.get("extra", {})):
        columns.append(" ".join(context))
    columns.append(_escape_braces(record["message"]))

    line = " | ".join(columns)
    if record.get("exception"):
        line += "\n{exception}"
    return line + "\n"


def serialize_for_json(record: dict[str, Any]) -> str:
    """Render a record as one JSON line.

    Context fields whose names start with an underscore are left out.
    Values JSON cannot represent are written as strings.
    """
    entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
    }
    entry.update((field, record[field]) for field in JSON_RECORD_FIELDS)
    entry.update(
        (key, value)
        for key, value in record.get("extra", {}).items()
        if not key.startswith("_")
    )
    if exception := record.get("exception"):
        entry["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }
    return json.dumps(entry, default=str) + "\n"


class InterceptHandler(logging.Handler):
    """Handler that re-emits standard library records through Loguru.

    uvicorn access records also get the method, path and correlation ID of
    the request they describe.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Point Loguru at the code that called the stdlib logger
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        bound: dict[str, Any] = {}
        scope = getattr(record, "scope", None)
        if record.name == "uvicorn.access" and isinstance(scope, dict):
            headers = dict(scope.get("headers", []))
            bound["method"] = scope.get("method", "")
            bound["path"] = scope.get("path", "")
            if correlation_id := headers.get(b"x-correlation-id", b"").decode():
                bound["correlation_id"] = correlation_id

        logger.opt(depth=depth, exception=record.exc_info).bind(**bound).log(
            level, record.getMessage()
        )


def _write_json(message: Any) -> None:  # noqa: ANN401 - loguru Message
    sys.stdout.write(serialize_for_json(message.record))
    sys.stdout.flush()


def setup_logging(settings: Settings) -> None:
    """Replace Loguru's default sink and route stdlib logging into Loguru.

    Later calls in the same process are ignored.
    """
    if _state.configured:
        return

    config = settings.log_config
    formatter_type = config.log_formatter_type or "console"

    logger.remove()
    if formatter_type == "json":
        logger.add(
            _write_json,
            level=config.log_level,
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            level=config.log_level,
            format=cast("Any", format_console_with_context),
            colorize=True,
            enqueue=True,
            backtrace=settings.debug,
            diagnose=settings.debug,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in STDLIB_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        if not stdlib_logger.handlers:
            stdlib_logger.handlers = [InterceptHandler()]
            stdlib_logger.setLevel(logging.INFO)
            stdlib_logger.propagate = False

    _state.configured = True
    logger.debug("Logging configured", formatter=formatter_type, level=config.log_level)
