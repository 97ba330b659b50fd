"""JSON Logger Adapter - One JSON object per line for log aggregators and CI."""
import json
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from incapsula_manager.adapters.outbound.console_logger import level_value, shorten

# Keys every entry carries; bound context and call fields cannot replace them.
RESERVED_KEYS = ("timestamp", "level", "message")


class JsonLogger:
    """
    LoggerPort that writes JSON lines.

    Fields bound with `set_context` (the CLI binds the command being run)
    appear in every entry. Fields whose value is None are left out, and
    long string values such as raw response bodies are shortened the same
    way the console logger does.
    """

    def __init__(self, level: str = "INFO", context: dict | None = None, stream: TextIO | None = None):
        self._level = level_value(level)
        self._context = dict(context or {})
        self._stream = stream

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, kwargs)

    def error(self, message: str, exception: Exception | None = None, **kwargs: Any) -> None:
        if exception is not None:
            kwargs["error"] = str(exception)
            kwargs["error_type"] = type(exception).__name__
            if exception.__cause__ is not None:
                kwargs["error_cause"] = type(exception.__cause__).__name__
        self._log("ERROR", message, kwargs)

    def set_level(self, level: str) -> None:
        self._level = level_value(level)

    def set_context(self, **kwargs: Any) -> None:
        """Bind fields to every following entry. A None value unbinds the field."""
        for key, value in kwargs.items():
            if value is None:
                self._context.pop(key, None)
            else:
                self._context[key] = value

    def _entry(self, level: str, message: str, fields: dict[str, Any]) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "message": message,
        }
        for source in (self._context, fields):
            for key, value in source.items():
                if key in RESERVED_KEYS or value is None:
                    continue
                entry[key] = shorten(value)
        return entry

    def _log(self, level: str, message: str, fields: dict[str, Any]) -> None:
        if level_value(level) < self._level:
            return
        stream = self._stream or sys.stderr
        stream.write(json.dumps(self._entry(level, message, fields), default=str) + "\n")
        stream.flush()
