"""Console Logger Adapter - Outputs logs to console/stdout."""
import sys
from datetime import datetime, timezone
from typing import Any

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}

# Raw response bodies can be large; keep console lines readable.
MAX_BODY_LENGTH = 2000


def level_value(level: str) -> int:
    """Map a level name to its numeric value (INFO when unknown)."""
    return LEVELS.get(level.upper(), 20)


def shorten(value: Any) -> Any:
    """Cut long strings down to MAX_BODY_LENGTH, noting the original length."""
    if isinstance(value, str) and len(value) > MAX_BODY_LENGTH:
        return f"{value[:MAX_BODY_LENGTH]}... ({len(value)} chars)"
    return value


class ConsoleLogger:
    """
    Implementation of LoggerPort that writes logs to console.

    Used for CLI-based execution. Errors go to stderr so that command
    output on stdout stays clean.
    """

    def __init__(self, level: str = "INFO", use_colors: bool = True):
        """
        Initialize the console logger.

        Args:
            level: Minimum log level to output (DEBUG, INFO, WARNING, ERROR)
            use_colors: Whether to use ANSI colors in output
        """
        self._level = level_value(level)
        self._use_colors = use_colors and sys.stderr.isatty()

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, exception: Exception | None = None, **kwargs: Any) -> None:
        """Log an error message, optionally with exception details."""
        if exception:
            kwargs["error_type"] = type(exception).__name__
        self._log("ERROR", message, **kwargs)

    def set_level(self, level: str) -> None:
        self._level = level_value(level)

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        if level_value(level) < self._level:
            return

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level_str = self._colorize_level(level) if self._use_colors else level

        output = f"[{timestamp}] {level_str}: {message}"

        details = {k: shorten(v) for k, v in kwargs.items() if v is not None}
        if details:
            output += " (" + " | ".join(f"{k}={v}" for k, v in details.items()) + ")"

        # Log lines never mix with command output.
        print(output, file=sys.stderr)

    def _colorize_level(self, level: str) -> str:
        colors = {
            "DEBUG": "\033[36m",    # Cyan
            "INFO": "\033[32m",     # Green
            "WARNING": "\033[33m",  # Yellow
            "ERROR": "\033[31m",    # Red
        }
        return f"{colors.get(level, '')}{level}\033[0m"
