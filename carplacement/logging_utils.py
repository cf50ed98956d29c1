"""
Structured Logging

All log entries are:
- Structured (JSON-serializable dicts)
- Timestamped
- Module-scoped

Components log:
- Initialization
- Inputs received and outputs produced (DEBUG)
- Load failures with suggested fix hints
"""

import json
from collections import deque
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import LoggingConfig


class LogLevel(Enum):
    """Log severity levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return list(LogLevel).index(self)

    @classmethod
    def from_string(cls, value: str) -> "LogLevel":
        """Parse log level from string (case-insensitive)."""
        normalized = value.upper().strip()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid log level: '{value}'. "
            f"Valid levels: {[m.value for m in cls]}"
        )


_COLORS = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
    "ERROR": "\033[31m",     # Red
    "CRITICAL": "\033[35m",  # Magenta
}
_RESET = "\033[0m"


class PlacementLogger:
    """
    Structured logger for the placement engine.

    Every entry includes:
    - timestamp: ISO 8601 format
    - module: Source module name
    - level: Severity level
    - message: Human-readable message
    - Additional context fields as needed

    Entries below ``console_level`` are recorded but not printed, so the
    validator can log every call at DEBUG without flooding a drag loop.
    """

    def __init__(
        self,
        module_name: str,
        log_dir: Optional[Path] = None,
        console_output: bool = True,
        file_output: bool = False,
        console_level: LogLevel = LogLevel.INFO,
        max_entries: int = 1000,
    ):
        """
        Initialize logger for a specific module.

        Args:
            module_name: Name of the module (e.g., "PlacementValidator")
            log_dir: Directory for JSONL log files
            console_output: Whether to print to console
            file_output: Whether to write to file
            console_level: Minimum level printed to console
            max_entries: In-memory entries kept for inspection
        """
        self.module_name = module_name
        self.log_dir = log_dir
        self.console_output = console_output
        self.file_output = file_output
        self.console_level = console_level
        self._log_file: Optional[Path] = None
        self._entries: deque = deque(maxlen=max_entries)

        if log_dir and file_output:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self._log_file = self.log_dir / f"{module_name.lower()}_{timestamp}.jsonl"

    def _format_entry(
        self,
        level: LogLevel,
        message: str,
        **kwargs: Any
    ) -> dict:
        """Create structured log entry."""
        entry = {
            "timestamp": datetime.now().isoformat(),
            "module": self.module_name,
            "level": level.value,
            "message": message,
        }

        for key, value in kwargs.items():
            if isinstance(value, Path):
                value = str(value)
            elif hasattr(value, "to_dict"):
                value = value.to_dict()
            elif hasattr(value, "__dict__"):
                value = str(value)
            entry[key] = value

        return entry

    def _output(self, level: LogLevel, entry: dict) -> None:
        """Send entry to configured destinations."""
        if self.console_output and level.rank >= self.console_level.rank:
            color = _COLORS.get(entry["level"], "")
            print(f"{color}[{entry['module']}] {entry['message']}{_RESET}")
            for key in entry:
                if key not in ("timestamp", "module", "level", "message"):
                    print(f"  {key}: {entry[key]}")

        if self._log_file and self.file_output:
            with open(self._log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, default=str) + "\n")

        self._entries.append(entry)

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        self._output(level, self._format_entry(level, message, **kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(
        self,
        message: str,
        reason: Optional[str] = None,
        suggested_fix: Optional[str] = None,
        **kwargs: Any
    ) -> None:
        """
        Log error message with required context.

        Args:
            message: Error description
            reason: Why the error occurred
            suggested_fix: How to potentially fix it
        """
        if reason:
            kwargs["reason"] = reason
        if suggested_fix:
            kwargs["suggested_fix"] = suggested_fix
        self._log(LogLevel.ERROR, message, **kwargs)

    def critical(
        self,
        message: str,
        reason: Optional[str] = None,
        suggested_fix: Optional[str] = None,
        **kwargs: Any
    ) -> None:
        """Log critical error - loading cannot continue."""
        if reason:
            kwargs["reason"] = reason
        if suggested_fix:
            kwargs["suggested_fix"] = suggested_fix
        self._log(LogLevel.CRITICAL, message, **kwargs)

    def log_init(self, **params: Any) -> None:
        """Log component initialization with parameters."""
        self.info(f"{self.module_name} initialized", **params)

    def log_input(self, description: str, **data: Any) -> None:
        self.debug(f"Input: {description}", **data)

    def log_output(self, description: str, **data: Any) -> None:
        self.debug(f"Output: {description}", **data)

    def get_entries(self, level: Optional[LogLevel] = None) -> list[dict]:
        """Get retained log entries, optionally filtered by level."""
        if level is None:
            return list(self._entries)
        return [e for e in self._entries if e["level"] == level.value]

    def get_error_count(self) -> int:
        """Count retained error and critical entries."""
        return sum(
            1 for e in self._entries
            if e["level"] in ("ERROR", "CRITICAL")
        )

    def get_summary(self) -> dict:
        """Get summary of retained log entries."""
        counts = {level.value: 0 for level in LogLevel}
        for entry in self._entries:
            counts[entry["level"]] += 1
        return {
            "module": self.module_name,
            "total_entries": len(self._entries),
            "by_level": counts,
            "log_file": str(self._log_file) if self._log_file else None,
        }


def get_logger(
    module_name: str,
    config: Optional["LoggingConfig"] = None,
) -> PlacementLogger:
    """Build a module logger from logging configuration (defaults if None)."""
    if config is None:
        return PlacementLogger(module_name)
    return PlacementLogger(
        module_name=module_name,
        log_dir=config.log_dir,
        console_output=config.console_output,
        file_output=config.file_output,
        console_level=LogLevel.from_string(config.console_level),
        max_entries=config.max_entries,
    )
