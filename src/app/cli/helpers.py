"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Configuration loading
- Logging setup (text or JSON, console plus optional rotating file)
- Console headers and footers
"""

import json
import logging
import os
import sys
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from constants import LoggingConfig
from core.validators import InputValidator

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LOG_FILENAME = "sdf_wot_converter.log"

# Attributes every LogRecord has; anything else came in through extra=
_STANDARD_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "timestamp": created.strftime(LoggingConfig.JSON_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key in _STANDARD_RECORD_FIELDS or key in payload:
                continue
            try:
                json.dumps(value)
            except TypeError:
                value = repr(value)
            payload[key] = value

        return json.dumps(payload, ensure_ascii=False)


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass
class LoggingSettings:
    """The ``logging`` section of the configuration file."""
    level: str = LoggingConfig.DEFAULT_LOG_LEVEL
    file: Optional[str] = None
    format: str = LoggingConfig.DEFAULT_FORMAT_STYLE
    rotation_enabled: bool = LoggingConfig.ROTATION_ENABLED
    max_mb: int = LoggingConfig.MAX_LOG_FILE_MB
    backup_count: int = LoggingConfig.LOG_BACKUP_COUNT

    @classmethod
    def from_dict(cls, section: Optional[Dict[str, Any]]) -> 'LoggingSettings':
        """Read settings, falling back to defaults for missing or invalid values."""
        section = section or {}
        rotation = section.get('rotation')
        if not isinstance(rotation, dict):
            rotation = {}

        style = str(section.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
        if style not in LoggingConfig.SUPPORTED_FORMATS:
            style = LoggingConfig.DEFAULT_FORMAT_STYLE

        return cls(
            level=str(section.get('level') or LoggingConfig.DEFAULT_LOG_LEVEL).upper(),
            file=section.get('file') or None,
            format=style,
            rotation_enabled=bool(rotation.get('enabled', LoggingConfig.ROTATION_ENABLED)),
            max_mb=_positive_int(rotation.get('max_mb'), LoggingConfig.MAX_LOG_FILE_MB),
            backup_count=_positive_int(rotation.get('backup_count'), LoggingConfig.LOG_BACKUP_COUNT),
        )

    def make_formatter(self) -> logging.Formatter:
        if self.format == 'json':
            return JSONFormatter()
        return logging.Formatter(fmt=LoggingConfig.LOG_FORMAT, datefmt=LoggingConfig.DATE_FORMAT)


_installed_handlers: List[logging.Handler] = []


def get_default_config_path() -> str:
    """Get the default configuration file path (config.json in the project root)."""
    # src/app/cli/helpers.py -> project root
    return str(Path(__file__).resolve().parents[3] / "config.json")


def reset_logging() -> None:
    """Detach and close the handlers installed by setup_logging()."""
    root_logger = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()


def _open_log_file(settings: LoggingSettings) -> Optional[logging.Handler]:
    """
    Open the log file, falling back to the temp directory and then the home
    directory when the configured location is not writable.
    """
    requested = settings.file
    name = os.path.basename(requested) or DEFAULT_LOG_FILENAME
    candidates = [requested, os.path.join(tempfile.gettempdir(), name), os.path.join(Path.home(), name)]

    for candidate in candidates:
        try:
            parent = os.path.dirname(candidate)
            if parent:
                os.makedirs(parent, exist_ok=True)
            if settings.rotation_enabled:
                handler: logging.Handler = RotatingFileHandler(
                    candidate,
                    maxBytes=settings.max_mb * 1024 * 1024,
                    backupCount=settings.backup_count,
                    encoding='utf-8',
                )
            else:
                handler = logging.FileHandler(candidate, encoding='utf-8')
        except OSError as e:
            print(f"  Could not open log file {candidate}: {e}", file=sys.stderr)
            continue

        if candidate != requested:
            print(f"Note: logging to fallback file {candidate}", file=sys.stderr)
        return handler

    print(f"Warning: no writable log file location (requested {requested}); "
          f"logging to console only", file=sys.stderr)
    return None


def setup_logging(
    level: Optional[LogLevel] = None,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
    include_console: bool = True,
) -> Optional[str]:
    """
    Configure the root logger.

    Console output goes to stderr so that converted documents printed on
    stdout stay machine-readable. Calling this again replaces the handlers
    installed by the previous call.

    Args:
        level: Log level; overrides the ``level`` key of ``config``.
        log_file: Log file; overrides the ``file`` key of ``config``.
        config: The ``logging`` section of the configuration file.
        include_console: If False, skip the console handler.

    Returns:
        The log file actually written to, or None when logging to console only.
    """
    settings = LoggingSettings.from_dict(config)
    if level:
        settings.level = level.upper()
    if log_file is not None:
        settings.file = log_file

    formatter = settings.make_formatter()
    handlers: List[logging.Handler] = []

    file_handler = _open_log_file(settings) if settings.file else None
    if file_handler is not None:
        handlers.append(file_handler)
    if include_console or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    reset_logging()
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.level, logging.WARNING))
    logging.captureWarnings(True)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _installed_handlers.append(handler)

    log_path = getattr(file_handler, 'baseFilename', None)
    if log_path:
        logging.getLogger(__name__).info(f"Logging to: {log_path}")
    return log_path


def load_config(config_path: str, strict_security: bool = False) -> Dict[str, Any]:
    """
    Load configuration from a JSON file with security validation.

    Args:
        config_path: Path to the configuration file.
        strict_security: If True, the file must be inside the current directory.

    Returns:
        Dictionary containing the configuration.

    Raises:
        ValueError: If config_path is empty, invalid, or not a JSON object.
        FileNotFoundError: If the configuration file doesn't exist.
        PermissionError: If the file cannot be read.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    try:
        if strict_security:
            path = InputValidator.validate_config_file_path(config_path)
        else:
            path = InputValidator.validate_file_path(
                config_path,
                allowed_suffixes=InputValidator.JSON_SUFFIXES,
                allow_relative_up=True,
            )
    except FileNotFoundError as e:
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}. "
            f"Create one from config.sample.json or pass --config"
        ) from e

    try:
        config = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path} (line {e.lineno}, column {e.colno}): {e.msg}") from e
    except UnicodeDecodeError as e:
        raise ValueError(f"Configuration file {path} is not valid UTF-8: {e}") from e

    if not isinstance(config, dict):
        raise ValueError(f"Configuration must be a JSON object, got {type(config).__name__}")
    return config


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with the given title."""
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    print("=" * width + "\n")
