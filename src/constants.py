"""
Centralized configuration constants for the SDF/WoT Converter.

This module provides a single source of truth for all configuration constants,
default values, and vocabulary strings used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    UNSUPPORTED_CONVERSION = 4
    FILE_NOT_FOUND = 5
    WRITE_ERROR = 6


# ============================================================================
# WoT Vocabulary
# ============================================================================

class WoTConfig:
    """Web of Things vocabulary constants."""

    TD_CONTEXT_URI: Final[str] = "https://www.w3.org/2019/wot/td/v1"
    """Context URI placed first in every generated @context."""

    THING_TYPE: Final[str] = "Thing"
    """@type emitted on generated Thing Models."""

    NO_TITLE: Final[str] = "No Title given."
    """Placeholder title for Thing Descriptions without an SDF info block."""

    LICENSE_LINK_REL: Final[str] = "license"
    """Link relation used for the SDF license URI."""

    NOSEC_SCHEME_NAME: Final[str] = "nosec_sc"
    """Security definition name used for generated Thing Descriptions."""

    NOSEC_SCHEME: Final[str] = "nosec"
    """Security scheme used for generated Thing Descriptions."""


# ============================================================================
# SDF Vocabulary
# ============================================================================

class SDFConfig:
    """SDF vocabulary constants."""

    SDF_THING: Final[str] = "sdfThing"
    SDF_OBJECT: Final[str] = "sdfObject"
    SDF_PROPERTY: Final[str] = "sdfProperty"
    SDF_ACTION: Final[str] = "sdfAction"
    SDF_EVENT: Final[str] = "sdfEvent"
    SDF_DATA: Final[str] = "sdfData"

    SDF_TYPES: Final[tuple[str, ...]] = ("byte-string", "unix-time")
    """Values accepted for the sdfType quality."""


# ============================================================================
# File Extensions
# ============================================================================

class FileExtensions:
    """Supported file suffixes."""

    SDF_SUFFIX: Final[str] = ".sdf.json"
    """SDF model documents."""

    TD_SUFFIX: Final[str] = ".td.json"
    """WoT Thing Description documents."""

    TM_SUFFIX: Final[str] = ".tm.json"
    """WoT Thing Model documents."""

    INPUT_SUFFIXES: Final[tuple[str, ...]] = (".sdf.json", ".td.json", ".tm.json")
    """Valid input and output suffixes."""


# ============================================================================
# Document Loading
# ============================================================================

class LoaderConfig:
    """Document loader defaults."""

    DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
    """Default HTTP request timeout."""

    DEFAULT_MAX_RETRIES: Final[int] = 3
    """Attempts for transient HTTP failures."""

    RETRY_MIN_WAIT_SECONDS: Final[int] = 1
    """Lower bound of the exponential back-off."""

    RETRY_MAX_WAIT_SECONDS: Final[int] = 10
    """Upper bound of the exponential back-off."""

    TRANSIENT_STATUS_CODES: Final[tuple[int, ...]] = (429, 502, 503, 504)
    """HTTP status codes that are retried."""

    MAX_DOCUMENT_SIZE_MB: Final[int] = 50
    """Largest document accepted from a file or URL."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""
