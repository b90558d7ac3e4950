"""
Base command class.

This module contains the base command class that all CLI commands inherit
from, plus small output helpers shared by the commands.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from ..helpers import (
    get_default_config_path,
    load_config,
    print_footer,
    print_header,
    setup_logging,
)
from constants import ExitCode
from core.loader import DocumentLoader, LoaderSettings
from core.services import ConversionPipeline
from shared.errors import (
    ConverterError,
    DocumentLoadError,
    DocumentWriteError,
    UnsupportedConversionError,
)
from shared.models import ConversionResult


logger = logging.getLogger(__name__)


# ============================================================================
# Helper Utilities
# ============================================================================

def print_conversion_summary(result: ConversionResult, heading: Optional[str] = None) -> None:
    """Print a consistent summary for a conversion result."""
    if heading:
        print_header(heading)
    print(result.get_summary())
    if heading:
        print_footer()


def exit_code_for(error: ConverterError) -> ExitCode:
    """Map a converter error to the exit code reported by the CLI."""
    if isinstance(error, UnsupportedConversionError):
        return ExitCode.UNSUPPORTED_CONVERSION
    if isinstance(error, DocumentWriteError):
        return ExitCode.WRITE_ERROR
    if isinstance(error, DocumentLoadError):
        return ExitCode.FILE_NOT_FOUND if "not found" in str(error).lower() else ExitCode.ERROR
    return ExitCode.VALIDATION_ERROR


# ============================================================================
# Base Command Class
# ============================================================================

class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides configuration loading, logging setup and a lazily built
    conversion pipeline. Subclasses implement execute().
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        pipeline: Optional[ConversionPipeline] = None,
    ):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file.
            pipeline: Optional pipeline instance (for dependency injection).
        """
        self.config_path = config_path or get_default_config_path()
        self._explicit_config = config_path is not None
        self._pipeline = pipeline
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Lazy-load configuration. A missing default config yields {}."""
        if self._config is None:
            if not self._explicit_config and not Path(self.config_path).exists():
                self._config = {}
            else:
                self._config = load_config(self.config_path)
        return self._config

    def get_pipeline(self) -> ConversionPipeline:
        """Get or create the conversion pipeline."""
        if self._pipeline is None:
            loader = DocumentLoader(LoaderSettings.from_dict(self.config))
            self._pipeline = ConversionPipeline(loader=loader)
        return self._pipeline

    def setup_logging_from_config(self, level: Optional[str] = None) -> None:
        """Setup logging from the config file's ``logging`` section."""
        setup_logging(level=level, config=self.config.get('logging', {}))

    def prepare(self, args: argparse.Namespace) -> Optional[int]:
        """
        Load configuration and configure logging.

        Returns:
            None on success, otherwise the exit code to return.
        """
        try:
            self.setup_logging_from_config(getattr(args, 'log_level', None))
        except (FileNotFoundError, ValueError, PermissionError) as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR
        return None

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
        pass
