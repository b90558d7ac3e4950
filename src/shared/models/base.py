"""
Base converter abstract type.

This module defines the common interface the SDF and WoT mappers implement.
Converters are stateless: ``convert`` reads its input document and builds a
new one, so one instance may serve any number of documents.
"""

from abc import ABC, abstractmethod
from typing import Any

__all__ = ['BaseConverter']


class BaseConverter(ABC):
    """
    Abstract base class for document model converters.

    Attributes:
        source_format: Short name of the accepted document format.
        target_format: Short name of the produced document format.
    """

    source_format: str = ""
    target_format: str = ""

    @abstractmethod
    def convert(self, document: Any) -> Any:
        """
        Convert a parsed document into the target document model.

        Must be implemented by subclasses.
        """

    def get_format_name(self) -> str:
        """
        Get the conversion this converter performs.

        Returns:
            Human-readable direction (e.g., "SDF→TM").
        """
        return f"{self.source_format.upper()}→{self.target_format.upper()}"
