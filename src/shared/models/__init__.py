"""
Shared data models for the SDF/WoT converter.

This module contains the schema value model both document families build
on, the conversion result, and the converter base class.

Usage:
    from shared.models import SchemaType, SchemaValue, ConversionResult

    # Or import specific classes
    from shared.models.schema import SchemaValue
    from shared.models.base import BaseConverter
"""

from .schema import (
    Number,
    SchemaType,
    SchemaValue,
    put_optional,
)
from .conversion import ConversionResult
from .base import BaseConverter

__all__ = [
    # Schema values
    "Number",
    "SchemaType",
    "SchemaValue",
    "put_optional",
    # Conversion results
    "ConversionResult",
    # Converter base class
    "BaseConverter",
]
