"""
Runtime services.

This package provides the conversion pipeline that runs load, map and
write for one or many documents.
"""

from .pipeline import (
    ConversionPipeline,
    PipelineState,
    PipelineStats,
)

__all__ = [
    "ConversionPipeline",
    "PipelineState",
    "PipelineStats",
]
