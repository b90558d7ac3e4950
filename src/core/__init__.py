"""
Core infrastructure for the SDF/WoT converter.

- Document loading from files, URLs and inline JSON (DocumentLoader, LoaderSettings)
- Input and URL validation (InputValidator, URLValidator)
- The load -> convert -> write pipeline (ConversionPipeline)

Usage:
    from core import ConversionPipeline, DocumentLoader
    from core.validators import InputValidator
"""

from .validators import InputValidator, URLValidator
from .loader import DocumentLoader, LoaderSettings, TransientHTTPError
from .services import ConversionPipeline, PipelineState, PipelineStats

__all__ = [
    'ConversionPipeline',
    'DocumentLoader',
    'InputValidator',
    'LoaderSettings',
    'PipelineState',
    'PipelineStats',
    'TransientHTTPError',
    'URLValidator',
]
