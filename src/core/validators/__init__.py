"""
Validation utilities for the SDF/WoT converter.

This package provides validators organized by concern:
- input.py: File path and content validation with security checks
- url.py: URL validation and SSRF protection

Usage:
    from core.validators import InputValidator, URLValidator
"""

from .input import InputValidator
from .url import URLValidator

__all__ = [
    'InputValidator',
    'URLValidator',
]
