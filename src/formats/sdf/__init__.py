"""
SDF (Semantic Definition Format) support.

Models and parser for hierarchical SDF device descriptions.
"""

from .sdf_models import (
    ActionQualities,
    CommonQualities,
    DataQualities,
    EventQualities,
    InfoBlock,
    ObjectQualities,
    PropertyQualities,
    SDFModel,
    ThingQualities,
)
from .sdf_parser import SDFParseError, SDFParser

__all__ = [
    "ActionQualities",
    "CommonQualities",
    "DataQualities",
    "EventQualities",
    "InfoBlock",
    "ObjectQualities",
    "PropertyQualities",
    "SDFModel",
    "SDFParseError",
    "SDFParser",
    "ThingQualities",
]
