"""
W3C Web of Things support.

Models and parser for Thing Models and Thing Descriptions.
"""

from .wot_models import (
    ActionAffordance,
    BaseThing,
    DataSchema,
    EventAffordance,
    Form,
    InteractionAffordance,
    Link,
    PropertyAffordance,
    SecurityScheme,
    ThingDescription,
    ThingModel,
    VersionInfo,
)
from .wot_parser import WoTParseError, WoTParser

__all__ = [
    "ActionAffordance",
    "BaseThing",
    "DataSchema",
    "EventAffordance",
    "Form",
    "InteractionAffordance",
    "Link",
    "PropertyAffordance",
    "SecurityScheme",
    "ThingDescription",
    "ThingModel",
    "VersionInfo",
    "WoTParseError",
    "WoTParser",
]
