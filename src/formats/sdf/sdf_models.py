"""
SDF Data Models.

This module defines the data structures for representing a parsed SDF
(Semantic Definition Format) model. SDF nests its interaction definitions
inside containers:

- SDFModel: Root document with info block, namespaces and top-level maps
- ThingQualities: sdfThing entry, may nest further things and objects
- ObjectQualities: sdfObject entry, holds properties, actions, events, data
- DataQualities / PropertyQualities: a data definition with its schema
- ActionQualities: an action with optional input and output data
- EventQualities: an event with optional output data

Every entity carries CommonQualities. Absent fields are None and are never
serialized.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shared.models.schema import SchemaValue, put_optional


@dataclass
class InfoBlock:
    """
    Document metadata. All four fields are required together.

    Attributes:
        title: Model title.
        version: Model version string.
        copyright: Copyright statement.
        license: License identifier or URI.
    """
    title: str
    version: str
    copyright: str
    license: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "title": self.title,
            "version": self.version,
            "copyright": self.copyright,
            "license": self.license,
        }


@dataclass
class CommonQualities:
    """
    Qualities shared by every SDF definition.

    Attributes:
        description: Human-readable description.
        label: Short human-readable name.
        comment: Implementation note.
        sdf_ref: Pointer such as "#/sdfAction/foo" to a definition this one extends.
        sdf_required: Pointers to required sub-definitions.
    """
    description: Optional[str] = None
    label: Optional[str] = None
    comment: Optional[str] = None
    sdf_ref: Optional[str] = None
    sdf_required: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {}
        put_optional(result, "description", self.description)
        put_optional(result, "label", self.label)
        put_optional(result, "comment", self.comment)
        put_optional(result, "sdfRef", self.sdf_ref)
        put_optional(result, "sdfRequired", self.sdf_required)
        return result


@dataclass
class DataQualities(SchemaValue):
    """
    An sdfData or sdfProperty definition.

    Extends SchemaValue with the SDF data qualities. Nested ``items`` and
    ``properties`` schemas are DataQualities themselves.

    Attributes:
        common_qualities: Label, description, comment, sdfRef, sdfRequired.
        unique_items: Whether array items must be unique.
        observable: Whether changes can be observed.
        readable: Whether the value can be read.
        writable: Whether the value can be written.
        nullable: Whether null is an accepted value.
        sdf_type: SDF-specific type hint ("byte-string" or "unix-time").
        content_format: Content format hint.
    """
    common_qualities: CommonQualities = field(default_factory=CommonQualities)
    unique_items: Optional[bool] = None
    observable: Optional[bool] = None
    readable: Optional[bool] = None
    writable: Optional[bool] = None
    nullable: Optional[bool] = None
    sdf_type: Optional[str] = None
    content_format: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = self.common_qualities.to_dict()
        result.update(super().to_dict())
        put_optional(result, "uniqueItems", self.unique_items)
        put_optional(result, "observable", self.observable)
        put_optional(result, "readable", self.readable)
        put_optional(result, "writable", self.writable)
        put_optional(result, "nullable", self.nullable)
        put_optional(result, "sdfType", self.sdf_type)
        put_optional(result, "contentFormat", self.content_format)
        return result


PropertyQualities = DataQualities


def _map_to_dict(entries: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if entries is None:
        return None
    return {key: value.to_dict() for key, value in entries.items()}


@dataclass
class ActionQualities:
    """
    An sdfAction definition.

    Attributes:
        common_qualities: Label, description, comment, sdfRef, sdfRequired.
        sdf_input_data: Data accepted by the action.
        sdf_output_data: Data returned by the action.
        sdf_data: Data definitions local to the action.
    """
    common_qualities: CommonQualities = field(default_factory=CommonQualities)
    sdf_input_data: Optional[DataQualities] = None
    sdf_output_data: Optional[DataQualities] = None
    sdf_data: Optional[Dict[str, DataQualities]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = self.common_qualities.to_dict()
        if self.sdf_input_data is not None:
            result["sdfInputData"] = self.sdf_input_data.to_dict()
        if self.sdf_output_data is not None:
            result["sdfOutputData"] = self.sdf_output_data.to_dict()
        put_optional(result, "sdfData", _map_to_dict(self.sdf_data))
        return result


@dataclass
class EventQualities:
    """
    An sdfEvent definition.

    Attributes:
        common_qualities: Label, description, comment, sdfRef, sdfRequired.
        sdf_output_data: Data emitted with the event.
        sdf_data: Data definitions local to the event.
    """
    common_qualities: CommonQualities = field(default_factory=CommonQualities)
    sdf_output_data: Optional[DataQualities] = None
    sdf_data: Optional[Dict[str, DataQualities]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = self.common_qualities.to_dict()
        if self.sdf_output_data is not None:
            result["sdfOutputData"] = self.sdf_output_data.to_dict()
        put_optional(result, "sdfData", _map_to_dict(self.sdf_data))
        return result


@dataclass
class ObjectQualities:
    """
    An sdfObject definition. Objects do not nest further objects or things.

    Attributes:
        common_qualities: Label, description, comment, sdfRef, sdfRequired.
        sdf_property: Properties keyed by name.
        sdf_action: Actions keyed by name.
        sdf_event: Events keyed by name.
        sdf_data: Data definitions keyed by name.
    """
    common_qualities: CommonQualities = field(default_factory=CommonQualities)
    sdf_property: Optional[Dict[str, PropertyQualities]] = None
    sdf_action: Optional[Dict[str, ActionQualities]] = None
    sdf_event: Optional[Dict[str, EventQualities]] = None
    sdf_data: Optional[Dict[str, DataQualities]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = self.common_qualities.to_dict()
        put_optional(result, "sdfProperty", _map_to_dict(self.sdf_property))
        put_optional(result, "sdfAction", _map_to_dict(self.sdf_action))
        put_optional(result, "sdfEvent", _map_to_dict(self.sdf_event))
        put_optional(result, "sdfData", _map_to_dict(self.sdf_data))
        return result


@dataclass
class ThingQualities:
    """
    An sdfThing definition, which may nest things and objects.

    Attributes:
        common_qualities: Label, description, comment, sdfRef, sdfRequired.
        sdf_object: Objects keyed by name.
        sdf_thing: Nested things keyed by name.
    """
    common_qualities: CommonQualities = field(default_factory=CommonQualities)
    sdf_object: Optional[Dict[str, ObjectQualities]] = None
    sdf_thing: Optional[Dict[str, "ThingQualities"]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = self.common_qualities.to_dict()
        put_optional(result, "sdfObject", _map_to_dict(self.sdf_object))
        put_optional(result, "sdfThing", _map_to_dict(self.sdf_thing))
        return result


@dataclass
class SDFModel:
    """
    Root of an SDF document.

    Attributes:
        info: Optional info block.
        namespace: Namespace prefixes mapped to URIs.
        default_namespace: Prefix of the namespace this model defines.
        sdf_thing: Top-level things.
        sdf_object: Top-level objects.
        sdf_property: Top-level properties.
        sdf_action: Top-level actions.
        sdf_event: Top-level events.
        sdf_data: Top-level data definitions.
    """
    info: Optional[InfoBlock] = None
    namespace: Optional[Dict[str, str]] = None
    default_namespace: Optional[str] = None
    sdf_thing: Optional[Dict[str, ThingQualities]] = None
    sdf_object: Optional[Dict[str, ObjectQualities]] = None
    sdf_property: Optional[Dict[str, PropertyQualities]] = None
    sdf_action: Optional[Dict[str, ActionQualities]] = None
    sdf_event: Optional[Dict[str, EventQualities]] = None
    sdf_data: Optional[Dict[str, DataQualities]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {}
        if self.info is not None:
            result["info"] = self.info.to_dict()
        put_optional(result, "namespace", self.namespace)
        put_optional(result, "defaultNamespace", self.default_namespace)
        put_optional(result, "sdfThing", _map_to_dict(self.sdf_thing))
        put_optional(result, "sdfObject", _map_to_dict(self.sdf_object))
        put_optional(result, "sdfProperty", _map_to_dict(self.sdf_property))
        put_optional(result, "sdfAction", _map_to_dict(self.sdf_action))
        put_optional(result, "sdfEvent", _map_to_dict(self.sdf_event))
        put_optional(result, "sdfData", _map_to_dict(self.sdf_data))
        return result

    def get_definitions(self, category: str) -> Optional[Dict[str, Any]]:
        """
        Get a top-level definition map by its SDF keyword.

        Args:
            category: One of "sdfProperty", "sdfAction", "sdfEvent", "sdfData".

        Returns:
            The matching map, or None when absent or the keyword is unknown.
        """
        return {
            "sdfProperty": self.sdf_property,
            "sdfAction": self.sdf_action,
            "sdfEvent": self.sdf_event,
            "sdfData": self.sdf_data,
        }.get(category)

    @property
    def affordance_count(self) -> int:
        """Number of properties, actions and events at the top level."""
        return sum(
            len(entries)
            for entries in (self.sdf_property, self.sdf_action, self.sdf_event)
            if entries
        )
