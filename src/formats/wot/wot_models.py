"""
WoT Data Models.

This module defines the data structures for W3C Web of Things documents.
Unlike SDF, WoT keeps every interaction in three flat maps:

- BaseThing: Shared document fields (@context, metadata, security, links)
- ThingModel: Partial or templated thing; title and security are optional
- ThingDescription: Fully specified thing; title and security are required
- PropertyAffordance / ActionAffordance / EventAffordance: named interactions
- DataSchema: SchemaValue plus the WoT annotations (title, readOnly, ...)

Absent fields are None and are never serialized.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from shared.models.schema import SchemaValue, put_optional

ContextEntry = Union[str, Dict[str, str]]
Context = Union[str, List[ContextEntry]]
StringOrList = Union[str, List[str]]


def _map_to_dict(entries: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if entries is None:
        return None
    return {key: value.to_dict() for key, value in entries.items()}


def _list_to_dict(entries: Optional[List[Any]]) -> Optional[List[Dict[str, Any]]]:
    if entries is None:
        return None
    return [entry.to_dict() for entry in entries]


@dataclass
class VersionInfo:
    """Version of a thing (``instance``) and of its model (``model``)."""
    instance: Optional[str] = None
    model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        put_optional(result, "instance", self.instance)
        put_optional(result, "model", self.model)
        return result


@dataclass
class Link:
    """A web link from the thing to another resource."""
    href: str
    type: Optional[str] = None
    rel: Optional[str] = None
    anchor: Optional[str] = None
    sizes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"href": self.href}
        put_optional(result, "type", self.type)
        put_optional(result, "rel", self.rel)
        put_optional(result, "anchor", self.anchor)
        put_optional(result, "sizes", self.sizes)
        return result


@dataclass
class ExpectedResponse:
    content_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"contentType": self.content_type}


@dataclass
class Form:
    """
    A protocol binding for an interaction.

    Attributes:
        href: Target URI.
        op: Operation type or list of them (e.g. "readproperty").
        content_type: Media type of the payload.
        content_coding: Content coding (e.g. "gzip").
        subprotocol: Protocol extension (e.g. "longpoll").
        security: Names of security definitions that apply.
        scopes: Authorization scopes.
        response: Expected response metadata.
    """
    href: str
    op: Optional[StringOrList] = None
    content_type: Optional[str] = None
    content_coding: Optional[str] = None
    subprotocol: Optional[str] = None
    security: Optional[StringOrList] = None
    scopes: Optional[StringOrList] = None
    response: Optional[ExpectedResponse] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"href": self.href}
        put_optional(result, "op", self.op)
        put_optional(result, "contentType", self.content_type)
        put_optional(result, "contentCoding", self.content_coding)
        put_optional(result, "subprotocol", self.subprotocol)
        put_optional(result, "security", self.security)
        put_optional(result, "scopes", self.scopes)
        if self.response is not None:
            result["response"] = self.response.to_dict()
        return result


@dataclass
class SecurityScheme:
    """
    A named security configuration.

    Scheme-specific members (``in``, ``name``, ``qop``, ``token``, ...) are
    kept verbatim in ``parameters``.
    """
    scheme: str
    type_annotation: Optional[StringOrList] = None
    description: Optional[str] = None
    descriptions: Optional[Dict[str, str]] = None
    proxy: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        put_optional(result, "@type", self.type_annotation)
        result["scheme"] = self.scheme
        put_optional(result, "description", self.description)
        put_optional(result, "descriptions", self.descriptions)
        put_optional(result, "proxy", self.proxy)
        result.update(self.parameters)
        return result


@dataclass
class DataSchema(SchemaValue):
    """
    A WoT data schema.

    Attributes:
        type_annotation: Semantic ``@type`` annotation.
        title: Human-readable title.
        titles: Titles keyed by language tag.
        description: Human-readable description.
        descriptions: Descriptions keyed by language tag.
        read_only: Value can only be read.
        write_only: Value can only be written.
        one_of: Alternative schemas.
        content_encoding: Encoding of string content (e.g. "base64").
        content_media_type: Media type of string content.
    """
    type_annotation: Optional[StringOrList] = None
    title: Optional[str] = None
    titles: Optional[Dict[str, str]] = None
    description: Optional[str] = None
    descriptions: Optional[Dict[str, str]] = None
    read_only: Optional[bool] = None
    write_only: Optional[bool] = None
    one_of: Optional[List["DataSchema"]] = None
    content_encoding: Optional[str] = None
    content_media_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {}
        put_optional(result, "@type", self.type_annotation)
        put_optional(result, "title", self.title)
        put_optional(result, "titles", self.titles)
        put_optional(result, "description", self.description)
        put_optional(result, "descriptions", self.descriptions)
        result.update(super().to_dict())
        put_optional(result, "readOnly", self.read_only)
        put_optional(result, "writeOnly", self.write_only)
        put_optional(result, "oneOf", _list_to_dict(self.one_of))
        put_optional(result, "contentEncoding", self.content_encoding)
        put_optional(result, "contentMediaType", self.content_media_type)
        return result


@dataclass
class InteractionAffordance:
    """Fields every action and event affordance carries."""
    type_annotation: Optional[StringOrList] = None
    title: Optional[str] = None
    titles: Optional[Dict[str, str]] = None
    description: Optional[str] = None
    descriptions: Optional[Dict[str, str]] = None
    forms: Optional[List[Form]] = None
    uri_variables: Optional[Dict[str, DataSchema]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {}
        put_optional(result, "@type", self.type_annotation)
        put_optional(result, "title", self.title)
        put_optional(result, "titles", self.titles)
        put_optional(result, "description", self.description)
        put_optional(result, "descriptions", self.descriptions)
        put_optional(result, "forms", _list_to_dict(self.forms))
        put_optional(result, "uriVariables", _map_to_dict(self.uri_variables))
        return result


@dataclass
class PropertyAffordance(DataSchema):
    """
    A property: the data schema of its value plus interaction fields.

    The affordance title and description are the DataSchema ones, since
    both share the same JSON keys.
    """
    forms: Optional[List[Form]] = None
    uri_variables: Optional[Dict[str, DataSchema]] = None
    observable: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = super().to_dict()
        put_optional(result, "forms", _list_to_dict(self.forms))
        put_optional(result, "uriVariables", _map_to_dict(self.uri_variables))
        put_optional(result, "observable", self.observable)
        return result


@dataclass
class ActionAffordance(InteractionAffordance):
    """An action with optional input and output schemas."""
    input: Optional[DataSchema] = None
    output: Optional[DataSchema] = None
    safe: Optional[bool] = None
    idempotent: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.input is not None:
            result["input"] = self.input.to_dict()
        if self.output is not None:
            result["output"] = self.output.to_dict()
        put_optional(result, "safe", self.safe)
        put_optional(result, "idempotent", self.idempotent)
        return result


@dataclass
class EventAffordance(InteractionAffordance):
    """An event with optional subscription, data and cancellation schemas."""
    subscription: Optional[DataSchema] = None
    data: Optional[DataSchema] = None
    cancellation: Optional[DataSchema] = None

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.subscription is not None:
            result["subscription"] = self.subscription.to_dict()
        if self.data is not None:
            result["data"] = self.data.to_dict()
        if self.cancellation is not None:
            result["cancellation"] = self.cancellation.to_dict()
        return result


@dataclass
class BaseThing:
    """
    Fields shared by Thing Models and Thing Descriptions.

    Attributes:
        context: JSON-LD context, a URI string or a list of URIs and
            prefix-to-URI maps.
        type_annotation: ``@type`` of the thing.
        id: Identifier URI.
        title: Human-readable title.
        titles: Titles keyed by language tag.
        description: Human-readable description.
        descriptions: Descriptions keyed by language tag.
        version: Version information.
        created: Creation timestamp (ISO 8601).
        modified: Modification timestamp (ISO 8601).
        support: Support contact URI.
        base: Base URI for relative form targets.
        properties: Property affordances keyed by name.
        actions: Action affordances keyed by name.
        events: Event affordances keyed by name.
        links: Web links.
        forms: Thing-level forms.
        security: Names of the security definitions in force.
        security_definitions: Security schemes keyed by name.
        profile: Profile URIs.
        schema_definitions: Reusable data schemas keyed by name.
    """
    context: Context
    type_annotation: Optional[StringOrList] = None
    id: Optional[str] = None
    title: Optional[str] = None
    titles: Optional[Dict[str, str]] = None
    description: Optional[str] = None
    descriptions: Optional[Dict[str, str]] = None
    version: Optional[VersionInfo] = None
    created: Optional[str] = None
    modified: Optional[str] = None
    support: Optional[str] = None
    base: Optional[str] = None
    properties: Optional[Dict[str, PropertyAffordance]] = None
    actions: Optional[Dict[str, ActionAffordance]] = None
    events: Optional[Dict[str, EventAffordance]] = None
    links: Optional[List[Link]] = None
    forms: Optional[List[Form]] = None
    security: Optional[StringOrList] = None
    security_definitions: Optional[Dict[str, SecurityScheme]] = None
    profile: Optional[StringOrList] = None
    schema_definitions: Optional[Dict[str, DataSchema]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {"@context": self.context}
        put_optional(result, "@type", self.type_annotation)
        put_optional(result, "id", self.id)
        put_optional(result, "title", self.title)
        put_optional(result, "titles", self.titles)
        put_optional(result, "description", self.description)
        put_optional(result, "descriptions", self.descriptions)
        if self.version is not None:
            result["version"] = self.version.to_dict()
        put_optional(result, "created", self.created)
        put_optional(result, "modified", self.modified)
        put_optional(result, "support", self.support)
        put_optional(result, "base", self.base)
        put_optional(result, "links", _list_to_dict(self.links))
        put_optional(result, "security", self.security)
        put_optional(result, "securityDefinitions", _map_to_dict(self.security_definitions))
        put_optional(result, "profile", self.profile)
        put_optional(result, "schemaDefinitions", _map_to_dict(self.schema_definitions))
        put_optional(result, "forms", _list_to_dict(self.forms))
        put_optional(result, "properties", _map_to_dict(self.properties))
        put_optional(result, "actions", _map_to_dict(self.actions))
        put_optional(result, "events", _map_to_dict(self.events))
        return result

    @property
    def affordance_count(self) -> int:
        """Total number of properties, actions and events."""
        return sum(
            len(entries)
            for entries in (self.properties, self.actions, self.events)
            if entries
        )

    @property
    def context_entries(self) -> List[ContextEntry]:
        """The context as a list, whichever form it was given in."""
        if isinstance(self.context, str):
            return [self.context]
        return list(self.context)


@dataclass
class ThingModel(BaseThing):
    """A partial, templated thing."""


@dataclass
class ThingDescription(BaseThing):
    """A fully specified thing. Parsers require title, security and securityDefinitions."""
