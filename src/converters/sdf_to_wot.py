"""
SDF to WoT converter.

This module flattens a hierarchical SDF model into the flat affordance maps
of a WoT Thing Model or Thing Description.

Flattening walks the containers top-down and prefixes every affordance key
with the names of the objects and things it is nested in:

    sdfObject.Switch.sdfProperty.value                 -> SwitchValue
    sdfThing.house.sdfObject.lamp.sdfAction.toggle     -> HouseLampToggle

Keys are joined camel-case, never with a separator. When two branches yield
the same key the one visited last wins.

``sdfRef`` pointers are resolved a single hop deep against the top-level
maps of the same model. Only the common qualities (label, description,
comment, sdfRef, sdfRequired) are inherited from the referenced definition.

Usage:
    from converters.sdf_to_wot import SDFToWoTConverter

    converter = SDFToWoTConverter()
    thing_model = converter.convert_to_thing_model(sdf_model)
    thing_description = converter.convert_to_thing_description(sdf_model)
"""

import dataclasses
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from constants import SDFConfig, WoTConfig
from formats.sdf.sdf_models import (
    ActionQualities,
    CommonQualities,
    DataQualities,
    EventQualities,
    InfoBlock,
    ObjectQualities,
    SDFModel,
    ThingQualities,
)
from formats.wot.wot_models import (
    ActionAffordance,
    BaseThing,
    ContextEntry,
    DataSchema,
    EventAffordance,
    Link,
    PropertyAffordance,
    SecurityScheme,
    ThingDescription,
    ThingModel,
    VersionInfo,
)
from shared.models.base import BaseConverter

from .type_mapper import sdf_data_to_data_schema

logger = logging.getLogger(__name__)

DATA_SCHEMA_FIELDS = tuple(f.name for f in dataclasses.fields(DataSchema))


# =============================================================================
# Key composition
# =============================================================================

def first_letter_to_upper_case(text: str) -> str:
    """Upper-case the first character only: "aB" -> "AB", "" -> ""."""
    return text[:1].upper() + text[1:]


def get_prefixed_key(prefix: Optional[str], key: str) -> str:
    """
    Compose a flattened affordance key.

    Args:
        prefix: Accumulated container prefix; None or "" at the root.
        key: The affordance's own key.

    Returns:
        ``key`` unchanged without a prefix, otherwise the prefix followed by
        ``key`` with its first letter upper-cased.
    """
    if not prefix:
        return key
    return prefix + first_letter_to_upper_case(key)


def get_container_prefix(prefix: str, key: str) -> str:
    """Prefix for the members of a container named ``key``; always capitalized."""
    return prefix + first_letter_to_upper_case(key)


# =============================================================================
# Reference resolution
# =============================================================================

def resolve_sdf_ref(model: SDFModel, sdf_ref: str, category: str) -> Optional[Any]:
    """
    Look up the definition an sdfRef points to.

    Only local pointers of the form ``#/<category>/<key>`` (e.g.
    ``#/sdfAction/foo``) whose category equals ``category`` are resolved,
    and only against the model's top-level map for that category. Pointers
    into other documents (``other:/sdfAction/foo``) are left unresolved.

    Args:
        model: The root SDF model.
        sdf_ref: The pointer.
        category: Category of the referencing definition ("sdfAction", ...).

    Returns:
        The referenced definition, or None if it cannot be resolved.
    """
    elements = sdf_ref.split("/")
    if len(elements) != 3 or elements[0] not in ("#", "") or elements[1] != category:
        logger.debug(f"Not resolving sdfRef '{sdf_ref}' as {category}")
        return None

    definitions = model.get_definitions(category) or {}
    resolved = definitions.get(elements[2])
    if resolved is None:
        logger.debug(f"Unresolved sdfRef '{sdf_ref}'")
    return resolved


def merge_common_qualities(base: CommonQualities, overriding: CommonQualities) -> CommonQualities:
    """Take each common quality from ``overriding`` if present, else from ``base``."""
    return CommonQualities(
        description=overriding.description if overriding.description is not None else base.description,
        label=overriding.label if overriding.label is not None else base.label,
        comment=overriding.comment if overriding.comment is not None else base.comment,
        sdf_ref=overriding.sdf_ref if overriding.sdf_ref is not None else base.sdf_ref,
        sdf_required=(
            overriding.sdf_required if overriding.sdf_required is not None else base.sdf_required
        ),
    )


def resolve_definition(model: SDFModel, definition: Any, category: str) -> Any:
    """
    Apply sdfRef resolution to ``definition``.

    Returns:
        ``definition`` itself when it has no resolvable sdfRef, otherwise a
        copy whose common qualities are merged with the referenced ones.
        Type-specific fields always stay those of ``definition``.
    """
    sdf_ref = definition.common_qualities.sdf_ref
    if sdf_ref is None:
        return definition

    base = resolve_sdf_ref(model, sdf_ref, category)
    if base is None:
        return definition

    return dataclasses.replace(
        definition,
        common_qualities=merge_common_qualities(base.common_qualities, definition.common_qualities),
    )


# =============================================================================
# Converter
# =============================================================================

class SDFToWoTConverter(BaseConverter):
    """
    Convert SDF models into WoT Thing Models or Thing Descriptions.

    The converter keeps no state between calls; the same input always
    produces the same output.

    Example:
        >>> converter = SDFToWoTConverter()
        >>> tm = converter.convert_to_thing_model(SDFModel())
        >>> tm.to_dict()
        {'@context': ['https://www.w3.org/2019/wot/td/v1'], '@type': 'Thing'}
    """

    source_format = "sdf"
    target_format = "tm"

    def convert(self, document: SDFModel) -> ThingModel:
        return self.convert_to_thing_model(document)

    def convert_to_thing_model(self, model: SDFModel) -> ThingModel:
        """
        Convert an SDF model into a Thing Model.

        Without an info block the Thing Model carries no title, version,
        description or links.
        """
        thing_model = ThingModel(
            context=self._build_context(model),
            type_annotation=WoTConfig.THING_TYPE,
        )
        self._apply_info_block(thing_model, model.info)
        self._apply_affordances(thing_model, model)
        logger.debug(f"Converted SDF model to Thing Model with {thing_model.affordance_count} affordances")
        return thing_model

    def convert_to_thing_description(self, model: SDFModel) -> ThingDescription:
        """
        Convert an SDF model into a Thing Description.

        A Thing Description requires a title and security configuration:
        the title falls back to "No Title given." and a single ``nosec``
        scheme is declared.
        """
        thing_description = ThingDescription(
            context=self._build_context(model),
            title=WoTConfig.NO_TITLE,
            security=WoTConfig.NOSEC_SCHEME_NAME,
            security_definitions={
                WoTConfig.NOSEC_SCHEME_NAME: SecurityScheme(scheme=WoTConfig.NOSEC_SCHEME),
            },
        )
        self._apply_info_block(thing_description, model.info)
        self._apply_affordances(thing_description, model)
        logger.debug(
            f"Converted SDF model to Thing Description with "
            f"{thing_description.affordance_count} affordances"
        )
        return thing_description

    # =========================================================================
    # Document metadata
    # =========================================================================

    def _build_context(self, model: SDFModel) -> List[ContextEntry]:
        context: List[ContextEntry] = [WoTConfig.TD_CONTEXT_URI]
        if model.namespace:
            context.append(dict(model.namespace))
        return context

    def _apply_info_block(self, thing: BaseThing, info: Optional[InfoBlock]) -> None:
        if info is None:
            return
        thing.title = info.title
        thing.version = VersionInfo(instance=info.version)
        thing.description = info.copyright
        thing.links = [Link(href=info.license, rel=WoTConfig.LICENSE_LINK_REL)]

    # =========================================================================
    # Flattening
    # =========================================================================

    def _iter_containers(self, model: SDFModel) -> Iterator[Tuple[str, Any]]:
        """Yield ``(prefix, container)`` for every node holding affordances, in visiting order."""
        yield "", model
        for key, sdf_object in (model.sdf_object or {}).items():
            yield get_container_prefix("", key), sdf_object
        yield from self._iter_things(model.sdf_thing, "")

    def _iter_things(self, things: Optional[Dict[str, ThingQualities]],
                     prefix: str) -> Iterator[Tuple[str, ObjectQualities]]:
        for key, thing in (things or {}).items():
            thing_prefix = get_container_prefix(prefix, key)
            yield from self._iter_things(thing.sdf_thing, thing_prefix)
            for object_key, sdf_object in (thing.sdf_object or {}).items():
                yield get_container_prefix(thing_prefix, object_key), sdf_object

    def _apply_affordances(self, thing: BaseThing, model: SDFModel) -> None:
        properties: Dict[str, PropertyAffordance] = {}
        actions: Dict[str, ActionAffordance] = {}
        events: Dict[str, EventAffordance] = {}

        for prefix, container in self._iter_containers(model):
            for key, sdf_property in (container.sdf_property or {}).items():
                self._insert(properties, get_prefixed_key(prefix, key),
                             self._convert_property(model, sdf_property))
            for key, sdf_action in (container.sdf_action or {}).items():
                self._insert(actions, get_prefixed_key(prefix, key),
                             self._convert_action(model, sdf_action))
            for key, sdf_event in (container.sdf_event or {}).items():
                self._insert(events, get_prefixed_key(prefix, key),
                             self._convert_event(model, sdf_event))

        thing.properties = properties or None
        thing.actions = actions or None
        thing.events = events or None

    @staticmethod
    def _insert(affordances: Dict[str, Any], key: str, affordance: Any) -> None:
        if key in affordances:
            logger.debug(f"Flattened key '{key}' occurs more than once; keeping the last one")
        affordances[key] = affordance

    # =========================================================================
    # Affordances
    # =========================================================================

    @staticmethod
    def _data_resolver(model: SDFModel) -> Callable[[DataQualities], DataQualities]:
        def resolve(data: DataQualities) -> DataQualities:
            return resolve_definition(model, data, SDFConfig.SDF_DATA)
        return resolve

    def _convert_data(self, model: SDFModel, data: Optional[DataQualities]) -> Optional[DataSchema]:
        if data is None:
            return None
        resolve = self._data_resolver(model)
        return sdf_data_to_data_schema(resolve(data), nested=True, resolve=resolve)

    def _convert_property(self, model: SDFModel, sdf_property: DataQualities) -> PropertyAffordance:
        resolved = resolve_definition(model, sdf_property, SDFConfig.SDF_PROPERTY)
        schema = sdf_data_to_data_schema(
            resolved,
            resolve=self._data_resolver(model),
        )
        affordance = PropertyAffordance(
            **{name: getattr(schema, name) for name in DATA_SCHEMA_FIELDS}
        )
        affordance.title = resolved.common_qualities.label
        affordance.description = resolved.common_qualities.description
        affordance.observable = resolved.observable
        return affordance

    def _convert_action(self, model: SDFModel, sdf_action: ActionQualities) -> ActionAffordance:
        resolved = resolve_definition(model, sdf_action, SDFConfig.SDF_ACTION)
        return ActionAffordance(
            title=resolved.common_qualities.label,
            description=resolved.common_qualities.description,
            input=self._convert_data(model, resolved.sdf_input_data),
            output=self._convert_data(model, resolved.sdf_output_data),
        )

    def _convert_event(self, model: SDFModel, sdf_event: EventQualities) -> EventAffordance:
        resolved = resolve_definition(model, sdf_event, SDFConfig.SDF_EVENT)
        return EventAffordance(
            title=resolved.common_qualities.label,
            description=resolved.common_qualities.description,
            data=self._convert_data(model, resolved.sdf_output_data),
        )
