"""
WoT to SDF converter.

This module maps a WoT Thing Model onto the top-level maps of an SDF model.
The mapping is flat to flat: each WoT property, action and event becomes an
sdfProperty, sdfAction or sdfEvent under the same key. Prefixed keys are not
split back into nested objects or things.

Two parts of the mapping are best effort:

- Namespaces are taken only from map-shaped ``@context`` entries.
- An info block needs title, version, copyright and license together. WoT
  has no copyright field, so no info block is produced.

Thing Descriptions are rejected; only Thing Models convert back.
"""

import logging
from typing import Any, Dict, List, Optional

from constants import WoTConfig
from formats.sdf.sdf_models import (
    ActionQualities,
    CommonQualities,
    DataQualities,
    EventQualities,
    InfoBlock,
    SDFModel,
)
from formats.wot.wot_models import (
    ActionAffordance,
    BaseThing,
    ContextEntry,
    EventAffordance,
    PropertyAffordance,
    ThingModel,
)
from shared.errors import UnsupportedConversionError
from shared.models.base import BaseConverter

from .type_mapper import data_schema_to_sdf_data

logger = logging.getLogger(__name__)


def extract_namespaces(context_entries: List[ContextEntry]) -> Optional[Dict[str, str]]:
    """
    Merge the map-shaped context entries into one namespace map.

    Later entries override earlier ones for the same prefix. Plain string
    entries are ignored.

    Returns:
        The merged map, or None when no context entry is a map.
    """
    namespaces: Optional[Dict[str, str]] = None
    for entry in context_entries:
        if isinstance(entry, dict):
            if namespaces is None:
                namespaces = {}
            namespaces.update(entry)
    return namespaces


def create_info_block(thing: BaseThing) -> Optional[InfoBlock]:
    """
    Build an SDF info block from a thing's metadata.

    Only title, version and license have WoT counterparts, so for ordinary
    documents this returns None.
    """
    title = thing.title
    version = thing.version.instance if thing.version is not None else None
    license_href = next(
        (link.href for link in thing.links or [] if link.rel == WoTConfig.LICENSE_LINK_REL),
        None,
    )
    copyright_notice = None

    if None in (title, version, copyright_notice, license_href):
        return None
    return InfoBlock(title=title, version=version, copyright=copyright_notice, license=license_href)


class WoTToSDFConverter(BaseConverter):
    """
    Convert WoT Thing Models into SDF models.

    Example:
        >>> converter = WoTToSDFConverter()
        >>> tm = ThingModel(context=["https://www.w3.org/2019/wot/td/v1"])
        >>> converter.convert(tm).to_dict()
        {}
    """

    source_format = "tm"
    target_format = "sdf"

    def convert(self, document: ThingModel) -> SDFModel:
        """
        Convert a Thing Model into an SDF model.

        Raises:
            UnsupportedConversionError: If ``document`` is not a Thing Model.
        """
        if not isinstance(document, ThingModel):
            raise UnsupportedConversionError("td", "sdf")

        model = SDFModel(
            info=create_info_block(document),
            namespace=extract_namespaces(document.context_entries),
            sdf_property=self._convert_map(document.properties, self._convert_property),
            sdf_action=self._convert_map(document.actions, self._convert_action),
            sdf_event=self._convert_map(document.events, self._convert_event),
        )
        logger.debug(f"Converted Thing Model to SDF model with {model.affordance_count} affordances")
        return model

    def convert_thing_description(self, document: Any) -> SDFModel:
        """
        Thing Descriptions cannot be converted to SDF.

        Raises:
            UnsupportedConversionError: Always.
        """
        raise UnsupportedConversionError("td", "sdf")

    @staticmethod
    def _convert_map(affordances: Optional[Dict[str, Any]], convert) -> Optional[Dict[str, Any]]:
        if not affordances:
            return None
        return {key: convert(affordance) for key, affordance in affordances.items()}

    @staticmethod
    def _common_qualities(affordance: Any) -> CommonQualities:
        return CommonQualities(label=affordance.title, description=affordance.description)

    def _convert_property(self, affordance: PropertyAffordance) -> DataQualities:
        data = data_schema_to_sdf_data(affordance)
        data.common_qualities = self._common_qualities(affordance)
        data.observable = affordance.observable
        return data

    def _convert_action(self, affordance: ActionAffordance) -> ActionQualities:
        return ActionQualities(
            common_qualities=self._common_qualities(affordance),
            sdf_input_data=(
                data_schema_to_sdf_data(affordance.input, nested=True)
                if affordance.input is not None else None
            ),
            sdf_output_data=(
                data_schema_to_sdf_data(affordance.output, nested=True)
                if affordance.output is not None else None
            ),
        )

    def _convert_event(self, affordance: EventAffordance) -> EventQualities:
        return EventQualities(
            common_qualities=self._common_qualities(affordance),
            sdf_output_data=(
                data_schema_to_sdf_data(affordance.data, nested=True)
                if affordance.data is not None else None
            ),
        )
