"""
Converters package - SDF and WoT document mappers.

Components:
- type_mapper: data schema conversion and value coercion
- sdf_to_wot: SDF model -> Thing Model / Thing Description (flattening)
- wot_to_sdf: Thing Model -> SDF model (flat to flat)

The module-level helpers convert JSON text to JSON text:

    from converters import convert_sdf_to_thing_model

    tm_json = convert_sdf_to_thing_model(sdf_json)
"""

from formats.sdf.sdf_parser import SDFParser
from formats.wot.wot_parser import WoTParser
from formats.writer import DocumentWriter

from .type_mapper import (
    coerce_enum,
    coerce_value,
    data_schema_to_sdf_data,
    map_read_write_only,
    map_readable_writable,
    sdf_data_to_data_schema,
)
from .sdf_to_wot import (
    SDFToWoTConverter,
    first_letter_to_upper_case,
    get_prefixed_key,
    merge_common_qualities,
    resolve_sdf_ref,
)
from .wot_to_sdf import (
    WoTToSDFConverter,
    create_info_block,
    extract_namespaces,
)

__all__ = [
    'SDFToWoTConverter',
    'WoTToSDFConverter',
    'coerce_enum',
    'coerce_value',
    'convert_sdf_to_thing_description',
    'convert_sdf_to_thing_model',
    'convert_thing_model_to_sdf',
    'create_info_block',
    'data_schema_to_sdf_data',
    'extract_namespaces',
    'first_letter_to_upper_case',
    'get_prefixed_key',
    'map_read_write_only',
    'map_readable_writable',
    'merge_common_qualities',
    'resolve_sdf_ref',
    'sdf_data_to_data_schema',
]


def convert_sdf_to_thing_model(content: str) -> str:
    """Convert SDF JSON text to Thing Model JSON text."""
    model = SDFParser().parse(content)
    return DocumentWriter().serialize(SDFToWoTConverter().convert_to_thing_model(model))


def convert_sdf_to_thing_description(content: str) -> str:
    """Convert SDF JSON text to Thing Description JSON text."""
    model = SDFParser().parse(content)
    return DocumentWriter().serialize(SDFToWoTConverter().convert_to_thing_description(model))


def convert_thing_model_to_sdf(content: str) -> str:
    """Convert Thing Model JSON text to SDF JSON text."""
    thing_model = WoTParser().parse_thing_model(content)
    return DocumentWriter().serialize(WoTToSDFConverter().convert(thing_model))
