"""
Schema Type Mapper.

This module converts data schemas between SDF data qualities and WoT data
schemas, in both directions.

Constraint fields are copied one to one, grouped by the type tag they belong
to (a numeric bound is only meaningful on an integer or number schema).
Read/write flags are inverted:

    SDF readable  <->  WoT writeOnly  (writeOnly = not readable)
    SDF writable  <->  WoT readOnly   (readOnly  = not writable)

Generic ``enum``/``const``/``default`` values go forward unchanged. Going
back to SDF they are kept only when the JSON value matches the schema's type
tag; a mismatch drops that one field.

Usage:
    from converters.type_mapper import sdf_data_to_data_schema, coerce_value

    schema = sdf_data_to_data_schema(data_qualities)
    coerce_value(5, SchemaType.INTEGER)     # 5
    coerce_value(True, SchemaType.INTEGER)  # None
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from formats.sdf.sdf_models import CommonQualities, DataQualities
from formats.wot.wot_models import DataSchema
from shared.models.schema import SchemaType, SchemaValue

logger = logging.getLogger(__name__)

DataResolver = Callable[[DataQualities], DataQualities]

# =============================================================================
# Constraint groups per type tag
# =============================================================================

NUMERIC_CONSTRAINTS: Tuple[str, ...] = (
    "minimum",
    "maximum",
    "exclusive_minimum",
    "exclusive_maximum",
    "multiple_of",
)

STRING_CONSTRAINTS: Tuple[str, ...] = ("min_length", "max_length", "pattern", "format")

ARRAY_CONSTRAINTS: Tuple[str, ...] = ("min_items", "max_items")

OBJECT_CONSTRAINTS: Tuple[str, ...] = ("required",)

TYPE_CONSTRAINTS: Dict[SchemaType, Tuple[str, ...]] = {
    SchemaType.INTEGER: NUMERIC_CONSTRAINTS,
    SchemaType.NUMBER: NUMERIC_CONSTRAINTS,
    SchemaType.STRING: STRING_CONSTRAINTS,
    SchemaType.ARRAY: ARRAY_CONSTRAINTS,
    SchemaType.OBJECT: OBJECT_CONSTRAINTS,
}


# =============================================================================
# Value coercion
# =============================================================================

def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


VALUE_CHECKS: Dict[SchemaType, Callable[[Any], bool]] = {
    SchemaType.NULL: lambda value: value is None,
    SchemaType.BOOLEAN: lambda value: isinstance(value, bool),
    SchemaType.INTEGER: _is_integer,
    SchemaType.NUMBER: lambda value: _is_integer(value) or isinstance(value, float),
    SchemaType.STRING: lambda value: isinstance(value, str),
    SchemaType.ARRAY: lambda value: isinstance(value, list),
    SchemaType.OBJECT: lambda value: isinstance(value, dict),
}


def value_matches_type(value: Any, schema_type: Optional[SchemaType]) -> bool:
    """Check whether a JSON value can be held by a schema of ``schema_type``."""
    if schema_type is None:
        return False
    return VALUE_CHECKS[schema_type](value)


def coerce_value(value: Any, schema_type: Optional[SchemaType]) -> Any:
    """
    Coerce a generic JSON value into a field of the given type.

    Args:
        value: The untyped JSON value (``const`` or ``default``).
        schema_type: Type tag of the target schema.

    Returns:
        The value when its JSON type matches ``schema_type``, otherwise None.
        An untagged schema accepts nothing. A null value reads as absent, so
        it is dropped even for a ``null`` schema.
    """
    if value is None:
        return None
    if not value_matches_type(value, schema_type):
        logger.debug(f"Dropping value {value!r}: does not match type {schema_type}")
        return None
    return value


def coerce_enum(values: Optional[List[Any]], schema_type: Optional[SchemaType]) -> Optional[List[Any]]:
    """Keep an ``enum`` list only if every member matches ``schema_type``."""
    if values is None:
        return None
    if not all(value_matches_type(value, schema_type) for value in values):
        logger.debug(f"Dropping enum {values!r}: not all members match type {schema_type}")
        return None
    return list(values)


def map_readable_writable(
    readable: Optional[bool], writable: Optional[bool]
) -> Tuple[Optional[bool], Optional[bool]]:
    """
    Map SDF ``readable``/``writable`` to WoT ``writeOnly``/``readOnly``.

    Returns:
        ``(write_only, read_only)``; each is None when its source is absent.
    """
    write_only = None if readable is None else not readable
    read_only = None if writable is None else not writable
    return write_only, read_only


def map_read_write_only(
    read_only: Optional[bool], write_only: Optional[bool]
) -> Tuple[Optional[bool], Optional[bool]]:
    """
    Map WoT ``readOnly``/``writeOnly`` back to SDF ``readable``/``writable``.

    Returns:
        ``(readable, writable)``; each is None when its source is absent.
    """
    readable = None if write_only is None else not write_only
    writable = None if read_only is None else not read_only
    return readable, writable


def _copy_constraints(source: SchemaValue, schema_type: Optional[SchemaType]) -> Dict[str, Any]:
    return {
        name: getattr(source, name)
        for name in TYPE_CONSTRAINTS.get(schema_type, ())
    }


# =============================================================================
# SDF -> WoT
# =============================================================================

def _resolved(data: DataQualities, resolve: Optional[DataResolver]) -> DataQualities:
    return resolve(data) if resolve is not None else data


def sdf_data_to_data_schema(data: DataQualities, nested: bool = False,
                            resolve: Optional[DataResolver] = None) -> DataSchema:
    """
    Convert SDF data qualities into a WoT data schema.

    Args:
        data: The SDF data or property definition.
        nested: True for schemas inside an affordance (action input/output,
            event data, array items, object members). Their label and
            description become the schema title and description; at property
            level those go to the affordance only.
        resolve: Optional hook applying ``sdfRef`` resolution to nested
            items and members. The caller resolves ``data`` itself.

    Returns:
        The equivalent DataSchema.
    """
    schema_type = data.type
    write_only, read_only = map_readable_writable(data.readable, data.writable)

    schema = DataSchema(
        type=schema_type,
        unit=data.unit,
        enum=list(data.enum) if data.enum is not None else None,
        const=data.const,
        default=data.default,
        # WoT treats an absent flag as false
        read_only=read_only or None,
        write_only=write_only or None,
        **_copy_constraints(data, schema_type),
    )

    if nested:
        schema.title = data.common_qualities.label
        schema.description = data.common_qualities.description

    if schema_type == SchemaType.ARRAY and data.items is not None:
        items = [sdf_data_to_data_schema(_resolved(item, resolve), nested=True, resolve=resolve)
                 for item in data.item_list]
        schema.items = items if isinstance(data.items, list) else items[0]

    if schema_type == SchemaType.OBJECT and data.properties:
        schema.properties = {
            name: sdf_data_to_data_schema(_resolved(member, resolve), nested=True, resolve=resolve)
            for name, member in data.properties.items()
        }

    return schema


# =============================================================================
# WoT -> SDF
# =============================================================================

def data_schema_to_sdf_data(schema: DataSchema, nested: bool = False) -> DataQualities:
    """
    Convert a WoT data schema into SDF data qualities.

    Args:
        schema: The WoT data schema.
        nested: True for schemas inside an affordance; their title and
            description become the label and description.

    Returns:
        The equivalent DataQualities, with enum/const/default coerced to
        the schema type.
    """
    schema_type = schema.type
    readable, writable = map_read_write_only(schema.read_only, schema.write_only)

    common_qualities = CommonQualities()
    if nested:
        common_qualities = CommonQualities(label=schema.title, description=schema.description)

    data = DataQualities(
        common_qualities=common_qualities,
        type=schema_type,
        unit=schema.unit,
        enum=coerce_enum(schema.enum, schema_type),
        const=coerce_value(schema.const, schema_type),
        default=coerce_value(schema.default, schema_type),
        readable=readable,
        writable=writable,
        **_copy_constraints(schema, schema_type),
    )

    if schema_type == SchemaType.ARRAY and schema.items is not None:
        items = [data_schema_to_sdf_data(item, nested=True) for item in schema.item_list]
        data.items = items if isinstance(schema.items, list) else items[0]

    if schema_type == SchemaType.OBJECT and schema.properties:
        data.properties = {
            name: data_schema_to_sdf_data(member, nested=True)
            for name, member in schema.properties.items()
        }

    return data
