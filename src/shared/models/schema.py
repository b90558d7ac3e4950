"""
Schema Value model.

This module defines the typed leaf description of a data value that both
document families share: a JSON-Schema-like type tag plus its constraints.
SDF data qualities and WoT data schemas extend SchemaValue with their own
format-specific fields.

Every field is optional. None always means "absent": a missing constraint is
no constraint, never a constraint of zero or False.

Usage:
    from shared.models.schema import SchemaType, SchemaValue

    schema = SchemaValue(type=SchemaType.INTEGER, minimum=0, maximum=100)
    schema.to_dict()  # {'type': 'integer', 'minimum': 0, 'maximum': 100}
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]


class SchemaType(str, Enum):
    """JSON value types a schema can be tagged with."""
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


def put_optional(result: Dict[str, Any], key: str, value: Any) -> None:
    """Add ``key`` to ``result`` unless ``value`` is absent."""
    if value is not None:
        result[key] = value


@dataclass
class SchemaValue:
    """
    Type tag plus constraints of a data value.

    Attributes:
        type: Type tag; None means unconstrained.
        minimum: Inclusive lower bound (integer/number).
        maximum: Inclusive upper bound (integer/number).
        exclusive_minimum: Exclusive lower bound (integer/number).
        exclusive_maximum: Exclusive upper bound (integer/number).
        multiple_of: Value must be a multiple of this (integer/number).
        min_length: Minimum string length.
        max_length: Maximum string length.
        pattern: Regular expression a string must match.
        format: Named string format (e.g. "date-time").
        min_items: Minimum array length.
        max_items: Maximum array length.
        items: Schema of array items, a single schema or a list of them.
        required: Names of required object members.
        properties: Schemas of object members keyed by name.
        unit: Unit of measure.
        enum: Allowed values.
        const: Fixed value.
        default: Default value.
    """
    type: Optional[SchemaType] = None
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    exclusive_minimum: Optional[Number] = None
    exclusive_maximum: Optional[Number] = None
    multiple_of: Optional[Number] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    items: Optional[Union["SchemaValue", List["SchemaValue"]]] = None
    required: Optional[List[str]] = None
    properties: Optional[Dict[str, "SchemaValue"]] = None
    unit: Optional[str] = None
    enum: Optional[List[Any]] = None
    const: Any = None
    default: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary, omitting absent fields."""
        result: Dict[str, Any] = {}
        if self.type is not None:
            result["type"] = self.type.value
        put_optional(result, "minimum", self.minimum)
        put_optional(result, "maximum", self.maximum)
        put_optional(result, "exclusiveMinimum", self.exclusive_minimum)
        put_optional(result, "exclusiveMaximum", self.exclusive_maximum)
        put_optional(result, "multipleOf", self.multiple_of)
        put_optional(result, "minLength", self.min_length)
        put_optional(result, "maxLength", self.max_length)
        put_optional(result, "pattern", self.pattern)
        put_optional(result, "format", self.format)
        put_optional(result, "minItems", self.min_items)
        put_optional(result, "maxItems", self.max_items)
        if self.items is not None:
            if isinstance(self.items, list):
                result["items"] = [item.to_dict() for item in self.items]
            else:
                result["items"] = self.items.to_dict()
        put_optional(result, "required", self.required)
        if self.properties is not None:
            result["properties"] = {
                name: schema.to_dict() for name, schema in self.properties.items()
            }
        put_optional(result, "unit", self.unit)
        put_optional(result, "enum", self.enum)
        put_optional(result, "const", self.const)
        put_optional(result, "default", self.default)
        return result

    @property
    def item_list(self) -> List["SchemaValue"]:
        """Array item schemas as a list, whichever form they were given in."""
        if self.items is None:
            return []
        if isinstance(self.items, list):
            return list(self.items)
        return [self.items]
