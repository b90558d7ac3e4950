"""
Base JSON document parser.

Provides typed field extraction shared by the SDF and WoT parsers. Each
accessor returns None when the key is absent and raises the parser's error
class when the key is present with the wrong JSON type. Unknown keys are
never inspected, so they are ignored.

Locations in error messages use fragment-style paths such as
``#/sdfObject/Switch/sdfProperty/value``.
"""

import json
import logging
from typing import Any, Callable, Dict, List, NoReturn, Optional, Type

from shared.errors import DocumentParseError
from shared.models.schema import SchemaType, SchemaValue

logger = logging.getLogger(__name__)

NestedSchemaParser = Callable[[Any, str], SchemaValue]


def child_path(path: str, key: str) -> str:
    """Append ``key`` to a fragment-style path."""
    return f"{path}/{key}"


def is_integer(value: Any) -> bool:
    """Check for a JSON integer (booleans are not integers)."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    """Check for a JSON number (booleans are not numbers)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class JSONDocumentParser:
    """
    Shared helpers for parsers of JSON-based document formats.

    Subclasses set ``error_class`` to their own DocumentParseError subclass
    and ``document_label`` to the name used in messages.
    """

    error_class: Type[DocumentParseError] = DocumentParseError
    document_label: str = "JSON"

    def __init__(self) -> None:
        self._file_path: Optional[str] = None

    def _load_json(self, content: str, file_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Decode ``content`` and check the root is a JSON object.

        Raises:
            DocumentParseError subclass: If content is not JSON or not an object.
        """
        self._file_path = file_path
        if not isinstance(content, str):
            raise self.error_class(
                f"{self.document_label} content must be a string, got {type(content).__name__}",
                file_path=file_path,
            )
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise self.error_class(
                f"Invalid JSON: {e}",
                file_path=file_path,
                details=str(e),
            ) from e
        return self._expect_root(data)

    def _expect_root(self, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            self._fail(f"{self.document_label} document must be a JSON object", "#")
        return data

    def _fail(self, message: str, path: str) -> NoReturn:
        raise self.error_class(f"{message} at '{path}'", file_path=self._file_path)

    def _get(self, data: Dict[str, Any], key: str, check: Callable[[Any], bool],
             expected: str, path: str) -> Any:
        if key not in data:
            return None
        value = data[key]
        if not check(value):
            self._fail(
                f"Expected {expected} for '{key}', got {type(value).__name__}",
                child_path(path, key),
            )
        return value

    def _get_str(self, data: Dict[str, Any], key: str, path: str) -> Optional[str]:
        return self._get(data, key, lambda v: isinstance(v, str), "string", path)

    def _get_bool(self, data: Dict[str, Any], key: str, path: str) -> Optional[bool]:
        return self._get(data, key, lambda v: isinstance(v, bool), "boolean", path)

    def _get_int(self, data: Dict[str, Any], key: str, path: str) -> Optional[int]:
        return self._get(data, key, is_integer, "integer", path)

    def _get_number(self, data: Dict[str, Any], key: str, path: str) -> Optional[Any]:
        return self._get(data, key, is_number, "number", path)

    def _get_object(self, data: Dict[str, Any], key: str, path: str) -> Optional[Dict[str, Any]]:
        return self._get(data, key, lambda v: isinstance(v, dict), "object", path)

    def _get_list(self, data: Dict[str, Any], key: str, path: str) -> Optional[List[Any]]:
        return self._get(data, key, lambda v: isinstance(v, list), "array", path)

    def _get_str_list(self, data: Dict[str, Any], key: str, path: str) -> Optional[List[str]]:
        return self._get(
            data, key,
            lambda v: isinstance(v, list) and all(isinstance(item, str) for item in v),
            "array of strings", path,
        )

    def _get_str_map(self, data: Dict[str, Any], key: str, path: str) -> Optional[Dict[str, str]]:
        return self._get(
            data, key,
            lambda v: isinstance(v, dict) and all(isinstance(item, str) for item in v.values()),
            "object of strings", path,
        )

    def _get_str_or_str_list(self, data: Dict[str, Any], key: str, path: str) -> Any:
        return self._get(
            data, key,
            lambda v: isinstance(v, str) or (
                isinstance(v, list) and all(isinstance(item, str) for item in v)
            ),
            "string or array of strings", path,
        )

    def _get_entries(self, data: Dict[str, Any], key: str, path: str,
                     parse_entry: Callable[[Any, str], Any]) -> Optional[Dict[str, Any]]:
        """Parse a named map whose values are definitions."""
        entries = self._get_object(data, key, path)
        if entries is None:
            return None
        map_path = child_path(path, key)
        return {
            name: parse_entry(self._expect_object(value, child_path(map_path, name)),
                              child_path(map_path, name))
            for name, value in entries.items()
        }

    def _expect_object(self, value: Any, path: str) -> Dict[str, Any]:
        if not isinstance(value, dict):
            self._fail(f"Expected object, got {type(value).__name__}", path)
        return value

    def _parse_schema_type(self, data: Dict[str, Any], path: str) -> Optional[SchemaType]:
        type_name = self._get_str(data, "type", path)
        if type_name is None:
            return None
        try:
            return SchemaType(type_name)
        except ValueError:
            self._fail(f"Unknown data type '{type_name}'", child_path(path, "type"))

    def _parse_schema_fields(self, data: Dict[str, Any], path: str,
                             parse_nested: NestedSchemaParser) -> Dict[str, Any]:
        """
        Extract the SchemaValue fields of ``data``.

        Args:
            data: JSON object holding the schema.
            path: Location of ``data`` for error messages.
            parse_nested: Parser for nested ``items`` and ``properties`` schemas.

        Returns:
            Keyword arguments for a SchemaValue (or subclass) constructor.
        """
        items: Any = None
        if "items" in data:
            raw_items = data["items"]
            items_path = child_path(path, "items")
            if isinstance(raw_items, list):
                items = [
                    parse_nested(self._expect_object(item, child_path(items_path, str(index))),
                                 child_path(items_path, str(index)))
                    for index, item in enumerate(raw_items)
                ]
            else:
                items = parse_nested(self._expect_object(raw_items, items_path), items_path)

        return {
            "type": self._parse_schema_type(data, path),
            "minimum": self._get_number(data, "minimum", path),
            "maximum": self._get_number(data, "maximum", path),
            "exclusive_minimum": self._get_number(data, "exclusiveMinimum", path),
            "exclusive_maximum": self._get_number(data, "exclusiveMaximum", path),
            "multiple_of": self._get_number(data, "multipleOf", path),
            "min_length": self._get_int(data, "minLength", path),
            "max_length": self._get_int(data, "maxLength", path),
            "pattern": self._get_str(data, "pattern", path),
            "format": self._get_str(data, "format", path),
            "min_items": self._get_int(data, "minItems", path),
            "max_items": self._get_int(data, "maxItems", path),
            "items": items,
            "required": self._get_str_list(data, "required", path),
            "properties": self._get_entries(data, "properties", path, parse_nested),
            "unit": self._get_str(data, "unit", path),
            "enum": self._get_list(data, "enum", path),
            "const": data.get("const"),
            "default": data.get("default"),
        }
