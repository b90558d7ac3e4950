"""
WoT Parser.

This module parses W3C Web of Things Thing Models and Thing Descriptions
into the dataclasses defined in wot_models.

Supported file types:
- *.tm.json - Thing Model
- *.td.json - Thing Description

A Thing Description must carry ``title``, ``security`` and
``securityDefinitions``; a Thing Model may omit all three. Both require
``@context``. Unknown keys are ignored.

Usage:
    from formats.wot.wot_parser import WoTParser

    parser = WoTParser()
    thing_model = parser.parse_thing_model_file("lamp.tm.json")
    thing_description = parser.parse_thing_description(json_content)
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Type

from constants import LoaderConfig
from shared.errors import DocumentParseError

from ..base_parser import JSONDocumentParser, child_path
from .wot_models import (
    ActionAffordance,
    BaseThing,
    DataSchema,
    EventAffordance,
    ExpectedResponse,
    Form,
    Link,
    PropertyAffordance,
    SecurityScheme,
    ThingDescription,
    ThingModel,
    VersionInfo,
)

logger = logging.getLogger(__name__)

SECURITY_SCHEME_COMMON_KEYS = ("scheme", "@type", "description", "descriptions", "proxy")


class WoTParseError(DocumentParseError):
    """Exception raised when WoT parsing fails."""


class WoTParser(JSONDocumentParser):
    """
    Parse WoT Thing Model and Thing Description documents.

    Example:
        >>> parser = WoTParser()
        >>> tm = parser.parse_thing_model('{"@context": "https://www.w3.org/2019/wot/td/v1"}')
        >>> tm.context_entries
        ['https://www.w3.org/2019/wot/td/v1']
    """

    error_class = WoTParseError
    document_label = "WoT"

    # =========================================================================
    # Thing Model
    # =========================================================================

    def parse_thing_model(self, content: str, file_path: Optional[str] = None) -> ThingModel:
        """
        Parse Thing Model content string.

        Raises:
            WoTParseError: If content is not a valid Thing Model.
        """
        data = self._load_json(content, file_path)
        return self._parse_thing(data, ThingModel)

    def parse_thing_model_dict(self, data: Dict[str, Any], file_path: Optional[str] = None) -> ThingModel:
        """Parse an already-decoded Thing Model."""
        self._file_path = file_path
        return self._parse_thing(self._expect_root(data), ThingModel)

    def parse_thing_model_file(self, file_path: str) -> ThingModel:
        """
        Parse a Thing Model file.

        Raises:
            FileNotFoundError: If file doesn't exist.
            WoTParseError: If content cannot be parsed.
        """
        return self.parse_thing_model(self._read_file(file_path), file_path=file_path)

    # =========================================================================
    # Thing Description
    # =========================================================================

    def parse_thing_description(self, content: str, file_path: Optional[str] = None) -> ThingDescription:
        """
        Parse Thing Description content string.

        Raises:
            WoTParseError: If content is not a valid Thing Description.
        """
        data = self._load_json(content, file_path)
        return self._parse_thing(data, ThingDescription)

    def parse_thing_description_dict(self, data: Dict[str, Any],
                                     file_path: Optional[str] = None) -> ThingDescription:
        """Parse an already-decoded Thing Description."""
        self._file_path = file_path
        return self._parse_thing(self._expect_root(data), ThingDescription)

    def parse_thing_description_file(self, file_path: str) -> ThingDescription:
        """
        Parse a Thing Description file.

        Raises:
            FileNotFoundError: If file doesn't exist.
            WoTParseError: If content cannot be parsed.
        """
        return self.parse_thing_description(self._read_file(file_path), file_path=file_path)

    def _read_file(self, file_path: str) -> str:
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"WoT file not found: {file_path}")

        size_mb = path.stat().st_size / (1024 * 1024)
        if size_mb > LoaderConfig.MAX_DOCUMENT_SIZE_MB:
            raise WoTParseError(
                f"WoT file too large: {size_mb:.1f}MB (max {LoaderConfig.MAX_DOCUMENT_SIZE_MB}MB)",
                file_path=file_path,
            )

        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise WoTParseError(
                f"WoT file is not valid UTF-8: {e}",
                file_path=file_path,
                details=str(e),
            ) from e

    # =========================================================================
    # Document
    # =========================================================================

    def _parse_thing(self, data: Dict[str, Any], thing_class: Type[BaseThing]) -> Any:
        path = "#"
        if thing_class is ThingDescription:
            for key in ("title", "security", "securityDefinitions"):
                if key not in data:
                    self._fail(f"Thing Description is missing required field '{key}'", path)

        version = self._get_object(data, "version", path)
        version_path = child_path(path, "version")

        thing = thing_class(
            context=self._parse_context(data, path),
            type_annotation=self._get_str_or_str_list(data, "@type", path),
            id=self._get_str(data, "id", path),
            title=self._get_str(data, "title", path),
            titles=self._get_str_map(data, "titles", path),
            description=self._get_str(data, "description", path),
            descriptions=self._get_str_map(data, "descriptions", path),
            version=VersionInfo(
                instance=self._get_str(version, "instance", version_path),
                model=self._get_str(version, "model", version_path),
            ) if version is not None else None,
            created=self._get_str(data, "created", path),
            modified=self._get_str(data, "modified", path),
            support=self._get_str(data, "support", path),
            base=self._get_str(data, "base", path),
            properties=self._get_entries(data, "properties", path, self._parse_property),
            actions=self._get_entries(data, "actions", path, self._parse_action),
            events=self._get_entries(data, "events", path, self._parse_event),
            links=self._parse_list(data, "links", path, self._parse_link),
            forms=self._parse_list(data, "forms", path, self._parse_form),
            security=self._get_str_or_str_list(data, "security", path),
            security_definitions=self._get_entries(
                data, "securityDefinitions", path, self._parse_security_scheme
            ),
            profile=self._get_str_or_str_list(data, "profile", path),
            schema_definitions=self._get_entries(data, "schemaDefinitions", path, self._parse_data_schema),
        )
        logger.debug(f"Parsed {thing_class.__name__} with {thing.affordance_count} affordances")
        return thing

    def _parse_context(self, data: Dict[str, Any], path: str) -> Any:
        if "@context" not in data:
            self._fail("Missing required field '@context'", path)

        context = data["@context"]
        context_path = child_path(path, "@context")
        if isinstance(context, str):
            return context
        if not isinstance(context, list):
            self._fail(f"Expected string or array, got {type(context).__name__}", context_path)

        for index, entry in enumerate(context):
            if isinstance(entry, str):
                continue
            if isinstance(entry, dict) and all(isinstance(v, str) for v in entry.values()):
                continue
            self._fail(
                "Context entries must be strings or maps of strings",
                child_path(context_path, str(index)),
            )
        return list(context)

    def _parse_list(self, data: Dict[str, Any], key: str, path: str, parse_entry) -> Optional[list]:
        entries = self._get_list(data, key, path)
        if entries is None:
            return None
        list_path = child_path(path, key)
        return [
            parse_entry(self._expect_object(entry, child_path(list_path, str(index))),
                        child_path(list_path, str(index)))
            for index, entry in enumerate(entries)
        ]

    def _parse_link(self, data: Dict[str, Any], path: str) -> Link:
        href = self._get_str(data, "href", path)
        if href is None:
            self._fail("Link is missing required field 'href'", path)
        return Link(
            href=href,
            type=self._get_str(data, "type", path),
            rel=self._get_str(data, "rel", path),
            anchor=self._get_str(data, "anchor", path),
            sizes=self._get_str(data, "sizes", path),
        )

    def _parse_form(self, data: Dict[str, Any], path: str) -> Form:
        href = self._get_str(data, "href", path)
        if href is None:
            self._fail("Form is missing required field 'href'", path)

        response = self._get_object(data, "response", path)
        response_path = child_path(path, "response")
        if response is not None:
            content_type = self._get_str(response, "contentType", response_path)
            if content_type is None:
                self._fail("Response is missing required field 'contentType'", response_path)
            response = ExpectedResponse(content_type=content_type)

        return Form(
            href=href,
            op=self._get_str_or_str_list(data, "op", path),
            content_type=self._get_str(data, "contentType", path),
            content_coding=self._get_str(data, "contentCoding", path),
            subprotocol=self._get_str(data, "subprotocol", path),
            security=self._get_str_or_str_list(data, "security", path),
            scopes=self._get_str_or_str_list(data, "scopes", path),
            response=response,
        )

    def _parse_security_scheme(self, data: Dict[str, Any], path: str) -> SecurityScheme:
        scheme = self._get_str(data, "scheme", path)
        if scheme is None:
            self._fail("Security scheme is missing required field 'scheme'", path)
        return SecurityScheme(
            scheme=scheme,
            type_annotation=self._get_str_or_str_list(data, "@type", path),
            description=self._get_str(data, "description", path),
            descriptions=self._get_str_map(data, "descriptions", path),
            proxy=self._get_str(data, "proxy", path),
            parameters={
                key: value for key, value in data.items()
                if key not in SECURITY_SCHEME_COMMON_KEYS
            },
        )

    # =========================================================================
    # Schemas and affordances
    # =========================================================================

    def _parse_annotations(self, data: Dict[str, Any], path: str) -> Dict[str, Any]:
        return {
            "type_annotation": self._get_str_or_str_list(data, "@type", path),
            "title": self._get_str(data, "title", path),
            "titles": self._get_str_map(data, "titles", path),
            "description": self._get_str(data, "description", path),
            "descriptions": self._get_str_map(data, "descriptions", path),
        }

    def _parse_schema_annotations(self, data: Dict[str, Any], path: str) -> Dict[str, Any]:
        fields = self._parse_annotations(data, path)
        fields.update(
            read_only=self._get_bool(data, "readOnly", path),
            write_only=self._get_bool(data, "writeOnly", path),
            one_of=self._parse_list(data, "oneOf", path, self._parse_data_schema),
            content_encoding=self._get_str(data, "contentEncoding", path),
            content_media_type=self._get_str(data, "contentMediaType", path),
        )
        fields.update(self._parse_schema_fields(data, path, self._parse_data_schema))
        return fields

    def _parse_data_schema(self, data: Dict[str, Any], path: str) -> DataSchema:
        return DataSchema(**self._parse_schema_annotations(data, path))

    def _parse_optional_schema(self, data: Dict[str, Any], key: str, path: str) -> Optional[DataSchema]:
        value = self._get_object(data, key, path)
        if value is None:
            return None
        return self._parse_data_schema(value, child_path(path, key))

    def _parse_interaction(self, data: Dict[str, Any], path: str) -> Dict[str, Any]:
        return {
            "forms": self._parse_list(data, "forms", path, self._parse_form),
            "uri_variables": self._get_entries(data, "uriVariables", path, self._parse_data_schema),
        }

    def _parse_property(self, data: Dict[str, Any], path: str) -> PropertyAffordance:
        return PropertyAffordance(
            observable=self._get_bool(data, "observable", path),
            **self._parse_interaction(data, path),
            **self._parse_schema_annotations(data, path),
        )

    def _parse_action(self, data: Dict[str, Any], path: str) -> ActionAffordance:
        return ActionAffordance(
            input=self._parse_optional_schema(data, "input", path),
            output=self._parse_optional_schema(data, "output", path),
            safe=self._get_bool(data, "safe", path),
            idempotent=self._get_bool(data, "idempotent", path),
            **self._parse_interaction(data, path),
            **self._parse_annotations(data, path),
        )

    def _parse_event(self, data: Dict[str, Any], path: str) -> EventAffordance:
        return EventAffordance(
            subscription=self._parse_optional_schema(data, "subscription", path),
            data=self._parse_optional_schema(data, "data", path),
            cancellation=self._parse_optional_schema(data, "cancellation", path),
            **self._parse_interaction(data, path),
            **self._parse_annotations(data, path),
        )
