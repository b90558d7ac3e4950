"""
SDF Parser.

This module parses SDF (Semantic Definition Format) JSON documents into the
dataclass tree defined in sdf_models.

Only structural and type conformance is checked: unknown keys are ignored,
missing optional keys stay None. An info block must carry all four of title,
version, copyright and license.

Usage:
    from formats.sdf.sdf_parser import SDFParser

    parser = SDFParser()

    # Parse a file
    model = parser.parse_file("switch.sdf.json")

    # Parse content string
    model = parser.parse(json_content)
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from constants import LoaderConfig, SDFConfig
from shared.errors import DocumentParseError

from ..base_parser import JSONDocumentParser, child_path
from .sdf_models import (
    ActionQualities,
    CommonQualities,
    DataQualities,
    EventQualities,
    InfoBlock,
    ObjectQualities,
    SDFModel,
    ThingQualities,
)

logger = logging.getLogger(__name__)


class SDFParseError(DocumentParseError):
    """Exception raised when SDF parsing fails."""


class SDFParser(JSONDocumentParser):
    """
    Parse SDF model documents.

    Example:
        >>> parser = SDFParser()
        >>> model = parser.parse('{"sdfObject": {"Switch": {}}}')
        >>> list(model.sdf_object)
        ['Switch']
    """

    error_class = SDFParseError
    document_label = "SDF"

    def parse(self, content: str, file_path: Optional[str] = None) -> SDFModel:
        """
        Parse SDF content string.

        Args:
            content: JSON string containing an SDF model.
            file_path: Optional path used in error messages.

        Returns:
            Parsed SDFModel.

        Raises:
            SDFParseError: If content is not a valid SDF model.
        """
        data = self._load_json(content, file_path)
        return self._parse_model(data)

    def parse_dict(self, data: Dict[str, Any], file_path: Optional[str] = None) -> SDFModel:
        """Parse an already-decoded SDF document."""
        self._file_path = file_path
        return self._parse_model(self._expect_root(data))

    def parse_file(self, file_path: str) -> SDFModel:
        """
        Parse an SDF file.

        Args:
            file_path: Path to the *.sdf.json file.

        Returns:
            Parsed SDFModel.

        Raises:
            FileNotFoundError: If file doesn't exist.
            SDFParseError: If content cannot be parsed.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"SDF file not found: {file_path}")

        size_mb = path.stat().st_size / (1024 * 1024)
        if size_mb > LoaderConfig.MAX_DOCUMENT_SIZE_MB:
            raise SDFParseError(
                f"SDF file too large: {size_mb:.1f}MB (max {LoaderConfig.MAX_DOCUMENT_SIZE_MB}MB)",
                file_path=file_path,
            )

        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SDFParseError(
                f"SDF file is not valid UTF-8: {e}",
                file_path=file_path,
                details=str(e),
            ) from e

        return self.parse(content, file_path=str(path))

    # =========================================================================
    # Document sections
    # =========================================================================

    def _parse_model(self, data: Dict[str, Any]) -> SDFModel:
        path = "#"
        model = SDFModel(
            info=self._parse_info(data, path),
            namespace=self._get_str_map(data, "namespace", path),
            default_namespace=self._get_str(data, "defaultNamespace", path),
            sdf_thing=self._get_entries(data, SDFConfig.SDF_THING, path, self._parse_thing),
            sdf_object=self._get_entries(data, SDFConfig.SDF_OBJECT, path, self._parse_object),
            sdf_property=self._get_entries(data, SDFConfig.SDF_PROPERTY, path, self._parse_data),
            sdf_action=self._get_entries(data, SDFConfig.SDF_ACTION, path, self._parse_action),
            sdf_event=self._get_entries(data, SDFConfig.SDF_EVENT, path, self._parse_event),
            sdf_data=self._get_entries(data, SDFConfig.SDF_DATA, path, self._parse_data),
        )
        logger.debug(f"Parsed SDF model with {model.affordance_count} top-level affordances")
        return model

    def _parse_info(self, data: Dict[str, Any], path: str) -> Optional[InfoBlock]:
        info = self._get_object(data, "info", path)
        if info is None:
            return None

        info_path = child_path(path, "info")
        values = {}
        for key in ("title", "version", "copyright", "license"):
            value = self._get_str(info, key, info_path)
            if value is None:
                self._fail(f"Info block is missing required field '{key}'", info_path)
            values[key] = value
        return InfoBlock(**values)

    def _parse_common(self, data: Dict[str, Any], path: str) -> CommonQualities:
        comment = self._get_str(data, "comment", path)
        if comment is None:
            comment = self._get_str(data, "$comment", path)
        return CommonQualities(
            description=self._get_str(data, "description", path),
            label=self._get_str(data, "label", path),
            comment=comment,
            sdf_ref=self._get_str(data, "sdfRef", path),
            sdf_required=self._get_str_list(data, "sdfRequired", path),
        )

    # =========================================================================
    # Definitions
    # =========================================================================

    def _parse_thing(self, data: Dict[str, Any], path: str) -> ThingQualities:
        return ThingQualities(
            common_qualities=self._parse_common(data, path),
            sdf_object=self._get_entries(data, SDFConfig.SDF_OBJECT, path, self._parse_object),
            sdf_thing=self._get_entries(data, SDFConfig.SDF_THING, path, self._parse_thing),
        )

    def _parse_object(self, data: Dict[str, Any], path: str) -> ObjectQualities:
        return ObjectQualities(
            common_qualities=self._parse_common(data, path),
            sdf_property=self._get_entries(data, SDFConfig.SDF_PROPERTY, path, self._parse_data),
            sdf_action=self._get_entries(data, SDFConfig.SDF_ACTION, path, self._parse_action),
            sdf_event=self._get_entries(data, SDFConfig.SDF_EVENT, path, self._parse_event),
            sdf_data=self._get_entries(data, SDFConfig.SDF_DATA, path, self._parse_data),
        )

    def _parse_action(self, data: Dict[str, Any], path: str) -> ActionQualities:
        return ActionQualities(
            common_qualities=self._parse_common(data, path),
            sdf_input_data=self._parse_optional_data(data, "sdfInputData", path),
            sdf_output_data=self._parse_optional_data(data, "sdfOutputData", path),
            sdf_data=self._get_entries(data, SDFConfig.SDF_DATA, path, self._parse_data),
        )

    def _parse_event(self, data: Dict[str, Any], path: str) -> EventQualities:
        return EventQualities(
            common_qualities=self._parse_common(data, path),
            sdf_output_data=self._parse_optional_data(data, "sdfOutputData", path),
            sdf_data=self._get_entries(data, SDFConfig.SDF_DATA, path, self._parse_data),
        )

    def _parse_optional_data(self, data: Dict[str, Any], key: str, path: str) -> Optional[DataQualities]:
        value = self._get_object(data, key, path)
        if value is None:
            return None
        return self._parse_data(value, child_path(path, key))

    def _parse_data(self, data: Dict[str, Any], path: str) -> DataQualities:
        sdf_type = self._get_str(data, "sdfType", path)
        if sdf_type is not None and sdf_type not in SDFConfig.SDF_TYPES:
            self._fail(f"Unknown sdfType '{sdf_type}'", child_path(path, "sdfType"))

        return DataQualities(
            common_qualities=self._parse_common(data, path),
            unique_items=self._get_bool(data, "uniqueItems", path),
            observable=self._get_bool(data, "observable", path),
            readable=self._get_bool(data, "readable", path),
            writable=self._get_bool(data, "writable", path),
            nullable=self._get_bool(data, "nullable", path),
            sdf_type=sdf_type,
            content_format=self._get_str(data, "contentFormat", path),
            **self._parse_schema_fields(data, path, self._parse_data),
        )
