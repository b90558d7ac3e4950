"""
Document writer.

Serializes SDF and WoT models back to formatted JSON. Absent fields are
omitted by each model's ``to_dict()``, so no ``null`` placeholders appear.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from shared.errors import DocumentWriteError

logger = logging.getLogger(__name__)

JSON_INDENT = 2


class DocumentWriter:
    """
    Write SDF or WoT documents as JSON.

    Example:
        >>> writer = DocumentWriter()
        >>> writer.serialize(model)
        '{\\n  "sdfObject": {...}\\n}'
        >>> writer.write(model, "out/switch.tm.json")
    """

    def __init__(self, indent: int = JSON_INDENT):
        self.indent = indent

    def serialize(self, document: Any) -> str:
        """
        Serialize a document model (or plain dict) to JSON text.

        Raises:
            DocumentWriteError: If the document holds values JSON cannot represent.
        """
        data = document.to_dict() if hasattr(document, "to_dict") else document
        try:
            return json.dumps(data, indent=self.indent, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise DocumentWriteError(f"Failed to serialize document: {e}") from e

    def write(self, document: Any, file_path: Union[str, Path]) -> Path:
        """
        Serialize ``document`` and write it to ``file_path``.

        Parent directories are created as needed.

        Returns:
            The path written.

        Raises:
            DocumentWriteError: If serialization or writing fails.
        """
        path = Path(file_path)
        content = self.serialize(document)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content + "\n", encoding="utf-8")
        except OSError as e:
            raise DocumentWriteError(
                f"Failed to write {path}: {e}",
                file_path=str(path),
            ) from e

        logger.info(f"Wrote {path}")
        return path
