"""
Format enumeration and file name helpers.

Provides a single point for deciding which document family a path holds
and which file name a converted document gets.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List

from constants import FileExtensions

logger = logging.getLogger(__name__)


class Format(str, Enum):
    """Supported document formats."""
    SDF = "sdf"
    TD = "td"
    TM = "tm"

    def __str__(self) -> str:
        return self.value

    @property
    def suffix(self) -> str:
        """File name ending for documents of this format."""
        return FORMAT_SUFFIXES[self]


FORMAT_SUFFIXES: Dict[Format, str] = {
    Format.SDF: FileExtensions.SDF_SUFFIX,
    Format.TD: FileExtensions.TD_SUFFIX,
    Format.TM: FileExtensions.TM_SUFFIX,
}

DEFAULT_TARGETS: Dict[Format, Format] = {
    Format.SDF: Format.TM,
    Format.TM: Format.SDF,
    Format.TD: Format.SDF,
}


def infer_format_from_path(path: str) -> Format:
    """
    Infer the format from a file name suffix.

    Args:
        path: File path or URL.

    Returns:
        Inferred Format.

    Raises:
        ValueError: If the name ends in none of the known suffixes.
    """
    name = Path(path.split("?", 1)[0]).name.lower()
    for fmt, suffix in FORMAT_SUFFIXES.items():
        if name.endswith(suffix):
            return fmt
    raise ValueError(
        f"Cannot infer format of '{path}'. "
        f"Expected a name ending in one of: {', '.join(FORMAT_SUFFIXES.values())}. "
        f"Use --from/--to to specify explicitly."
    )


def output_path_for(input_path: Path, target: Format) -> Path:
    """Name of the converted file: ``lamp.sdf.json`` -> ``lamp.tm.json``."""
    name = input_path.name
    for suffix in FORMAT_SUFFIXES.values():
        if name.lower().endswith(suffix):
            name = name[: -len(suffix)]
            break
    return input_path.with_name(name + target.suffix)


def find_documents(directory: Path, source: Format, recursive: bool = False) -> List[Path]:
    """List the documents of format ``source`` in ``directory``, sorted by path."""
    pattern = f"*{source.suffix}"
    matches = directory.rglob(pattern) if recursive else directory.glob(pattern)
    return sorted(path for path in matches if path.is_file())
