"""
Input validation utilities for the SDF/WoT converter.

This module provides centralized validation of file paths and document
content with consistent error messages.

Security features:
- Path traversal detection (../ sequences)
- Symlink detection (rejected by default)
- Document suffix validation (*.sdf.json, *.td.json, *.tm.json)
- Directory boundary awareness

Usage:
    from core.validators.input import InputValidator

    validated_path = InputValidator.validate_input_document_path("lamp.sdf.json")
    content = InputValidator.validate_document_content(content)
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

from constants import FileExtensions

logger = logging.getLogger(__name__)

TRAVERSAL_PATTERNS = ('../', '..\\', '/..', '\\..')


class InputValidator:
    """
    Centralized input validation for loader and CLI entry points.

    Suffixes are matched against the whole file name, so compound suffixes
    such as ``.sdf.json`` work.
    """

    DOCUMENT_SUFFIXES = list(FileExtensions.INPUT_SUFFIXES)
    JSON_SUFFIXES = ['.json']

    @staticmethod
    def validate_document_content(content: Any) -> str:
        """
        Validate document text.

        Raises:
            ValueError: If content is None or empty.
            TypeError: If content is not a string.
        """
        if content is None:
            raise ValueError("Document content cannot be None")

        if not isinstance(content, str):
            raise TypeError(f"Document content must be string, got {type(content).__name__}")

        if not content.strip():
            raise ValueError("Document content cannot be empty or whitespace-only")

        return content

    @staticmethod
    def has_traversal(path_str: str) -> bool:
        """Check whether a path string contains '..' components."""
        normalized = path_str.replace('\\', '/')
        if any(pattern in path_str or pattern in normalized for pattern in TRAVERSAL_PATTERNS):
            return True
        return '..' in Path(path_str).parts

    @staticmethod
    def has_suffix(path: Path, suffixes: Sequence[str]) -> bool:
        name = path.name.lower()
        return any(name.endswith(suffix.lower()) for suffix in suffixes)

    @staticmethod
    def _check_symlink(path_obj: Path, strict: bool = True) -> None:
        if not path_obj.is_symlink():
            return
        msg = (
            f"Security error: Symlink detected: {path_obj}. "
            f"Please use the actual file path instead."
        )
        if strict:
            raise ValueError(msg)
        logger.warning(msg)

    @staticmethod
    def _check_directory_boundary(path_obj: Path, warn_only: bool = True) -> None:
        try:
            path_obj.relative_to(Path.cwd().resolve())
        except ValueError:
            msg = f"Path is outside current directory: {path_obj}"
            if warn_only:
                logger.debug(msg)
            else:
                raise ValueError(msg + ". Access to paths outside working directory is restricted.")

    @classmethod
    def _normalize(cls, path: Any, allow_relative_up: bool,
                   restrict_to_cwd: bool) -> Tuple[Path, Path]:
        if not isinstance(path, (str, Path)):
            raise TypeError(f"File path must be string, got {type(path).__name__}")

        path_str = str(path).strip()
        if not path_str:
            raise ValueError("File path cannot be empty")

        relative_up = cls.has_traversal(path_str)
        if relative_up and not allow_relative_up:
            raise ValueError(
                f"Path traversal detected in path: {path_str}. "
                f"Paths containing '..' are not allowed."
            )

        # Symlink check needs the unresolved path
        unresolved = Path(path_str)
        path_obj = unresolved.resolve()
        cls._check_directory_boundary(path_obj, warn_only=not (restrict_to_cwd or relative_up))
        return unresolved, path_obj

    @classmethod
    def validate_file_path(
        cls,
        path: Any,
        allowed_suffixes: Optional[Sequence[str]] = None,
        check_exists: bool = True,
        restrict_to_cwd: bool = False,
        reject_symlinks: bool = True,
        allow_relative_up: bool = False,
    ) -> Path:
        """
        Validate a file path for reading.

        Args:
            path: Path to validate.
            allowed_suffixes: Accepted file name endings (e.g. ['.sdf.json']).
            check_exists: Whether the file must exist and be readable.
            restrict_to_cwd: If True, reject paths outside the current directory.
            reject_symlinks: If True, raise on symlinks; otherwise warn.
            allow_relative_up: If True, allow '..' but keep the path inside cwd.

        Returns:
            Validated Path object (resolved to absolute path).

        Raises:
            TypeError: If path is not a string.
            ValueError: If path is empty, has the wrong suffix, contains
                traversal or is a symlink.
            FileNotFoundError: If the file doesn't exist.
            PermissionError: If the file is not readable.
        """
        unresolved, path_obj = cls._normalize(path, allow_relative_up, restrict_to_cwd)
        cls._check_symlink(unresolved, strict=reject_symlinks)

        if check_exists:
            if not path_obj.exists():
                raise FileNotFoundError(f"File not found: {path_obj}")
            if not path_obj.is_file():
                raise ValueError(f"Path is not a file: {path_obj}")
            if not os.access(path_obj, os.R_OK):
                raise PermissionError(f"File is not readable: {path_obj}")

        if allowed_suffixes and not cls.has_suffix(path_obj, allowed_suffixes):
            raise ValueError(
                f"Invalid file name: '{path_obj.name}'. "
                f"Expected one of: {', '.join(allowed_suffixes)}"
            )

        return path_obj

    @classmethod
    def validate_input_document_path(cls, path: Any, allow_relative_up: bool = False) -> Path:
        """Validate the path of an SDF, TD or TM input document."""
        return cls.validate_file_path(
            path,
            allowed_suffixes=cls.DOCUMENT_SUFFIXES,
            allow_relative_up=allow_relative_up,
        )

    @classmethod
    def validate_output_document_path(cls, path: Any, allow_relative_up: bool = False) -> Path:
        """
        Validate the path a converted document is written to.

        The file need not exist. Its parent directory is created by the
        writer when missing.

        Raises:
            ValueError: If the suffix is wrong, traversal is detected or the
                target is a symlink.
            PermissionError: If an existing target is not writable.
        """
        unresolved, path_obj = cls._normalize(path, allow_relative_up, restrict_to_cwd=False)
        if path_obj.exists():
            cls._check_symlink(unresolved, strict=True)
            if not os.access(path_obj, os.W_OK):
                raise PermissionError(f"File exists but is not writable: {path_obj}")

        if not cls.has_suffix(path_obj, cls.DOCUMENT_SUFFIXES):
            raise ValueError(
                f"Invalid file name: '{path_obj.name}'. "
                f"Expected one of: {', '.join(cls.DOCUMENT_SUFFIXES)}"
            )
        return path_obj

    @classmethod
    def validate_config_file_path(cls, path: Any) -> Path:
        """
        Validate a configuration file path. Must be JSON inside the cwd.

        Raises:
            ValueError: If path is invalid or outside the current directory.
            FileNotFoundError: If file doesn't exist.
        """
        return cls.validate_file_path(
            path,
            allowed_suffixes=cls.JSON_SUFFIXES,
            restrict_to_cwd=True,
        )
