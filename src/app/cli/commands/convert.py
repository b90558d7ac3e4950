"""
Convert command: SDF -> Thing Model / Thing Description, Thing Model -> SDF.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from tqdm import tqdm

from .base import BaseCommand, exit_code_for, print_conversion_summary
from ..format import (
    DEFAULT_TARGETS,
    Format,
    find_documents,
    infer_format_from_path,
    output_path_for,
)
from constants import ExitCode
from core.validators import InputValidator, URLValidator
from shared.errors import ConverterError


logger = logging.getLogger(__name__)


class ConvertCommand(BaseCommand):
    """
    Convert one document, or every document below a directory.

    Usage:
        convert <input> [output] [--from F] [--to F]
        convert <directory> --recursive [--from F] [--to F] [--output-dir DIR]
    """

    def execute(self, args: argparse.Namespace) -> int:
        early_exit = self.prepare(args)
        if early_exit is not None:
            return early_exit

        source = args.input
        is_path = not (self.get_pipeline().loader.is_inline(source) or URLValidator.is_url(source))
        if is_path and Path(source).is_dir():
            if not args.recursive:
                print(f"✗ '{source}' is a directory. Use --recursive to convert all documents.")
                return ExitCode.ERROR
            return self._convert_directory(args, Path(source))
        return self._convert_single(args)

    def _resolve_direction(self, args: argparse.Namespace) -> Tuple[Format, Format]:
        """
        Pick source and target formats from --from/--to, then file names.

        Raises:
            ValueError: If a format cannot be inferred.
        """
        source_format = (
            Format(args.source_format) if args.source_format else infer_format_from_path(args.input)
        )
        if args.target_format:
            target_format = Format(args.target_format)
        elif args.output:
            target_format = infer_format_from_path(args.output)
        else:
            target_format = DEFAULT_TARGETS[source_format]
        return source_format, target_format

    def _convert_single(self, args: argparse.Namespace) -> int:
        try:
            source_format, target_format = self._resolve_direction(args)
        except ValueError as e:
            print(f"✗ {e}")
            return ExitCode.ERROR

        output_path: Optional[str] = None
        if args.output:
            try:
                output_path = str(InputValidator.validate_output_document_path(
                    args.output, allow_relative_up=args.allow_relative_up
                ))
            except (ValueError, PermissionError) as e:
                print(f"✗ Invalid output path: {e}")
                return ExitCode.WRITE_ERROR

        pipeline = self.get_pipeline()
        try:
            result = pipeline.run(args.input, source_format, target_format, output_path=output_path)
        except ConverterError as e:
            print(f"✗ {e}")
            return exit_code_for(e)

        if output_path is None:
            print(pipeline.serialize(result))
        else:
            print_conversion_summary(result)
        return ExitCode.SUCCESS

    def _collect(self, args: argparse.Namespace, directory: Path) -> List[Tuple[Path, Format]]:
        # Thing Descriptions have no default target, so they are only picked up with --from td
        formats = [Format(args.source_format)] if args.source_format else [Format.SDF, Format.TM]
        files = []
        for fmt in formats:
            files.extend((path, fmt) for path in find_documents(directory, fmt, recursive=True))
        return sorted(files)

    def _convert_directory(self, args: argparse.Namespace, directory: Path) -> int:
        """Convert all documents found below ``directory``."""
        files = self._collect(args, directory)
        if not files:
            print(f"✗ No SDF or WoT documents found in '{directory}'")
            return ExitCode.FILE_NOT_FOUND

        output_dir = Path(args.output_dir) if args.output_dir else None
        print(f"Found {len(files)} document(s) to convert\n")

        pipeline = self.get_pipeline()
        for path, source_format in tqdm(files, desc="Converting", unit="doc", disable=len(files) < 2):
            target_format = Format(args.target_format) if args.target_format else DEFAULT_TARGETS[source_format]
            target_path = output_path_for(path, target_format)
            if output_dir is not None:
                target_path = output_dir / target_path.relative_to(directory)
            try:
                pipeline.run(str(path), source_format, target_format, output_path=str(target_path))
            except ConverterError as e:
                logger.warning(f"Skipping {path}: {e}")

        print("\n" + pipeline.stats.get_summary())
        return ExitCode.ERROR if pipeline.stats.documents_failed else ExitCode.SUCCESS
