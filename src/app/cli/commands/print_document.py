"""
Print command: load a document and print its normalized JSON.
"""

import argparse
import logging

from .base import BaseCommand, exit_code_for
from ..format import Format, infer_format_from_path
from constants import ExitCode
from shared.errors import ConverterError


logger = logging.getLogger(__name__)


class PrintCommand(BaseCommand):
    """
    Load an SDF model, Thing Model or Thing Description and print it.

    Usage:
        print <input> [--from {sdf,tm,td}]
    """

    def execute(self, args: argparse.Namespace) -> int:
        early_exit = self.prepare(args)
        if early_exit is not None:
            return early_exit

        try:
            fmt = Format(args.source_format) if args.source_format else infer_format_from_path(args.input)
        except ValueError as e:
            print(f"✗ {e}")
            return ExitCode.ERROR

        pipeline = self.get_pipeline()
        loaders = {
            Format.SDF: pipeline.loader.load_sdf,
            Format.TM: pipeline.loader.load_thing_model,
            Format.TD: pipeline.loader.load_thing_description,
        }
        try:
            document = loaders[fmt](args.input)
            print(pipeline.writer.serialize(document))
        except ConverterError as e:
            print(f"✗ {e}")
            return exit_code_for(e)

        return ExitCode.SUCCESS
