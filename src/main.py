#!/usr/bin/env python3
"""
SDF to W3C Web of Things Converter

This is the main entry point for converting SDF models to WoT Thing Models and
Thing Descriptions, and WoT Thing Models back to SDF.

Usage:
    python main.py print <input> [--from {sdf,tm,td}]
    python main.py convert <input> [output] [--from F] [--to F]
    python main.py convert <directory> --recursive [--output-dir DIR]
"""

import sys
from typing import Dict, List, Optional, Type

from app.cli.commands import BaseCommand, ConvertCommand, PrintCommand
from app.cli.parsers import create_argument_parser
from constants import ExitCode


COMMANDS: Dict[str, Type[BaseCommand]] = {
    'print': PrintCommand,
    'convert': ConvertCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    command = COMMANDS[args.command](config_path=args.config)
    try:
        return int(command.execute(args))
    except KeyboardInterrupt:
        print("\n✗ Interrupted")
        return ExitCode.ERROR


if __name__ == '__main__':
    sys.exit(main())
