"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.

Command Structure:
    - print   <input>
    - convert <input> [output] [--from {sdf,tm,td}] [--to {sdf,tm,td}]
"""

import argparse

from .format import Format

FORMAT_CHOICES = [fmt.value for fmt in Format]


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_common_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags shared by every command."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file (default: config.json in the project root)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Log level (overrides the config file)'
    )


def add_input_flags(parser: argparse.ArgumentParser) -> None:
    """Add input-related flags."""
    parser.add_argument(
        '--allow-relative-up',
        action='store_true',
        help="Permit '..' in path only if the resolved path stays within the current directory"
    )


def add_direction_flags(parser: argparse.ArgumentParser) -> None:
    """Add the --from/--to format selectors."""
    parser.add_argument(
        '--from',
        dest='source_format',
        choices=FORMAT_CHOICES,
        help='Input format (default: inferred from the file name)'
    )
    parser.add_argument(
        '--to',
        dest='target_format',
        choices=FORMAT_CHOICES,
        help='Output format (default: inferred from the output name, else sdf->tm and tm->sdf)'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="sdf-wot-converter",
        description="SDF to W3C Web of Things Converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Print a normalized document
    %(prog)s print examples/switch.sdf.json

    # Convert SDF to a Thing Model (printed)
    %(prog)s convert examples/switch.sdf.json

    # Convert SDF to a Thing Description file
    %(prog)s convert examples/switch.sdf.json switch.td.json

    # Convert a Thing Model back to SDF
    %(prog)s convert lamp.tm.json lamp.sdf.json

    # Convert a directory of SDF models into Thing Models
    %(prog)s convert models/ --from sdf --to tm --recursive --output-dir out/
        """,
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_print_parser(subparsers)
    _add_convert_parser(subparsers)

    return parser


def _add_print_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the print command parser."""
    parser = subparsers.add_parser(
        'print',
        help='Load a *.sdf.json, *.td.json or *.tm.json document and print it'
    )
    parser.add_argument('input', help='File path, URL or inline JSON')
    parser.add_argument(
        '--from',
        dest='source_format',
        choices=FORMAT_CHOICES,
        help='Input format (required for URLs and inline JSON without a known suffix)'
    )
    add_input_flags(parser)
    add_common_flags(parser)


def _add_convert_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the convert command parser."""
    parser = subparsers.add_parser(
        'convert',
        help='Convert between SDF and WoT Thing Models / Thing Descriptions'
    )
    parser.add_argument('input', help='File path, URL, inline JSON or directory')
    parser.add_argument('output', nargs='?', help='Output file (default: print to stdout)')
    add_direction_flags(parser)
    add_input_flags(parser)
    parser.add_argument(
        '--recursive', '-r',
        action='store_true',
        help='Convert every matching file below a directory input'
    )
    parser.add_argument(
        '--output-dir', '-o',
        help='Output directory for directory input (default: next to each source)'
    )
    add_common_flags(parser)
