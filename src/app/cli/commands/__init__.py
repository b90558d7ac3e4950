"""
CLI command implementations.

- base.py: Base command class and shared output helpers
- print_document.py: PrintCommand
- convert.py: ConvertCommand
"""

from .base import (
    BaseCommand,
    exit_code_for,
    print_conversion_summary,
)
from .convert import ConvertCommand
from .print_document import PrintCommand


__all__ = [
    'BaseCommand',
    'exit_code_for',
    'print_conversion_summary',
    'ConvertCommand',
    'PrintCommand',
]
