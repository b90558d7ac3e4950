"""
Conversion result model.

Wraps a converted document with the bookkeeping the CLI reports: source and
target format, number of affordances carried over, and where the output went.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ConversionResult:
    """
    Result of one document conversion.

    Attributes:
        source_format: Format of the input ("sdf", "tm", "td").
        target_format: Format of the output.
        document: The converted document model.
        source_path: Input file or URL, if any.
        output_path: File written, if any.
        warnings: Non-fatal issues noticed while converting.
    """
    source_format: str
    target_format: str
    document: Any
    source_path: Optional[str] = None
    output_path: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def affordance_count(self) -> int:
        """Number of properties, actions and events in the output."""
        return getattr(self.document, "affordance_count", 0)

    @property
    def direction(self) -> str:
        return f"{self.source_format}→{self.target_format}"

    def get_summary(self) -> str:
        """Generate human-readable summary of the conversion."""
        lines = [
            "Conversion Summary:",
            f"  ✓ Direction: {self.direction}",
            f"  ✓ Affordances: {self.affordance_count}",
        ]
        if self.source_path:
            lines.append(f"  Source: {self.source_path}")
        if self.output_path:
            lines.append(f"  Output: {self.output_path}")

        if self.warnings:
            lines.append(f"  ⚠ Warnings: {len(self.warnings)}")
            for warning in self.warnings[:3]:
                lines.append(f"      - {warning}")
            if len(self.warnings) > 3:
                lines.append(f"      ... and {len(self.warnings) - 3} more")

        return "\n".join(lines)
