"""
Conversion pipeline.

Ties the document loader, the mappers and the document writer together:

    load (file / URL / inline) -> map (SDF <-> WoT) -> write (file or text)

Supported directions:

    sdf -> tm   SDFToWoTConverter.convert_to_thing_model
    sdf -> td   SDFToWoTConverter.convert_to_thing_description
    tm  -> sdf  WoTToSDFConverter.convert

Every other direction, notably ``td -> sdf``, raises
UnsupportedConversionError before anything is loaded.

Usage:
    from core.services.pipeline import ConversionPipeline

    pipeline = ConversionPipeline()
    result = pipeline.run("lamp.sdf.json", "sdf", "tm", output_path="lamp.tm.json")
    print(result.get_summary())
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from converters.sdf_to_wot import SDFToWoTConverter
from converters.wot_to_sdf import WoTToSDFConverter
from core.loader import DocumentLoader
from formats.writer import DocumentWriter
from shared.errors import UnsupportedConversionError
from shared.models.conversion import ConversionResult

logger = logging.getLogger(__name__)


# =============================================================================
# Pipeline State
# =============================================================================

class PipelineState(str, Enum):
    """State of a conversion pipeline."""
    IDLE = "idle"
    LOADING = "loading"
    CONVERTING = "converting"
    WRITING = "writing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PipelineStats:
    """
    Counters accumulated over the documents a pipeline has processed.

    Attributes:
        documents_converted: Conversions that produced output.
        documents_failed: Conversions that raised.
        affordances: Affordances in all produced documents.
        duration_seconds: Wall time spent in ``run``.
        failures: ``(source, message)`` per failed document.
    """
    documents_converted: int = 0
    documents_failed: int = 0
    affordances: int = 0
    duration_seconds: float = 0.0
    failures: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def documents_total(self) -> int:
        return self.documents_converted + self.documents_failed

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            f"  ✓ Converted: {self.documents_converted}",
            f"  ✓ Affordances: {self.affordances}",
        ]
        if self.documents_failed:
            lines.append(f"  ✗ Failed: {self.documents_failed}")
            for source, message in self.failures[:5]:
                lines.append(f"      - {source}: {message}")
            if len(self.failures) > 5:
                lines.append(f"      ... and {len(self.failures) - 5} more")
        lines.append(f"  Duration: {self.duration_seconds:.2f}s")
        return "\n".join(lines)


# =============================================================================
# Pipeline
# =============================================================================

class ConversionPipeline:
    """
    Load, convert and write SDF and WoT documents.

    The mappers are stateless, so one pipeline can convert any number of
    documents; only ``stats`` and ``state`` change between runs.
    """

    def __init__(self, loader: Optional[DocumentLoader] = None,
                 writer: Optional[DocumentWriter] = None):
        self.loader = loader or DocumentLoader()
        self.writer = writer or DocumentWriter()
        self.sdf_to_wot = SDFToWoTConverter()
        self.wot_to_sdf = WoTToSDFConverter()
        self.state = PipelineState.IDLE
        self.stats = PipelineStats()

        self._loaders: Dict[str, Callable[[str], Any]] = {
            "sdf": self.loader.load_sdf,
            "tm": self.loader.load_thing_model,
            "td": self.loader.load_thing_description,
        }
        self._converters: Dict[Tuple[str, str], Callable[[Any], Any]] = {
            ("sdf", "tm"): self.sdf_to_wot.convert_to_thing_model,
            ("sdf", "td"): self.sdf_to_wot.convert_to_thing_description,
            ("tm", "sdf"): self.wot_to_sdf.convert,
        }

    @property
    def supported_conversions(self) -> List[Tuple[str, str]]:
        return list(self._converters)

    def check_supported(self, source_format: str, target_format: str) -> None:
        """
        Raises:
            UnsupportedConversionError: If the direction has no mapper.
        """
        if (str(source_format), str(target_format)) not in self._converters:
            raise UnsupportedConversionError(str(source_format), str(target_format))

    def convert_document(self, document: Any, source_format: str, target_format: str) -> Any:
        """Map an already-parsed document to the target format."""
        self.check_supported(source_format, target_format)
        return self._converters[(str(source_format), str(target_format))](document)

    def run(self, source: str, source_format: str, target_format: str,
            output_path: Optional[str] = None) -> ConversionResult:
        """
        Convert one document end to end.

        Args:
            source: File path, URL or inline JSON.
            source_format: "sdf", "tm" or "td".
            target_format: "sdf", "tm" or "td".
            output_path: File to write; when None the result is only returned.

        Returns:
            ConversionResult holding the converted document.

        Raises:
            UnsupportedConversionError: For a direction without a mapper.
            DocumentParseError: If the source cannot be loaded or parsed.
            DocumentWriteError: If the output cannot be written.
        """
        start = time.monotonic()
        source_label = None if self.loader.is_inline(source) else source
        try:
            self.check_supported(source_format, target_format)

            self.state = PipelineState.LOADING
            document = self._loaders[str(source_format)](source)

            self.state = PipelineState.CONVERTING
            converted = self.convert_document(document, source_format, target_format)

            result = ConversionResult(
                source_format=str(source_format),
                target_format=str(target_format),
                document=converted,
                source_path=source_label,
            )
            if output_path is not None:
                self.state = PipelineState.WRITING
                result.output_path = str(self.writer.write(converted, output_path))
        except Exception as e:
            self.state = PipelineState.FAILED
            self.stats.documents_failed += 1
            self.stats.failures.append((source_label or "<inline>", str(e)))
            raise
        finally:
            self.stats.duration_seconds += time.monotonic() - start

        self.state = PipelineState.COMPLETED
        self.stats.documents_converted += 1
        self.stats.affordances += result.affordance_count
        logger.info(f"Converted {source_label or '<inline>'} ({result.direction})")
        return result

    def serialize(self, result: ConversionResult) -> str:
        """JSON text of a converted document."""
        return self.writer.serialize(result.document)
