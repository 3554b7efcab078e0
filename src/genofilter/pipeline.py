"""Composable genofilter extraction pipeline."""

from __future__ import annotations

import logging
import os
import zlib
from dataclasses import dataclass
from pathlib import Path

from genofilter.adapters.common import open_genotype_text
from genofilter.config import ReferencePanel
from genofilter.detection import FormatDetector
from genofilter.filtering import FilterResult, PanelFilter
from genofilter.models import FormatKind
from genofilter.registry import AdapterRegistry, build_default_adapter_registry
from genofilter.reporting import ExtractionReporter, ExtractionSummary
from genofilter.writers import VariantFileWriter

logger = logging.getLogger(__name__)


class InputNotFoundError(FileNotFoundError):
    """The input path is missing, not a regular file, or cannot be read."""


@dataclass
class ExtractionRunReport:
    """Execution summary for a pipeline run."""

    input_path: Path
    output_path: Path
    format_kind: FormatKind
    adapter_name: str
    result: FilterResult
    summary: ExtractionSummary


class ExtractionPipeline:
    """Detect, parse, filter, write and summarize in one sequential pass."""

    def __init__(
        self,
        *,
        panel: ReferencePanel,
        registry: AdapterRegistry | None = None,
        detector: FormatDetector | None = None,
        writer: VariantFileWriter | None = None,
    ) -> None:
        self.panel = panel
        self.registry = registry or build_default_adapter_registry()
        self.detector = detector or FormatDetector()
        self.writer = writer or VariantFileWriter()
        self.panel_filter = PanelFilter(panel)
        self.reporter = ExtractionReporter(panel)

    def run(self, input_path: str | Path, output_path: str | Path) -> ExtractionRunReport:
        input_path = Path(input_path)
        output_path = Path(output_path)
        ensure_readable(input_path)

        try:
            format_kind = self.detector.detect(input_path)
        except (OSError, EOFError, zlib.error) as exc:
            raise InputNotFoundError(f"Input file '{input_path}' cannot be read: {exc}") from exc
        logger.info("Input %s detected as %s", input_path.name, format_kind.value)
        if format_kind is FormatKind.UNKNOWN:
            logger.warning(
                "Could not auto-detect format of %s; attempting generic extraction",
                input_path.name,
            )

        adapter = self.registry.create_for_format(format_kind, input_path)
        try:
            result = self.panel_filter.apply(adapter.read())
        except (OSError, EOFError, zlib.error) as exc:
            raise InputNotFoundError(f"Input file '{input_path}' cannot be read: {exc}") from exc
        logger.info("Parsed %d records, %d matched the panel", result.total_records, result.matched)

        self.writer.write(
            output_path,
            result,
            source_name=input_path.name,
            format_kind=format_kind,
            panel=self.panel,
        )
        summary = self.reporter.summarize(result)
        logger.info(
            "Extraction %s: %d/%d targets (%.1f%%)",
            summary.status.value,
            summary.total_variants,
            summary.total_targets,
            summary.match_pct,
        )

        return ExtractionRunReport(
            input_path=input_path,
            output_path=output_path,
            format_kind=format_kind,
            adapter_name=adapter.name,
            result=result,
            summary=summary,
        )


def ensure_readable(path: Path) -> None:
    """Raise ``InputNotFoundError`` unless ``path`` can be opened and decoded."""

    if not path.is_file():
        raise InputNotFoundError(f"Input file '{path}' not found")
    if not os.access(path, os.R_OK):
        raise InputNotFoundError(f"Input file '{path}' is not readable")

    try:
        with open_genotype_text(path) as stream:
            stream.read(1)
    except (OSError, EOFError, zlib.error) as exc:
        raise InputNotFoundError(f"Input file '{path}' cannot be read: {exc}") from exc
