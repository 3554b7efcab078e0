"""Writer for the filtered variant text artifact."""

from __future__ import annotations

from pathlib import Path

from genofilter.config import ReferencePanel
from genofilter.filtering import FilterResult
from genofilter.models import CANONICAL_COLUMNS, FormatKind

RULE = "#" + "=" * 79


class VariantFileWriter:
    """Write a comment preamble followed by one block per panel category.

    The artifact carries no timestamp, so the same input and panel always give
    byte-identical output.
    """

    def __init__(self, separator: str = "\t") -> None:
        self.separator = separator

    def write(
        self,
        output_path: str | Path,
        result: FilterResult,
        *,
        source_name: str,
        format_kind: FormatKind,
        panel: ReferencePanel,
    ) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with output_path.open("w", encoding="utf-8", newline="\n") as stream:
            stream.write(self.render(result, source_name=source_name, format_kind=format_kind, panel=panel))

        return output_path

    def render(
        self,
        result: FilterResult,
        *,
        source_name: str,
        format_kind: FormatKind,
        panel: ReferencePanel,
    ) -> str:
        lines = self._preamble(source_name=source_name, format_kind=format_kind, panel=panel)
        for block in result.blocks:
            lines.append("")
            lines.append(f"# === {block.display_name} ===")
            lines.extend(record.to_line(self.separator) for record in block.records)
        return "\n".join(lines) + "\n"

    def _preamble(self, *, source_name: str, format_kind: FormatKind, panel: ReferencePanel) -> list[str]:
        title = panel.description or panel.name
        return [
            RULE,
            f"# FILTERED GENETIC VARIANTS - {title}",
            RULE,
            f"# Source file: {source_name}",
            f"# Detected format: {format_kind.value}",
            f"# Reference panel: {panel.name} ({len(panel)} categories, {panel.total_targets} markers)",
            "#",
            f"# COLUMN FORMAT: {'  '.join(CANONICAL_COLUMNS)}",
            "#",
            "# NOTE: These variants are extracted for educational/research purposes.",
            "# Consult healthcare professionals for medical interpretation.",
            RULE,
        ]
