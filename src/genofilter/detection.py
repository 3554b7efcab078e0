"""Format detection for raw genotype exports."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

from genofilter.adapters.common import first_data_line, normalize_column, open_genotype_text
from genofilter.config import HEAD_LINE_COUNT
from genofilter.models import FormatKind, is_rsid

logger = logging.getLogger(__name__)

_VCF_MARKER = re.compile(r"^##fileformat=VCF", re.MULTILINE)
_ILLUMINA_MARKER = re.compile(r"^\[Header\]|GSGT Version|GenomeStudio", re.IGNORECASE | re.MULTILINE)
_SHORT_CHROMOSOME = re.compile(r"^[0-9XYM]{1,2}$")
_RSID_FIRST = re.compile(r"^rs[0-9]+\s")
_RSID_INSIDE = re.compile(r"\srs[0-9]+\s")
_HEADER_TOKENS = re.compile(r"rsid|snpname|variant|marker")

SERVICE_MARKERS: tuple[tuple[re.Pattern[str], FormatKind], ...] = (
    (re.compile(r"AncestryDNA", re.IGNORECASE), FormatKind.ANCESTRYDNA),
    (re.compile(r"23andMe", re.IGNORECASE), FormatKind.TWENTYTHREEANDME),
    (re.compile(r"MyHeritage", re.IGNORECASE), FormatKind.MYHERITAGE),
    (re.compile(r"FTDNA|FamilyTreeDNA", re.IGNORECASE), FormatKind.FTDNA),
    (re.compile(r"Living DNA", re.IGNORECASE), FormatKind.LIVINGDNA),
    (re.compile(r"Nebula", re.IGNORECASE), FormatKind.NEBULA),
    (re.compile(r"Dante", re.IGNORECASE), FormatKind.DANTE),
    (re.compile(r"Genes for Good", re.IGNORECASE), FormatKind.GENESFORGOOD),
)


class FormatDetector:
    """Classify a raw export into one ``FormatKind``.

    Rules form a priority chain evaluated over the leading lines and the first
    data line; the first matching rule wins. Misclassification is possible, so
    adapters must tolerate rows that do not fit their layout.
    """

    def __init__(self, head_line_count: int = HEAD_LINE_COUNT) -> None:
        self.head_line_count = head_line_count

    def detect(self, path: str | Path) -> FormatKind:
        """Detect the format of the file at ``path`` (``.gz`` is decompressed)."""

        head: list[str] = []
        data_line = ""
        with open_genotype_text(path) as stream:
            for line in stream:
                line = line.rstrip("\r\n")
                if len(head) < self.head_line_count:
                    head.append(line)
                if not data_line:
                    data_line = first_data_line([line])
                if data_line and len(head) >= self.head_line_count:
                    break

        kind = self.detect_lines(head, data_line)
        logger.debug("Detected %s for %s", kind.value, path)
        return kind

    def detect_lines(self, head: Sequence[str], data_line: str | None = None) -> FormatKind:
        """Classify from the leading ``head`` lines and the first data line."""

        if data_line is None:
            data_line = first_data_line(head)
        head_text = "\n".join(head)

        if _VCF_MARKER.search(head_text):
            return FormatKind.VCF

        if self._looks_like_bim(data_line):
            return FormatKind.PLINK_BIM

        if _ILLUMINA_MARKER.search(head_text):
            return FormatKind.ILLUMINA_REPORT

        for pattern, kind in SERVICE_MARKERS:
            if pattern.search(head_text):
                return kind

        if _RSID_FIRST.match(data_line):
            if "\t" in data_line:
                return FormatKind.GENERIC_TSV_RSID_FIRST
            return FormatKind.GENERIC_CSV_RSID_FIRST

        if _RSID_INSIDE.search(data_line):
            return FormatKind.GENERIC_TSV

        header_line = next(
            (line for line in head if _HEADER_TOKENS.search(normalize_column(line))),
            None,
        )
        if header_line is not None:
            if "\t" in header_line:
                return FormatKind.GENERIC_TSV_WITH_HEADER
            return FormatKind.GENERIC_CSV_WITH_HEADER

        if "\t" in data_line:
            return FormatKind.GENERIC_TSV
        if "," in data_line:
            return FormatKind.GENERIC_CSV
        return FormatKind.UNKNOWN

    @staticmethod
    def _looks_like_bim(data_line: str) -> bool:
        fields = data_line.split()
        return (
            len(fields) == 6
            and is_rsid(fields[1])
            and _SHORT_CHROMOSOME.match(fields[0]) is not None
        )
