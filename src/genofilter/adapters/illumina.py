"""Adapter for Illumina GenomeStudio FinalReport exports."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from genofilter.adapters.base import LineAdapter
from genofilter.adapters.common import ColumnRule, cell, resolve_columns
from genofilter.models import CanonicalRecord, is_rsid

DATA_SECTION_MARKER = "[Data]"

ILLUMINA_COLUMN_RULES: tuple[ColumnRule, ...] = (
    ColumnRule.of("marker_id", r"snpname|rsid|marker"),
    ColumnRule.of("chromosome", r"^chr$|chromosome"),
    ColumnRule.of("position", r"^pos$|position"),
    ColumnRule.of("allele1", r"allele1"),
    ColumnRule.of("allele2", r"allele2"),
)


class IlluminaReportAdapter(LineAdapter):
    """Read the ``[Data]`` section of a FinalReport.

    The first row after ``[Data]`` with more than three columns is the header.
    Reports are usually tab-delimited; a header without tabs is split on commas.
    """

    name = "illumina_report"

    def parse(self, lines: Iterable[str]) -> Iterator[CanonicalRecord]:
        in_data = False
        delimiter: str | None = None
        columns: dict[str, int] = {}

        for line in lines:
            line = line.rstrip("\r\n")
            if line.startswith(DATA_SECTION_MARKER):
                in_data = True
                continue
            if not in_data:
                continue

            if delimiter is None:
                candidate = "\t" if "\t" in line else ","
                header = line.split(candidate)
                if len(header) <= 3:
                    continue
                columns = resolve_columns(header, ILLUMINA_COLUMN_RULES)
                delimiter = candidate
                continue

            marker_index = columns.get("marker_id")
            if marker_index is None:
                continue

            fields = line.split(delimiter)
            marker_id = cell(fields, marker_index)
            if not is_rsid(marker_id):
                continue

            yield CanonicalRecord(
                marker_id=marker_id,
                chromosome=cell(fields, columns.get("chromosome")),
                position=cell(fields, columns.get("position")),
                allele1=cell(fields, columns.get("allele1")),
                allele2=cell(fields, columns.get("allele2")),
            )
