"""Adapter for delimited exports that carry a named header row."""

from __future__ import annotations

import csv
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from genofilter.adapters.base import LineAdapter
from genofilter.adapters.common import ColumnRule, cell, resolve_columns
from genofilter.models import UNKNOWN, CanonicalRecord, is_rsid

HEADER_SEARCH_LINES = 5

HEADER_COLUMN_RULES: tuple[ColumnRule, ...] = (
    ColumnRule.of("marker_id", r"^rsid$|snpname|markerid|variantid"),
    ColumnRule.of("chromosome", r"^chr$|chromosome|chrom"),
    ColumnRule.of("position", r"^pos$|position|^bp$"),
    ColumnRule.of("allele1", r"allele1|^a1$|^ref$"),
    ColumnRule.of("allele2", r"allele2|^a2$|^alt$"),
    ColumnRule.of("genotype", r"genotype|^gt$|call"),
)

_NON_NUCLEOTIDE = re.compile(r"[^ACGT]")


class HeaderDelimitedAdapter(LineAdapter):
    """Resolve columns by name from a header in the first few lines.

    When the export has no separate allele columns, a combined genotype column
    (``AG``, ``A/G``) is reduced to its nucleotides and split in two.
    """

    name = "header_tsv"
    delimiter = "\t"

    def __init__(self, *, input_path: str | Path, delimiter: str | None = None) -> None:
        super().__init__(input_path=input_path)
        if delimiter is not None:
            self.delimiter = delimiter

    def parse(self, lines: Iterable[str]) -> Iterator[CanonicalRecord]:
        columns: dict[str, int] | None = None

        for line_number, line in enumerate(lines, start=1):
            fields = self._split(line)
            if fields is None:
                continue

            if columns is None:
                if line_number > HEADER_SEARCH_LINES:
                    return
                resolved = resolve_columns(fields, HEADER_COLUMN_RULES)
                if "marker_id" in resolved:
                    columns = resolved
                continue

            marker_id = cell(fields, columns["marker_id"])
            if not is_rsid(marker_id):
                continue

            allele1, allele2 = self._alleles(fields, columns)
            yield CanonicalRecord(
                marker_id=marker_id,
                chromosome=cell(fields, columns.get("chromosome")),
                position=cell(fields, columns.get("position")),
                allele1=allele1,
                allele2=allele2,
            )

    def _split(self, line: str) -> list[str] | None:
        # One reader per line so an unbalanced quote cannot swallow later rows.
        cleaned = line.rstrip("\r\n").replace("\0", "")
        try:
            return next(csv.reader([cleaned], delimiter=self.delimiter), [])
        except csv.Error:
            return None

    @staticmethod
    def _alleles(fields: list[str], columns: dict[str, int]) -> tuple[str, str]:
        if "allele1" in columns and "allele2" in columns:
            return cell(fields, columns["allele1"]), cell(fields, columns["allele2"])

        if "genotype" in columns:
            genotype = _NON_NUCLEOTIDE.sub("", cell(fields, columns["genotype"]))
            if not genotype:
                return UNKNOWN, UNKNOWN
            allele1 = genotype[0]
            allele2 = genotype[1] if len(genotype) > 1 else allele1
            return allele1, allele2

        return UNKNOWN, UNKNOWN


class HeaderCsvAdapter(HeaderDelimitedAdapter):
    """Comma-delimited variant of :class:`HeaderDelimitedAdapter`."""

    name = "header_csv"
    delimiter = ","
