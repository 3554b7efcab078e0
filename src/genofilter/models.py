"""Canonical in-memory data models used by genofilter."""

from __future__ import annotations

import re
from dataclasses import astuple, dataclass
from enum import Enum

UNKNOWN = "."

RSID_PATTERN = re.compile(r"^rs[0-9]+$")

CANONICAL_COLUMNS: tuple[str, ...] = (
    "rsid",
    "chromosome",
    "position",
    "allele1",
    "allele2",
)


def is_rsid(value: str | None) -> bool:
    """Return True if ``value`` is a bare ``rs<digits>`` marker identifier."""

    return value is not None and RSID_PATTERN.match(value) is not None


class FormatKind(str, Enum):
    """Raw genotype export layouts recognized by the format detector."""

    VCF = "vcf"
    PLINK_BIM = "plink_bim"
    ILLUMINA_REPORT = "illumina_report"
    ANCESTRYDNA = "ancestrydna"
    TWENTYTHREEANDME = "23andme"
    MYHERITAGE = "myheritage"
    FTDNA = "ftdna"
    LIVINGDNA = "livingdna"
    NEBULA = "nebula"
    DANTE = "dante"
    GENESFORGOOD = "genesforgood"
    GENERIC_TSV_RSID_FIRST = "generic_tsv_rsid_first"
    GENERIC_CSV_RSID_FIRST = "generic_csv_rsid_first"
    GENERIC_TSV = "generic_tsv"
    GENERIC_CSV = "generic_csv"
    GENERIC_TSV_WITH_HEADER = "generic_tsv_with_header"
    GENERIC_CSV_WITH_HEADER = "generic_csv_with_header"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CanonicalRecord:
    """Single normalized genotype call.

    Every field is a string; values that the source layout cannot provide are
    set to the ``UNKNOWN`` sentinel.
    """

    marker_id: str
    chromosome: str = UNKNOWN
    position: str = UNKNOWN
    allele1: str = UNKNOWN
    allele2: str = UNKNOWN

    def fields(self) -> tuple[str, str, str, str, str]:
        return astuple(self)

    def to_line(self, separator: str = "\t") -> str:
        """Render the record as one output row."""

        return separator.join(self.fields())

    def has_alleles(self) -> bool:
        return all(value and value != UNKNOWN for value in (self.allele1, self.allele2))

    def has_position(self) -> bool:
        return self.position.isdigit() and self.position.isascii()
