"""Adapters for consumer DNA service exports.

AncestryDNA, 23andMe, Nebula, Dante and Genes for Good ship tab-delimited
files; MyHeritage, FamilyTreeDNA and Living DNA ship quoted CSV. Both use the
column order ``rsid, chromosome, position, allele1[, allele2]``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from genofilter.adapters.base import LineAdapter
from genofilter.adapters.common import clean, split_combined_genotype
from genofilter.models import CanonicalRecord, is_rsid


class ConsumerTsvAdapter(LineAdapter):
    """Read tab-delimited consumer exports."""

    name = "consumer_tsv"

    def parse(self, lines: Iterable[str]) -> Iterator[CanonicalRecord]:
        for line in lines:
            if self._is_comment(line):
                continue

            record = self._record_from_fields(self._split(line.rstrip("\r\n")))
            if record is not None:
                yield record

    @staticmethod
    def _is_comment(line: str) -> bool:
        return line.startswith("#")

    @staticmethod
    def _split(line: str) -> list[str]:
        return line.split("\t")

    @staticmethod
    def _record_from_fields(fields: list[str]) -> CanonicalRecord | None:
        if len(fields) < 4 or not is_rsid(fields[0].strip()):
            return None

        allele1 = fields[3].strip()
        allele2 = fields[4].strip() if len(fields) >= 5 else ""
        allele1, allele2 = split_combined_genotype(allele1, allele2)

        return CanonicalRecord(
            marker_id=fields[0].strip(),
            chromosome=clean(fields[1]),
            position=clean(fields[2]),
            allele1=clean(allele1),
            allele2=clean(allele2),
        )


class ConsumerCsvAdapter(ConsumerTsvAdapter):
    """Read quoted comma-delimited consumer exports."""

    name = "consumer_csv"

    @staticmethod
    def _is_comment(line: str) -> bool:
        return line.startswith("#") or line.startswith('"#')

    @staticmethod
    def _split(line: str) -> list[str]:
        unquoted = line.replace('","', "\t").replace('"', "").replace(",", "\t")
        return unquoted.split("\t")
