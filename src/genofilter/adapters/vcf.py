"""Adapter for single-sample Variant Call Format files."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from genofilter.adapters.base import LineAdapter
from genofilter.models import UNKNOWN, CanonicalRecord, is_rsid

_ALLELE_SEPARATOR = re.compile(r"[/|]")


class VCFAdapter(LineAdapter):
    """Read rs-identified sites and the first sample's called genotype.

    Sites without a sample column report ``REF`` and ``ALT`` (or ``REF`` twice
    when ``ALT`` is missing).
    """

    name = "vcf"

    def parse(self, lines: Iterable[str]) -> Iterator[CanonicalRecord]:
        for line in lines:
            if line.startswith("#"):
                continue

            fields = line.rstrip("\r\n").split("\t")
            if len(fields) < 5 or not is_rsid(fields[2]):
                continue

            chrom, pos, marker_id, ref, alt = (value.strip() for value in fields[:5])
            if len(fields) >= 10:
                allele1, allele2 = self._called_alleles(fields[9], ref, alt)
            else:
                allele1 = ref
                allele2 = alt if alt != UNKNOWN else ref

            yield CanonicalRecord(
                marker_id=marker_id,
                chromosome=chrom or UNKNOWN,
                position=pos or UNKNOWN,
                allele1=allele1 or UNKNOWN,
                allele2=allele2 or UNKNOWN,
            )

    @staticmethod
    def _called_alleles(sample: str, ref: str, alt: str) -> tuple[str, str]:
        genotype = sample.strip().split(":", 1)[0]
        indices = [index for index in _ALLELE_SEPARATOR.split(genotype) if index]
        if not indices:
            return UNKNOWN, UNKNOWN

        alts = alt.split(",")
        alleles = [VCFAdapter._allele_for_index(index, ref, alts) for index in indices[:2]]
        if len(alleles) == 1:
            alleles.append(alleles[0])
        return alleles[0], alleles[1]

    @staticmethod
    def _allele_for_index(index: str, ref: str, alts: list[str]) -> str:
        if index == "0":
            return ref
        if not index.isdigit():
            return UNKNOWN

        position = int(index) - 1
        if position >= len(alts) or alts[position] in {"", UNKNOWN}:
            return UNKNOWN
        return alts[position]
