"""Heuristic adapter that finds rs identifiers anywhere on a line."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from genofilter.adapters.base import LineAdapter
from genofilter.models import UNKNOWN, CanonicalRecord, is_rsid

_RSID_ANYWHERE = re.compile(r"rs[0-9]+")
_SEPARATORS = re.compile(r"[,;|]")
_POSITION = re.compile(r"^[0-9]{5,}$")
_CHROMOSOME = re.compile(r"^[0-9XYM]{1,2}$")
_NUCLEOTIDE = re.compile(r"^[ACGT]$")


class TokenSearchAdapter(LineAdapter):
    """Last-resort scan for layouts that no other adapter recognizes.

    Neighbouring tokens are classified by shape: the first long number is the
    position, the first short chromosome-like token is the chromosome and the
    first two single nucleotides are the alleles.
    """

    name = "token_search"

    def parse(self, lines: Iterable[str]) -> Iterator[CanonicalRecord]:
        for line in lines:
            if not _RSID_ANYWHERE.search(line):
                continue

            tokens = _SEPARATORS.sub("\t", line).split()
            marker_index = next((index for index, token in enumerate(tokens) if is_rsid(token)), None)
            if marker_index is None:
                continue

            yield self._classify(tokens[marker_index], tokens[:marker_index] + tokens[marker_index + 1 :])

    @staticmethod
    def _classify(marker_id: str, tokens: list[str]) -> CanonicalRecord:
        chromosome = position = UNKNOWN
        alleles: list[str] = []

        for token in tokens:
            if position == UNKNOWN and _POSITION.match(token):
                position = token
            if chromosome == UNKNOWN and _CHROMOSOME.match(token):
                chromosome = token
            if len(alleles) < 2 and _NUCLEOTIDE.match(token):
                alleles.append(token)

        alleles.extend([UNKNOWN] * (2 - len(alleles)))
        return CanonicalRecord(
            marker_id=marker_id,
            chromosome=chromosome,
            position=position,
            allele1=alleles[0],
            allele2=alleles[1],
        )
