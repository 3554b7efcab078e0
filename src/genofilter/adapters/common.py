"""Shared utilities for genotype format adapters."""

from __future__ import annotations

import gzip
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from genofilter.models import UNKNOWN

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def is_gzip_path(path: str | Path) -> bool:
    return Path(path).name.lower().endswith(".gz")


def open_genotype_text(path: str | Path) -> TextIO:
    """Open a raw export as text, decompressing ``.gz`` files transparently."""

    path = Path(path)
    if is_gzip_path(path):
        return gzip.open(path, "rt", encoding="utf-8-sig", errors="replace")
    return path.open("r", encoding="utf-8-sig", errors="replace")


def first_data_line(lines: Iterable[str]) -> str:
    """Return the first non-blank line that is not a ``#`` comment."""

    for line in lines:
        stripped = line.rstrip("\r\n")
        if stripped.strip() and not stripped.startswith("#"):
            return stripped
    return ""


def normalize_column(name: str) -> str:
    """Lowercase a header cell and drop everything that is not a letter or digit."""

    return _NON_ALNUM.sub("", name.lower())


def clean(value: str | None) -> str:
    """Strip a raw cell, mapping empty values to the unknown sentinel."""

    if value is None:
        return UNKNOWN
    cleaned = value.strip()
    return cleaned or UNKNOWN


def cell(fields: Sequence[str], index: int | None) -> str:
    """Return ``fields[index]`` cleaned, or the sentinel for unresolved/short rows."""

    if index is None or index >= len(fields):
        return UNKNOWN
    return clean(fields[index])


def split_combined_genotype(allele1: str, allele2: str | None) -> tuple[str, str]:
    """Split a packed two-character diploid call such as ``AG``.

    ``allele2`` defaults to ``allele1``. The split happens only when ``allele1``
    is exactly two characters and ``allele2`` is absent or repeats it.
    """

    if not allele2:
        allele2 = allele1
    if len(allele1) == 2 and allele2 == allele1:
        return allele1[0], allele1[1]
    return allele1, allele2


@dataclass(frozen=True)
class ColumnRule:
    """Header pattern that resolves a canonical field to a column index."""

    field_name: str
    pattern: re.Pattern[str]

    @classmethod
    def of(cls, field_name: str, pattern: str) -> "ColumnRule":
        return cls(field_name=field_name, pattern=re.compile(pattern))

    def matches(self, column: str) -> bool:
        return self.pattern.search(normalize_column(column)) is not None


def resolve_columns(header: Sequence[str], rules: Sequence[ColumnRule]) -> dict[str, int]:
    """Map each rule's field to the first header column it matches.

    Rules are evaluated in order; a field is left out of the result when no
    column matches it.
    """

    resolved: dict[str, int] = {}
    for rule in rules:
        if rule.field_name in resolved:
            continue
        for index, column in enumerate(header):
            if rule.matches(column):
                resolved[rule.field_name] = index
                break
    return resolved
