"""Base interfaces for all genofilter format adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from pathlib import Path

from genofilter.adapters.common import open_genotype_text
from genofilter.models import CanonicalRecord


class GenotypeAdapter(ABC):
    """Adapter that converts one raw genotype export into canonical records."""

    name: str

    def __init__(self, *, input_path: str | Path) -> None:
        self.input_path = Path(input_path)

    @abstractmethod
    def read(self) -> Iterable[CanonicalRecord]:
        """Yield canonical records from the adapter source."""


class LineAdapter(GenotypeAdapter):
    """Adapter whose parsing works line by line over decompressed text."""

    def read(self) -> Iterator[CanonicalRecord]:
        with open_genotype_text(self.input_path) as stream:
            yield from self.parse(stream)

    @abstractmethod
    def parse(self, lines: Iterable[str]) -> Iterator[CanonicalRecord]:
        """Yield canonical records for the rows in ``lines`` that fit the layout."""
