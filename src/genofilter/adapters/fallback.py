"""Adapter that unions several adapters when the layout is undetermined."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from genofilter.adapters.base import GenotypeAdapter
from genofilter.models import CanonicalRecord


class FallbackAdapter(GenotypeAdapter):
    """Run adapters in order and yield each distinct record once.

    Records keep the order in which they were first produced.
    """

    name = "fallback"

    def __init__(self, *, adapters: Sequence[GenotypeAdapter]) -> None:
        if not adapters:
            raise ValueError("FallbackAdapter needs at least one adapter")
        super().__init__(input_path=adapters[0].input_path)
        self.adapters = tuple(adapters)

    def read(self) -> Iterator[CanonicalRecord]:
        seen: set[CanonicalRecord] = set()
        for adapter in self.adapters:
            for record in adapter.read():
                if record in seen:
                    continue
                seen.add(record)
                yield record
