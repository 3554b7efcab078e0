"""Intersect canonical records with a reference panel."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from genofilter.config import ReferenceCategory, ReferencePanel
from genofilter.models import CanonicalRecord


@dataclass
class CategoryBlock:
    """Records matched into one category, in input order."""

    category: ReferenceCategory
    records: list[CanonicalRecord] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.category.display_name

    def __len__(self) -> int:
        return len(self.records)


@dataclass
class FilterResult:
    """Categorized matches plus the size of the unfiltered record stream."""

    blocks: list[CategoryBlock]
    total_records: int = 0

    @property
    def matched(self) -> int:
        return sum(len(block) for block in self.blocks)

    def records(self) -> list[CanonicalRecord]:
        """All matched rows, block by block (one row per category match)."""

        return [record for block in self.blocks for record in block.records]


class PanelFilter:
    """Select records whose marker id belongs to a panel category.

    A marker listed in several categories is emitted once per category.
    """

    def __init__(self, panel: ReferencePanel) -> None:
        self.panel = panel
        self._index: dict[str, list[int]] = {}
        for position, category in enumerate(panel.categories):
            for marker_id in category.marker_ids:
                self._index.setdefault(marker_id, []).append(position)

    def apply(self, records: Iterable[CanonicalRecord]) -> FilterResult:
        result = FilterResult(blocks=[CategoryBlock(category) for category in self.panel.categories])

        for record in records:
            result.total_records += 1
            for position in self._index.get(record.marker_id, ()):
                result.blocks[position].records.append(record)

        return result
