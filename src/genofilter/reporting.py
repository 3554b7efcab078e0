"""Extraction quality summary and status classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd

from genofilter.config import DEFAULT_TOP_CATEGORIES, MIN_SUCCESS_VARIANTS, ReferencePanel
from genofilter.filtering import FilterResult


class Status(str, Enum):
    """Overall outcome of one extraction run."""

    FAILED = "FAILED"
    PARTIAL = "PARTIAL"
    SUCCESS = "SUCCESS"


def classify_status(total_variants: int, variants_with_alleles: int) -> Status:
    if total_variants == 0:
        return Status.FAILED
    if total_variants < MIN_SUCCESS_VARIANTS:
        return Status.PARTIAL
    if variants_with_alleles < total_variants // 2:
        return Status.PARTIAL
    return Status.SUCCESS


@dataclass
class ExtractionSummary:
    """Metrics computed from one filtered run.

    ``total_variants`` counts one row per category match, so a marker that sits
    in two categories counts twice.
    """

    total_records: int
    total_variants: int
    total_targets: int
    variants_with_alleles: int
    variants_with_position: int
    categories_with_hits: int
    total_categories: int
    category_counts: dict[str, int] = field(default_factory=dict)

    @property
    def status(self) -> Status:
        return classify_status(self.total_variants, self.variants_with_alleles)

    @property
    def match_pct(self) -> float:
        if self.total_targets == 0:
            return 0.0
        return round(self.total_variants / self.total_targets * 100, 1)

    @property
    def extracted_pct(self) -> float:
        """Share of all parsed records that ended up in the output."""

        if self.total_records == 0:
            return 0.0
        return round(self.total_variants / self.total_records * 100, 3)

    @property
    def variants_missing_alleles(self) -> int:
        return self.total_variants - self.variants_with_alleles

    def top_categories(self, limit: int = DEFAULT_TOP_CATEGORIES) -> list[tuple[str, int]]:
        """Categories with hits, largest first; ties keep panel order."""

        counts = pd.Series(self.category_counts, dtype="int64")
        counts = counts[counts > 0].sort_values(ascending=False, kind="stable")
        return [(str(name), int(count)) for name, count in counts.head(limit).items()]

    def guidance(self) -> list[str]:
        status = self.status
        if status is Status.FAILED:
            return [
                "File format not recognized or not supported",
                "File uses non-standard rsID naming",
                "Data may be in a different encoding",
            ]
        if status is Status.PARTIAL:
            hints = []
            if self.total_variants < MIN_SUCCESS_VARIANTS:
                hints.append("Low variant count - file may be filtered or use different IDs")
            if self.variants_with_alleles < self.total_variants // 2:
                hints.append("Many variants missing allele data - format may need adjustment")
            hints.append("Output is usable but may be incomplete")
            return hints
        return ["Output file is ready to share for analysis"]

    def to_dict(self, top: int = DEFAULT_TOP_CATEGORIES) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "total_records": self.total_records,
            "total_variants": self.total_variants,
            "total_targets": self.total_targets,
            "match_pct": self.match_pct,
            "extracted_pct": self.extracted_pct,
            "variants_with_alleles": self.variants_with_alleles,
            "variants_missing_alleles": self.variants_missing_alleles,
            "variants_with_position": self.variants_with_position,
            "categories_with_hits": self.categories_with_hits,
            "total_categories": self.total_categories,
            "top_categories": [
                {"category": name, "count": count} for name, count in self.top_categories(top)
            ],
            "guidance": self.guidance(),
        }


class ExtractionReporter:
    """Summarize a ``FilterResult`` against the panel it was filtered with."""

    def __init__(self, panel: ReferencePanel) -> None:
        self.panel = panel

    def summarize(self, result: FilterResult) -> ExtractionSummary:
        rows = result.records()
        category_counts = {block.display_name: len(block) for block in result.blocks}

        return ExtractionSummary(
            total_records=result.total_records,
            total_variants=len(rows),
            total_targets=self.panel.total_targets,
            variants_with_alleles=sum(1 for record in rows if record.has_alleles()),
            variants_with_position=sum(1 for record in rows if record.has_position()),
            categories_with_hits=sum(1 for block in result.blocks if block.records),
            total_categories=len(self.panel),
            category_counts=category_counts,
        )
