"""Adapter for PLINK ``.bim`` variant tables."""

from __future__ import annotations

import csv
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pandas as pd

from genofilter.adapters.base import GenotypeAdapter
from genofilter.adapters.common import is_gzip_path
from genofilter.models import UNKNOWN, CanonicalRecord, is_rsid

BIM_COLUMNS: tuple[str, ...] = (
    "chromosome",
    "rsid",
    "centimorgan",
    "position",
    "allele1",
    "allele2",
)


class PlinkBimAdapter(GenotypeAdapter):
    """Read whitespace-separated ``chrom, rsid, cM, pos, a1, a2`` rows.

    Rows with more than six fields are dropped by the reader; rows with fewer
    report the missing trailing values as unknown. Undecodable bytes are
    replaced rather than aborting the read.
    """

    name = "plink_bim"

    def __init__(self, *, input_path: str | Path, chunksize: int = 200_000) -> None:
        super().__init__(input_path=input_path)
        self.chunksize = chunksize

    def read(self) -> Iterator[CanonicalRecord]:
        try:
            frame_iter = pd.read_csv(
                self.input_path,
                sep=r"\s+",
                header=None,
                index_col=False,
                names=list(BIM_COLUMNS),
                dtype=str,
                keep_default_na=False,
                encoding="utf-8-sig",
                encoding_errors="replace",
                compression="gzip" if is_gzip_path(self.input_path) else None,
                quoting=csv.QUOTE_NONE,
                on_bad_lines="skip",
                chunksize=self.chunksize,
            )
        except pd.errors.EmptyDataError:
            return

        for frame in frame_iter:
            for row in frame.itertuples(index=False):
                marker_id = self._to_string(row.rsid)
                if not is_rsid(marker_id):
                    continue

                yield CanonicalRecord(
                    marker_id=marker_id,
                    chromosome=self._to_string(row.chromosome) or UNKNOWN,
                    position=self._to_string(row.position) or UNKNOWN,
                    allele1=self._to_string(row.allele1) or UNKNOWN,
                    allele2=self._to_string(row.allele2) or UNKNOWN,
                )

    @staticmethod
    def _to_string(value: Any) -> str | None:
        if value is None or pd.isna(value):
            return None

        cleaned = str(value).strip()
        return cleaned or None
