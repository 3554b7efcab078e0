"""Format adapters for genofilter."""

from .base import GenotypeAdapter, LineAdapter
from .consumer import ConsumerCsvAdapter, ConsumerTsvAdapter
from .fallback import FallbackAdapter
from .header import HeaderCsvAdapter, HeaderDelimitedAdapter
from .illumina import IlluminaReportAdapter
from .plink import PlinkBimAdapter
from .search import TokenSearchAdapter
from .vcf import VCFAdapter

__all__ = [
    "GenotypeAdapter",
    "LineAdapter",
    "VCFAdapter",
    "PlinkBimAdapter",
    "IlluminaReportAdapter",
    "ConsumerTsvAdapter",
    "ConsumerCsvAdapter",
    "HeaderDelimitedAdapter",
    "HeaderCsvAdapter",
    "TokenSearchAdapter",
    "FallbackAdapter",
]
