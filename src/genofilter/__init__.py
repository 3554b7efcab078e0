"""Core genofilter primitives.

This package detects the layout of raw genotype exports, normalizes them into
canonical records, filters them against a reference panel and summarizes the
extraction quality.
"""

from .config import ReferenceCategory, ReferencePanel
from .detection import FormatDetector
from .filtering import CategoryBlock, FilterResult, PanelFilter
from .models import UNKNOWN, CanonicalRecord, FormatKind
from .panels import ReferencePanelLoader
from .pipeline import ExtractionPipeline, ExtractionRunReport, InputNotFoundError
from .registry import AdapterPluginSpec, AdapterRegistry, build_default_adapter_registry
from .reporting import ExtractionReporter, ExtractionSummary, Status, classify_status
from .writers import VariantFileWriter

__all__ = [
    "UNKNOWN",
    "CanonicalRecord",
    "FormatKind",
    "ReferenceCategory",
    "ReferencePanel",
    "ReferencePanelLoader",
    "FormatDetector",
    "AdapterRegistry",
    "AdapterPluginSpec",
    "build_default_adapter_registry",
    "PanelFilter",
    "FilterResult",
    "CategoryBlock",
    "ExtractionReporter",
    "ExtractionSummary",
    "Status",
    "classify_status",
    "VariantFileWriter",
    "ExtractionPipeline",
    "ExtractionRunReport",
    "InputNotFoundError",
]
