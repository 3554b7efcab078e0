"""Adapter registry and format dispatch table."""

from __future__ import annotations

import importlib
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from genofilter.adapters import (
    ConsumerCsvAdapter,
    ConsumerTsvAdapter,
    FallbackAdapter,
    GenotypeAdapter,
    HeaderCsvAdapter,
    HeaderDelimitedAdapter,
    IlluminaReportAdapter,
    PlinkBimAdapter,
    TokenSearchAdapter,
    VCFAdapter,
)
from genofilter.models import FormatKind

AdapterFactory = Callable[..., GenotypeAdapter]

_TSV = (ConsumerTsvAdapter.name,)
_CSV = (ConsumerCsvAdapter.name,)

FORMAT_ADAPTERS: Mapping[FormatKind, tuple[str, ...]] = {
    FormatKind.VCF: (VCFAdapter.name,),
    FormatKind.PLINK_BIM: (PlinkBimAdapter.name,),
    FormatKind.ILLUMINA_REPORT: (IlluminaReportAdapter.name,),
    FormatKind.ANCESTRYDNA: _TSV,
    FormatKind.TWENTYTHREEANDME: _TSV,
    FormatKind.NEBULA: _TSV,
    FormatKind.DANTE: _TSV,
    FormatKind.GENESFORGOOD: _TSV,
    FormatKind.GENERIC_TSV_RSID_FIRST: _TSV,
    FormatKind.GENERIC_TSV: _TSV,
    FormatKind.MYHERITAGE: _CSV,
    FormatKind.FTDNA: _CSV,
    FormatKind.LIVINGDNA: _CSV,
    FormatKind.GENERIC_CSV_RSID_FIRST: _CSV,
    FormatKind.GENERIC_CSV: _CSV,
    FormatKind.GENERIC_TSV_WITH_HEADER: (HeaderDelimitedAdapter.name,),
    FormatKind.GENERIC_CSV_WITH_HEADER: (HeaderCsvAdapter.name,),
    FormatKind.UNKNOWN: (
        ConsumerTsvAdapter.name,
        ConsumerCsvAdapter.name,
        TokenSearchAdapter.name,
    ),
}


@dataclass(frozen=True)
class AdapterPluginSpec:
    """Spec describing a dynamically imported adapter implementation."""

    name: str
    module: str
    class_name: str


class AdapterRegistry:
    """Registry that maps stable adapter names to constructors."""

    def __init__(self, format_adapters: Mapping[FormatKind, tuple[str, ...]] | None = None) -> None:
        self._factories: dict[str, AdapterFactory] = {}
        self.format_adapters: dict[FormatKind, tuple[str, ...]] = dict(
            FORMAT_ADAPTERS if format_adapters is None else format_adapters
        )

    def register(self, name: str, factory: AdapterFactory) -> None:
        """Register an adapter factory under a unique name."""

        key = name.strip().lower()
        if not key:
            raise ValueError("Adapter name cannot be empty")
        if key in self._factories:
            raise ValueError(f"Adapter already registered: {name}")
        self._factories[key] = factory

    def register_plugin(self, plugin: AdapterPluginSpec) -> None:
        """Register an adapter by importing a module/class at runtime."""

        module = importlib.import_module(plugin.module)
        adapter_cls = getattr(module, plugin.class_name)
        self.register(plugin.name, adapter_cls)

    def route(self, kind: FormatKind, *adapter_names: str) -> None:
        """Point a format at one adapter, or at several to be unioned."""

        if not adapter_names:
            raise ValueError(f"Format {kind.value} needs at least one adapter")
        self.format_adapters[kind] = tuple(name.strip().lower() for name in adapter_names)

    def create(self, name: str, **kwargs: Any) -> GenotypeAdapter:
        """Instantiate a registered adapter."""

        key = name.strip().lower()
        if key not in self._factories:
            raise KeyError(
                f"Unknown adapter '{name}'. Available: {', '.join(self.available())}"
            )
        return self._factories[key](**kwargs)

    def create_for_format(self, kind: FormatKind, input_path: str | Path) -> GenotypeAdapter:
        """Build the adapter for ``kind``, unioning adapters when several are routed."""

        names = self.format_adapters.get(kind, self.format_adapters[FormatKind.UNKNOWN])
        adapters = [self.create(name, input_path=input_path) for name in names]
        if len(adapters) == 1:
            return adapters[0]
        return FallbackAdapter(adapters=adapters)

    def available(self) -> list[str]:
        """Return sorted list of known adapter names."""

        return sorted(self._factories.keys())


def build_default_adapter_registry() -> AdapterRegistry:
    """Create a registry preloaded with the built-in format adapters."""

    registry = AdapterRegistry()
    for adapter_cls in (
        VCFAdapter,
        PlinkBimAdapter,
        IlluminaReportAdapter,
        ConsumerTsvAdapter,
        ConsumerCsvAdapter,
        HeaderDelimitedAdapter,
        HeaderCsvAdapter,
        TokenSearchAdapter,
    ):
        registry.register(adapter_cls.name, adapter_cls)
    return registry
