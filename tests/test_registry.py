import importlib
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from genofilter.adapters import (  # noqa: E402
    ConsumerCsvAdapter,
    ConsumerTsvAdapter,
    FallbackAdapter,
    GenotypeAdapter,
    HeaderCsvAdapter,
    TokenSearchAdapter,
)
from genofilter.models import CanonicalRecord, FormatKind  # noqa: E402
from genofilter.registry import (  # noqa: E402
    FORMAT_ADAPTERS,
    AdapterPluginSpec,
    AdapterRegistry,
    build_default_adapter_registry,
)


class _InlineAdapter(GenotypeAdapter):
    name = "inline"

    def read(self):
        return [CanonicalRecord("rs1")]


def test_default_registry_contains_builtin_adapters() -> None:
    registry = build_default_adapter_registry()
    names = registry.available()

    assert names == sorted(
        [
            "vcf",
            "plink_bim",
            "illumina_report",
            "consumer_tsv",
            "consumer_csv",
            "header_tsv",
            "header_csv",
            "token_search",
        ]
    )


def test_every_format_kind_is_routed() -> None:
    assert set(FORMAT_ADAPTERS) == set(FormatKind)


def test_consumer_aliases_share_generic_behaviour(tmp_path: Path) -> None:
    registry = build_default_adapter_registry()
    path = tmp_path / "raw.txt"

    for kind in (FormatKind.ANCESTRYDNA, FormatKind.TWENTYTHREEANDME, FormatKind.GENERIC_TSV):
        assert type(registry.create_for_format(kind, path)) is ConsumerTsvAdapter
    for kind in (FormatKind.MYHERITAGE, FormatKind.FTDNA, FormatKind.LIVINGDNA):
        assert type(registry.create_for_format(kind, path)) is ConsumerCsvAdapter
    assert type(registry.create_for_format(FormatKind.GENERIC_CSV_WITH_HEADER, path)) is HeaderCsvAdapter


def test_unknown_format_builds_ordered_fallback(tmp_path: Path) -> None:
    registry = build_default_adapter_registry()

    adapter = registry.create_for_format(FormatKind.UNKNOWN, tmp_path / "raw.txt")

    assert isinstance(adapter, FallbackAdapter)
    assert [type(item) for item in adapter.adapters] == [
        ConsumerTsvAdapter,
        ConsumerCsvAdapter,
        TokenSearchAdapter,
    ]


def test_route_overrides_dispatch_for_custom_adapter(tmp_path: Path) -> None:
    registry = build_default_adapter_registry()
    registry.register(_InlineAdapter.name, _InlineAdapter)
    registry.route(FormatKind.NEBULA, "inline")

    adapter = registry.create_for_format(FormatKind.NEBULA, tmp_path / "raw.txt")

    assert list(adapter.read()) == [CanonicalRecord("rs1")]
    assert FORMAT_ADAPTERS[FormatKind.NEBULA] == ("consumer_tsv",)


def test_registry_plugin_registration(tmp_path: Path) -> None:
    module_path = tmp_path / "plugin_adapter.py"
    module_path.write_text(
        "from genofilter.adapters import GenotypeAdapter\n"
        "class CustomAdapter(GenotypeAdapter):\n"
        "    name='custom_adapter'\n"
        "    def __init__(self, input_path, value=0):\n"
        "        super().__init__(input_path=input_path)\n"
        "        self.value=value\n"
        "    def read(self):\n"
        "        return []\n"
    )

    sys.path.insert(0, str(tmp_path))
    try:
        importlib.invalidate_caches()
        registry = AdapterRegistry()
        registry.register_plugin(
            AdapterPluginSpec(
                name="custom_adapter",
                module="plugin_adapter",
                class_name="CustomAdapter",
            )
        )

        instance = registry.create("custom_adapter", input_path=tmp_path / "x.txt", value=7)
        assert getattr(instance, "value") == 7
    finally:
        sys.path = [path for path in sys.path if path != str(tmp_path)]
        sys.modules.pop("plugin_adapter", None)


def test_registry_rejects_duplicate_registration() -> None:
    registry = AdapterRegistry()
    registry.register("inline", _InlineAdapter)

    with pytest.raises(ValueError):
        registry.register("inline", _InlineAdapter)


def test_registry_create_unknown_name_lists_available() -> None:
    registry = build_default_adapter_registry()

    with pytest.raises(KeyError, match="consumer_tsv"):
        registry.create("does_not_exist")
