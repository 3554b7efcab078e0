import json
import sys
from pathlib import Path

import pytest
from jsonschema import ValidationError

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from genofilter.config import ReferenceCategory, ReferencePanel  # noqa: E402
from genofilter.panels import ReferencePanelLoader  # noqa: E402


def test_default_panel_loads_in_declaration_order() -> None:
    loader = ReferencePanelLoader()
    panel = loader.load("neuropsych")

    assert "neuropsych" in loader.list_panels()
    assert len(panel) == 35
    assert panel.categories[0].name == "MTHFR_Methylation"
    assert panel.categories[-1].name == "Inflammation_Markers"
    assert "rs4680" in panel.categories[1]
    assert panel.total_targets == 196


def test_loader_accepts_explicit_path(tmp_path: Path) -> None:
    path = tmp_path / "mini.json"
    path.write_text(
        json.dumps(
            {
                "name": "mini",
                "categories": [
                    {"name": "COMT_Dopamine", "markers": ["rs4680", "rs4633"]},
                    {"name": "BDNF", "markers": ["rs6265", "rs4680"]},
                ],
            }
        )
    )

    panel = ReferencePanelLoader(panels_dir=tmp_path / "missing").load(path)

    assert panel.name == "mini"
    assert panel.description == ""
    assert panel.categories[0].display_name == "COMT Dopamine"
    assert panel.marker_ids() == frozenset({"rs4680", "rs4633", "rs6265"})
    assert panel.total_targets == 3


@pytest.mark.parametrize(
    "payload",
    [
        {"categories": []},
        {"name": "bad", "categories": [{"name": "A", "markers": ["4680"]}]},
        {"name": "bad", "categories": [{"name": "A", "markers": ["rs1", "rs1"]}]},
        {"name": "bad", "categories": [{"name": "has space", "markers": ["rs1"]}]},
    ],
)
def test_loader_rejects_invalid_payloads(payload: dict) -> None:
    with pytest.raises(ValidationError):
        ReferencePanelLoader().parse(payload)


def test_loader_reports_available_panels_when_missing(tmp_path: Path) -> None:
    (tmp_path / "alpha.json").write_text("{}")

    with pytest.raises(FileNotFoundError, match="alpha"):
        ReferencePanelLoader(panels_dir=tmp_path).load("beta")


def test_panel_from_mapping_collapses_repeats_and_keeps_order() -> None:
    panel = ReferencePanel.from_mapping(
        {"Second_Group": ["rs2", "rs1", "rs2"], "First-Group": ["rs1"]},
        name="synthetic",
    )

    assert [category.name for category in panel] == ["Second_Group", "First-Group"]
    assert panel.categories[0].marker_ids == ("rs2", "rs1")
    assert panel.categories[1].display_name == "First Group"
    assert panel.total_targets == 2


def test_panel_rejects_categories_sharing_a_display_name() -> None:
    with pytest.raises(ValueError, match="display name"):
        ReferencePanel.from_mapping({"A_B": ["rs1"], "A-B": ["rs2"]})
    with pytest.raises(ValueError, match="display name"):
        ReferencePanelLoader().parse(
            {
                "name": "clash",
                "categories": [
                    {"name": "Stress_Response", "markers": ["rs1"]},
                    {"name": "Stress-Response", "markers": ["rs2"]},
                ],
            }
        )


def test_panel_rejects_duplicate_categories_and_bad_markers() -> None:
    with pytest.raises(ValueError):
        ReferenceCategory(name="A", marker_ids=("rs1", "chr1:100"))
    with pytest.raises(ValueError):
        ReferenceCategory(name="A", marker_ids=("rs1", "rs1"))
    with pytest.raises(ValueError):
        ReferencePanel(
            name="dup",
            categories=(
                ReferenceCategory(name="A", marker_ids=("rs1",)),
                ReferenceCategory(name="A", marker_ids=("rs2",)),
            ),
        )
