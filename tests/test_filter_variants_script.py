import gzip
import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "scripts/filter_variants.py", *args],
        cwd=REPO_ROOT,
        text=True,
        capture_output=True,
    )


def _write_23andme(path: Path, rows: int) -> None:
    panel = json.loads((REPO_ROOT / "config" / "panels" / "neuropsych.json").read_text())
    markers = [marker for category in panel["categories"] for marker in category["markers"]]
    lines = ["# This data file generated by 23andMe", "# rsid\tchromosome\tposition\tgenotype"]
    lines += [f"{marker}\t1\t{100000 + index}\tAG" for index, marker in enumerate(markers[:rows])]
    lines.append("rs3131972\t1\t752721\tAG")
    path.write_text("\n".join(lines) + "\n")


def test_filter_variants_script_reports_success(tmp_path: Path) -> None:
    source = tmp_path / "genome.txt"
    output = tmp_path / "filtered.txt"
    _write_23andme(source, rows=25)

    result = _run(str(source), str(output), "--top", "3")

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["status"] == "SUCCESS"
    assert payload["format"] == "23andme"
    assert payload["panel"] == "neuropsych"
    assert payload["total_records"] == 26
    assert payload["total_variants"] == 25
    assert payload["total_targets"] == 196
    assert payload["match_pct"] == 12.8
    assert payload["total_categories"] == 35
    assert len(payload["top_categories"]) == 3
    assert payload["top_categories"][0] == {"category": "DRD2 Dopamine D2 Receptor", "count": 13}
    assert output.read_text().startswith("#" + "=" * 79 + "\n")


def test_filter_variants_script_accepts_custom_panel(tmp_path: Path) -> None:
    source = tmp_path / "genome.txt"
    panel_path = tmp_path / "mini.json"
    output = tmp_path / "filtered.txt"
    source.write_text("rs4680\t22\t19951271\tAG\n")
    panel_path.write_text(
        json.dumps({"name": "mini", "categories": [{"name": "COMT", "markers": ["rs4680"]}]})
    )

    result = _run(str(source), str(output), "--panel", str(panel_path))

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["status"] == "PARTIAL"
    assert payload["match_pct"] == 100.0
    assert "# === COMT ===\nrs4680\t22\t19951271\tA\tG\n" in output.read_text()


def test_filter_variants_script_fails_on_unknown_panel(tmp_path: Path) -> None:
    source = tmp_path / "genome.txt"
    source.write_text("rs4680\t22\t19951271\tAG\n")

    result = _run(str(source), str(tmp_path / "filtered.txt"), "--panel", "no_such_panel")

    assert result.returncode == 1
    assert "Reference panel not found: no_such_panel" in result.stderr
    assert "Traceback" not in result.stderr
    assert result.stdout == ""


def test_filter_variants_script_fails_on_invalid_panel(tmp_path: Path) -> None:
    source = tmp_path / "genome.txt"
    panel_path = tmp_path / "broken.json"
    source.write_text("rs4680\t22\t19951271\tAG\n")
    panel_path.write_text(json.dumps({"name": "broken", "categories": [{"name": "A", "markers": ["4680"]}]}))

    result = _run(str(source), str(tmp_path / "filtered.txt"), "--panel", str(panel_path))

    assert result.returncode == 1
    assert "is invalid" in result.stderr
    assert "Traceback" not in result.stderr


def test_filter_variants_script_fails_on_truncated_gzip(tmp_path: Path) -> None:
    source = tmp_path / "genome.txt.gz"
    output = tmp_path / "filtered.txt"
    rows = "".join(f"rs{index}\t1\t{index * 7919}\tAG\n" for index in range(50_000))
    payload = gzip.compress(rows.encode())
    source.write_bytes(payload[: len(payload) // 2])

    result = _run(str(source), str(output))

    assert result.returncode == 1
    assert "cannot be read" in result.stderr
    assert not output.exists()


def test_filter_variants_script_fails_on_missing_input(tmp_path: Path) -> None:
    output = tmp_path / "filtered.txt"

    result = _run(str(tmp_path / "absent.txt"), str(output))

    assert result.returncode == 1
    assert "not found" in result.stderr
    assert result.stdout == ""
    assert not output.exists()
