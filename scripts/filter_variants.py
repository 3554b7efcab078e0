#!/usr/bin/env python3
"""Extract reference-panel variants from a raw DNA export."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from jsonschema import ValidationError

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from genofilter import (  # noqa: E402
    ExtractionPipeline,
    InputNotFoundError,
    ReferencePanelLoader,
)
from genofilter.config import DEFAULT_PANEL, DEFAULT_TOP_CATEGORIES  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Filter a raw genotype file (23andMe, AncestryDNA, VCF, PLINK, ...) to a reference panel"
    )
    parser.add_argument("input", help="Raw DNA data file, optionally .gz compressed")
    parser.add_argument(
        "output",
        nargs="?",
        default="dna_variants_filtered.txt",
        help="Output file (default: dna_variants_filtered.txt)",
    )
    parser.add_argument("--panel", default=DEFAULT_PANEL, help="Panel name or JSON path")
    parser.add_argument("--panels-dir", default=None, help="Directory holding panel JSON files")
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP_CATEGORIES,
        help="Number of top categories to report",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("genofilter.cli")

    try:
        panel = ReferencePanelLoader(panels_dir=args.panels_dir).load(args.panel)
    except ValidationError as exc:
        logger.error("Reference panel %s is invalid: %s", args.panel, exc.message)
        return 1
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    logger.info("Reference panel: %s (%d categories)", panel.name, len(panel))

    try:
        report = ExtractionPipeline(panel=panel).run(args.input, args.output)
    except InputNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    payload = {
        "input": report.input_path.name,
        "output": str(report.output_path),
        "format": report.format_kind.value,
        "adapter": report.adapter_name,
        "panel": panel.name,
        **report.summary.to_dict(top=args.top),
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
