"""Reference panel loader for ``config/panels`` JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema.validators import validator_for

from genofilter.config import ReferenceCategory, ReferencePanel

PANEL_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "genofilter reference panel",
    "type": "object",
    "required": ["name", "categories"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "categories": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "markers"],
                "properties": {
                    "name": {"type": "string", "pattern": "^[A-Za-z0-9][A-Za-z0-9_\\-]*$"},
                    "markers": {
                        "type": "array",
                        "items": {"type": "string", "pattern": "^rs[0-9]+$"},
                        "uniqueItems": True,
                    },
                },
                "additionalProperties": False,
            },
        },
    },
}


def _compile_validator():
    validator_cls = validator_for(PANEL_SCHEMA)
    validator_cls.check_schema(PANEL_SCHEMA)
    return validator_cls(PANEL_SCHEMA)


class ReferencePanelLoader:
    """Load reference panels by name from ``config/panels`` or a custom path."""

    def __init__(self, panels_dir: str | Path | None = None) -> None:
        if panels_dir is None:
            panels_dir = Path(__file__).resolve().parents[2] / "config" / "panels"
        self.panels_dir = Path(panels_dir)
        self._validator = _compile_validator()

    def list_panels(self) -> list[str]:
        """Return available panel names from the configured directory."""

        return sorted(path.stem for path in self.panels_dir.glob("*.json"))

    def load(self, name_or_path: str | Path) -> ReferencePanel:
        """Load a panel by name (for example, ``neuropsych``) or explicit path.

        Raises ``jsonschema.ValidationError`` when the payload does not match
        ``PANEL_SCHEMA``.
        """

        path = self._resolve_path(name_or_path)
        payload = json.loads(path.read_text(encoding="utf-8"))
        return self.parse(payload)

    def parse(self, payload: dict[str, Any]) -> ReferencePanel:
        self._validator.validate(payload)

        categories = tuple(
            ReferenceCategory(
                name=str(raw_category["name"]),
                marker_ids=tuple(raw_category["markers"]),
            )
            for raw_category in payload["categories"]
        )
        return ReferencePanel(
            name=str(payload["name"]),
            categories=categories,
            description=str(payload.get("description", "")),
        )

    def _resolve_path(self, name_or_path: str | Path) -> Path:
        requested = Path(name_or_path)

        if requested.is_file():
            return requested

        candidate = self.panels_dir / f"{requested}.json"
        if candidate.exists():
            return candidate

        raise FileNotFoundError(
            f"Reference panel not found: {name_or_path}. Available: {', '.join(self.list_panels())}"
        )
