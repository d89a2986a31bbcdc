"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

from pptx_markdown.model.presentation_model import Presentation

DUMP_FILE_NAME = "presentation_model.json"


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, presentation: Presentation) -> Path:
        """Persist the parsed slides as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = {
            "source": str(presentation.package.source),
            "slides": [self._serialize(slide) for slide in presentation.slides],
        }
        out_path = self.directory / DUMP_FILE_NAME
        out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        return out_path

    def _serialize(self, value: Any) -> Any:
        if is_dataclass(value):
            return {k: self._serialize(v) for k, v in asdict(value).items()}
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
