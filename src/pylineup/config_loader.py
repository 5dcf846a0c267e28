"""Persist and load CLI column mapping profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict


@dataclass
class MappingProfile:
    columns: Dict[str, str]
    rules: str | None = None

    @classmethod
    def load(cls, path: Path) -> "MappingProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            columns=data.get("columns", {}),
            rules=data.get("rules"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "columns": self.columns,
            "rules": self.rules,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
