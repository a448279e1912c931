"""Settings persistence: one JSON document in the user config directory."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from treefind.config.models import AppSettings
from treefind.paths import settings_path


class SettingsStore:
    """Reads and writes :class:`AppSettings` at ``path``.

    A file that no longer parses or validates is copied aside as
    ``settings.corrupt.json`` and replaced with defaults.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings_path()

    def load(self) -> AppSettings:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return self._write_defaults()

        try:
            return AppSettings.model_validate_json(raw)
        except ValidationError:
            self.path.with_suffix(".corrupt.json").write_text(raw, encoding="utf-8")
            return self._write_defaults()

    def save(self, settings: AppSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(settings.model_dump(mode="json"), indent=2, sort_keys=True)
        self.path.write_text(f"{payload}\n", encoding="utf-8")

    def update(self, dotted_key: str, value: Any) -> AppSettings:
        """Set one ``section.field`` value, validate the result and persist it."""
        section, _, field = dotted_key.partition(".")
        data = self.load().model_dump()
        group = data.get(section)
        if not isinstance(group, dict) or field not in group:
            raise KeyError(f"Unknown setting path: {dotted_key}")
        group[field] = value

        updated = AppSettings.model_validate(data)
        self.save(updated)
        return updated

    def _write_defaults(self) -> AppSettings:
        settings = AppSettings()
        self.save(settings)
        return settings
