"""Settings schema for treefind."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LauncherBackend = Literal["auto", "xdg-open", "gio", "open"]


class AppearanceSettings(BaseModel):
    theme: str = Field(default="textual-dark", description="Textual theme name")


class SearchSettings(BaseModel):
    default_root: str = Field(default_factory=lambda: str(Path.cwd()))
    max_workers: int = Field(default=4, ge=1, le=64)
    follow_symlinks: bool = Field(default=False)
    discard_stale_results: bool = Field(default=True)
    max_rendered_results: int = Field(default=2000, ge=50, le=100000)

    @field_validator("default_root")
    @classmethod
    def validate_root(cls, value: str) -> str:
        return str(Path(value).expanduser())


class LauncherSettings(BaseModel):
    backend: LauncherBackend = Field(default="auto")


class AppSettings(BaseModel):
    schema_version: int = Field(default=1)
    appearance: AppearanceSettings = Field(default_factory=AppearanceSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    launcher: LauncherSettings = Field(default_factory=LauncherSettings)

    def setting_items(self) -> list[tuple[str, str]]:
        """Flatten key/value pairs for display."""

        result: list[tuple[str, str]] = []

        def walk(prefix: str, value: object) -> None:
            if isinstance(value, BaseModel):
                for key in type(value).model_fields:
                    walk(f"{prefix}.{key}" if prefix else key, getattr(value, key))
            else:
                result.append((prefix, str(value)))

        walk("", self)
        return result
