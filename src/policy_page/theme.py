"""Light/dark theme preference, persisted in a small JSON key/value file."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

from .config import ThemeConfig
from .utils import atomic_write


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def css_class(self) -> str:
        return f"{self.value}-theme"

    def toggled(self) -> Theme:
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT

    @classmethod
    def from_system(cls, prefers_dark: bool) -> Theme:
        return cls.DARK if prefers_dark else cls.LIGHT


class PreferenceStore:
    def __init__(self, path: Path) -> None:
        self._path = path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            return {}
        return {str(key): str(value) for key, value in data.items()} if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        atomic_write(self._path, json.dumps(data, indent=2, sort_keys=True))


class ThemeManager:
    def __init__(self, config: ThemeConfig, store: PreferenceStore | None = None) -> None:
        self._key = config.storage_key
        self._store = store or PreferenceStore(config.storage_path)

    def saved(self) -> Theme | None:
        value = self._store.get(self._key)
        try:
            return Theme(value) if value else None
        except ValueError:
            return None

    def current(self, system_prefers_dark: bool = False) -> Theme:
        return self.saved() or Theme.from_system(system_prefers_dark)

    def set(self, theme: Theme) -> Theme:
        self._store.set(self._key, theme.value)
        return theme

    def toggle(self, system_prefers_dark: bool = False) -> Theme:
        return self.set(self.current(system_prefers_dark).toggled())


def prefers_dark(hint: str | None) -> bool:
    """Interpret a ``Sec-CH-Prefers-Color-Scheme`` style hint."""

    return (hint or "").strip().strip('"').lower() == "dark"


__all__ = ["PreferenceStore", "Theme", "ThemeManager", "prefers_dark"]
