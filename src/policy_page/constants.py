from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config.toml")
ENV_PREFIX = "PPR_"
THEME_STORAGE_KEY = "theme"
API_VERSION = "0.1.0"
EMBEDDED_RESOURCE = "content/PRIVACY_POLICY.md"

__all__ = ["API_VERSION", "DEFAULT_CONFIG_PATH", "ENV_PREFIX", "EMBEDDED_RESOURCE", "THEME_STORAGE_KEY"]
