from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from policy_page.config import AppConfig, PageConfig, RuntimeConfig, SourceConfig, ThemeConfig

ConfigFactory = Callable[..., AppConfig]


@pytest.fixture
def build_config(tmp_path: Path) -> ConfigFactory:
    def factory(
        markdown_url: str | None = None,
        *,
        embedded_path: Path | None = None,
        use_embedded: bool = True,
        fallback_page: str | None = None,
        enable_local_api: bool = False,
    ) -> AppConfig:
        source = SourceConfig(
            markdown_url=markdown_url or str(tmp_path / "missing.md"),
            embedded_path=embedded_path,
            use_embedded=use_embedded,
            fallback_page=fallback_page,
            timeout_s=2.0,
        )
        runtime = RuntimeConfig(output_dir=tmp_path / "site", enable_local_api=enable_local_api)
        theme = ThemeConfig(storage_path=tmp_path / "prefs.json")
        page = PageConfig(contact_email="privacy@example.org")
        return AppConfig(source=source, page=page, theme=theme, runtime=runtime)

    return factory
