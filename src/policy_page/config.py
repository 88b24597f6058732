from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .constants import DEFAULT_CONFIG_PATH, THEME_STORAGE_KEY


@dataclass(slots=True)
class SourceConfig:
    markdown_url: str = "PRIVACY_POLICY.md"
    embedded_path: Path | None = None
    use_embedded: bool = True
    fallback_page: str | None = None
    timeout_s: float = 10.0


@dataclass(slots=True)
class PageConfig:
    title: str = "Privacy Policy"
    content_container: str = "privacy-content"
    loading_container: str = "loading"
    contact_email: str = "contact@example.com"
    stylesheet: str | None = "styles.css"


@dataclass(slots=True)
class ThemeConfig:
    storage_path: Path = Path(".policy-page.json")
    storage_key: str = THEME_STORAGE_KEY


@dataclass(slots=True)
class RuntimeConfig:
    output_dir: Path = Path("site")
    output_file: str = "index.html"
    log_file: str = "render.jsonl"
    enable_local_api: bool = False


@dataclass(slots=True)
class APIConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    source: SourceConfig = field(default_factory=SourceConfig)
    page: PageConfig = field(default_factory=PageConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: APIConfig = field(default_factory=APIConfig)

    @property
    def log_path(self) -> Path:
        return self.runtime.output_dir / self.runtime.log_file


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _optional_str(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build_source(data: Mapping[str, object] | None) -> SourceConfig:
    if not data:
        return SourceConfig()
    embedded = _optional_str(data.get("embedded_path"))
    return SourceConfig(
        markdown_url=str(data.get("markdown_url", "PRIVACY_POLICY.md")),
        embedded_path=Path(embedded) if embedded else None,
        use_embedded=bool(data.get("use_embedded", True)),
        fallback_page=_optional_str(data.get("fallback_page")),
        timeout_s=float(data.get("timeout_s", 10.0)),
    )


def _build_page(data: Mapping[str, object] | None) -> PageConfig:
    if not data:
        return PageConfig()
    return PageConfig(
        title=str(data.get("title", "Privacy Policy")),
        content_container=str(data.get("content_container", "privacy-content")),
        loading_container=str(data.get("loading_container", "loading")),
        contact_email=str(data.get("contact_email", "contact@example.com")),
        stylesheet=_optional_str(data.get("stylesheet", "styles.css")),
    )


def _build_theme(data: Mapping[str, object] | None) -> ThemeConfig:
    if not data:
        return ThemeConfig()
    return ThemeConfig(
        storage_path=Path(str(data.get("storage_path", ".policy-page.json"))),
        storage_key=str(data.get("storage_key", THEME_STORAGE_KEY)),
    )


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    return RuntimeConfig(
        output_dir=Path(str(data.get("output_dir", "site"))),
        output_file=str(data.get("output_file", "index.html")),
        log_file=str(data.get("log_file", "render.jsonl")),
        enable_local_api=bool(data.get("enable_local_api", False)),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "127.0.0.1")), port=int(data.get("port", 8000)))


def _section(raw: Mapping[str, object], name: str) -> Mapping[str, object] | None:
    value = raw.get(name)
    return value if isinstance(value, Mapping) else None


def load_config(path: Path | None = None) -> AppConfig:
    path = path or DEFAULT_CONFIG_PATH
    raw = _read_toml(path)
    return AppConfig(
        source=_build_source(_section(raw, "source")),
        page=_build_page(_section(raw, "page")),
        theme=_build_theme(_section(raw, "theme")),
        runtime=_build_runtime(_section(raw, "runtime")),
        api=_build_api(_section(raw, "api")),
    )


def dump_config(config: AppConfig) -> str:
    payload = {
        "source": {
            "markdown_url": config.source.markdown_url,
            "embedded_path": str(config.source.embedded_path) if config.source.embedded_path else None,
            "use_embedded": config.source.use_embedded,
            "fallback_page": config.source.fallback_page,
            "timeout_s": config.source.timeout_s,
        },
        "page": {
            "title": config.page.title,
            "content_container": config.page.content_container,
            "loading_container": config.page.loading_container,
            "contact_email": config.page.contact_email,
            "stylesheet": config.page.stylesheet,
        },
        "theme": {
            "storage_path": str(config.theme.storage_path),
            "storage_key": config.theme.storage_key,
        },
        "runtime": {
            "output_dir": str(config.runtime.output_dir),
            "output_file": config.runtime.output_file,
            "log_file": config.runtime.log_file,
            "enable_local_api": config.runtime.enable_local_api,
        },
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)


__all__ = [
    "APIConfig",
    "AppConfig",
    "PageConfig",
    "RuntimeConfig",
    "SourceConfig",
    "ThemeConfig",
    "dump_config",
    "load_config",
]
