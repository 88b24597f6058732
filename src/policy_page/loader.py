from __future__ import annotations

from importlib import resources
from pathlib import Path
from urllib.parse import urlparse

import requests

from .config import SourceConfig
from .constants import EMBEDDED_RESOURCE

USER_AGENT = "policy-page/0.1"


class SourceUnavailable(RuntimeError):
    """Raised when the markdown source cannot be obtained."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


def is_remote(location: str) -> bool:
    parsed = urlparse(location)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class MarkdownLoader:
    def __init__(self, config: SourceConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def location(self) -> str:
        return self._config.markdown_url

    def load_primary(self) -> str:
        location = self._config.markdown_url
        if is_remote(location):
            return self._fetch(location)
        return self._read(Path(location))

    def load_embedded(self) -> str | None:
        if not self._config.use_embedded:
            return None
        if self._config.embedded_path is not None:
            try:
                return self._config.embedded_path.read_text(encoding="utf-8")
            except OSError:
                return None
        resource = resources.files("policy_page").joinpath(EMBEDDED_RESOURCE)
        if not resource.is_file():
            return None
        return resource.read_text(encoding="utf-8")

    def _fetch(self, url: str) -> str:
        try:
            response = self._session.get(
                url,
                headers={"User-Agent": USER_AGENT, "Accept": "text/markdown, text/plain"},
                timeout=self._config.timeout_s,
            )
        except requests.RequestException as exc:
            raise SourceUnavailable("FETCH_FAILED", f"Failed to load markdown file: {exc}") from exc
        if not response.ok:
            raise SourceUnavailable(
                "HTTP_STATUS", f"Failed to load markdown file: HTTP error! status: {response.status_code}"
            )
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        return response.text

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceUnavailable("NOT_FOUND", f"Failed to load markdown file: {path} does not exist") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailable("READ_FAILED", f"Failed to load markdown file: {exc}") from exc


__all__ = ["MarkdownLoader", "SourceUnavailable", "is_remote"]
