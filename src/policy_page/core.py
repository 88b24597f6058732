from __future__ import annotations

import time
from dataclasses import dataclass

from .config import AppConfig
from .constants import EMBEDDED_RESOURCE
from .decorate import decorate_fragment
from .loader import MarkdownLoader, SourceUnavailable
from .logging import RenderLogEntry, RenderLogger, StageTimings
from .models import ContentSource, RenderOutcome, RenderStatus, SiteResult
from .page import error_panel, render_document
from .pipeline import ConversionError, MarkdownPipeline
from .theme import Theme
from .utils import atomic_write, elapsed_ms, generate_run_id


@dataclass(slots=True)
class _Attempt:
    run_id: str
    source: ContentSource | None
    location: str
    markdown: str = ""
    load_ms: float = 0.0
    convert_ms: float = 0.0
    decorate_ms: float = 0.0


class PolicyRenderer:
    def __init__(
        self,
        config: AppConfig,
        *,
        loader: MarkdownLoader | None = None,
        pipeline: MarkdownPipeline | None = None,
        logger: RenderLogger | None = None,
    ) -> None:
        self._config = config
        self._loader = loader or MarkdownLoader(config.source)
        self._pipeline = pipeline or MarkdownPipeline()
        self._logger = logger or RenderLogger(config.log_path)

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def logger(self) -> RenderLogger:
        return self._logger

    def convert(self, markdown: str, *, decorate: bool = True) -> str:
        """Run the pipeline stages and, unless disabled, the decoration pass."""

        if not decorate:
            return self._pipeline.render(markdown)
        return self._convert_timed(markdown)[0]

    def render(self, *, run_id: str | None = None) -> RenderOutcome:
        attempt = _Attempt(
            run_id=run_id or generate_run_id(),
            source=ContentSource.PRIMARY,
            location=self._loader.location,
        )
        warnings: list[str] = []
        status = RenderStatus.LOADED
        load_start = time.perf_counter()
        try:
            attempt.markdown = self._loader.load_primary()
        except SourceUnavailable as exc:
            attempt.load_ms = elapsed_ms(load_start)
            self._log(attempt, "source_unavailable", [], exc.code)
            warnings.append(exc.code)
            embedded = self._loader.load_embedded()
            if embedded is None:
                return self._without_content(attempt, warnings, exc)
            attempt.source = ContentSource.EMBEDDED
            attempt.location = self._embedded_location()
            attempt.markdown = embedded
            status = RenderStatus.FALLBACK
        attempt.load_ms = elapsed_ms(load_start)

        try:
            fragment, attempt.convert_ms, attempt.decorate_ms = self._convert_timed(attempt.markdown)
        except ConversionError as exc:
            self._log(attempt, "failure", warnings, exc.code)
            return RenderOutcome(
                run_id=attempt.run_id,
                status=RenderStatus.ERROR,
                html=error_panel(self._config.page.contact_email),
                source=attempt.source,
                error_code=exc.code,
                warnings=warnings,
            )

        self._log(attempt, status.value, warnings, None)
        return RenderOutcome(
            run_id=attempt.run_id,
            status=status,
            html=fragment,
            source=attempt.source,
            warnings=warnings,
        )

    def write_site(self, theme: Theme = Theme.LIGHT, *, run_id: str | None = None) -> SiteResult:
        start = time.perf_counter()
        outcome = self.render(run_id=run_id)
        document = render_document(outcome, self._config.page, theme)
        output_path = self._config.runtime.output_dir / self._config.runtime.output_file
        atomic_write(output_path, document)
        elapsed = time.perf_counter() - start
        summary = f"Rendered {outcome.status.value} page -> {output_path} in {elapsed:.2f}s"
        return SiteResult(outcome=outcome, output_path=output_path, summary=summary)

    def _convert_timed(self, markdown: str) -> tuple[str, float, float]:
        convert_start = time.perf_counter()
        fragment = self._pipeline.render(markdown)
        convert_ms = elapsed_ms(convert_start)
        decorate_start = time.perf_counter()
        try:
            decorated = decorate_fragment(fragment)
        except Exception as exc:
            raise ConversionError("DECORATION_FAILED", f"Failed to decorate markdown: {exc}") from exc
        return decorated, convert_ms, elapsed_ms(decorate_start)

    def _without_content(
        self, attempt: _Attempt, warnings: list[str], exc: SourceUnavailable
    ) -> RenderOutcome:
        attempt.source = None
        attempt.location = ""
        fallback_page = self._config.source.fallback_page
        if fallback_page:
            self._log(attempt, RenderStatus.REDIRECT.value, warnings, exc.code)
            return RenderOutcome(
                run_id=attempt.run_id,
                status=RenderStatus.REDIRECT,
                html="",
                redirect_url=fallback_page,
                error_code=exc.code,
                warnings=warnings,
            )
        self._log(attempt, "failure", warnings, exc.code)
        return RenderOutcome(
            run_id=attempt.run_id,
            status=RenderStatus.ERROR,
            html=error_panel(self._config.page.contact_email),
            error_code=exc.code,
            warnings=warnings,
        )

    def _embedded_location(self) -> str:
        if self._config.source.embedded_path is not None:
            return str(self._config.source.embedded_path)
        return f"package:policy_page/{EMBEDDED_RESOURCE}"

    def _log(self, attempt: _Attempt, status: str, warnings: list[str], error_code: str | None) -> None:
        self._logger.append(
            RenderLogEntry(
                run_id=attempt.run_id,
                source=attempt.source.value if attempt.source else "none",
                location=attempt.location,
                status=status,
                warnings=list(warnings),
                error_code=error_code,
                timings=StageTimings(
                    load_ms=attempt.load_ms,
                    convert_ms=attempt.convert_ms,
                    decorate_ms=attempt.decorate_ms,
                ),
                size_bytes=len(attempt.markdown.encode("utf-8")),
            )
        )


__all__ = [
    "ConversionError",
    "PolicyRenderer",
    "RenderOutcome",
    "SourceUnavailable",
]
