"""Render a markdown privacy policy into a themed, decorated HTML page."""

from .config import AppConfig, load_config
from .core import PolicyRenderer
from .loader import MarkdownLoader, SourceUnavailable
from .models import RenderOutcome, RenderStatus
from .pipeline import ConversionError, MarkdownPipeline, render_markdown

__all__ = [
    "AppConfig",
    "ConversionError",
    "MarkdownLoader",
    "MarkdownPipeline",
    "PolicyRenderer",
    "RenderOutcome",
    "RenderStatus",
    "SourceUnavailable",
    "load_config",
    "render_markdown",
]
