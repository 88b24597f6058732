"""HTTP surface for serving the rendered policy page."""

from .app import create_app

__all__ = ["create_app"]
