"""
Models sub-package for html_snapshot.

Pydantic models describing rendering parameters and render results.
"""

from .schemas import Viewport, PdfMargins, RenderOptions, RenderResult

__all__ = [
    "Viewport",
    "PdfMargins",
    "RenderOptions",
    "RenderResult",
]
