"""
Renderer component for html_snapshot.

Drives a headless Chromium through Playwright to turn a local HTML document
into a raster screenshot and a PDF.
"""
from .playwright_manager import PlaywrightManager, image_type_for_path, file_uri, write_capture

__all__ = [
    "PlaywrightManager",
    "image_type_for_path",
    "file_uri",
    "write_capture",
]
