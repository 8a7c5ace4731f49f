"""
Components sub-package for html_snapshot.

The `__all__` variable defines the public API of this sub-package,
making the renderer directly importable from `html_snapshot.components`.
"""

from .renderer.playwright_manager import PlaywrightManager

__all__ = [
    "PlaywrightManager",
]
