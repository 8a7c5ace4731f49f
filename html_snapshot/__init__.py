"""
html_snapshot: render a local HTML document to a full-page screenshot and a PDF
with headless Chromium.
"""

__version__ = "0.1.0"
