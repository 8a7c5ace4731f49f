"""
Command-line entry point.

    html-snapshot INPUT_HTML IMAGE_OUT DOCUMENT_OUT

Renders INPUT_HTML with headless Chromium, writes a full-page screenshot to
IMAGE_OUT (PNG or JPEG by extension) and an A4 landscape PDF to DOCUMENT_OUT.
Rendering parameters come from the YAML configuration selected by APP_ENV.
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from html_snapshot.core.config import config_manager
from html_snapshot.core.exceptions import HtmlSnapshotError
from html_snapshot.core.logger import setup_logging, get_logger
from html_snapshot.core.manager import RenderManager
from html_snapshot.models.schemas import RenderOptions

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="html-snapshot",
        description="Render a local HTML file to a full-page screenshot and a PDF.",
    )
    parser.add_argument("input_html", help="HTML file to render")
    parser.add_argument("image_out", help="Screenshot output path (.png, .jpg or .jpeg)")
    parser.add_argument("document_out", help="PDF output path")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """
    Parses arguments and runs one render.

    Returns:
        int: Process exit status, 0 on success and 1 on any failure.
    """
    args = build_parser().parse_args(argv)

    try:
        config_manager.ensure_loaded()
        setup_logging(config_manager)
        options = RenderOptions.from_config(config_manager)
        manager = RenderManager(config=config_manager, options=options)
        asyncio.run(manager.render(args.input_html, args.image_out, args.document_out))
    except HtmlSnapshotError as e:
        logger.error(f"html-snapshot failed: {e}", exc_info=True)
        return 1
    except Exception as e:
        logger.critical(f"html-snapshot failed with an unexpected error: {e}", exc_info=True)
        return 1
    return 0


def main() -> None:
    sys.exit(run())
