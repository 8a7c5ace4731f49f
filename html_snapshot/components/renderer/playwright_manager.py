"""
Manages the Playwright browser session used to render HTML documents.

This module provides the `PlaywrightManager` class, an asynchronous context
manager that starts Playwright, launches headless Chromium and always closes
both again on exit. Its stage methods (`open_page`, `navigate`,
`capture_image`, `capture_document`) each wrap Playwright failures in their own
`RendererError` subclass.
"""
import os
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from playwright.async_api import async_playwright, Playwright, Browser, Page

from html_snapshot.core.exceptions import (
    RendererError,
    BrowserLaunchError,
    NavigationError,
    CaptureError,
)
from html_snapshot.core.logger import get_logger
from html_snapshot.models.schemas import RenderOptions

if TYPE_CHECKING:
    from html_snapshot.core.config import ConfigurationManager

logger = get_logger(__name__)

# Screenshot types Chromium can encode, keyed by file extension.
IMAGE_TYPES = {
    ".png": "png",
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
}


def image_type_for_path(path: str) -> str:
    """
    Returns the Playwright screenshot type for an output path's extension.

    Raises:
        CaptureError: If the extension has no supported image type.
    """
    extension = os.path.splitext(path)[1].lower()
    try:
        return IMAGE_TYPES[extension]
    except KeyError:
        raise CaptureError(
            path,
            f"Unsupported image extension '{extension or '(none)'}'. "
            f"Use one of: {', '.join(sorted(IMAGE_TYPES))}."
        ) from None


def file_uri(path: str) -> str:
    """Resolves a filesystem path to an absolute `file://` URI."""
    return Path(path).resolve().as_uri()


def write_capture(path: str, data: bytes) -> None:
    """
    Writes captured bytes to `path`. The parent directory must already exist;
    it is never created here.

    Raises:
        CaptureError: If the file cannot be written.
    """
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        logger.error(f"Writing capture to '{path}' failed: {e}", exc_info=True)
        raise CaptureError(path, str(e)) from e


class PlaywrightManager:
    """
    Asynchronous context manager for one headless Chromium session.

    Entering starts Playwright and launches the browser; exiting closes the
    browser and stops Playwright, on normal exit as well as on errors and
    cancellation.

    Attributes:
        options (RenderOptions): Rendering parameters for this session.
        playwright (Optional[Playwright]): The Playwright engine instance.
        browser (Optional[Browser]): The launched browser instance.
    """

    def __init__(self, config: Optional['ConfigurationManager'] = None, options: Optional[RenderOptions] = None):
        """
        Initializes the PlaywrightManager.

        Args:
            config (Optional[ConfigurationManager]): Used to build `RenderOptions`
                when `options` is not given.
            options (Optional[RenderOptions]): Explicit rendering parameters.
                Takes precedence over `config`.
        """
        self.options = options if options is not None else RenderOptions.from_config(config)
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        logger.debug(f"PlaywrightManager configured with browser args: {self.options.browser_args}")

    async def __aenter__(self) -> 'PlaywrightManager':
        """
        Starts Playwright and launches headless Chromium.

        Raises:
            BrowserLaunchError: If Playwright fails to start or the browser fails
                                to launch (e.g. browser binaries are not installed).
        """
        logger.debug("Entering PlaywrightManager context: starting Playwright and launching chromium.")
        try:
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=True,
                args=list(self.options.browser_args),
            )
            logger.info("Chromium browser launched.")
        except Exception as e:
            logger.error(f"Failed to initialize Playwright or launch chromium: {e}", exc_info=True)
            if self.playwright:
                try:
                    await self.playwright.stop()
                except Exception as stop_e:
                    logger.error(f"Error stopping Playwright during __aenter__ cleanup: {stop_e}", exc_info=True)
                self.playwright = None
            self.browser = None
            raise BrowserLaunchError(f"Failed to initialize Playwright or launch chromium: {e}") from e
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Closes the browser and stops Playwright. Cleanup errors are logged, not raised."""
        logger.debug("Exiting PlaywrightManager context: closing browser and stopping Playwright.")
        if self.browser:
            try:
                await self.browser.close()
                logger.info("Browser closed.")
            except Exception as e:
                logger.error(f"Error closing browser: {e}", exc_info=True)
        if self.playwright:
            try:
                await self.playwright.stop()
                logger.debug("Playwright stopped.")
            except Exception as e:
                logger.error(f"Error stopping Playwright: {e}", exc_info=True)

        self.browser = None
        self.playwright = None

    async def open_page(self) -> Page:
        """
        Opens a new page with the configured viewport.

        Raises:
            RendererError: If the manager has not been entered, or the page
                           cannot be created.
        """
        if not self.browser:
            logger.error("open_page called but browser is not initialized.")
            raise RendererError("Browser is not initialized. Ensure PlaywrightManager is used within an 'async with' statement.")

        viewport = self.options.viewport
        try:
            page = await self.browser.new_page(viewport={"width": viewport.width, "height": viewport.height})
        except Exception as e:
            logger.error(f"Failed to open a new page: {e}", exc_info=True)
            raise RendererError(f"Failed to open a new page: {e}") from e
        logger.debug(f"Opened page with viewport {viewport.width}x{viewport.height}.")
        return page

    async def navigate(self, page: Page, url: str) -> None:
        """
        Loads `url` and waits for the configured condition (network idle by default).

        Raises:
            NavigationError: If the document cannot be loaded or the wait times out.
        """
        timeout = self.options.navigation_timeout_ms
        logger.info(f"Navigating to {url} (wait_until={self.options.wait_until}, timeout={timeout}ms).")
        try:
            await page.goto(url, wait_until=self.options.wait_until, timeout=timeout)
        except Exception as e:
            logger.error(f"Navigation to '{url}' failed: {e}", exc_info=True)
            raise NavigationError(url, str(e)) from e

    async def capture_image(self, page: Page, path: str) -> None:
        """
        Writes a screenshot of `page` to `path`; the image type follows the extension.

        Raises:
            CaptureError: If the extension is unsupported, the screenshot fails, or
                          the file cannot be written (e.g. missing directory).
        """
        image_type = image_type_for_path(path)
        logger.debug(f"Capturing {image_type} screenshot to '{path}' (full_page={self.options.full_page}).")
        try:
            data = await page.screenshot(**self.options.screenshot_kwargs(image_type))
        except Exception as e:
            logger.error(f"Screenshot to '{path}' failed: {e}", exc_info=True)
            raise CaptureError(path, str(e)) from e
        write_capture(path, data)
        logger.info(f"Screenshot saved to: {path}")

    async def capture_document(self, page: Page, path: str) -> None:
        """
        Prints `page` to a PDF at `path`.

        Raises:
            CaptureError: If PDF generation or the file write fails.
        """
        logger.debug(
            f"Capturing PDF to '{path}' (format={self.options.pdf_format}, "
            f"landscape={self.options.landscape}, scale={self.options.scale})."
        )
        try:
            data = await page.pdf(**self.options.pdf_kwargs())
        except Exception as e:
            logger.error(f"PDF capture to '{path}' failed: {e}", exc_info=True)
            raise CaptureError(path, str(e)) from e
        write_capture(path, data)
        logger.info(f"PDF saved to: {path}")
