"""
Orchestrates a render run: one HTML document in, one screenshot and one PDF out.
"""
import time
from typing import Optional, Tuple, TYPE_CHECKING

from PIL import Image

from html_snapshot.components.renderer.playwright_manager import PlaywrightManager, file_uri
from html_snapshot.core.exceptions import RendererError
from html_snapshot.core.logger import get_logger
from html_snapshot.models.schemas import RenderOptions, RenderResult

if TYPE_CHECKING:
    from html_snapshot.core.config import ConfigurationManager

logger = get_logger(__name__)


class RenderManager:
    """
    Runs the render pipeline against a single browser session.

    The stages run strictly in order: launch, open page, navigate, capture the
    screenshot, capture the PDF, close. Both captures see the same page state
    because nothing navigates between them. The browser is closed on every exit
    path; a screenshot written before a later failure stays on disk.
    """

    def __init__(self, config: Optional['ConfigurationManager'] = None, options: Optional[RenderOptions] = None):
        """
        Args:
            config (Optional[ConfigurationManager]): Configuration for building the
                rendering options when `options` is not given.
            options (Optional[RenderOptions]): Explicit rendering options.
        """
        self.config = config
        self.options = options if options is not None else RenderOptions.from_config(config)
        logger.debug("RenderManager initialized.")

    async def render(self, input_path: str, image_path: str, document_path: str) -> RenderResult:
        """
        Renders `input_path` to a screenshot at `image_path` and a PDF at `document_path`.

        Output directories must already exist; they are not created here.

        Args:
            input_path (str): HTML document to render. Resolved to an absolute path.
            image_path (str): Screenshot output; the extension selects PNG or JPEG.
            document_path (str): PDF output.

        Returns:
            RenderResult: Paths, screenshot pixel size and elapsed time.

        Raises:
            BrowserLaunchError: If the browser cannot be started.
            NavigationError: If the document cannot be loaded.
            CaptureError: If either capture fails.
        """
        url = file_uri(input_path)
        started = time.monotonic()
        logger.info(f"Rendering {url} -> image '{image_path}', document '{document_path}'.")

        try:
            async with PlaywrightManager(options=self.options) as pm:
                page = await pm.open_page()
                await pm.navigate(page, url)
                await pm.capture_image(page, image_path)
                await pm.capture_document(page, document_path)
        except RendererError as e:
            logger.error(f"Render of {url} failed: {e.message}")
            raise

        result = RenderResult(
            source_url=url,
            image_path=image_path,
            document_path=document_path,
            image_size=self._read_image_size(image_path),
            elapsed_seconds=round(time.monotonic() - started, 3),
        )
        size_text = f"{result.image_size[0]}x{result.image_size[1]}" if result.image_size else "unknown size"
        logger.info(f"Render of {url} finished in {result.elapsed_seconds}s (image {size_text}).")
        return result

    @staticmethod
    def _read_image_size(image_path: str) -> Optional[Tuple[int, int]]:
        """Pixel size of the written screenshot, or None if it cannot be read back."""
        try:
            with Image.open(image_path) as img:
                return img.size
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read image size from '{image_path}': {e}")
            return None


async def render_html(
    input_path: str,
    image_path: str,
    document_path: str,
    config: Optional['ConfigurationManager'] = None,
    options: Optional[RenderOptions] = None,
) -> RenderResult:
    """Convenience wrapper: `RenderManager(config, options).render(...)`."""
    return await RenderManager(config=config, options=options).render(input_path, image_path, document_path)
