"""
Pydantic models for rendering parameters and render results.

`RenderOptions` gathers every parameter that influences the produced files
(viewport, navigation wait, screenshot and PDF settings). The defaults
reproduce the fixed layout the tool has always used; any field can be
overridden from the `renderer` section of the YAML configuration.
"""
from typing import Any, Dict, List, Literal, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError

from html_snapshot.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from html_snapshot.core.config import ConfigurationManager

DEFAULT_BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class Viewport(BaseModel):
    """Browser viewport in CSS pixels, at the default device scale factor."""
    width: int = Field(default=3200, gt=0)
    height: int = Field(default=2200, gt=0)


class PdfMargins(BaseModel):
    """Page margins for the PDF capture, as CSS length strings."""
    top: str = "0.05in"
    right: str = "0.05in"
    bottom: str = "0.05in"
    left: str = "0.05in"


class RenderOptions(BaseModel):
    """
    Parameters for one render run.

    Attributes:
        browser_args: Extra Chromium command-line switches. The defaults disable the
            sandbox, which containers commonly do not support.
        viewport: Page viewport used for layout and for the raster width.
        wait_until: Playwright navigation wait condition. 'networkidle' waits until
            there are no network connections for at least 500 ms.
        navigation_timeout_ms: Upper bound for navigation, including the idle wait.
        full_page: Capture the whole scrollable page instead of just the viewport.
        pdf_format: Paper format name understood by Chromium (e.g. 'A4', 'Letter').
        print_background: Include background colors and images in the PDF.
        scale: Content scale factor for the PDF (Chromium accepts 0.1 to 2).
        landscape: Landscape paper orientation.
        margin: PDF page margins.
    """
    browser_args: List[str] = Field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))
    viewport: Viewport = Field(default_factory=Viewport)
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = "networkidle"
    navigation_timeout_ms: int = Field(default=30000, ge=0)
    full_page: bool = True
    pdf_format: str = "A4"
    print_background: bool = True
    scale: float = Field(default=1.05, ge=0.1, le=2.0)
    landscape: bool = True
    margin: PdfMargins = Field(default_factory=PdfMargins)

    @classmethod
    def from_config(cls, config: Optional['ConfigurationManager'] = None) -> 'RenderOptions':
        """
        Builds options from the `renderer` section of the configuration.

        Missing keys keep their defaults, so a config file only needs to list what
        it changes.

        Args:
            config (Optional[ConfigurationManager]): Source of settings. If None,
                the defaults are returned.

        Raises:
            ConfigurationError: If a configured value fails validation.
        """
        if config is None:
            return cls()

        # config key -> field name
        mapping = {
            "renderer.browser_args": "browser_args",
            "renderer.viewport": "viewport",
            "renderer.navigation.wait_until": "wait_until",
            "renderer.navigation.timeout_ms": "navigation_timeout_ms",
            "renderer.screenshot.full_page": "full_page",
            "renderer.pdf.format": "pdf_format",
            "renderer.pdf.print_background": "print_background",
            "renderer.pdf.scale": "scale",
            "renderer.pdf.landscape": "landscape",
            "renderer.pdf.margin": "margin",
        }
        values: Dict[str, Any] = {}
        for key, field_name in mapping.items():
            value = config.get(key)
            if value is not None:
                values[field_name] = value

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid renderer configuration: {e}") from e

    def screenshot_kwargs(self, image_type: str) -> Dict[str, Any]:
        """Keyword arguments for Playwright's `page.screenshot`. The image bytes are returned, not written."""
        return {"full_page": self.full_page, "type": image_type}

    def pdf_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Playwright's `page.pdf`. The document bytes are returned, not written."""
        return {
            "format": self.pdf_format,
            "print_background": self.print_background,
            "scale": self.scale,
            "landscape": self.landscape,
            "margin": self.margin.model_dump(),
        }


class RenderResult(BaseModel):
    """Outcome of a successful render run."""
    source_url: str
    image_path: str
    document_path: str
    image_size: Optional[Tuple[int, int]] = None
    elapsed_seconds: float = 0.0
