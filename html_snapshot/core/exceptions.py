"""
Custom exception classes for html_snapshot.
"""


class HtmlSnapshotError(Exception):
    """
    Base class for all custom exceptions raised by html_snapshot.

    Attributes:
        message (str): A human-readable description of the error.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


# --- Configuration Related Exceptions ---
class ConfigurationError(HtmlSnapshotError):
    """
    Raised for errors related to application configuration, such as
    loading YAML files or invalid rendering option values.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Component Related Exceptions ---
class ComponentError(HtmlSnapshotError):
    """
    Base class for errors originating from within a specific component.

    Attributes:
        component_name (str): Name of the component where the error originated.
    """
    def __init__(self, component_name: str, message: str):
        full_message = f"Error in component '{component_name}': {message}"
        super().__init__(full_message)
        self.component_name = component_name


class RendererError(ComponentError):
    """Raised for errors in the Renderer component (browser session, navigation, capture)."""
    def __init__(self, message: str):
        super().__init__(component_name="Renderer", message=message)


class BrowserLaunchError(RendererError):
    """Raised when Playwright cannot start or the browser process cannot be launched."""


class NavigationError(RendererError):
    """
    Raised when the input document cannot be loaded: missing file, or the
    network-idle condition not reached before the navigation timeout.

    Attributes:
        url (str): The URL that failed to load.
    """
    def __init__(self, url: str, message: str):
        super().__init__(f"Failed to navigate to '{url}': {message}")
        self.url = url


class CaptureError(RendererError):
    """
    Raised when the raster or document capture fails, e.g. because the output
    directory does not exist or the image type is not supported.

    Attributes:
        path (str): The output path of the failed capture.
    """
    def __init__(self, path: str, message: str):
        super().__init__(f"Failed to capture '{path}': {message}")
        self.path = path
