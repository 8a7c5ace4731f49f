import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from PIL import Image

from html_snapshot.core.manager import RenderManager, render_html
from html_snapshot.core.exceptions import BrowserLaunchError, NavigationError, CaptureError
from html_snapshot.models.schemas import RenderOptions, RenderResult


@pytest.fixture(autouse=True)
def mock_manager_logger():
    with patch('html_snapshot.core.manager.logger', MagicMock()) as mock_log:
        yield mock_log


@pytest.fixture
def render_manager_mocker():
    """
    Provides a RenderManager whose PlaywrightManager is replaced by a mock.
    Stage calls are recorded in `calls` in the order they happen.
    """
    calls = []
    mock_pm = MagicMock()
    mock_page = MagicMock(name="page")

    async def aenter():
        calls.append("launch")
        return mock_pm

    async def aexit(*args):
        calls.append("close")
        return False

    async def open_page():
        calls.append("open_page")
        return mock_page

    async def navigate(page, url):
        calls.append("navigate")

    async def capture_image(page, path):
        calls.append("capture_image")
        Image.new("RGB", (320, 480), "white").save(path)

    async def capture_document(page, path):
        calls.append("capture_document")

    mock_pm.__aenter__ = AsyncMock(side_effect=aenter)
    mock_pm.__aexit__ = AsyncMock(side_effect=aexit)
    mock_pm.open_page = AsyncMock(side_effect=open_page)
    mock_pm.navigate = AsyncMock(side_effect=navigate)
    mock_pm.capture_image = AsyncMock(side_effect=capture_image)
    mock_pm.capture_document = AsyncMock(side_effect=capture_document)

    with patch('html_snapshot.core.manager.PlaywrightManager', return_value=mock_pm) as patched_pm:
        yield RenderManager(options=RenderOptions()), mock_pm, mock_page, calls, patched_pm


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<html><body><h1>Report</h1></body></html>")
    return path


@pytest.mark.asyncio
async def test_render_success_flow(render_manager_mocker, html_file, tmp_path):
    manager, mock_pm, mock_page, calls, patched_pm = render_manager_mocker
    image_path = str(tmp_path / "out.png")
    document_path = str(tmp_path / "out.pdf")

    result = await manager.render(str(html_file), image_path, document_path)

    assert calls == ["launch", "open_page", "navigate", "capture_image", "capture_document", "close"]
    patched_pm.assert_called_once_with(options=manager.options)
    mock_pm.navigate.assert_awaited_once_with(mock_page, html_file.resolve().as_uri())
    mock_pm.capture_image.assert_awaited_once_with(mock_page, image_path)
    mock_pm.capture_document.assert_awaited_once_with(mock_page, document_path)

    assert isinstance(result, RenderResult)
    assert result.source_url == html_file.resolve().as_uri()
    assert result.image_size == (320, 480)
    assert result.image_path == image_path
    assert result.document_path == document_path
    assert result.elapsed_seconds >= 0


@pytest.mark.asyncio
async def test_relative_input_path_is_resolved(render_manager_mocker, html_file, tmp_path, monkeypatch):
    manager, mock_pm, mock_page, _, _ = render_manager_mocker
    monkeypatch.chdir(tmp_path)

    await manager.render("page.html", str(tmp_path / "out.png"), str(tmp_path / "out.pdf"))

    url = mock_pm.navigate.call_args[0][1]
    assert url == html_file.resolve().as_uri()


@pytest.mark.asyncio
async def test_navigation_failure_skips_captures_and_closes(render_manager_mocker, tmp_path):
    manager, mock_pm, _, calls, _ = render_manager_mocker
    mock_pm.navigate.side_effect = NavigationError("file:///missing.html", "net::ERR_FILE_NOT_FOUND")

    with pytest.raises(NavigationError):
        await manager.render(str(tmp_path / "missing.html"), str(tmp_path / "out.png"), str(tmp_path / "out.pdf"))

    mock_pm.capture_image.assert_not_awaited()
    mock_pm.capture_document.assert_not_awaited()
    mock_pm.__aexit__.assert_awaited_once()
    assert not (tmp_path / "out.png").exists()


@pytest.mark.asyncio
async def test_image_failure_never_requests_document(render_manager_mocker, html_file, tmp_path):
    manager, mock_pm, _, _, _ = render_manager_mocker
    mock_pm.capture_image.side_effect = CaptureError("/no/such/dir/out.png", "ENOENT")

    with pytest.raises(CaptureError):
        await manager.render(str(html_file), "/no/such/dir/out.png", str(tmp_path / "out.pdf"))

    mock_pm.capture_document.assert_not_awaited()
    mock_pm.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_document_failure_keeps_image(render_manager_mocker, html_file, tmp_path):
    manager, mock_pm, _, calls, _ = render_manager_mocker
    image_path = tmp_path / "out.png"

    async def failing_document(page, path):
        calls.append("capture_document")
        raise CaptureError(path, "Printing failed")

    mock_pm.capture_document.side_effect = failing_document

    with pytest.raises(CaptureError):
        await manager.render(str(html_file), str(image_path), str(tmp_path / "out.pdf"))

    assert image_path.exists()
    assert calls[-1] == "close"


@pytest.mark.asyncio
async def test_launch_failure_propagates(html_file, tmp_path):
    mock_pm = MagicMock()
    mock_pm.__aenter__ = AsyncMock(side_effect=BrowserLaunchError("no chromium"))
    mock_pm.__aexit__ = AsyncMock(return_value=False)

    with patch('html_snapshot.core.manager.PlaywrightManager', return_value=mock_pm):
        with pytest.raises(BrowserLaunchError):
            await RenderManager().render(str(html_file), str(tmp_path / "out.png"), str(tmp_path / "out.pdf"))

    mock_pm.open_page.assert_not_called()


@pytest.mark.asyncio
async def test_unreadable_image_gives_no_size(render_manager_mocker, html_file, tmp_path):
    manager, mock_pm, _, _, _ = render_manager_mocker
    mock_pm.capture_image.side_effect = None  # nothing written

    result = await manager.render(str(html_file), str(tmp_path / "out.png"), str(tmp_path / "out.pdf"))

    assert result.image_size is None


def test_options_built_from_config():
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: {"renderer.pdf.landscape": False}.get(key, default)
    manager = RenderManager(config=config)
    assert manager.options.landscape is False
    assert manager.config is config


@pytest.mark.asyncio
async def test_render_html_wrapper(render_manager_mocker, html_file, tmp_path):
    _, mock_pm, _, calls, _ = render_manager_mocker

    result = await render_html(str(html_file), str(tmp_path / "out.png"), str(tmp_path / "out.pdf"))

    assert result.image_size == (320, 480)
    assert calls[0] == "launch" and calls[-1] == "close"
