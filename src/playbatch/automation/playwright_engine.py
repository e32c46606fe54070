from typing import Optional, Dict, Callable, TypeVar

from playwright.sync_api import (
    sync_playwright,
    Page,
    Browser,
    BrowserContext,
    BrowserType,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
)

from .types import EngineType, LaunchConfig

T = TypeVar("T")


def _browser_types(pw: Playwright) -> Dict[EngineType, BrowserType]:
    return {
        EngineType.CHROMIUM: pw.chromium,
        EngineType.FIREFOX: pw.firefox,
        EngineType.WEBKIT: pw.webkit,
    }


def _translate_timeout(action: Callable[[], T], what: str) -> T:
    try:
        return action()
    except PlaywrightTimeoutError as e:
        raise TimeoutError(f"Timeout {what}") from e


class PlaywrightEngine:
    def __init__(self):
        self._pw: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def launch(self, engine_type: EngineType, config: LaunchConfig) -> None:
        self._pw = sync_playwright().start()
        try:
            browser_type = _browser_types(self._pw)[engine_type]
            self._browser = browser_type.launch(
                headless=config.headless,
                slow_mo=config.slow_mo_ms,
                executable_path=str(config.executable_path),
            )
        except Exception:
            self._pw.stop()
            self._pw = None
            raise

    def new_context(self) -> None:
        assert self._browser is not None
        self._context = self._browser.new_context()

    def new_page(self) -> None:
        assert self._context is not None
        self._page = self._context.new_page()

    def goto(self, url: str, wait_until: str = "load") -> None:
        assert self._page is not None
        page = self._page
        _translate_timeout(lambda: page.goto(url, wait_until=wait_until), f"loading {url}")

    def wait_for(self, selector: str, timeout_ms: int = 30000) -> None:
        assert self._page is not None
        page = self._page
        _translate_timeout(
            lambda: page.wait_for_selector(selector, state="attached", timeout=timeout_ms),
            f"waiting for selector: {selector}",
        )

    def click(self, selector: str, timeout_ms: int = 30000) -> None:
        assert self._page is not None
        page = self._page
        _translate_timeout(lambda: page.click(selector, timeout=timeout_ms), f"clicking {selector}")

    def fill(self, selector: str, value: str, timeout_ms: int = 30000) -> None:
        assert self._page is not None
        page = self._page
        _translate_timeout(lambda: page.fill(selector, value, timeout=timeout_ms), f"filling {selector}")

    def text_content(self, selector: str, timeout_ms: int = 30000) -> Optional[str]:
        assert self._page is not None
        page = self._page
        return _translate_timeout(
            lambda: page.text_content(selector, timeout=timeout_ms),
            f"reading text of {selector}",
        )

    def screenshot(self, full_page: bool = False, path: Optional[str] = None) -> bytes:
        assert self._page is not None
        page = self._page
        return _translate_timeout(
            lambda: page.screenshot(full_page=full_page, path=path), "taking screenshot"
        )

    def close(self) -> None:
        try:
            if self._browser:
                self._browser.close()
        finally:
            if self._pw:
                self._pw.stop()
            self._page = None
            self._context = None
            self._browser = None
            self._pw = None
