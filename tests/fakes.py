"""
In-memory stand-ins for the browser engine, resolver and installer.

They record every call so tests can assert on ordering and call counts
without starting a real browser.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from playbatch.automation.exceptions import ExecutableNotFound
from playbatch.automation.types import EngineType, LaunchConfig


class FakeEngine:
    """Simulates one browser process holding a page whose DOM is a selector->text map."""

    def __init__(
        self,
        dom: Optional[Dict[str, str]] = None,
        fail_on: Optional[Dict[str, Exception]] = None,
        close_error: Optional[Exception] = None,
    ) -> None:
        self.dom: Dict[str, str] = dict(dom or {})
        self.fail_on = fail_on or {}
        self.close_error = close_error
        self.calls: List[str] = []
        self.close_count = 0
        self.engine_type: Optional[EngineType] = None
        self.config: Optional[LaunchConfig] = None
        self.url: Optional[str] = None
        self.screenshot_args: Dict[str, Any] = {}

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise self.fail_on[name]

    def launch(self, engine_type: EngineType, config: LaunchConfig) -> None:
        self._record("launch")
        self.engine_type = engine_type
        self.config = config

    def new_context(self) -> None:
        self._record("new_context")

    def new_page(self) -> None:
        self._record("new_page")

    def goto(self, url: str, wait_until: str = "load") -> None:
        self._record("goto")
        self.url = url

    def wait_for(self, selector: str, timeout_ms: int = 30000) -> None:
        self._record("wait_for")
        if selector not in self.dom:
            raise TimeoutError(f"Timeout waiting for selector: {selector}")

    def click(self, selector: str, timeout_ms: int = 30000) -> None:
        self._record("click")

    def fill(self, selector: str, value: str, timeout_ms: int = 30000) -> None:
        self._record("fill")
        self.dom[selector] = value

    def text_content(self, selector: str, timeout_ms: int = 30000) -> Optional[str]:
        self._record("text_content")
        return self.dom.get(selector)

    def screenshot(self, full_page: bool = False, path: Optional[str] = None) -> bytes:
        self._record("screenshot")
        self.screenshot_args = {"full_page": full_page, "path": path}
        data = b"full-document" if full_page else b"viewport"
        if path:
            Path(path).write_bytes(data)
        return data

    def close(self) -> None:
        self.calls.append("close")
        self.close_count += 1
        if self.close_error:
            raise self.close_error


class FakeEngineFactory:
    """Callable producing a fresh FakeEngine per session."""

    def __init__(self, **engine_kwargs: Any) -> None:
        self.engine_kwargs = engine_kwargs
        self.engines: List[FakeEngine] = []

    def __call__(self) -> FakeEngine:
        engine = FakeEngine(**self.engine_kwargs)
        self.engines.append(engine)
        return engine


class FakeResolver:
    """Resolves only engine types present in ``installed``."""

    def __init__(self, installed: Optional[Set[EngineType]] = None) -> None:
        self.installed: Set[EngineType] = set(installed or ())
        self.calls: List[EngineType] = []

    def resolve(self, engine_type: EngineType, install_root: Path) -> Path:
        self.calls.append(engine_type)
        if engine_type not in self.installed:
            raise ExecutableNotFound(f"{engine_type.value} not found under {install_root}")
        return Path(install_root) / engine_type.value / "bin"


class FakeInstaller:
    """Installs into a FakeResolver; can report failure while still installing."""

    def __init__(
        self,
        resolver: FakeResolver,
        installs: bool = True,
        error: Optional[Exception] = None,
    ) -> None:
        self.resolver = resolver
        self.installs = installs
        self.error = error
        self.calls: List[EngineType] = []

    def ensure_installed(self, engine_type: EngineType) -> None:
        self.calls.append(engine_type)
        if self.installs:
            self.resolver.installed.add(engine_type)
        if self.error:
            raise self.error


__all__ = [
    "FakeEngine",
    "FakeEngineFactory",
    "FakeInstaller",
    "FakeResolver",
]
