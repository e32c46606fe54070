from typing import Protocol, Optional

from .types import EngineType, LaunchConfig


class AutomationEngine(Protocol):
    """One engine process with a single context and page.

    ``wait_for`` only waits for the selector to be attached to the DOM; hidden
    elements count as present. Timeouts surface as the builtin ``TimeoutError``
    so callers stay independent of the driver library.
    """

    def launch(self, engine_type: EngineType, config: LaunchConfig) -> None:
        ...

    def new_context(self) -> None:
        ...

    def new_page(self) -> None:
        ...

    def goto(self, url: str, wait_until: str = "load") -> None:
        ...

    def wait_for(self, selector: str, timeout_ms: int = 30000) -> None:
        ...

    def click(self, selector: str, timeout_ms: int = 30000) -> None:
        ...

    def fill(self, selector: str, value: str, timeout_ms: int = 30000) -> None:
        ...

    def text_content(self, selector: str, timeout_ms: int = 30000) -> Optional[str]:
        ...

    def screenshot(self, full_page: bool = False, path: Optional[str] = None) -> bytes:
        ...

    def close(self) -> None:
        ...
