"""
Map an operation request onto a live session.

Each request variant gets its own handler; selector-based operations first wait
for the element so a missing element is reported distinctly from a slow one.
"""
from __future__ import annotations

import logging
from typing import Callable, TypeVar

from .exceptions import OperationError, OperationErrorKind, OrchestratorError
from .launcher import Session
from .types import (
    OperationRequest,
    OperationResult,
    Navigate,
    Screenshot,
    GetText,
    ClickElement,
    FillForm,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationDispatcher:
    def __init__(self, selector_timeout_ms: int = 30000):
        self.selector_timeout_ms = selector_timeout_ms

    def dispatch(self, request: OperationRequest, session: Session) -> OperationResult:
        if isinstance(request, Navigate):
            return self._navigate(request, session)
        if isinstance(request, Screenshot):
            return self._screenshot(request, session)
        if isinstance(request, GetText):
            return self._get_text(request, session)
        if isinstance(request, ClickElement):
            return self._click(request, session)
        if isinstance(request, FillForm):
            return self._fill(request, session)
        raise TypeError(f"Unsupported operation request: {type(request).__name__}")

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _locate(self, session: Session, selector: str) -> None:
        try:
            session.engine.wait_for(selector, timeout_ms=self.selector_timeout_ms)
        except TimeoutError as e:
            raise OperationError(
                OperationErrorKind.SELECTOR_NOT_FOUND,
                f"Selector '{selector}' not found within {self.selector_timeout_ms} ms",
            ) from e
        except Exception as e:
            raise OperationError(
                OperationErrorKind.OTHER, f"Failed to locate '{selector}': {e}"
            ) from e

    def _step(self, what: str, action: Callable[[], T]) -> T:
        try:
            return action()
        except OrchestratorError:
            raise
        except TimeoutError as e:
            raise OperationError(OperationErrorKind.TIMEOUT, f"Timed out {what}: {e}") from e
        except Exception as e:
            raise OperationError(OperationErrorKind.OTHER, f"Failed {what}: {e}") from e

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------
    def _navigate(self, request: Navigate, session: Session) -> OperationResult:
        # the launcher has already loaded the page
        return OperationResult(payload={"url": request.url})

    def _get_text(self, request: GetText, session: Session) -> OperationResult:
        self._locate(session, request.selector)
        text = self._step(
            f"reading text of '{request.selector}'",
            lambda: session.engine.text_content(request.selector, timeout_ms=self.selector_timeout_ms),
        )
        return OperationResult(payload={"text": (text or "").strip()})

    def _click(self, request: ClickElement, session: Session) -> OperationResult:
        self._locate(session, request.selector)
        self._step(
            f"clicking '{request.selector}'",
            lambda: session.engine.click(request.selector, timeout_ms=self.selector_timeout_ms),
        )
        return OperationResult(payload={"clicked": True, "selector": request.selector})

    def _fill(self, request: FillForm, session: Session) -> OperationResult:
        self._locate(session, request.selector)
        self._step(
            f"filling '{request.selector}'",
            lambda: session.engine.fill(
                request.selector, request.value, timeout_ms=self.selector_timeout_ms
            ),
        )
        return OperationResult(
            payload={"filled": True, "selector": request.selector, "value": request.value}
        )

    def _screenshot(self, request: Screenshot, session: Session) -> OperationResult:
        data = self._step(
            "taking screenshot",
            lambda: session.engine.screenshot(
                full_page=request.full_page, path=request.save_path or None
            ),
        )
        if request.save_path:
            logger.info(f"Screenshot saved to {request.save_path}")
        return OperationResult(payload={}, binary={request.output_property_name: data})
