from dataclasses import dataclass
from typing import Any, Mapping

from ..automation.exceptions import InvalidRequestError
from ..automation.types import (
    EngineType,
    OperationKind,
    OperationRequest,
    Navigate,
    Screenshot,
    GetText,
    ClickElement,
    FillForm,
)


@dataclass
class WorkItem:
    """A single batch entry as supplied by the caller.

    ``from_dict`` checks the shape of the raw item; ``to_request`` and friends
    check what each operation needs. Both raise InvalidRequestError, which the
    batch executor records against the item alone.
    """
    operation: str = OperationKind.NAVIGATE.value
    url: str = ""
    selector: str = ""
    value: str = ""
    data_property_name: str = "screenshot"
    browser: str = EngineType.CHROMIUM.value
    headless: bool = True
    slow_mo: Any = 0
    full_page: bool = False
    screenshot_path: str = ""

    def engine_type(self) -> EngineType:
        try:
            return EngineType(self.browser)
        except ValueError:
            choices = ", ".join(e.value for e in EngineType)
            raise InvalidRequestError(
                f"Unsupported browser '{self.browser}' (expected one of: {choices})"
            )

    def slow_mo_ms(self) -> int:
        slow_mo = 0 if self.slow_mo is None else self.slow_mo
        # bool is an int subclass
        if isinstance(slow_mo, bool) or not isinstance(slow_mo, int):
            raise InvalidRequestError(f"slowMo must be an integer, got {self.slow_mo!r}")
        if slow_mo < 0:
            raise InvalidRequestError(f"slowMo must be non-negative, got {slow_mo}")
        return slow_mo

    def _require(self, name: str, value: str) -> str:
        if not value:
            raise InvalidRequestError(
                f"Operation '{self.operation}' requires a non-empty '{name}'"
            )
        return value

    def to_request(self) -> OperationRequest:
        try:
            kind = OperationKind(self.operation)
        except ValueError:
            raise InvalidRequestError(f"Unsupported operation '{self.operation}'")

        url = self._require("url", self.url)
        if kind == OperationKind.NAVIGATE:
            return Navigate(url=url)
        if kind == OperationKind.TAKE_SCREENSHOT:
            return Screenshot(
                url=url,
                output_property_name=self._require("dataPropertyName", self.data_property_name),
                full_page=self.full_page,
                save_path=self.screenshot_path or None,
            )
        selector = self._require("selector", self.selector)
        if kind == OperationKind.GET_TEXT:
            return GetText(url=url, selector=selector)
        if kind == OperationKind.CLICK_ELEMENT:
            return ClickElement(url=url, selector=selector)
        return FillForm(url=url, selector=selector, value=self._require("value", self.value))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'WorkItem':
        """Create a WorkItem from the external (camelCase) item format."""
        if not isinstance(data, Mapping):
            raise InvalidRequestError(
                f"Work item must be an object, got {type(data).__name__}"
            )
        browser_options = _options(data, 'browserOptions')
        screenshot_options = _options(data, 'screenshotOptions')
        return cls(
            operation=data.get('operation') or OperationKind.NAVIGATE.value,
            url=data.get('url') or "",
            selector=data.get('selector') or "",
            value="" if data.get('value') is None else str(data['value']),
            data_property_name=data.get('dataPropertyName') or "screenshot",
            browser=data.get('browser') or EngineType.CHROMIUM.value,
            headless=_flag(browser_options, 'headless', True),
            slow_mo=browser_options.get('slowMo', 0),
            full_page=_flag(screenshot_options, 'fullPage', False),
            screenshot_path=screenshot_options.get('path') or "",
        )


def _options(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    options = data.get(name)
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        raise InvalidRequestError(f"'{name}' must be an object, got {options!r}")
    return options


def _flag(options: Mapping[str, Any], name: str, default: bool) -> bool:
    value = options.get(name)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InvalidRequestError(f"'{name}' must be true or false, got {value!r}")
    return value
