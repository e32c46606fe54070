from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, Union


class EngineType(str, Enum):
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class OperationKind(str, Enum):
    NAVIGATE = "navigate"
    TAKE_SCREENSHOT = "takeScreenshot"
    GET_TEXT = "getText"
    CLICK_ELEMENT = "clickElement"
    FILL_FORM = "fillForm"


@dataclass
class LaunchConfig:
    executable_path: Path
    headless: bool = True
    slow_mo_ms: int = 0


@dataclass(frozen=True)
class Navigate:
    url: str


@dataclass(frozen=True)
class Screenshot:
    url: str
    output_property_name: str = "screenshot"
    full_page: bool = False
    save_path: Optional[str] = None


@dataclass(frozen=True)
class GetText:
    url: str
    selector: str


@dataclass(frozen=True)
class ClickElement:
    url: str
    selector: str


@dataclass(frozen=True)
class FillForm:
    url: str
    selector: str
    value: str


OperationRequest = Union[Navigate, Screenshot, GetText, ClickElement, FillForm]


@dataclass
class OperationResult:
    payload: Dict[str, Any] = field(default_factory=dict)
    binary: Dict[str, bytes] = field(default_factory=dict)

    def to_output(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {"json": dict(self.payload)}
        if self.binary:
            output["binary"] = dict(self.binary)
        return output


@dataclass
class ErrorRecord:
    message: str
    engine_type: str
    host_platform: str

    def to_output(self) -> Dict[str, Any]:
        return {
            "json": {
                "error": self.message,
                "browserType": self.engine_type,
                "os": self.host_platform,
            }
        }


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ItemOutcome:
    index: int
    status: OutcomeStatus
    engine_type: str
    result: Optional[OperationResult] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


BatchEntry = Union[OperationResult, ErrorRecord]
