"""
Exceptions raised while orchestrating a browser automation batch.
"""
from enum import Enum


class OrchestratorError(Exception):
    """Base class for errors raised while processing a work item."""
    pass


class ExecutableNotFound(OrchestratorError):
    """Raised when no usable engine binary exists under the install root."""
    pass


class InstallFailure(OrchestratorError):
    """Raised when provisioning an engine binary fails."""
    pass


class LaunchError(OrchestratorError):
    """Raised when the engine process (or its context/page) fails to start."""
    pass


class NavigationError(OrchestratorError):
    """Raised when the page fails to load the target URL."""
    pass


class OperationErrorKind(str, Enum):
    SELECTOR_NOT_FOUND = "selector_not_found"
    TIMEOUT = "timeout"
    OTHER = "other"


class OperationError(OrchestratorError):
    """Raised when the dispatched page interaction fails."""

    def __init__(self, kind: OperationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class InvalidRequestError(OrchestratorError, ValueError):
    """Raised when a work item lacks a field its operation requires.
    Inherits from ValueError so callers validating input can catch it generically.
    """
    pass
