"""Session orchestration for batches of browser automation items.

This package resolves (and if needed installs) engine binaries, launches one
isolated Playwright session per item, dispatches the requested page operation
and applies the batch's continue-on-failure policy.
"""

from .types import (
    EngineType,
    ErrorRecord,
    ItemOutcome,
    LaunchConfig,
    OperationKind,
    OperationResult,
    OutcomeStatus,
)
from .engine import AutomationEngine
from .exceptions import (
    ExecutableNotFound,
    InstallFailure,
    InvalidRequestError,
    LaunchError,
    NavigationError,
    OperationError,
    OperationErrorKind,
    OrchestratorError,
)

__all__ = [
    'AutomationEngine',
    'BatchExecutor',
    'EngineType',
    'ErrorRecord',
    'ExecutableNotFound',
    'InstallFailure',
    'InvalidRequestError',
    'ItemOutcome',
    'LaunchConfig',
    'LaunchError',
    'NavigationError',
    'OperationError',
    'OperationErrorKind',
    'OperationKind',
    'OperationResult',
    'OrchestratorError',
    'OutcomeStatus',
]


def __getattr__(name):
    # runner pulls in core.models, which itself imports from this package
    if name == "BatchExecutor":
        from .runner import BatchExecutor
        return BatchExecutor
    raise AttributeError(name)
