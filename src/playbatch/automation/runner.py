from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..core.config import BatchConfig
from ..core.models import WorkItem
from .dispatcher import OperationDispatcher
from .exceptions import ExecutableNotFound, LaunchError
from .installer import EngineInstaller, PlaywrightInstaller
from .launcher import EngineFactory, SessionLauncher
from .resolver import ExecutableResolver
from .types import (
    BatchEntry,
    EngineType,
    ErrorRecord,
    ItemOutcome,
    LaunchConfig,
    OutcomeStatus,
)

log = logging.getLogger(__name__)


class BatchExecutor:
    """Run work items one at a time, each in its own browser session.

    Every item goes through resolve -> [install -> resolve] -> launch ->
    dispatch -> close. ``run_item`` never raises; ``run`` decides from
    ``config.continue_on_fail`` whether a failed item aborts the batch or is
    recorded as an ErrorRecord.
    """

    def __init__(
        self,
        engine_factory: EngineFactory,
        config: Optional[BatchConfig] = None,
        resolver: Optional[ExecutableResolver] = None,
        installer: Optional[EngineInstaller] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or BatchConfig()
        self.resolver = resolver or ExecutableResolver(self.config.host_platform)
        self.installer = installer or PlaywrightInstaller(
            self.config.install_root, timeout_s=self.config.install_timeout_s
        )
        self.launcher = SessionLauncher(engine_factory, wait_until=self.config.navigation_wait_until)
        self.dispatcher = OperationDispatcher(selector_timeout_ms=self.config.selector_timeout_ms)
        self.log = logger or log

    def resolve_executable(self, engine_type: EngineType) -> Path:
        """Resolve the engine binary, installing it at most once on a miss."""
        root = Path(self.config.install_root)
        try:
            return self.resolver.resolve(engine_type, root)
        except ExecutableNotFound as e:
            self.log.warning(f"Browser path error: {e}")

        try:
            self.installer.ensure_installed(engine_type)
        except Exception as e:
            # A partial install may still have produced a usable binary.
            self.log.warning(f"Installing {engine_type.value} failed: {e}")

        try:
            return self.resolver.resolve(engine_type, root)
        except ExecutableNotFound as e:
            raise LaunchError(
                f"Browser executable for {engine_type.value} still missing after install: {e}"
            ) from e

    def run_item(self, index: int, raw: Union[WorkItem, Mapping[str, Any]]) -> ItemOutcome:
        session = None
        browser = _browser_name(raw)
        try:
            item = raw if isinstance(raw, WorkItem) else WorkItem.from_dict(raw)
            request = item.to_request()
            engine_type = item.engine_type()
            launch_options = {"headless": item.headless, "slow_mo_ms": item.slow_mo_ms()}

            executable_path = self.resolve_executable(engine_type)
            config = LaunchConfig(executable_path=executable_path, **launch_options)
            session = self.launcher.launch(engine_type, config, request.url)
            result = self.dispatcher.dispatch(request, session)
        except Exception as e:
            self.log.error(f"Item {index} (on {browser}) failed: {e}")
            self.log.debug("Item failure details", exc_info=True)
            return ItemOutcome(
                index=index, status=OutcomeStatus.FAILED, engine_type=browser, error=e
            )
        finally:
            if session is not None:
                session.close()

        return ItemOutcome(
            index=index, status=OutcomeStatus.SUCCESS, engine_type=browser, result=result
        )

    def run(self, items: Iterable[Union[WorkItem, Mapping[str, Any]]]) -> List[BatchEntry]:
        results: List[BatchEntry] = []
        for index, raw in enumerate(items):
            outcome = self.run_item(index, raw)
            if outcome.ok:
                assert outcome.result is not None
                results.append(outcome.result)
                continue

            assert outcome.error is not None
            if not self.config.continue_on_fail:
                raise outcome.error
            results.append(
                ErrorRecord(
                    message=str(outcome.error),
                    engine_type=outcome.engine_type,
                    host_platform=self.config.host_platform,
                )
            )
        return results


def _browser_name(raw: Any) -> str:
    """Best-effort browser name for error records, even for malformed items."""
    if isinstance(raw, WorkItem):
        return raw.browser
    if isinstance(raw, Mapping) and isinstance(raw.get("browser"), str) and raw["browser"]:
        return raw["browser"]
    return EngineType.CHROMIUM.value
