from __future__ import annotations

import logging
from typing import Callable

from .engine import AutomationEngine
from .exceptions import LaunchError, NavigationError
from .types import EngineType, LaunchConfig

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], AutomationEngine]


class Session:
    """Exclusive owner of one engine process, context and page.

    ``close()`` may be called any number of times; the engine is closed once.
    """

    def __init__(self, engine: AutomationEngine, engine_type: EngineType, config: LaunchConfig):
        self.engine = engine
        self.engine_type = engine_type
        self.config = config
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.engine.close()
        except Exception as e:
            # The item's own outcome is already decided at this point.
            logger.warning(f"Error closing {self.engine_type.value} session: {e}")


class SessionLauncher:
    def __init__(self, engine_factory: EngineFactory, wait_until: str = "load"):
        self.engine_factory = engine_factory
        self.wait_until = wait_until

    def launch(self, engine_type: EngineType, config: LaunchConfig, url: str) -> Session:
        """Start an engine, open a context and page, and load ``url``.

        Raises LaunchError if the process, context or page cannot be created and
        NavigationError if the page fails to load. Any partially started session
        is closed before the error propagates.
        """
        engine = self.engine_factory()
        logger.info(f"Launching {engine_type.value} from: {config.executable_path}")
        try:
            engine.launch(engine_type, config)
        except Exception as e:
            raise LaunchError(f"Failed to launch {engine_type.value}: {e}") from e

        session = Session(engine, engine_type, config)
        try:
            try:
                engine.new_context()
                engine.new_page()
            except Exception as e:
                raise LaunchError(f"Failed to open page in {engine_type.value}: {e}") from e
            try:
                engine.goto(url, wait_until=self.wait_until)
            except Exception as e:
                raise NavigationError(f"Failed to load {url}: {e}") from e
        except (LaunchError, NavigationError):
            session.close()
            raise

        return session
