"""
Engine provisioning.

The orchestrator only depends on the ``EngineInstaller`` protocol; the default
implementation shells out to the Playwright CLI with the browser cache pointed
at the configured install root.
"""
from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Protocol, List

from .exceptions import InstallFailure
from .types import EngineType

logger = logging.getLogger(__name__)


class EngineInstaller(Protocol):
    def ensure_installed(self, engine_type: EngineType) -> None:
        ...


class PlaywrightInstaller:
    def __init__(self, install_root: Path, timeout_s: int = 600):
        self.install_root = Path(install_root)
        self.timeout_s = timeout_s

    def command(self, engine_type: EngineType) -> List[str]:
        return [sys.executable, "-m", "playwright", "install", engine_type.value]

    def ensure_installed(self, engine_type: EngineType) -> None:
        env = dict(os.environ)
        env["PLAYWRIGHT_BROWSERS_PATH"] = str(self.install_root)
        logger.info(f"Installing {engine_type.value} into {self.install_root}...")
        try:
            result = subprocess.run(
                self.command(engine_type),
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
                env=env,
            )
        except subprocess.TimeoutExpired as e:
            raise InstallFailure(
                f"Installing {engine_type.value} timed out after {self.timeout_s}s"
            ) from e
        except OSError as e:
            raise InstallFailure(f"Failed to run installer for {engine_type.value}: {e}") from e

        if result.returncode != 0:
            raise InstallFailure(
                f"Failed to install {engine_type.value}: {result.stderr.strip() or result.stdout.strip()}"
            )
        logger.info(f"{engine_type.value} installed successfully")
