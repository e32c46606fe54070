"""
Locate engine binaries inside a Playwright-style browser cache.

Each engine is unpacked into ``<install_root>/<engine>-<revision>/`` and the
binary sits at a platform-specific path inside that directory. When several
revisions are present the highest one with a usable binary wins.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import ExecutableNotFound
from .types import EngineType

logger = logging.getLogger(__name__)


EXECUTABLE_LAYOUT: Dict[EngineType, Dict[str, str]] = {
    EngineType.CHROMIUM: {
        "linux": "chrome-linux/chrome",
        "darwin": "chrome-mac/Chromium.app/Contents/MacOS/Chromium",
        "win32": "chrome-win/chrome.exe",
    },
    EngineType.FIREFOX: {
        "linux": "firefox/firefox",
        "darwin": "firefox/Nightly.app/Contents/MacOS/firefox",
        "win32": "firefox/firefox.exe",
    },
    EngineType.WEBKIT: {
        "linux": "pw_run.sh",
        "darwin": "pw_run.sh",
        "win32": "Playwright.exe",
    },
}


def normalize_platform(host_platform: str) -> str:
    if host_platform.startswith("linux"):
        return "linux"
    if host_platform.startswith(("win", "cygwin", "msys")):
        return "win32"
    return host_platform


def _revision(directory: Path) -> int:
    suffix = directory.name.rsplit("-", 1)[-1]
    return int(suffix) if suffix.isdigit() else -1


class ExecutableResolver:
    def __init__(self, host_platform: Optional[str] = None):
        self.host_platform = normalize_platform(host_platform or sys.platform)

    def relative_binary(self, engine_type: EngineType) -> str:
        layout = EXECUTABLE_LAYOUT[engine_type]
        if self.host_platform not in layout:
            raise ExecutableNotFound(
                f"No known {engine_type.value} layout for platform '{self.host_platform}'"
            )
        return layout[self.host_platform]

    def candidates(self, engine_type: EngineType, install_root: Path) -> List[Path]:
        """Return candidate binaries, newest revision first."""
        root = Path(install_root)
        if not root.is_dir():
            return []
        relative = self.relative_binary(engine_type)
        dirs = [d for d in root.glob(f"{engine_type.value}-*") if d.is_dir()]
        dirs.sort(key=_revision, reverse=True)
        return [d / relative for d in dirs]

    def _is_valid(self, path: Path) -> bool:
        if not path.is_file():
            return False
        if self.host_platform == "win32":
            return True
        return os.access(path, os.X_OK)

    def resolve(self, engine_type: EngineType, install_root: Path) -> Path:
        for candidate in self.candidates(engine_type, install_root):
            if self._is_valid(candidate):
                logger.debug(f"Resolved {engine_type.value} executable: {candidate}")
                return candidate
            logger.debug(f"Skipping unusable candidate: {candidate}")
        raise ExecutableNotFound(
            f"Browser executable for {engine_type.value} not found under {install_root}"
        )
