"""
Runtime configuration for batch execution.

Defaults can be overridden through environment variables and, from the CLI,
through command line options.
"""
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Mapping

from ..automation.resolver import normalize_platform

ENV_BROWSERS_PATH = "PLAYBATCH_BROWSERS_PATH"
ENV_PLAYWRIGHT_BROWSERS_PATH = "PLAYWRIGHT_BROWSERS_PATH"

DEFAULT_SELECTOR_TIMEOUT_MS = 30000
DEFAULT_INSTALL_TIMEOUT_S = 600


def default_install_root(
    host_platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    env = os.environ if environ is None else environ
    for name in (ENV_BROWSERS_PATH, ENV_PLAYWRIGHT_BROWSERS_PATH):
        # PLAYWRIGHT_BROWSERS_PATH=0 means "inside the package", which we don't manage
        if env.get(name) and env[name] != "0":
            return Path(env[name]).expanduser()

    platform = normalize_platform(host_platform or sys.platform)
    home = Path(env.get("HOME") or os.path.expanduser("~"))
    if platform == "darwin":
        return home / "Library" / "Caches" / "ms-playwright"
    if platform == "win32":
        local = env.get("LOCALAPPDATA")
        base = Path(local) if local else home / "AppData" / "Local"
        return base / "ms-playwright"
    return home / ".cache" / "ms-playwright"


@dataclass
class BatchConfig:
    continue_on_fail: bool = False
    install_root: Path = field(default_factory=default_install_root)
    selector_timeout_ms: int = DEFAULT_SELECTOR_TIMEOUT_MS
    navigation_wait_until: str = "load"
    install_timeout_s: int = DEFAULT_INSTALL_TIMEOUT_S
    host_platform: str = field(default_factory=lambda: sys.platform)
