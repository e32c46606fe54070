"""
tests/conftest.py - shared fixtures; no test here starts a real browser.
"""
import logging
from pathlib import Path

import pytest

from playbatch.automation.launcher import Session
from playbatch.automation.types import EngineType, LaunchConfig
from playbatch.core.config import BatchConfig

from fakes import FakeEngine, FakeEngineFactory, FakeInstaller, FakeResolver

logging.getLogger("playbatch").setLevel(logging.WARNING)


@pytest.fixture
def batch_config(tmp_path: Path) -> BatchConfig:
    return BatchConfig(install_root=tmp_path / "browsers", host_platform="linux")


@pytest.fixture
def engine_factory() -> FakeEngineFactory:
    return FakeEngineFactory(dom={"#greeting": "  Hello  ", "#name": ""})


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver(installed={EngineType.CHROMIUM, EngineType.FIREFOX, EngineType.WEBKIT})


@pytest.fixture
def installer(resolver: FakeResolver) -> FakeInstaller:
    return FakeInstaller(resolver)


@pytest.fixture
def session() -> Session:
    engine = FakeEngine(dom={"#greeting": "  Hello  ", "#name": "", "#go": "Go"})
    config = LaunchConfig(executable_path=Path("/opt/chrome"))
    engine.launch(EngineType.CHROMIUM, config)
    return Session(engine, EngineType.CHROMIUM, config)
