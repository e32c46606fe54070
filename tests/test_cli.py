import base64
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from playbatch.automation.resolver import ExecutableResolver
from playbatch.automation.types import EngineType
from playbatch.cli import main as cli_main

from fakes import FakeEngineFactory


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    root = tmp_path / "browsers"
    binary = root / "chromium-1091" / ExecutableResolver().relative_binary(EngineType.CHROMIUM)
    binary.parent.mkdir(parents=True)
    binary.write_text("#!/bin/sh\n")
    binary.chmod(0o755)
    return root


@pytest.fixture
def factory(monkeypatch: pytest.MonkeyPatch) -> FakeEngineFactory:
    factory = FakeEngineFactory(dom={"#greeting": "  Hello  "})
    monkeypatch.setattr(cli_main, "PlaywrightEngine", factory)
    return factory


def _write_items(tmp_path: Path, items) -> Path:
    path = tmp_path / "items.json"
    path.write_text(json.dumps(items))
    return path


def test_run_writes_results(tmp_path: Path, install_root: Path, factory: FakeEngineFactory) -> None:
    items = _write_items(
        tmp_path,
        [
            {"url": "https://example.com"},
            {"operation": "getText", "url": "https://example.com", "selector": "#greeting"},
        ],
    )
    output = tmp_path / "out.json"

    result = CliRunner().invoke(
        cli_main.cli,
        ["--install-root", str(install_root), "run", str(items), "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text()) == [
        {"json": {"url": "https://example.com"}},
        {"json": {"text": "Hello"}},
    ]
    assert len(factory.engines) == 2


def test_run_writes_screenshots_to_binary_dir(
    tmp_path: Path, install_root: Path, factory: FakeEngineFactory
) -> None:
    items = _write_items(
        tmp_path, {"operation": "takeScreenshot", "url": "https://example.com", "dataPropertyName": "shot"}
    )
    output = tmp_path / "out.json"
    binary_dir = tmp_path / "shots"

    result = CliRunner().invoke(
        cli_main.cli,
        [
            "--install-root", str(install_root),
            "run", str(items), "-o", str(output), "--binary-dir", str(binary_dir),
        ],
    )

    assert result.exit_code == 0, result.output
    exported = json.loads(output.read_text())
    assert exported[0]["json"] == {}
    assert Path(exported[0]["binary"]["shot"]).read_bytes() == b"viewport"


def test_export_without_binary_dir_uses_base64(
    tmp_path: Path, install_root: Path, factory: FakeEngineFactory
) -> None:
    items = _write_items(tmp_path, [{"operation": "takeScreenshot", "url": "https://example.com"}])
    output = tmp_path / "out.json"

    result = CliRunner().invoke(
        cli_main.cli, ["--install-root", str(install_root), "run", str(items), "-o", str(output)]
    )

    assert result.exit_code == 0, result.output
    encoded = json.loads(output.read_text())[0]["binary"]["screenshot"]
    assert base64.b64decode(encoded) == b"viewport"


def test_run_aborts_without_continue(tmp_path: Path, install_root: Path, factory: FakeEngineFactory) -> None:
    items = _write_items(
        tmp_path,
        [
            {"operation": "clickElement", "url": "https://example.com", "selector": "#missing"},
            {"url": "https://example.com"},
        ],
    )

    result = CliRunner().invoke(
        cli_main.cli,
        ["--install-root", str(install_root), "run", str(items), "--selector-timeout", "10"],
    )

    assert result.exit_code == 1
    assert len(factory.engines) == 1


def test_run_continue_on_fail_records_errors(
    tmp_path: Path, install_root: Path, factory: FakeEngineFactory
) -> None:
    items = _write_items(
        tmp_path,
        [
            {"operation": "clickElement", "url": "https://example.com", "selector": "#missing"},
            {"url": "https://example.com"},
        ],
    )
    output = tmp_path / "out.json"

    result = CliRunner().invoke(
        cli_main.cli,
        [
            "--install-root", str(install_root),
            "run", str(items), "--continue-on-fail", "-o", str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    exported = json.loads(output.read_text())
    assert len(exported) == 2
    assert set(exported[0]["json"]) == {"error", "browserType", "os"}
    assert exported[1] == {"json": {"url": "https://example.com"}}


def test_run_rejects_non_object_items(tmp_path: Path, install_root: Path, factory: FakeEngineFactory) -> None:
    items = _write_items(tmp_path, ["https://example.com"])
    result = CliRunner().invoke(cli_main.cli, ["--install-root", str(install_root), "run", str(items)])
    assert result.exit_code != 0
    assert "list of objects" in result.output


def test_resolve_prints_path(install_root: Path) -> None:
    result = CliRunner().invoke(cli_main.cli, ["--install-root", str(install_root), "resolve", "chromium"])
    assert result.exit_code == 0
    assert "chromium-1091" in result.output


def test_resolve_missing_browser_exits_nonzero(install_root: Path) -> None:
    result = CliRunner().invoke(cli_main.cli, ["--install-root", str(install_root), "resolve", "webkit"])
    assert result.exit_code == 1
