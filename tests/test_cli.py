"""Tests for the command line interface and logging setup."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest
from loguru import logger

from gdocs_source.__main__ import main, parse_folder_id
from gdocs_source.logging import configure_logging

GOLDEN_DIR = Path(__file__).parent / "golden"


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def run_cli(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["gdocs-source", *args])
    return main()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://drive.google.com/drive/folders/1AbC_d-9", "1AbC_d-9"),
        ("https://drive.google.com/drive/u/0/folders/xyz?usp=sharing", "xyz"),
        ("plain-id", "plain-id"),
    ],
)
def test_parse_folder_id(value: str, expected: str) -> None:
    assert parse_folder_id(value) == expected


def test_convert_markdown(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(monkeypatch, "convert", str(GOLDEN_DIR / "doc-intro.json"))

    assert code == 0
    assert capsys.readouterr().out == "## Intro\n\n**Hello**\n"


def test_convert_text(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(
        monkeypatch, "convert", str(GOLDEN_DIR / "doc-intro.json"), "--format", "text"
    )

    assert code == 0
    assert capsys.readouterr().out == "Intro\nHello\n"


def test_convert_json(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(
        monkeypatch, "convert", str(GOLDEN_DIR / "doc-intro.json"), "--format", "json"
    )

    assert code == 0
    tree = json.loads(capsys.readouterr().out)
    assert [block["type"] for block in tree] == ["heading", "paragraph"]


def test_convert_reports_unsupported_kind(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    code = run_cli(monkeypatch, "convert", str(GOLDEN_DIR / "doc-broken.json"))

    assert code == 1
    assert "Unsupported block kind 'hologram'" in capsys.readouterr().err


def test_convert_missing_file(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    code = run_cli(monkeypatch, "convert", str(tmp_path / "nope.json"))

    assert code == 1
    assert "File not found" in capsys.readouterr().err


def test_nodes_without_configuration_fails(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("API_KEY", "CLIENT_ID", "CLIENT_SECRET", "FOLDERS_IDS"):
        monkeypatch.delenv(f"GDOCS_{name}", raising=False)

    code = run_cli(monkeypatch, "nodes")

    assert code == 1
    assert "Missing API key" in capsys.readouterr().err


def test_json_logs(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="INFO", json_logs=True)

    logger.bind(file_id="f1").warning("Skipping '{}'", "Doc")
    logger.debug("not emitted")

    lines = capsys.readouterr().err.strip().splitlines()
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["severity"] == "WARNING"
    assert entry["message"] == "Skipping 'Doc'"
    assert entry["file_id"] == "f1"


def test_standard_logging_is_intercepted(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="DEBUG", json_logs=True)

    logging.getLogger("httpx").info("HTTP Request: GET https://example.com")

    entry = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert entry["message"] == "HTTP Request: GET https://example.com"
    assert entry["severity"] == "INFO"
