from __future__ import annotations

import importlib.util
import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

CLI_PATH = Path(__file__).resolve().parents[1] / "cli" / "mediacat.py"


@pytest.fixture(scope="module")
def cli_app():
    spec = importlib.util.spec_from_file_location("mediacat_cli", CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module.app


@pytest.fixture
def media_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, touch) -> Path:
    touch(tmp_path, ["flash/b.mp3", "card/A.mp3", "card/DCIM/.thumbnails/t.mp3", "usb/c.mp3", "usb/v.mkv"])
    monkeypatch.setenv("MEDIACAT_FLASH_ROOT", str(tmp_path / "flash"))
    monkeypatch.setenv("MEDIACAT_CARD_ROOT", str(tmp_path / "card"))
    monkeypatch.setenv("MEDIACAT_USB_ROOT", str(tmp_path / "usb"))
    monkeypatch.setenv("MEDIACAT_LOG_LEVEL", "WARNING")
    return tmp_path


def test_list_json(cli_app, media_env: Path) -> None:
    result = CliRunner().invoke(cli_app, ["list", "audio", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [
        str(media_env / "card" / "A.mp3"),
        str(media_env / "flash" / "b.mp3"),
        str(media_env / "usb" / "c.mp3"),
    ]


def test_list_with_detach(cli_app, media_env: Path) -> None:
    result = CliRunner().invoke(cli_app, ["list", "audio", "--detach", "host_attached"])
    assert result.exit_code == 0, result.output
    lines = result.stdout.strip().splitlines()
    assert lines == [str(media_env / "card" / "A.mp3"), str(media_env / "flash" / "b.mp3")]


def test_list_attach_rescans_without_duplicates(cli_app, media_env: Path) -> None:
    expected = [
        str(media_env / "card" / "A.mp3"),
        str(media_env / "flash" / "b.mp3"),
        str(media_env / "usb" / "c.mp3"),
    ]
    result = CliRunner().invoke(cli_app, ["list", "audio", "--attach", "host_attached", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == expected

    result = CliRunner().invoke(
        cli_app, ["list", "audio", "--detach", "host_attached", "--attach", "host_attached", "--json"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == expected


def test_list_accepts_numeric_codes(cli_app, media_env: Path) -> None:
    result = CliRunner().invoke(cli_app, ["list", "1", "--detach", "1", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [str(media_env / "card" / "A.mp3"), str(media_env / "flash" / "b.mp3")]


def test_list_rejects_unknown_category(cli_app, media_env: Path) -> None:
    result = CliRunner().invoke(cli_app, ["list", "podcast"])
    assert result.exit_code == 2


def test_summary_table(cli_app, media_env: Path) -> None:
    result = CliRunner().invoke(cli_app, ["summary", "video"])
    assert result.exit_code == 0, result.output
    assert "host_attached" in result.stdout
    assert "total" in result.stdout


def test_roots(cli_app, media_env: Path) -> None:
    result = CliRunner().invoke(cli_app, ["roots"])
    assert result.exit_code == 0, result.output
    assert f"ignored\t{os.path.join(str(media_env / 'card'), 'DCIM', '.thumbnails')}" in result.stdout


def test_classify(cli_app) -> None:
    result = CliRunner().invoke(cli_app, ["classify", "song.OGG", "setup.apk", "notes"])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["audio\tsong.OGG", "package\tsetup.apk", "unknown\tnotes"]


def test_config_file(cli_app, tmp_path: Path, touch) -> None:
    touch(tmp_path, ["f/one.jpg", "f/two.jpg", "f/three.jpg"])
    config = tmp_path / "mediacat.yml"
    config.write_text(f"internal_flash_root: {tmp_path / 'f'}\ncatalog_cap: 2\nlog_level: WARNING\n")
    result = CliRunner().invoke(cli_app, ["--config", str(config), "list", "image"])
    assert result.exit_code == 0, result.output
    listed = [line for line in result.stdout.splitlines() if line.startswith(str(tmp_path / "f"))]
    assert len(listed) == 2
