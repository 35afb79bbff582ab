"""Tests for the browser-reload CLI."""

from typer.testing import CliRunner

from browser_reload.cli import app
from browser_reload.core.config import CONFIG_FILE, ReloadConfig

runner = CliRunner()


def test_init_creates_config(tmp_path):
    result = runner.invoke(app, ["init", str(tmp_path)])
    assert result.exit_code == 0
    assert (tmp_path / CONFIG_FILE).exists()
    assert ReloadConfig.load(tmp_path).endpoint.path == "/dev/reload-check"


def test_init_refuses_to_overwrite(tmp_path):
    (tmp_path / CONFIG_FILE).write_text("server:\n  port: 1234\n")
    result = runner.invoke(app, ["init", str(tmp_path)])
    assert result.exit_code == 1
    assert ReloadConfig.load(tmp_path).server.port == 1234


def test_config_prints_yaml(tmp_path):
    (tmp_path / CONFIG_FILE).write_text("server:\n  port: 4321\n")
    result = runner.invoke(app, ["config", str(tmp_path)])
    assert result.exit_code == 0
    assert "port: 4321" in result.stdout
    assert "path: /dev/reload-check" in result.stdout


def test_serve_missing_directory(tmp_path):
    result = runner.invoke(app, ["serve", str(tmp_path / "nope")])
    assert result.exit_code == 1


def test_serve_missing_watch_path(tmp_path):
    result = runner.invoke(app, ["serve", str(tmp_path), "--watch", "missing"])
    assert result.exit_code == 1
