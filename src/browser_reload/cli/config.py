"""browser-reload config / init — inspect and create the project config."""

from __future__ import annotations

from pathlib import Path

import typer
import yaml

from browser_reload.cli import ui
from browser_reload.core.config import CONFIG_FILE, ReloadConfig


def config(
    project_dir: Path = typer.Argument(Path("."), help="Project directory"),
) -> None:
    """Print the resolved configuration as YAML."""
    cfg = ReloadConfig.load(project_dir)
    typer.echo(yaml.dump(cfg.model_dump(), default_flow_style=False, sort_keys=False).rstrip())


def init(
    project_dir: Path = typer.Argument(Path("."), help="Project directory"),
) -> None:
    """Write a default browser-reload.config.yaml."""
    config_path = project_dir / CONFIG_FILE
    if config_path.exists():
        ui.error(f"{CONFIG_FILE} already exists in {project_dir}")
        raise typer.Exit(1)
    project_dir.mkdir(parents=True, exist_ok=True)
    ReloadConfig().save(project_dir)
    ui.success(f"Created {config_path}")
