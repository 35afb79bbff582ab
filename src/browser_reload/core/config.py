"""Configuration parsed from browser-reload.config.yaml."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, field_validator

CONFIG_FILE = "browser-reload.config.yaml"
DEFAULT_CHECK_PATH = "/dev/reload-check"


class WatchConfig(BaseModel):
    paths: list[str] = ["src", "public"]
    extensions: list[str] = ["html", "css", "js"]
    debounce_ms: int = 1600
    force_polling: Optional[bool] = None

    @field_validator("extensions")
    @classmethod
    def _strip_dots(cls, value: list[str]) -> list[str]:
        # "css" and ".css" mean the same thing
        return [ext.lstrip(".") for ext in value]


class EndpointConfig(BaseModel):
    path: str = DEFAULT_CHECK_PATH
    interval_ms: int = 1000
    inject_when_content_type_missing: bool = True

    @field_validator("path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"


class ServerConfig(BaseModel):
    root: str = "public"
    host: str = "127.0.0.1"
    port: int = 8000


class ReloadConfig(BaseModel):
    watch: WatchConfig = WatchConfig()
    endpoint: EndpointConfig = EndpointConfig()
    server: ServerConfig = ServerConfig()

    @classmethod
    def load(cls, project_dir: str | Path) -> ReloadConfig:
        config_path = Path(project_dir) / CONFIG_FILE
        if not config_path.exists():
            return cls()
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    def save(self, project_dir: str | Path) -> None:
        """Write the current config back to browser-reload.config.yaml."""
        config_path = Path(project_dir) / CONFIG_FILE
        data = self.model_dump()
        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def resolve_paths(self, project_dir: str | Path) -> list[Path]:
        """Watch paths made absolute against *project_dir*."""
        base = Path(project_dir)
        return [(base / p).resolve() for p in self.watch.paths]


def is_dev_mode(environ: Mapping[str, str] | None = None) -> bool:
    """True when ENV=dev. Hosts use this to decide whether to wire reload in."""
    env = os.environ if environ is None else environ
    return env.get("ENV", "").strip().lower() == "dev"
