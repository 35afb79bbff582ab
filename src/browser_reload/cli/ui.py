"""Centralized CLI output with Rich."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


# ── Status messages ──────────────────────────────────────────────────────────

def success(msg: str) -> None:
    console.print(f"  [green]✓[/green] {msg}")


def error(msg: str) -> None:
    err_console.print(f"  [red]✗[/red] {msg}")


def info(msg: str) -> None:
    console.print(f"  [dim]ℹ {msg}[/dim]")


# ── Structure ────────────────────────────────────────────────────────────────

def header(msg: str) -> None:
    console.print()
    console.print(f"  [bold]{msg}[/bold]")


def kv(key: str, value: str, indent: int = 2) -> None:
    pad = " " * indent
    console.print(f"{pad}[bold]{key + ':':<12}[/bold] {value}")


def url(label: str, link: str) -> None:
    console.print(f"  [bold]{label + ':':<12}[/bold] [cyan]{link}[/cyan]")


def plain(msg: str = "") -> None:
    console.print(msg)


# ── Logging ──────────────────────────────────────────────────────────────────

def setup_logging(level: str = "info") -> None:
    """Route the package's log records through Rich."""
    handler = RichHandler(console=err_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("browser_reload")
    root.handlers[:] = [handler]
    root.setLevel(level.upper())
    root.propagate = False
