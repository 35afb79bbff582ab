"""browser-reload CLI powered by Typer."""

import typer

from browser_reload.cli.config import config, init
from browser_reload.cli.serve import serve

app = typer.Typer(
    name="browser-reload",
    help="Reload the browser automatically when watched files change.",
    add_completion=False,
    no_args_is_help=True,
)

app.command()(serve)
app.command()(config)
app.command()(init)
