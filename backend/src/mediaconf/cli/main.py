"""mediaconf CLI entry point."""

import os

import click


@click.group()
def cli():
    """mediaconf - media server configuration CLI."""
    pass


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=None, type=int, help="Defaults to MEDIACONF_PORT or 8096.")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes.")
def serve(host: str, port: int | None, reload: bool):
    """Run the API server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "mediaconf.api:app",
        host=host,
        port=port or int(os.environ.get("MEDIACONF_PORT", "8096")),
        reload=reload,
        log_level=os.environ.get("MEDIACONF_LOG_LEVEL", "info"),
    )


# Register subcommand groups
from mediaconf.cli.config_cmd import config  # noqa: E402

cli.add_command(config)
