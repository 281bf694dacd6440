"""Configuration CLI commands - list keys, show and set configurations."""

import json

import click

from mediaconf.configuration import (
    ConfigurationError,
    ConfigurationStore,
    ConfigurationTypeRegistry,
)
from mediaconf.persistence import FileResourcePersistence, ServerPaths


def _open_store() -> ConfigurationStore:
    """Open the configuration store the server in this directory would use."""
    return ConfigurationStore(
        ServerPaths.from_env(),
        ConfigurationTypeRegistry.builtin(),
        FileResourcePersistence(),
    )


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2, sort_keys=True))


@click.group()
def config():
    """Configuration commands."""
    pass


@config.command()
def keys():
    """List registered named configuration keys."""
    registry = ConfigurationTypeRegistry.builtin()
    for key in registry.keys():
        click.echo(f"{key}  {registry.resolve_type(key).__name__}")


@config.command()
@click.argument("key", required=False)
def show(key: str | None):
    """Show the application configuration, or the named configuration KEY."""
    try:
        store = _open_store()
        if key is None:
            _echo_json(store.get_application_configuration().to_dict())
        else:
            _echo_json(store.get_named_configuration(key).to_dict())
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)


@config.command(name="set")
@click.argument("key")
@click.argument("source", type=click.File("rb"))
def set_(key: str, source):
    """Save the JSON in SOURCE (a file or -) as the named configuration KEY.

    Use "system" as KEY to replace the application configuration.
    """
    raw = source.read()
    try:
        store = _open_store()
        if key.lower() == "system":
            store.replace_application_configuration(raw)
        else:
            store.save_named_configuration(key, raw)
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)
    click.echo(click.style(f"Saved configuration '{key}'", fg="green"))


@config.command(name="init")
def init_defaults():
    """Write default configuration files that do not exist yet."""
    store = _open_store()
    written = store.ensure_defaults()
    if not written:
        click.echo("All configuration files already exist.")
        return
    for name in written:
        click.echo(f"Wrote {name}")
