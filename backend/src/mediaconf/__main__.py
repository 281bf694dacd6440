"""Run the mediaconf CLI with python -m mediaconf."""

from mediaconf.cli.main import cli

if __name__ == "__main__":
    cli()
