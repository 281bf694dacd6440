"""Local dev entrypoint: `mediaconf serve --reload` without installing the package."""

import sys
from pathlib import Path

if __name__ == "__main__":
    src_dir = Path(__file__).resolve().parent / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    from mediaconf.cli.main import cli

    cli(["serve", "--reload", *sys.argv[1:]])
