"""Entry point for ``python -m danuubot``."""

from danuubot.cli.commands import app

if __name__ == "__main__":
    app()
