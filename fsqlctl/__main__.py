"""Allow ``python -m fsqlctl``."""

from fsqlctl.cli.app import app

app()
