"""Allow ``python -m ragdesk``."""

from ragdesk.cli import app

app()
