"""Allow running as `python -m tourline`."""

from tourline.main import cli

cli()
