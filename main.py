"""
Clear Air Habit — Entry Point.

Single entry point: `python main.py --help` lists the tracker commands.
"""

import logging

from clearair.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from clearair.cli import cli

if __name__ == "__main__":
    cli()
