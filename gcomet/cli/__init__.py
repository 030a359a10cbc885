"""Command Line Interface Package"""

from gcomet.cli.main import main, run

__all__ = ["main", "run"]
