"""Main entry point for python -m s2runner.

This module enables subprocess invocation using:
    python -m s2runner serve
"""

from .cli import cli

if __name__ == "__main__":
    cli()
