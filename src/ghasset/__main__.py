"""Allow running gh-asset as ``python -m ghasset``."""

from ghasset.cli import cli

if __name__ == "__main__":
    cli(prog_name="gh-asset")
