"""
gh-asset CLI - Download GitHub issue/PR assets using GitHub CLI authentication
"""

import click

from ghasset import __version__

from .commands import config, download

LONG_HELP = """A CLI tool to download GitHub issue/PR assets using GitHub CLI authentication.

\b
PREREQUISITES:
  GitHub CLI (gh) installed and authenticated:  gh auth login

\b
EXAMPLES:
  # Download an asset by ID to a file
  gh-asset download 1234abcd-1234-1234-1234-1234abcd1234 ./image.png

\b
  # Download into a directory; the extension is detected from the response
  gh-asset download 1234abcd-1234-1234-1234-1234abcd1234 ./downloads/

\b
  # Download using the full attachment URL
  gh-asset download https://github.com/user-attachments/assets/1234abcd-1234-1234-1234-1234abcd1234 ./image.png
"""


@click.group(help=LONG_HELP)
@click.version_option(version=__version__, prog_name="gh-asset")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--host", default=None, help="GitHub host (default: github.com)")
def cli(verbose: bool, host: str) -> None:
    from ghasset.core.config import get_config
    from ghasset.core.logger import set_level

    settings = get_config()
    if host:
        settings.set("github", "host", host, source="cli:--host")
    if verbose:
        settings.set("logging", "level", "DEBUG", source="cli:--verbose")

    set_level(settings.get("logging", "level", "WARNING"))


# Register commands
cli.add_command(download)
cli.add_command(config)


if __name__ == "__main__":
    cli()
