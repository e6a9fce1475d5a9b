"""Configuration inspection commands."""

import click


@click.group()
def config() -> None:
    """Configuration and environment information commands."""
    pass


@config.command("show")
def config_show() -> None:
    """Show the effective configuration and where each value came from."""
    from ghasset.cli.progress import print_table
    from ghasset.cli.service_helpers import handle_result, services

    rows = handle_result(services.config.describe_sources())

    print_table(
        "Current Configuration",
        ["Setting", "Value", "Source"],
        [(f"{section}.{key}", value, source) for section, key, value, source in rows],
    )
