"""Attachment download command."""

import click


@click.command("download")
@click.argument("identifier_or_url")
@click.argument("destination")
def download(identifier_or_url: str, destination: str) -> None:
    """Download an asset from GitHub using its asset ID or attachment URL.

    IDENTIFIER_OR_URL is a GitHub asset ID (e.g., 1234abcd-1234-1234-1234-1234abcd1234)
    or a https://github.com/user-attachments/assets/<id> URL.

    DESTINATION is the local file path where the asset will be saved, or an
    existing directory. Directories receive a file named after the asset ID
    with an extension detected from the response.
    """
    from ghasset.cli.progress import DownloadProgress, is_terminal, print_success
    from ghasset.cli.service_helpers import get_factory, handle_result, services

    service = services.download
    show_progress = get_factory().config.get("progress", "enabled", True) and is_terminal()

    with DownloadProgress(description="Downloading", disable=not show_progress) as progress:
        service.set_progress_callback(progress.update_from)
        result = service.download(identifier_or_url, destination)

    outcome = handle_result(result)
    print_success(f"Downloaded {outcome.bytes_written} bytes to {outcome.path}")
