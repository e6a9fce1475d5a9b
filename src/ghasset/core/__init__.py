"""Core Module

This package contains the download logic for gh-asset: asset identifier
parsing, credential lookup, the HTTP transfer client, content-type sniffing,
destination resolution and the downloader that sequences them.

Nothing in here imports click or rich, so the core can be embedded in other
applications. Import from specific submodules as needed:
    from ghasset.core.resolver import resolve_destination
    from ghasset.core.downloader import Downloader
"""
