"""
Helpers for driving a local ixBrowser profile service.

The package bundles small, independent commands for computing CPU affinity
masks, bulk-launching profiles, exporting profile IDs and closing running
profiles through the service's local REST API.
"""

from __future__ import annotations

__all__ = [
    "affinity",
    "client",
    "close",
    "config",
    "export",
    "launch",
    "open_urls",
    "profiles_file",
    "types",
]
