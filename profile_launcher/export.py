from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

import httpx

from .client import create_client, fetch_profiles
from .config import (
    DEFAULT_EXPORT_PATH,
    LOG_FORMAT,
    ExportCLIArgs,
    add_endpoint_arguments,
    endpoint_from_args,
)
from .profiles_file import write_named_profiles, write_profile_ids

LOGGER = logging.getLogger("ProfileLauncher.Export")


async def export_profile_ids(
    client: httpx.AsyncClient,
    output_path: Path,
    *,
    named: bool = False,
) -> list[str]:
    """Fetch every profile ID and overwrite ``output_path`` with them.

    Request failures and malformed payloads are not handled here.
    """

    profiles = await fetch_profiles(client)
    profile_ids = [profile.id for profile in profiles]
    if named:
        write_named_profiles(output_path, profile_ids)
    else:
        write_profile_ids(output_path, profile_ids)
    LOGGER.info("Saved %s profile IDs to %s", len(profile_ids), output_path)
    return profile_ids


def parse_args(argv: Sequence[str] | None = None) -> ExportCLIArgs:
    parser = argparse.ArgumentParser(
        description="Write the IDs of every profile known to the local service to a file."
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_EXPORT_PATH,
        help=f"Destination file (defaults to '{DEFAULT_EXPORT_PATH}').",
    )
    parser.add_argument(
        "--named",
        action="store_true",
        help="Prefix each ID with a logical name, e.g. 'Profile001,<id>'.",
    )
    add_endpoint_arguments(parser)

    args = parser.parse_args(argv)
    return ExportCLIArgs(
        endpoint=endpoint_from_args(args),
        output_path=args.output.expanduser().resolve(),
        named=args.named,
    )


async def _run(args: ExportCLIArgs) -> list[str]:
    async with create_client(args.endpoint) as client:
        return await export_profile_ids(client, args.output_path, named=args.named)


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        args = parse_args(argv)
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 1

    asyncio.run(_run(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
