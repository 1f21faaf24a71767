from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Iterable, Sequence

import httpx

from .client import ProfileRequestError, create_client, open_profile
from .config import (
    DEFAULT_EXPORT_PATH,
    DEFAULT_LAUNCH_DELAY,
    LOG_FORMAT,
    LaunchCLIArgs,
    add_endpoint_arguments,
    endpoint_from_args,
)
from .profiles_file import read_profile_ids
from .types import LaunchResult

LOGGER = logging.getLogger("ProfileLauncher.Launch")

SleepFunc = Callable[[float], Awaitable[None]]


async def launch_profiles(
    profile_ids: Iterable[str],
    *,
    client: httpx.AsyncClient,
    delay: float = DEFAULT_LAUNCH_DELAY,
    sleep: SleepFunc = asyncio.sleep,
) -> LaunchResult:
    """Open each profile in order, one request at a time.

    A failed launch is logged and skipped; the remaining profiles are still
    attempted. ``delay`` seconds separate consecutive requests.
    """

    result = LaunchResult()
    for position, profile_id in enumerate(profile_ids):
        if position and delay > 0:
            await sleep(delay)
        try:
            await open_profile(client, profile_id)
        except ProfileRequestError as exc:
            LOGGER.warning("Failed to launch %s: %s", profile_id, exc)
            result.failures.append(profile_id)
            continue
        LOGGER.info("Launched Profile ID: %s", profile_id)
        result.launched.append(profile_id)
    return result


def parse_args(argv: Sequence[str] | None = None) -> LaunchCLIArgs:
    parser = argparse.ArgumentParser(
        description="Open browser profiles through the local profile service."
    )
    parser.add_argument(
        "profile_ids",
        nargs="*",
        help="Profile IDs to launch, in order.",
    )
    parser.add_argument(
        "--from-file",
        type=Path,
        default=None,
        help=(
            "Read profile IDs from a file, one per line. Used by default "
            f"('{DEFAULT_EXPORT_PATH}') when no IDs are given."
        ),
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_LAUNCH_DELAY,
        help="Seconds to wait between launches.",
    )
    add_endpoint_arguments(parser)

    args = parser.parse_args(argv)
    id_file = args.from_file
    if id_file is None and not args.profile_ids:
        id_file = DEFAULT_EXPORT_PATH
    return LaunchCLIArgs(
        endpoint=endpoint_from_args(args),
        profile_ids=tuple(args.profile_ids),
        id_file=id_file.expanduser().resolve() if id_file else None,
        delay=args.delay,
    )


def resolve_profile_ids(args: LaunchCLIArgs) -> list[str]:
    profile_ids = list(args.profile_ids)
    if args.id_file is not None:
        profile_ids.extend(read_profile_ids(args.id_file))
    return profile_ids


async def _run(args: LaunchCLIArgs, profile_ids: list[str]) -> LaunchResult:
    async with create_client(args.endpoint) as client:
        return await launch_profiles(profile_ids, client=client, delay=args.delay)


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        args = parse_args(argv)
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 1

    try:
        profile_ids = resolve_profile_ids(args)
    except FileNotFoundError:
        LOGGER.error("Profile ID file not found: %s", args.id_file)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Unable to read profile ID file %s: %s", args.id_file, exc)
        return 1

    if not profile_ids:
        LOGGER.error("No profile IDs to launch.")
        return 1

    asyncio.run(_run(args, profile_ids))
    return 0


if __name__ == "__main__":
    sys.exit(main())
