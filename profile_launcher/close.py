from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable, Sequence

import httpx
from pydantic import ValidationError

from .client import ProfileRequestError, create_client, fetch_profiles, stop_profile
from .config import (
    DEFAULT_CLOSE_DELAY,
    LOG_FORMAT,
    CloseCLIArgs,
    add_endpoint_arguments,
    endpoint_from_args,
)
from .types import CloseResult

LOGGER = logging.getLogger("ProfileLauncher.Close")

SleepFunc = Callable[[float], Awaitable[None]]


async def close_running_profiles(
    *,
    client: httpx.AsyncClient,
    delay: float = DEFAULT_CLOSE_DELAY,
    sleep: SleepFunc = asyncio.sleep,
) -> CloseResult:
    """Stop every profile the service reports as running, one at a time."""

    listing = await fetch_profiles(client, skip_missing_ids=True)
    profiles = [profile for profile in listing if profile.running]
    LOGGER.info("Found %s running profile(s).", len(profiles))

    result = CloseResult()
    if not profiles:
        LOGGER.warning("No running profiles to close.")
        return result

    for position, profile in enumerate(profiles):
        if position and delay > 0:
            await sleep(delay)
        label = profile.name or profile.id
        try:
            await stop_profile(client, profile.id)
        except ProfileRequestError as exc:
            LOGGER.warning("Failed to close %s: %s", label, exc)
            result.failures.append(profile.id)
            continue
        LOGGER.info("Closed %s", label)
        result.closed.append(profile.id)
    return result


def parse_args(argv: Sequence[str] | None = None) -> CloseCLIArgs:
    parser = argparse.ArgumentParser(
        description="Close every running profile on the local profile service."
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_CLOSE_DELAY,
        help="Seconds to wait between close requests.",
    )
    add_endpoint_arguments(parser)

    args = parser.parse_args(argv)
    return CloseCLIArgs(
        endpoint=endpoint_from_args(args),
        delay=args.delay,
    )


async def _run(args: CloseCLIArgs) -> CloseResult:
    async with create_client(args.endpoint) as client:
        return await close_running_profiles(client=client, delay=args.delay)


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        args = parse_args(argv)
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 1

    try:
        asyncio.run(_run(args))
    except (httpx.HTTPError, ValidationError, ValueError) as exc:
        LOGGER.error("Failed to query profiles: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
