from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Mapping, Sequence

import httpx

from .client import ProfileRequestError, create_client, open_url
from .config import (
    DEFAULT_EXPORT_PATH,
    DEFAULT_INSTANCE_DELAY,
    DEFAULT_URL_DELAY,
    DEFAULT_URLS_PATH,
    LOG_FORMAT,
    OpenUrlsCLIArgs,
    add_endpoint_arguments,
    endpoint_from_args,
)
from .profiles_file import read_profile_map, read_urls
from .types import OpenUrlsResult

LOGGER = logging.getLogger("ProfileLauncher.OpenUrls")

SleepFunc = Callable[[float], Awaitable[None]]


async def open_urls_for_profiles(
    logical_names: Sequence[str],
    profile_map: Mapping[str, str],
    urls: Sequence[str],
    *,
    client: httpx.AsyncClient,
    url_delay: float = DEFAULT_URL_DELAY,
    instance_delay: float = DEFAULT_INSTANCE_DELAY,
    sleep: SleepFunc = asyncio.sleep,
) -> OpenUrlsResult:
    """Open every URL in each named profile, one profile and one URL at a time.

    Names missing from ``profile_map`` are logged and skipped. A failed URL is
    logged and the next one is still attempted.
    """

    result = OpenUrlsResult()
    for position, name in enumerate(logical_names):
        if position and instance_delay > 0:
            await sleep(instance_delay)

        profile_id = profile_map.get(name)
        if profile_id is None:
            LOGGER.error("Profile ID not found for %r", name)
            result.missing.append(name)
            continue

        LOGGER.info("Launching %s [%s]...", name, profile_id)
        for url_position, url in enumerate(urls):
            if url_position and url_delay > 0:
                await sleep(url_delay)
            try:
                await open_url(client, profile_id, url)
            except ProfileRequestError as exc:
                LOGGER.warning("%s error on %s: %s", profile_id, url, exc)
                result.failures.append((profile_id, url))
                continue
            LOGGER.info("%s opened: %s", profile_id, url)
            result.opened.append((profile_id, url))
    return result


def parse_args(argv: Sequence[str] | None = None) -> OpenUrlsCLIArgs:
    parser = argparse.ArgumentParser(
        description="Open a list of URLs in named profiles through the local profile service."
    )
    parser.add_argument(
        "logical_names",
        nargs="*",
        help="Logical profile names (e.g. Profile001). Defaults to every name in the profiles file.",
    )
    parser.add_argument(
        "--profiles-file",
        type=Path,
        default=DEFAULT_EXPORT_PATH,
        help=f"Named profile file written by 'export-profile-ids --named' (defaults to '{DEFAULT_EXPORT_PATH}').",
    )
    parser.add_argument(
        "--urls-file",
        type=Path,
        default=DEFAULT_URLS_PATH,
        help=f"File with one URL per line (defaults to '{DEFAULT_URLS_PATH}').",
    )
    parser.add_argument(
        "--url-delay",
        type=float,
        default=DEFAULT_URL_DELAY,
        help="Seconds to wait between URLs within a profile.",
    )
    parser.add_argument(
        "--instance-delay",
        type=float,
        default=DEFAULT_INSTANCE_DELAY,
        help="Seconds to wait between profiles.",
    )
    add_endpoint_arguments(parser)

    args = parser.parse_args(argv)
    return OpenUrlsCLIArgs(
        endpoint=endpoint_from_args(args),
        logical_names=tuple(args.logical_names),
        profiles_file=args.profiles_file.expanduser().resolve(),
        urls_file=args.urls_file.expanduser().resolve(),
        url_delay=args.url_delay,
        instance_delay=args.instance_delay,
    )


async def _run(
    args: OpenUrlsCLIArgs,
    names: Sequence[str],
    profile_map: Mapping[str, str],
    urls: Sequence[str],
) -> OpenUrlsResult:
    async with create_client(args.endpoint) as client:
        return await open_urls_for_profiles(
            names,
            profile_map,
            urls,
            client=client,
            url_delay=args.url_delay,
            instance_delay=args.instance_delay,
        )


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        args = parse_args(argv)
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 1

    try:
        profile_map = read_profile_map(args.profiles_file)
        urls = read_urls(args.urls_file)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Unable to read input file: %s", exc)
        return 1

    if not profile_map:
        LOGGER.error("No named profiles found in %s", args.profiles_file)
        return 1
    if not urls:
        LOGGER.error("No valid URLs found in %s", args.urls_file)
        return 1

    names = list(args.logical_names) or list(profile_map)
    asyncio.run(_run(args, names, profile_map, urls))
    return 0


if __name__ == "__main__":
    sys.exit(main())
