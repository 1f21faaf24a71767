from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 3000
DEFAULT_LAUNCH_DELAY = 0.3
DEFAULT_CLOSE_DELAY = 2.0
DEFAULT_URL_DELAY = 3.0
DEFAULT_INSTANCE_DELAY = 3.0
DEFAULT_INSTANCE_COUNT = 8
DEFAULT_EXPORT_PATH = Path("ixbrowser_profiles.txt")
DEFAULT_URLS_PATH = Path("urls.txt")

API_HOST_ENV = "IXBROWSER_API_HOST"
API_PORT_ENV = "IXBROWSER_API_PORT"
INSTANCE_COUNT_ENV = "AFFINITY_INSTANCE_COUNT"

PROFILES_PATH = "/api/profiles"
OPEN_PROFILE_PATH = "/api/browser/open"
STOP_PROFILE_PATH = "/api/stop-profile"
OPEN_URL_PATH = "/api/open-url"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


@dataclass(frozen=True)
class ApiEndpoint:
    """Location of the local profile service."""

    host: str = DEFAULT_API_HOST
    port: int = DEFAULT_API_PORT

    def __post_init__(self) -> None:
        if not 1 <= self.port <= 65535:
            raise ValueError(f"API port must be between 1 and 65535, got {self.port}.")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

def _require_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}.")


@dataclass(frozen=True)
class AffinityCLIArgs:
    """Typed representation of the affinity command arguments."""

    count: int = DEFAULT_INSTANCE_COUNT
    index: int | None = None


@dataclass(frozen=True)
class LaunchCLIArgs:
    """Typed representation of the launch command arguments."""

    endpoint: ApiEndpoint
    profile_ids: tuple[str, ...] = ()
    id_file: Path | None = None
    delay: float = DEFAULT_LAUNCH_DELAY

    def __post_init__(self) -> None:
        _require_non_negative("Launch delay", self.delay)


@dataclass(frozen=True)
class ExportCLIArgs:
    """Typed representation of the export command arguments."""

    endpoint: ApiEndpoint
    output_path: Path = DEFAULT_EXPORT_PATH
    named: bool = False


@dataclass(frozen=True)
class CloseCLIArgs:
    """Typed representation of the close command arguments."""

    endpoint: ApiEndpoint
    delay: float = DEFAULT_CLOSE_DELAY

    def __post_init__(self) -> None:
        _require_non_negative("Close delay", self.delay)


@dataclass(frozen=True)
class OpenUrlsCLIArgs:
    """Typed representation of the open-urls command arguments."""

    endpoint: ApiEndpoint
    logical_names: tuple[str, ...] = ()
    profiles_file: Path = DEFAULT_EXPORT_PATH
    urls_file: Path = DEFAULT_URLS_PATH
    url_delay: float = DEFAULT_URL_DELAY
    instance_delay: float = DEFAULT_INSTANCE_DELAY

    def __post_init__(self) -> None:
        _require_non_negative("URL delay", self.url_delay)
        _require_non_negative("Instance delay", self.instance_delay)


def add_endpoint_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the shared ``--host``/``--port`` options on an argparse parser.

    Environment values are kept as raw strings here and only validated by
    :func:`endpoint_from_args`, so an explicit ``--port`` always wins over a
    broken ``IXBROWSER_API_PORT``.
    """

    parser.add_argument(
        "--host",
        default=os.environ.get(API_HOST_ENV, DEFAULT_API_HOST),
        help=f"Profile service host (defaults to {API_HOST_ENV} or '{DEFAULT_API_HOST}').",
    )
    parser.add_argument(
        "--port",
        default=os.environ.get(API_PORT_ENV, str(DEFAULT_API_PORT)),
        help=f"Profile service port (defaults to {API_PORT_ENV} or {DEFAULT_API_PORT}).",
    )


def endpoint_from_args(args: argparse.Namespace) -> ApiEndpoint:
    """Build the validated endpoint; raises ``ValueError`` for a bad host/port."""

    try:
        port = int(args.port)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"API port must be an integer, got {args.port!r}.") from exc
    return ApiEndpoint(host=args.host, port=port)
