from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import (
    OPEN_PROFILE_PATH,
    OPEN_URL_PATH,
    PROFILES_PATH,
    STOP_PROFILE_PATH,
    ApiEndpoint,
)
from .types import (
    OpenProfileRequest,
    OpenUrlRequest,
    ProfileListResponse,
    ProfileRecord,
    StopProfileRequest,
)

LOGGER = logging.getLogger("ProfileLauncher.Client")


class ProfileRequestError(Exception):
    """Raised when a per-profile request to the local service fails."""

    def __init__(self, profile_id: str, message: str) -> None:
        super().__init__(message)
        self.profile_id = profile_id


def create_client(endpoint: ApiEndpoint) -> httpx.AsyncClient:
    """Build a client rooted at the profile service; timeouts stay at httpx defaults."""

    return httpx.AsyncClient(base_url=endpoint.base_url)


def _drop_entries_without_id(payload: Any) -> Any:
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        return payload
    entries = [
        entry
        for entry in payload["data"]
        if isinstance(entry, dict) and entry.get("id") not in (None, "")
    ]
    dropped = len(payload["data"]) - len(entries)
    if dropped:
        LOGGER.debug("Ignoring %s profile entr(y/ies) without an id.", dropped)
    return {**payload, "data": entries}


async def fetch_profiles(
    client: httpx.AsyncClient, *, skip_missing_ids: bool = False
) -> list[ProfileRecord]:
    """Return every profile known to the service, in response order.

    Transport errors, error statuses and malformed payloads propagate to the
    caller unchanged. With ``skip_missing_ids`` the entries whose ``id`` is
    absent or null are discarded before validation.
    """

    response = await client.get(PROFILES_PATH)
    response.raise_for_status()
    payload = response.json()
    if skip_missing_ids:
        payload = _drop_entries_without_id(payload)
    listing = ProfileListResponse.model_validate(payload)
    LOGGER.debug("Fetched %s profile(s) from %s.", len(listing.data), response.url)
    return listing.data


async def _post_for_profile(
    client: httpx.AsyncClient, path: str, profile_id: str, body: dict[str, str]
) -> httpx.Response:
    try:
        response = await client.post(path, json=body)
    except httpx.HTTPError as exc:
        raise ProfileRequestError(profile_id, f"Request failed: {exc}") from exc

    if response.is_error:
        raise ProfileRequestError(
            profile_id,
            f"Service responded with {response.status_code}",
        )
    return response


async def open_profile(client: httpx.AsyncClient, profile_id: str) -> httpx.Response:
    """Ask the service to open the browser for ``profile_id``."""

    body = OpenProfileRequest(profile_id=profile_id).model_dump(mode="json")
    return await _post_for_profile(client, OPEN_PROFILE_PATH, profile_id, body)


async def stop_profile(client: httpx.AsyncClient, profile_id: str) -> httpx.Response:
    """Ask the service to stop the running browser for ``profile_id``."""

    body = StopProfileRequest(profile_id=profile_id).model_dump(
        mode="json", by_alias=True
    )
    return await _post_for_profile(client, STOP_PROFILE_PATH, profile_id, body)


async def open_url(
    client: httpx.AsyncClient, profile_id: str, url: str
) -> httpx.Response:
    """Ask the service to navigate ``profile_id`` to ``url`` in a new tab."""

    body = OpenUrlRequest(profile_id=profile_id, url=url).model_dump(
        mode="json", by_alias=True
    )
    return await _post_for_profile(client, OPEN_URL_PATH, profile_id, body)
