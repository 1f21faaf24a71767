from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from pydantic import ValidationError

from profile_launcher import export
from profile_launcher.export import export_profile_ids


@pytest.mark.anyio
async def test_writes_one_line_per_profile_in_response_order(
    stub_service, tmp_path: Path
) -> None:
    service = stub_service([{"id": "c"}, {"id": "a"}, {"id": "b"}])
    output = tmp_path / "ixbrowser_profiles.txt"
    output.write_text("old-1\nold-2\nold-3\nold-4\n", encoding="utf-8")

    async with service.client() as client:
        profile_ids = await export_profile_ids(client, output)

    assert profile_ids == ["c", "a", "b"]
    assert output.read_text(encoding="utf-8").splitlines() == ["c", "a", "b"]
    assert service.calls == [("GET", "/api/profiles", None)]


@pytest.mark.anyio
async def test_named_export(stub_service, tmp_path: Path) -> None:
    service = stub_service([{"id": "x"}, {"id": "y"}])
    output = tmp_path / "!profiles.txt"

    async with service.client() as client:
        await export_profile_ids(client, output, named=True)

    assert output.read_text(encoding="utf-8") == "Profile001,x\nProfile002,y\n"


@pytest.mark.anyio
async def test_empty_listing_writes_empty_file(stub_service, tmp_path: Path) -> None:
    service = stub_service([])
    output = tmp_path / "ids.txt"

    async with service.client() as client:
        assert await export_profile_ids(client, output) == []

    assert output.read_text(encoding="utf-8") == ""


@pytest.mark.anyio
async def test_error_status_propagates_and_leaves_file_untouched(
    stub_service, tmp_path: Path
) -> None:
    service = stub_service(list_status=503, list_payload={"error": "busy"})
    output = tmp_path / "ids.txt"
    output.write_text("keep\n", encoding="utf-8")

    async with service.client() as client:
        with pytest.raises(httpx.HTTPStatusError):
            await export_profile_ids(client, output)

    assert output.read_text(encoding="utf-8") == "keep\n"


@pytest.mark.anyio
async def test_malformed_payload_propagates(stub_service, tmp_path: Path) -> None:
    service = stub_service(list_payload={"data": [{"name": "no id"}]})

    async with service.client() as client:
        with pytest.raises(ValidationError):
            await export_profile_ids(client, tmp_path / "ids.txt")


def test_main_writes_output_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, stub_service
) -> None:
    service = stub_service([{"id": "one"}, {"id": "two"}])
    output = tmp_path / "out" / "ids.txt"
    monkeypatch.setattr(export, "create_client", lambda endpoint: service.client())

    assert export.main(["--output", str(output)]) == 0
    assert output.read_text(encoding="utf-8") == "one\ntwo\n"


def test_main_does_not_swallow_request_errors(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, stub_service
) -> None:
    service = stub_service(list_status=500, list_payload={})
    monkeypatch.setattr(export, "create_client", lambda endpoint: service.client())

    with pytest.raises(httpx.HTTPStatusError):
        export.main(["--output", str(tmp_path / "ids.txt")])
