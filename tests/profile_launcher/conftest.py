from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

BASE_URL = "http://127.0.0.1:3000"


class StubProfileService:
    """In-process stand-in for the local profile service."""

    def __init__(
        self,
        profiles: List[Dict[str, Any]] | None = None,
        *,
        failing: Iterable[str] = (),
        list_status: int = 200,
        list_payload: Any = None,
    ) -> None:
        self.profiles = profiles or []
        self.failing = set(failing)
        self.list_status = list_status
        self.list_payload = list_payload
        self.calls: list[tuple[str, str, Any]] = []
        self.app = self._build_app()

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.get("/api/profiles")
        async def list_profiles() -> JSONResponse:
            self.calls.append(("GET", "/api/profiles", None))
            payload = (
                self.list_payload
                if self.list_payload is not None
                else {"data": self.profiles}
            )
            return JSONResponse(status_code=self.list_status, content=payload)

        @app.post("/api/browser/open")
        async def open_browser(request: Request) -> JSONResponse:
            body = await request.json()
            self.calls.append(("POST", "/api/browser/open", body))
            if body.get("profile_id") in self.failing:
                return JSONResponse(status_code=500, content={"error": "launch failed"})
            return JSONResponse(content={"ok": True})

        @app.post("/api/open-url")
        async def open_url(request: Request) -> JSONResponse:
            body = await request.json()
            self.calls.append(("POST", "/api/open-url", body))
            if body.get("profileId") in self.failing or body.get("url") in self.failing:
                return JSONResponse(status_code=502, content={"error": "navigation failed"})
            return JSONResponse(content={"ok": True})

        @app.post("/api/stop-profile")
        async def stop_profile(request: Request) -> JSONResponse:
            body = await request.json()
            self.calls.append(("POST", "/api/stop-profile", body))
            if body.get("profileId") in self.failing:
                return JSONResponse(status_code=404, content={"error": "not running"})
            return JSONResponse(content={"ok": True})

        return app

    def client(self) -> httpx.AsyncClient:
        transport = httpx.ASGITransport(app=self.app)
        return httpx.AsyncClient(transport=transport, base_url=BASE_URL)

    def posted(self, path: str) -> list[Any]:
        return [body for method, p, body in self.calls if method == "POST" and p == path]


@pytest.fixture
def stub_service() -> Callable[..., StubProfileService]:
    return StubProfileService


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
