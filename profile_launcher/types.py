from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ProfileRecord(BaseModel):
    """A single profile entry as returned by ``GET /api/profiles``."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    name: Optional[str] = None
    status: Optional[str] = None

    @property
    def running(self) -> bool:
        return self.status == "running"


class ProfileListResponse(BaseModel):
    """Envelope of the profile listing endpoint."""

    model_config = ConfigDict(extra="allow")

    data: List[ProfileRecord]


class OpenProfileRequest(BaseModel):
    profile_id: str


class StopProfileRequest(BaseModel):
    profile_id: str = Field(serialization_alias="profileId")


class OpenUrlRequest(BaseModel):
    profile_id: str = Field(serialization_alias="profileId")
    url: str


@dataclass(frozen=True)
class LaunchResult:
    """Per-profile outcome of a bulk launch, in request order."""

    launched: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.launched) + len(self.failures)


@dataclass(frozen=True)
class CloseResult:
    """Per-profile outcome of closing running profiles, in request order."""

    closed: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class OpenUrlsResult:
    """Outcome of opening URLs per logical profile, in request order."""

    opened: List[Tuple[str, str]] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
