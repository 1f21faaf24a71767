from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

_BOM = "\ufeff"
_NAMED_LINE = re.compile(r"^(Profile\d{3,}),(.*)$")


def _write_lines(path: Path, lines: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    content = "\n".join(lines) + "\n" if lines else ""
    path.write_text(content, encoding="utf-8")


def logical_name(position: int) -> str:
    """Logical profile name for a 0-based position, e.g. ``Profile001``."""

    return f"Profile{position + 1:03d}"


def write_profile_ids(path: Path, profile_ids: Iterable[str]) -> None:
    """Overwrite ``path`` with one profile ID per line."""

    _write_lines(path, list(profile_ids))


def write_named_profiles(path: Path, profile_ids: Iterable[str]) -> None:
    """Overwrite ``path`` with ``ProfileNNN,<id>`` lines."""

    _write_lines(
        path,
        [f"{logical_name(index)},{pid}" for index, pid in enumerate(profile_ids)],
    )


def _read_entries(path: Path) -> list[str]:
    text = path.read_text(encoding="utf-8")
    if text.startswith(_BOM):
        text = text[len(_BOM) :]
    return [line.strip() for line in text.splitlines() if line.strip()]


def read_profile_ids(path: Path) -> list[str]:
    """Read IDs written by either writer, skipping blank lines.

    Only ``ProfileNNN,<id>`` lines are treated as named; any other line is
    taken verbatim, commas included.
    """

    profile_ids: list[str] = []
    for entry in _read_entries(path):
        match = _NAMED_LINE.match(entry)
        if match:
            entry = match.group(2).strip()
            if not entry:
                continue
        profile_ids.append(entry)
    return profile_ids


def read_profile_map(path: Path) -> dict[str, str]:
    """Map logical names to IDs from a named file, preserving file order."""

    mapping: dict[str, str] = {}
    for entry in _read_entries(path):
        match = _NAMED_LINE.match(entry)
        if match and match.group(2).strip():
            mapping[match.group(1)] = match.group(2).strip()
    return mapping


def read_urls(path: Path) -> list[str]:
    return [entry for entry in _read_entries(path) if entry.startswith("http")]
