"""Pull hidden home-directory paths out of an app's executable.

Apps routinely keep state in ``~/.something`` folders that follow no naming
convention, but the path is almost always a literal in the binary. This is
the equivalent of running ``strings`` and keeping what looks like a dot-folder.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from functools import lru_cache

from appsweep.models.app import ApplicationDescriptor
from appsweep.services.fs import DEFAULT_FS, FileSystem

log = logging.getLogger(__name__)

MIN_RUN_LENGTH = 5
MAX_CANDIDATE_LENGTH = 100

_GLOB_CHARS = frozenset("*?[{}")


@lru_cache(maxsize=8)
def _run_pattern(min_length: int) -> re.Pattern[bytes]:
    return re.compile(rb"[\x20-\x7e]{%d,}" % min_length)


def printable_runs(data: bytes, min_length: int = MIN_RUN_LENGTH) -> list[str]:
    """Maximal runs of printable ASCII (space through tilde) at least *min_length* long."""
    return [m.group().decode("ascii") for m in _run_pattern(min_length).finditer(data)]


def path_like(strings: Iterable[str]) -> list[str]:
    return [s for s in strings if "/" in s or "~" in s]


def _dot_path(name: str) -> str | None:
    # "~/..foo" and "~/.foo" are the same folder; a bare "~/." names nothing.
    stripped = name.lstrip(".")
    if not stripped:
        return None
    return f"~/.{stripped}"


def _home_relative(normalized: str, max_length: int) -> str | None:
    if not normalized.startswith("~/."):
        return None
    if len(normalized) >= max_length or any(c in _GLOB_CHARS for c in normalized):
        return None
    first = normalized[2:].split("/", 1)[0]
    return _dot_path(first)


def _from_users_path(raw: str) -> str | None:
    if not raw.startswith("/Users/") or "/." not in raw:
        return None
    after = raw[raw.rfind("/.") + 2 :]
    if "/" not in after:
        return None
    return _dot_path(after.split("/", 1)[0])


def candidate_paths(strings: Iterable[str], max_length: int = MAX_CANDIDATE_LENGTH) -> list[str]:
    """Reduce extracted strings to ordered, de-duplicated ``~/.<name>`` candidates."""
    found: list[str] = []
    seen: set[str] = set()

    def _add(candidate: str | None) -> None:
        if candidate is not None and candidate not in seen:
            seen.add(candidate)
            found.append(candidate)

    for raw in strings:
        normalized = raw.replace("$HOME", "~").strip()
        _add(_home_relative(normalized, max_length))
        _add(_from_users_path(raw))
    return found


def executable_path(app: ApplicationDescriptor) -> str:
    name = app.executable_name or app.bundle_name
    return f"{app.bundle_location.rstrip('/')}/Contents/MacOS/{name}"


def scan_executable(
    app: ApplicationDescriptor,
    fs: FileSystem = DEFAULT_FS,
    min_length: int = MIN_RUN_LENGTH,
    max_length: int = MAX_CANDIDATE_LENGTH,
) -> list[str]:
    path = executable_path(app)
    if not fs.exists(path):
        log.debug("No executable at %s", path)
        return []
    try:
        data = fs.read_bytes(path)
    except OSError as exc:
        log.debug("Cannot read executable %s: %s", path, exc)
        return []
    candidates = candidate_paths(path_like(printable_runs(data, min_length)), max_length)
    log.debug("Found %d path candidates in %s", len(candidates), path)
    return candidates
