"""Community-maintained bundle id → extra leftover locations.

Some apps store data under names nothing in their bundle metadata predicts.
A shared table fills that gap. It is fetched once over HTTP with a short
timeout and falls back to the copy shipped with the package; neither failure
mode ever stops a scan.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from http import client as http_client
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable
from urllib import error as urllib_error
from urllib import request as urllib_request

from appsweep.config.defaults import COMMUNITY_MAPPINGS_URL
from appsweep.services.fs import DEFAULT_FS, FileSystem

log = logging.getLogger(__name__)

BUNDLED_PATH = str(Path(__file__).resolve().parent.parent / "data" / "community_mappings.json")
HTTP_STATUS_OK = 200

Fetcher = Callable[[str, float], bytes]


class MappingFetchError(RuntimeError):
    """Raised when the remote table cannot be retrieved."""


def http_get(url: str, timeout: float) -> bytes:
    try:
        with urllib_request.urlopen(urllib_request.Request(url, method="GET"), timeout=timeout) as response:
            status = getattr(response, "status", HTTP_STATUS_OK)
            if status != HTTP_STATUS_OK:
                raise MappingFetchError(f"HTTP {status} from {url}")
            return response.read()
    except urllib_error.URLError as exc:
        raise MappingFetchError(str(exc)) from exc
    except (TimeoutError, OSError, http_client.HTTPException) as exc:
        raise MappingFetchError(f"{type(exc).__name__}: {exc}") from exc


@dataclass(slots=True, frozen=True)
class MappingSnapshot:
    version: int
    mappings: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    source: str = "empty"

    def paths_for(self, identifier: str) -> tuple[str, ...]:
        return self.mappings.get(identifier, ())

    def __len__(self) -> int:
        return len(self.mappings)


def parse_mappings(payload: Any, source: str) -> MappingSnapshot:
    """Validate the JSON document shape and freeze it into a snapshot."""
    if not isinstance(payload, dict) or not isinstance(payload.get("mappings"), dict):
        raise ValueError("mappings document must be an object with a 'mappings' object")
    table: dict[str, tuple[str, ...]] = {}
    for identifier, entry in payload["mappings"].items():
        if not isinstance(entry, dict):
            raise ValueError(f"mapping for {identifier!r} must be an object")
        paths = entry.get("paths", [])
        if not isinstance(paths, list):
            raise ValueError(f"paths for {identifier!r} must be a list")
        table[str(identifier)] = tuple(str(p) for p in paths if p)
    return MappingSnapshot(
        version=int(payload.get("version", 0)),
        mappings=MappingProxyType(table),
        source=source,
    )


class CommunityMappings:
    def __init__(
        self,
        url: str | None = COMMUNITY_MAPPINGS_URL,
        timeout: float = 5.0,
        fetch: Fetcher = http_get,
        bundled_path: str = BUNDLED_PATH,
        fs: FileSystem = DEFAULT_FS,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._fetch = fetch
        self._bundled_path = bundled_path
        self._fs = fs
        self._lock = threading.Lock()
        self._snapshot: MappingSnapshot | None = None

    def snapshot(self) -> MappingSnapshot:
        """Return the loaded table, loading it on first use."""
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._load()
            return self._snapshot

    def refresh(self) -> MappingSnapshot:
        """Load a fresh table. Earlier snapshots handed out stay unchanged."""
        snapshot = self._load()
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def _load(self) -> MappingSnapshot:
        if self._url:
            try:
                payload = json.loads(self._fetch(self._url, self._timeout))
                snapshot = parse_mappings(payload, source="remote")
                log.debug("Loaded %d community mappings from %s", len(snapshot), self._url)
                return snapshot
            except (MappingFetchError, TypeError, ValueError) as exc:
                log.info("Community mappings unavailable (%s); using bundled copy", exc)
        return self._load_bundled()

    def _load_bundled(self) -> MappingSnapshot:
        try:
            payload = json.loads(self._fs.read_text(self._bundled_path))
            return parse_mappings(payload, source="bundled")
        except (OSError, TypeError, ValueError) as exc:
            log.warning("Bundled community mappings unreadable: %s", exc)
            return MappingSnapshot(version=0)


@lru_cache(maxsize=None)
def default_mappings(url: str | None = COMMUNITY_MAPPINGS_URL, timeout: float = 5.0) -> CommunityMappings:
    """Process-wide instance, so the table is fetched at most once per run."""
    return CommunityMappings(url=url, timeout=timeout)
