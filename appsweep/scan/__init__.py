from __future__ import annotations

from typing import Protocol

from appsweep.config.schema import AppConfig
from appsweep.models.app import ApplicationDescriptor
from appsweep.models.scan import CancelCheck, ProgressCallback, ScanOutcome
from appsweep.scan._base import ProbeTask, run_tasks
from appsweep.scan.orchestrator import LeftoverScanner, dedupe_by_location
from appsweep.services.community import default_mappings


class Scanner(Protocol):
    def scan(
        self,
        app: ApplicationDescriptor,
        progress_callback: ProgressCallback | None = None,
        cancel_check: CancelCheck | None = None,
    ) -> ScanOutcome: ...


def default_scanner(config: AppConfig, offline: bool = False) -> LeftoverScanner:
    """Return a scanner wired to the shared community mappings when enabled."""
    mappings = None
    if config.use_community_mappings:
        url = None if offline else config.mappings_url
        mappings = default_mappings(url, config.mappings_timeout)
    return LeftoverScanner(config=config, mappings=mappings)


__all__ = [
    "LeftoverScanner",
    "ProbeTask",
    "Scanner",
    "dedupe_by_location",
    "default_scanner",
    "run_tasks",
]
