from __future__ import annotations

import logging
from dataclasses import replace

from result import Err, Ok

from appsweep.config.defaults import default_config
from appsweep.config.schema import AppConfig, FuzzyRule
from appsweep.models.app import ApplicationDescriptor
from appsweep.models.enums import ArtifactCategory, LibraryRoot, PatternSource
from appsweep.models.scan import (
    CancelCheck,
    FoundArtifact,
    ProgressCallback,
    ScanError,
    ScanErrorCode,
    ScanOutcome,
    ScanResult,
)
from appsweep.scan._base import ProbeTask, run_tasks
from appsweep.services.community import CommunityMappings
from appsweep.services.fs import DEFAULT_FS, FileSystem
from appsweep.services.patterns import home_dir_patterns, search_patterns
from appsweep.services.probes import (
    exact_probe,
    fuzzy_probe,
    home_dot_probe,
    resolve_discovered,
)
from appsweep.services.strings import scan_executable

log = logging.getLogger(__name__)


def split_extras(extras: tuple[str, ...]) -> tuple[list[str], list[str]]:
    """Separate community entries into ``(paths, name patterns)``."""
    paths: list[str] = []
    patterns: list[str] = []
    for value in extras:
        (paths if value.startswith(("~/", "/")) else patterns).append(value)
    return paths, patterns


def dedupe_by_location(artifacts: list[FoundArtifact], fs: FileSystem = DEFAULT_FS) -> list[FoundArtifact]:
    """Keep the first artifact for each canonical path."""
    seen: set[str] = set()
    unique: list[FoundArtifact] = []
    for artifact in artifacts:
        key = fs.canonical(artifact.location)
        if key in seen:
            continue
        seen.add(key)
        unique.append(artifact)
    return unique


class LeftoverScanner:
    """Find everything an app left behind outside its bundle.

    Phases run in a fixed order: executable strings, exact locations, fuzzy
    Library matches, home dot-folders, then the paths found in the
    executable. The probe phases in the middle are independent and share a
    worker pool; their findings are merged in phase order.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        fs: FileSystem = DEFAULT_FS,
        mappings: CommunityMappings | None = None,
    ) -> None:
        self._config = config or default_config()
        self._fs = fs
        self._mappings = mappings

    def _fuzzy_directory(self, rule: FuzzyRule, user_library: str) -> str | None:
        cfg = self._config
        if rule.root is LibraryRoot.USER:
            base = user_library
        elif not cfg.include_system_locations:
            return None
        elif rule.root is LibraryRoot.SYSTEM:
            base = cfg.system_library
        else:
            base = cfg.receipts_directory
        base = base.rstrip("/")
        return f"{base}/{rule.subdir}" if rule.subdir else base

    def _probe_tasks(self, app: ApplicationDescriptor, patterns: list[str], home: str) -> list[ProbeTask]:
        cfg = self._config
        fs = self._fs
        identifier = app.bundle_identifier
        user_library = f"{home.rstrip('/')}/Library"

        tasks = [
            ProbeTask(
                label=user_library,
                run=lambda: exact_probe(user_library, identifier, cfg.exact_rules, fs),
            )
        ]
        for rule in cfg.fuzzy_rules:
            directory = self._fuzzy_directory(rule, user_library)
            if directory is None:
                continue
            rule_patterns = [identifier] if rule.source is PatternSource.BUNDLE_ID else patterns
            skip = frozenset(f"{identifier}{suffix}" for suffix in rule.skip_suffixes)
            tasks.append(
                ProbeTask(
                    label=directory,
                    run=lambda d=directory, p=rule_patterns, c=rule.category, s=skip: fuzzy_probe(d, p, c, fs, skip=s),
                )
            )

        home_patterns = home_dir_patterns(app, cfg.generic_names)
        tasks.append(
            ProbeTask(
                label=home,
                run=lambda: home_dot_probe(home, home_patterns, fs, excluded=cfg.excluded_dot_names),
            )
        )
        return tasks

    def scan(
        self,
        app: ApplicationDescriptor,
        progress_callback: ProgressCallback | None = None,
        cancel_check: CancelCheck | None = None,
    ) -> ScanOutcome:
        cfg = self._config
        fs = self._fs
        home = fs.home()

        candidates = scan_executable(app, fs, cfg.min_string_length, cfg.max_candidate_length)
        augmented = replace(app, discovered_paths=candidates)

        extra_paths: list[str] = []
        extra_patterns: list[str] = []
        if self._mappings is not None:
            extra_paths, extra_patterns = split_extras(self._mappings.snapshot().paths_for(app.bundle_identifier))

        patterns = search_patterns(augmented, extra_patterns, cfg.generic_names)
        log.debug("Search patterns for %s: %s", app.bundle_identifier, patterns)

        tasks = self._probe_tasks(augmented, patterns, home)
        phase_findings, cancelled = run_tasks(tasks, cfg.scan_workers, progress_callback, cancel_check)
        if cancelled:
            return Err(
                ScanError(
                    code=ScanErrorCode.CANCELLED,
                    path=app.bundle_location,
                    message="Scan cancelled",
                )
            )

        artifacts: list[FoundArtifact] = []
        access_denied = False
        for findings in phase_findings:
            artifacts.extend(findings.artifacts)
            access_denied = access_denied or findings.access_denied

        existing = {fs.canonical(a.location) for a in artifacts}
        discovered = resolve_discovered(candidates, home, existing, fs)
        artifacts.extend(discovered.artifacts)

        if extra_paths:
            existing.update(fs.canonical(a.location) for a in discovered.artifacts)
            community = resolve_discovered(
                extra_paths, home, existing, fs, category=ArtifactCategory.OTHER, excluded=cfg.excluded_dot_names
            )
            artifacts.extend(community.artifacts)

        unique = dedupe_by_location(artifacts, fs)
        log.info(
            "Scanned %s: %d leftovers (%d duplicates dropped)",
            app.bundle_identifier,
            len(unique),
            len(artifacts) - len(unique),
        )
        return Ok(ScanResult(descriptor=augmented, artifacts=unique, access_denied=access_denied))
