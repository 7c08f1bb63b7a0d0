from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass, field

from appsweep.config.schema import ExactRule
from appsweep.models.enums import ArtifactCategory
from appsweep.models.scan import FoundArtifact
from appsweep.services.fs import DEFAULT_FS, DirEntry, FileSystem
from appsweep.services.sizes import artifact_at

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ProbeFindings:
    artifacts: list[FoundArtifact] = field(default_factory=list)
    access_denied: bool = False

    def add(self, artifact: FoundArtifact | None) -> None:
        if artifact is not None:
            self.artifacts.append(artifact)


def _list_children(directory: str, fs: FileSystem) -> tuple[list[DirEntry], bool]:
    """Return ``(entries, access_denied)``; any failure reads as an empty directory."""
    try:
        return list(fs.scandir(directory)), False
    except PermissionError as exc:
        log.debug("Permission denied listing %s: %s", directory, exc)
        return [], True
    except OSError as exc:
        log.debug("Cannot list %s: %s", directory, exc)
        return [], False


def exact_probe(
    user_library: str,
    identifier: str,
    rules: Iterable[ExactRule],
    fs: FileSystem = DEFAULT_FS,
) -> ProbeFindings:
    findings = ProbeFindings()
    base = user_library.rstrip("/")
    for rule in rules:
        path = f"{base}/{rule.parent}/{rule.name_for(identifier)}"
        if fs.exists(path):
            findings.add(artifact_at(path, rule.category, fs))
    return findings


def fuzzy_probe(
    directory: str,
    patterns: Sequence[str],
    category: ArtifactCategory,
    fs: FileSystem = DEFAULT_FS,
    skip: Collection[str] = (),
    include_hidden: bool = False,
) -> ProbeFindings:
    """Record every child of *directory* whose name contains one of *patterns*.

    Matching ignores case. Names in *skip* belong to the exact probe and are
    never reported here.
    """
    folded = [p.casefold() for p in patterns if p]
    entries, denied = _list_children(directory, fs)
    findings = ProbeFindings(access_denied=denied)
    if not folded:
        return findings
    for entry in entries:
        name = entry.name
        if not include_hidden and name.startswith("."):
            continue
        if name in skip:
            continue
        lname = name.casefold()
        if any(p in lname for p in folded):
            findings.add(artifact_at(entry.path, category, fs))
    return findings


def home_dot_probe(
    home: str,
    patterns: Collection[str],
    fs: FileSystem = DEFAULT_FS,
    excluded: Collection[str] = (),
) -> ProbeFindings:
    excluded_lower = {e.lower() for e in excluded}
    lowered = [p.lower() for p in patterns if p]
    entries, denied = _list_children(home, fs)
    findings = ProbeFindings(access_denied=denied)
    for entry in entries:
        name = entry.name
        if not name.startswith(".") or name.lower() in excluded_lower:
            continue
        clean = name[1:].lower()
        if not clean:
            continue
        # substring containment covers the exact-name case too
        if any(p in clean for p in lowered):
            findings.add(artifact_at(entry.path, ArtifactCategory.HOME_DIRECTORY, fs))
    return findings


def resolve_candidate(candidate: str, home: str) -> str:
    home = home.rstrip("/")
    if candidate == "~":
        return home
    if candidate.startswith("~/"):
        return home + candidate[1:]
    return candidate


def resolve_discovered(
    candidates: Iterable[str],
    home: str,
    existing: Collection[str],
    fs: FileSystem = DEFAULT_FS,
    category: ArtifactCategory = ArtifactCategory.BINARY_DISCOVERED,
    excluded: Collection[str] = (),
) -> ProbeFindings:
    """Turn ``~``-relative candidates into artifacts for the ones that exist.

    *existing* holds canonical paths already reported by earlier phases.
    Candidates whose final name is in *excluded* are dropped; binary strings
    pass none, community paths pass the home dot-folder blocklist.
    """
    excluded_lower = {e.lower() for e in excluded}
    seen = set(existing)
    seen.add(fs.canonical(home))
    findings = ProbeFindings()
    for candidate in candidates:
        path = resolve_candidate(candidate, home).rstrip("/")
        if not path:
            continue
        if path.rsplit("/", 1)[-1].lower() in excluded_lower:
            log.debug("Ignoring generic folder %s", path)
            continue
        key = fs.canonical(path)
        if key in seen or not fs.exists(path):
            continue
        seen.add(key)
        findings.add(artifact_at(path, category, fs))
    return findings
