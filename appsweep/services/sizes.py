from __future__ import annotations

import logging

from appsweep.models.enums import ArtifactCategory, NodeKind
from appsweep.models.scan import FoundArtifact
from appsweep.services.fs import DEFAULT_FS, FileSystem

log = logging.getLogger(__name__)


def directory_size(path: str, fs: FileSystem = DEFAULT_FS) -> int:
    """Sum of regular-file sizes beneath *path*.

    Symlinks are neither followed nor counted. A subtree that cannot be listed
    contributes zero.
    """
    total = 0
    stack = [path]
    while stack:
        current = stack.pop()
        try:
            for entry in fs.scandir(current):
                st = entry.stat
                if st is None:
                    continue
                if st.is_dir:
                    stack.append(entry.path)
                elif st.is_file:
                    total += st.size
        except OSError as exc:
            log.debug("Skipping unreadable subtree %s: %s", current, exc)
    return total


def artifact_at(path: str, category: ArtifactCategory, fs: FileSystem = DEFAULT_FS) -> FoundArtifact | None:
    """Build an artifact for an existing *path*, or ``None`` if it cannot be stat'ed."""
    try:
        st = fs.stat(path)
    except OSError:
        return None
    if st.is_dir:
        return FoundArtifact(location=path, size=directory_size(path, fs), kind=NodeKind.DIRECTORY, category=category)
    return FoundArtifact(location=path, size=max(st.size, 0), kind=NodeKind.FILE, category=category)
