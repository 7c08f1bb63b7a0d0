from __future__ import annotations

import logging
import os
import shutil
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass(slots=True)
class DisposalOutcome:
    succeeded: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)


def default_trash_dir() -> str:
    return str(Path.home() / ".Trash")


def _free_name(trash_dir: str, name: str) -> str:
    target = os.path.join(trash_dir, name)
    if not os.path.lexists(target):
        return target
    stem, ext = os.path.splitext(name)
    stamp = time.strftime("%H-%M-%S")
    counter = 0
    while True:
        suffix = f" {stamp}" if counter == 0 else f" {stamp} {counter}"
        candidate = os.path.join(trash_dir, f"{stem}{suffix}{ext}")
        if not os.path.lexists(candidate):
            return candidate
        counter += 1


def move_to_trash(paths: Iterable[str], trash_dir: str | None = None) -> DisposalOutcome:
    """Move each path into the user's Trash.

    Nothing is retried. The caller decides whether the failures point at a
    missing Full Disk Access grant.
    """
    outcome = DisposalOutcome()
    target_dir = trash_dir or default_trash_dir()
    for path in paths:
        try:
            os.makedirs(target_dir, exist_ok=True)
            destination = _free_name(target_dir, os.path.basename(path.rstrip("/")))
            shutil.move(path, destination)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            log.warning("Could not move %s to Trash: %s", path, reason)
            outcome.failed.append((path, reason))
            continue
        outcome.succeeded.append(path)
    return outcome
