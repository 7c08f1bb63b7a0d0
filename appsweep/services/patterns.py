from __future__ import annotations

from collections.abc import Iterable

from appsweep.config.defaults import GENERIC_EXECUTABLES
from appsweep.models.app import ApplicationDescriptor

VENDOR_NAMESPACE = "com.apple"


def is_generic_executable(name: str, generic_names: frozenset[str] = GENERIC_EXECUTABLES) -> bool:
    """True when *name* is a shared runtime (``node``, ``Electron``...) rather than an app."""
    return name.lower() in {g.lower() for g in generic_names}


def is_vendor_namespace(name: str) -> bool:
    return name.lower().startswith(VENDOR_NAMESPACE)


def last_segment(identifier: str) -> str:
    return identifier.rsplit(".", 1)[-1]


def _append_unique(patterns: list[str], candidate: str | None) -> None:
    if not candidate:
        return
    folded = candidate.casefold()
    if any(p.casefold() == folded for p in patterns):
        return
    patterns.append(candidate)


def search_patterns(
    app: ApplicationDescriptor,
    extra: Iterable[str] = (),
    generic_names: frozenset[str] = GENERIC_EXECUTABLES,
) -> list[str]:
    """Substrings used to match entries inside Library subdirectories.

    Order matters only for readability of results; matching is any-of. No two
    returned patterns are equal ignoring case.
    """
    patterns: list[str] = []
    _append_unique(patterns, app.bundle_identifier)
    _append_unique(patterns, app.bundle_name)
    if app.display_name is not None and app.display_name != app.bundle_name:
        _append_unique(patterns, app.display_name)
    exe = app.executable_name
    if exe is not None and exe != app.bundle_name and not is_generic_executable(exe, generic_names):
        _append_unique(patterns, exe)
    dev = app.developer_name
    if dev is not None and not is_vendor_namespace(dev):
        _append_unique(patterns, dev)
    _append_unique(patterns, last_segment(app.bundle_identifier))
    for value in extra:
        _append_unique(patterns, value)
    return patterns


def home_dir_patterns(
    app: ApplicationDescriptor,
    generic_names: frozenset[str] = GENERIC_EXECUTABLES,
) -> set[str]:
    """Lower-cased names matched against hidden folders directly under ``~``.

    Unlike :func:`search_patterns` this leaves out the bundle id and the
    developer prefix.
    """
    candidates = [app.bundle_name, app.display_name, last_segment(app.bundle_identifier)]
    exe = app.executable_name
    if exe is not None and not is_generic_executable(exe, generic_names):
        candidates.append(exe)
    return {c.lower() for c in candidates if c}
