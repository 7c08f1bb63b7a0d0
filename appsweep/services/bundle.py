from __future__ import annotations

import plistlib
from xml.parsers.expat import ExpatError

from result import Err, Ok

from appsweep.models.app import (
    ApplicationDescriptor,
    BundleError,
    BundleErrorCode,
    BundleResult,
    developer_name_for,
    is_dot_segmented,
)
from appsweep.services.fs import DEFAULT_FS, FileSystem

BUNDLE_SUFFIX = ".app"


def _optional_str(plist: dict[str, object], key: str) -> str | None:
    value = plist.get(key)
    return value if isinstance(value, str) and value else None


def read_bundle(location: str, fs: FileSystem = DEFAULT_FS) -> BundleResult:
    """Read ``Contents/Info.plist`` of an ``.app`` bundle into a descriptor."""
    path = fs.expanduser(location).rstrip("/")
    if not path.lower().endswith(BUNDLE_SUFFIX):
        return Err(
            BundleError(
                code=BundleErrorCode.NOT_A_BUNDLE,
                path=path,
                message="Not an application bundle (.app)",
            )
        )
    try:
        is_dir = fs.stat(path).is_dir
    except OSError:
        is_dir = False
    if not is_dir:
        return Err(
            BundleError(
                code=BundleErrorCode.NOT_A_BUNDLE,
                path=path,
                message="Application bundle does not exist or is not a directory",
            )
        )

    info_path = f"{path}/Contents/Info.plist"
    try:
        plist = plistlib.loads(fs.read_bytes(info_path))
    except (OSError, ExpatError, ValueError) as exc:
        return Err(
            BundleError(
                code=BundleErrorCode.METADATA_UNREADABLE,
                path=info_path,
                message=f"Cannot read Info.plist: {exc}",
            )
        )
    if not isinstance(plist, dict):
        return Err(
            BundleError(
                code=BundleErrorCode.METADATA_UNREADABLE,
                path=info_path,
                message="Info.plist is not a dictionary",
            )
        )

    identifier = _optional_str(plist, "CFBundleIdentifier")
    if identifier is None or not is_dot_segmented(identifier):
        return Err(
            BundleError(
                code=BundleErrorCode.MISSING_IDENTIFIER,
                path=info_path,
                message="Application has no valid bundle identifier",
            )
        )

    stem = path.rsplit("/", 1)[-1][: -len(BUNDLE_SUFFIX)]
    return Ok(
        ApplicationDescriptor(
            bundle_identifier=identifier,
            bundle_name=_optional_str(plist, "CFBundleName") or stem,
            bundle_location=path,
            display_name=_optional_str(plist, "CFBundleDisplayName"),
            executable_name=_optional_str(plist, "CFBundleExecutable"),
            developer_name=developer_name_for(identifier),
        )
    )
