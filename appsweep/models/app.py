from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from result import Result


@dataclass(slots=True)
class ApplicationDescriptor:
    """Identifying facts about one installed application."""

    bundle_identifier: str
    bundle_name: str
    bundle_location: str
    display_name: str | None = None
    executable_name: str | None = None
    developer_name: str | None = None
    discovered_paths: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not is_dot_segmented(self.bundle_identifier):
            raise ValueError(f"bundle_identifier {self.bundle_identifier!r} is not a dotted reverse-DNS name")
        dev = self.developer_name
        if dev is not None and not self.bundle_identifier.startswith(dev + "."):
            raise ValueError(f"developer_name {dev!r} is not a prefix of {self.bundle_identifier!r}")

    @property
    def effective_name(self) -> str:
        return self.display_name or self.bundle_name


def is_dot_segmented(identifier: str) -> bool:
    """True for non-empty names like ``com.example.widget`` with no empty segment."""
    parts = identifier.split(".")
    return len(parts) >= 2 and all(parts)


def developer_name_for(identifier: str) -> str | None:
    """Return the first two dot-segments of *identifier* when they are a strict prefix."""
    parts = identifier.split(".")
    if len(parts) < 3:
        return None
    return ".".join(parts[:2])


class BundleErrorCode(str, Enum):
    NOT_A_BUNDLE = "not_a_bundle"
    METADATA_UNREADABLE = "metadata_unreadable"
    MISSING_IDENTIFIER = "missing_identifier"


@dataclass(slots=True, frozen=True)
class BundleError:
    code: BundleErrorCode
    path: str
    message: str


BundleResult = Result[ApplicationDescriptor, BundleError]
