from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from result import Result

from appsweep.models.app import ApplicationDescriptor
from appsweep.models.enums import ArtifactCategory, NodeKind

# (location being probed, tasks finished, tasks total)
ProgressCallback = Callable[[str, int, int], None]
CancelCheck = Callable[[], bool]


@dataclass(slots=True)
class FoundArtifact:
    location: str
    size: int
    kind: NodeKind
    category: ArtifactCategory
    selected: bool = True

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def name(self) -> str:
        return self.location.rsplit("/", 1)[-1]

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location,
            "size": self.size,
            "isDirectory": self.is_directory,
            "category": self.category.value,
            "selected": self.selected,
        }


@dataclass(slots=True)
class ScanResult:
    descriptor: ApplicationDescriptor
    artifacts: list[FoundArtifact] = field(default_factory=list)
    # Set when at least one probed location could not be read for lack of
    # permission. Callers use it to suggest granting Full Disk Access.
    access_denied: bool = False

    @property
    def total_size(self) -> int:
        return sum(max(a.size, 0) for a in self.artifacts)

    @property
    def selected_size(self) -> int:
        return sum(max(a.size, 0) for a in self.artifacts if a.selected)

    @property
    def selected_count(self) -> int:
        return sum(1 for a in self.artifacts if a.selected)

    def selected_artifacts(self) -> list[FoundArtifact]:
        return [a for a in self.artifacts if a.selected]

    def grouped_by_category(self) -> list[tuple[ArtifactCategory, list[FoundArtifact]]]:
        grouped: dict[ArtifactCategory, list[FoundArtifact]] = {}
        for artifact in self.artifacts:
            grouped.setdefault(artifact.category, []).append(artifact)
        return [(cat, grouped[cat]) for cat in ArtifactCategory if cat in grouped]

    def to_dict(self) -> dict[str, Any]:
        d = self.descriptor
        return {
            "application": {
                "bundleIdentifier": d.bundle_identifier,
                "bundleName": d.bundle_name,
                "displayName": d.display_name,
                "executableName": d.executable_name,
                "bundleLocation": d.bundle_location,
                "discoveredPaths": list(d.discovered_paths),
            },
            "artifacts": [a.to_dict() for a in self.artifacts],
            "totalSize": self.total_size,
            "selectedSize": self.selected_size,
            "accessDenied": self.access_denied,
        }


class ScanErrorCode(str, Enum):
    CANCELLED = "cancelled"
    INTERNAL = "internal"


@dataclass(slots=True, frozen=True)
class ScanError:
    code: ScanErrorCode
    path: str
    message: str


ScanOutcome = Result[ScanResult, ScanError]
