from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from appsweep.models.enums import ArtifactCategory, LibraryRoot, PatternSource


@dataclass(slots=True, frozen=True)
class ExactRule:
    """A conventional ``<user Library>/<parent>/<bundle id><suffix>`` location."""

    parent: str
    suffix: str
    category: ArtifactCategory

    def name_for(self, identifier: str) -> str:
        return f"{identifier}{self.suffix}"


@dataclass(slots=True, frozen=True)
class FuzzyRule:
    root: LibraryRoot
    subdir: str
    category: ArtifactCategory
    source: PatternSource = PatternSource.PRIMARY
    # Suffixes appended to the bundle id; the resulting names are left to
    # the exact probe.
    skip_suffixes: tuple[str, ...] = ()


@dataclass(slots=True)
class AppConfig:
    scan_workers: int = 4
    include_system_locations: bool = True
    system_library: str = "/Library"
    receipts_directory: str = "/var/db/receipts"
    use_community_mappings: bool = True
    mappings_url: str | None = None
    mappings_timeout: float = 5.0
    min_string_length: int = 5
    max_candidate_length: int = 100
    generic_executables: frozenset[str] = frozenset()
    excluded_dot_folders: frozenset[str] = frozenset()
    extra_generic_executables: list[str] = field(default_factory=list)
    extra_excluded_dot_folders: list[str] = field(default_factory=list)
    exact_rules: list[ExactRule] = field(default_factory=list)
    fuzzy_rules: list[FuzzyRule] = field(default_factory=list)

    @property
    def generic_names(self) -> frozenset[str]:
        return frozenset(n.lower() for n in (*self.generic_executables, *self.extra_generic_executables))

    @property
    def excluded_dot_names(self) -> frozenset[str]:
        return frozenset(n.lower() for n in (*self.excluded_dot_folders, *self.extra_excluded_dot_folders))

    def to_dict(self) -> dict[str, Any]:
        return {
            "scanWorkers": self.scan_workers,
            "includeSystemLocations": self.include_system_locations,
            "systemLibrary": self.system_library,
            "receiptsDirectory": self.receipts_directory,
            "useCommunityMappings": self.use_community_mappings,
            "mappingsUrl": self.mappings_url,
            "mappingsTimeout": self.mappings_timeout,
            "minStringLength": self.min_string_length,
            "maxCandidateLength": self.max_candidate_length,
            "extraGenericExecutables": self.extra_generic_executables,
            "extraExcludedDotFolders": self.extra_excluded_dot_folders,
        }


def from_dict(data: dict[str, Any], defaults: AppConfig) -> AppConfig:
    url_raw = data.get("mappingsUrl", defaults.mappings_url)

    return AppConfig(
        scan_workers=max(1, int(data.get("scanWorkers", defaults.scan_workers))),
        include_system_locations=bool(data.get("includeSystemLocations", defaults.include_system_locations)),
        system_library=str(data.get("systemLibrary", defaults.system_library)),
        receipts_directory=str(data.get("receiptsDirectory", defaults.receipts_directory)),
        use_community_mappings=bool(data.get("useCommunityMappings", defaults.use_community_mappings)),
        mappings_url=str(url_raw) if url_raw else None,
        mappings_timeout=max(0.5, float(data.get("mappingsTimeout", defaults.mappings_timeout))),
        min_string_length=max(3, int(data.get("minStringLength", defaults.min_string_length))),
        max_candidate_length=max(10, int(data.get("maxCandidateLength", defaults.max_candidate_length))),
        generic_executables=defaults.generic_executables,
        excluded_dot_folders=defaults.excluded_dot_folders,
        extra_generic_executables=[
            str(x) for x in data.get("extraGenericExecutables", defaults.extra_generic_executables)
        ],
        extra_excluded_dot_folders=[
            str(x) for x in data.get("extraExcludedDotFolders", defaults.extra_excluded_dot_folders)
        ],
        exact_rules=list(defaults.exact_rules),
        fuzzy_rules=list(defaults.fuzzy_rules),
    )
