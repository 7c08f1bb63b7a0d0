from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class ArtifactCategory(str, Enum):
    """Where a leftover was found. Declaration order is display order."""

    APPLICATION_SUPPORT = "application-support"
    CACHES = "caches"
    PREFERENCES = "preferences"
    SAVED_STATE = "saved-state"
    LOGS = "logs"
    LAUNCH_AGENTS = "launch-agents"
    LAUNCH_DAEMONS = "launch-daemons"
    HTTP_STORAGES = "http-storages"
    WEBKIT = "webkit"
    COOKIES = "cookies"
    CONTAINERS = "containers"
    GROUP_CONTAINERS = "group-containers"
    RECEIPTS = "receipts"
    CRASH_REPORTS = "crash-reports"
    APPLICATION_SCRIPTS = "application-scripts"
    HOME_DIRECTORY = "home-directory"
    BINARY_DISCOVERED = "binary-discovered"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[ArtifactCategory, str] = {
    ArtifactCategory.APPLICATION_SUPPORT: "Application Support",
    ArtifactCategory.CACHES: "Caches",
    ArtifactCategory.PREFERENCES: "Preferences",
    ArtifactCategory.SAVED_STATE: "Saved Application State",
    ArtifactCategory.LOGS: "Logs",
    ArtifactCategory.LAUNCH_AGENTS: "Launch Agents",
    ArtifactCategory.LAUNCH_DAEMONS: "Launch Daemons",
    ArtifactCategory.HTTP_STORAGES: "HTTP Storages",
    ArtifactCategory.WEBKIT: "WebKit",
    ArtifactCategory.COOKIES: "Cookies",
    ArtifactCategory.CONTAINERS: "Containers",
    ArtifactCategory.GROUP_CONTAINERS: "Group Containers",
    ArtifactCategory.RECEIPTS: "Receipts",
    ArtifactCategory.CRASH_REPORTS: "Crash Reports",
    ArtifactCategory.APPLICATION_SCRIPTS: "Application Scripts",
    ArtifactCategory.HOME_DIRECTORY: "Home Directory",
    ArtifactCategory.BINARY_DISCOVERED: "Found in App Binary",
    ArtifactCategory.OTHER: "Other",
}


class PatternSource(str, Enum):
    """Which pattern list a fuzzy location is matched against."""

    PRIMARY = "primary"
    BUNDLE_ID = "bundle_id"


class LibraryRoot(str, Enum):
    USER = "user"
    SYSTEM = "system"
    RECEIPTS = "receipts"
