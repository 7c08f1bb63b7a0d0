from __future__ import annotations

from appsweep.config.schema import AppConfig, ExactRule, FuzzyRule
from appsweep.models.enums import ArtifactCategory, LibraryRoot, PatternSource

COMMUNITY_MAPPINGS_URL = (
    "https://raw.githubusercontent.com/maylard/MacOS-App-UnInstall/main/Uninstaller/Resources/community_mappings.json"
)

# Runtime and framework executable names shared by many unrelated apps.
# Matching on these would make every Electron app claim every other one's data.
GENERIC_EXECUTABLES = frozenset(
    {
        "electron",
        "node",
        "python",
        "python3",
        "ruby",
        "java",
        "php",
        "perl",
        "bash",
        "sh",
        "zsh",
        "nwjs",
        "cefclient",
        "helper",
        "chromium",
        "webkit",
        "qt",
        "gtk",
    }
)

# Home dot-folders that belong to the shell, toolchains or the OS, never to
# a single app.
EXCLUDED_DOT_FOLDERS = frozenset(
    {
        ".Trash",
        ".cache",
        ".config",
        ".local",
        ".ssh",
        ".gnupg",
        ".zshrc",
        ".zshenv",
        ".zprofile",
        ".zsh_history",
        ".zsh_sessions",
        ".bashrc",
        ".bash_profile",
        ".bash_history",
        ".profile",
        ".gitconfig",
        ".git",
        ".npm",
        ".yarn",
        ".pnpm-store",
        ".cargo",
        ".rustup",
        ".gradle",
        ".m2",
        ".pyenv",
        ".nvm",
        ".rbenv",
        ".DS_Store",
        ".CFUserTextEncoding",
    }
)


def default_exact_rules() -> list[ExactRule]:
    return [
        ExactRule("Containers", "", ArtifactCategory.CONTAINERS),
        ExactRule("Saved Application State", ".savedState", ArtifactCategory.SAVED_STATE),
        ExactRule("HTTPStorages", "", ArtifactCategory.HTTP_STORAGES),
        ExactRule("WebKit", "", ArtifactCategory.WEBKIT),
        ExactRule("Cookies", ".binarycookies", ArtifactCategory.COOKIES),
        ExactRule("Preferences", ".plist", ArtifactCategory.PREFERENCES),
        ExactRule("Preferences", ".helper.plist", ArtifactCategory.PREFERENCES),
        ExactRule("Application Scripts", "", ArtifactCategory.APPLICATION_SCRIPTS),
    ]


def default_fuzzy_rules() -> list[FuzzyRule]:
    user = LibraryRoot.USER
    system = LibraryRoot.SYSTEM
    return [
        FuzzyRule(user, "Application Support", ArtifactCategory.APPLICATION_SUPPORT),
        FuzzyRule(user, "Caches", ArtifactCategory.CACHES),
        FuzzyRule(user, "Logs", ArtifactCategory.LOGS),
        FuzzyRule(user, "LaunchAgents", ArtifactCategory.LAUNCH_AGENTS),
        FuzzyRule(user, "Group Containers", ArtifactCategory.GROUP_CONTAINERS),
        FuzzyRule(user, "Logs/DiagnosticReports", ArtifactCategory.CRASH_REPORTS),
        FuzzyRule(
            user,
            "Preferences",
            ArtifactCategory.PREFERENCES,
            source=PatternSource.BUNDLE_ID,
            skip_suffixes=(".plist", ".helper.plist"),
        ),
        FuzzyRule(user, "Application Scripts", ArtifactCategory.APPLICATION_SCRIPTS, skip_suffixes=("",)),
        FuzzyRule(system, "Application Support", ArtifactCategory.APPLICATION_SUPPORT),
        FuzzyRule(system, "LaunchAgents", ArtifactCategory.LAUNCH_AGENTS),
        FuzzyRule(system, "LaunchDaemons", ArtifactCategory.LAUNCH_DAEMONS),
        FuzzyRule(system, "Preferences", ArtifactCategory.PREFERENCES),
        FuzzyRule(system, "Caches", ArtifactCategory.CACHES),
        # Receipts are matched on the bare bundle id only.
        FuzzyRule(LibraryRoot.RECEIPTS, "", ArtifactCategory.RECEIPTS, source=PatternSource.BUNDLE_ID),
    ]


def default_config() -> AppConfig:
    return AppConfig(
        scan_workers=4,
        include_system_locations=True,
        system_library="/Library",
        receipts_directory="/var/db/receipts",
        use_community_mappings=True,
        mappings_url=COMMUNITY_MAPPINGS_URL,
        mappings_timeout=5.0,
        min_string_length=5,
        max_candidate_length=100,
        generic_executables=GENERIC_EXECUTABLES,
        excluded_dot_folders=EXCLUDED_DOT_FOLDERS,
        extra_generic_executables=[],
        extra_excluded_dot_folders=[],
        exact_rules=default_exact_rules(),
        fuzzy_rules=default_fuzzy_rules(),
    )
