from __future__ import annotations

from appsweep.models.app import ApplicationDescriptor
from appsweep.services.strings import (
    candidate_paths,
    executable_path,
    path_like,
    printable_runs,
    scan_executable,
)
from tests.fs_mock import MemoryFileSystem


def _app(exe: str | None = "Widget") -> ApplicationDescriptor:
    return ApplicationDescriptor(
        bundle_identifier="com.example.widget",
        bundle_name="Widget",
        bundle_location="/Applications/Widget.app",
        executable_name=exe,
    )


# ── printable_runs / path_like ──────────────────────────────────────


def test_printable_runs_split_on_non_printable_bytes() -> None:
    data = b"\x00\x01hello world\x00abc\x00~/.widgetrc\xff"
    assert printable_runs(data) == ["hello world", "~/.widgetrc"]


def test_printable_runs_minimum_length_inclusive() -> None:
    assert printable_runs(b"abcd\x00abcde\x00") == ["abcde"]
    assert printable_runs(b"abc\x00", min_length=3) == ["abc"]


def test_printable_runs_trailing_run_kept() -> None:
    assert printable_runs(b"\x00\x00/usr/lib") == ["/usr/lib"]


def test_path_like_keeps_slash_or_tilde() -> None:
    assert path_like(["hello", "a/b", "~home", "plain text"]) == ["a/b", "~home"]


# ── candidate_paths ─────────────────────────────────────────────────


def test_home_relative_string_reduced_to_first_segment() -> None:
    assert candidate_paths(["~/.widgetrc/config.json"]) == ["~/.widgetrc"]


def test_home_variable_normalized() -> None:
    assert candidate_paths(["$HOME/.widget/data"]) == ["~/.widget"]


def test_bare_dot_folder_kept() -> None:
    assert candidate_paths(["~/.gemini"]) == ["~/.gemini"]


def test_redundant_leading_dots_collapsed() -> None:
    assert candidate_paths(["~/..widget/state"]) == ["~/.widget"]


def test_empty_segment_yields_no_candidate() -> None:
    assert candidate_paths(["~/./", "~/../x", "~/."]) == []


def test_glob_and_brace_strings_rejected() -> None:
    assert candidate_paths(["~/.widget/*.log", "~/.{a,b}/x", "~/.w?dget/x"]) == []


def test_overlong_strings_rejected() -> None:
    long = "~/.widget/" + "x" * 100
    assert candidate_paths([long]) == []
    assert candidate_paths([long], max_length=200) == ["~/.widget"]


def test_users_path_uses_last_dot_segment() -> None:
    assert candidate_paths(["/Users/alice/.config/.widget/settings.json"]) == ["~/.widget"]


def test_users_path_requires_trailing_slash() -> None:
    assert candidate_paths(["/Users/alice/.widgetrc"]) == []


def test_candidates_are_ordered_and_unique() -> None:
    strings = [
        "~/.beta/x",
        "~/.alpha/y",
        "$HOME/.beta/z",
        "/Users/bob/.alpha/q",
        "~/.Alpha/r",
    ]
    assert candidate_paths(strings) == ["~/.beta", "~/.alpha", "~/.Alpha"]


def test_non_home_strings_ignored() -> None:
    assert candidate_paths(["/usr/lib/libSystem.dylib", "~/Documents/file"]) == []


# ── scan_executable ─────────────────────────────────────────────────


def test_executable_path_falls_back_to_bundle_name() -> None:
    assert executable_path(_app(exe=None)) == "/Applications/Widget.app/Contents/MacOS/Widget"
    assert executable_path(_app(exe="wdg")) == "/Applications/Widget.app/Contents/MacOS/wdg"


def test_scan_executable_reads_binary() -> None:
    blob = b"\xcf\xfa\xed\xfe\x00\x00~/.widgetrc/config.json\x00\x01noise\x00/Users/x/.wcache/db\x00"
    fs = MemoryFileSystem().add_file("/Applications/Widget.app/Contents/MacOS/Widget", content=blob)
    assert scan_executable(_app(), fs) == ["~/.widgetrc", "~/.wcache"]


def test_scan_executable_missing_binary_is_empty() -> None:
    fs = MemoryFileSystem().add_dir("/Applications/Widget.app/Contents/MacOS")
    assert scan_executable(_app(), fs) == []


def test_scan_executable_unreadable_binary_is_empty() -> None:
    exe = "/Applications/Widget.app/Contents/MacOS/Widget"
    fs = MemoryFileSystem().add_file(exe, content=b"~/.widgetrc/x").deny(exe)
    assert scan_executable(_app(), fs) == []
