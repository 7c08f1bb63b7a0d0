from __future__ import annotations

import pytest
from rich.console import Console

from appsweep.models.app import ApplicationDescriptor
from appsweep.models.enums import ArtifactCategory, NodeKind
from appsweep.models.scan import FoundArtifact, ScanResult
from appsweep.services.formatting import format_bytes, shorten_home
from appsweep.services.summary import render_result

HOME = "/mock/home"


def _app() -> ApplicationDescriptor:
    return ApplicationDescriptor(
        bundle_identifier="com.example.widget",
        bundle_name="Widget",
        bundle_location="/Applications/Widget.app",
        discovered_paths=["~/.widget"],
    )


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "Zero KB"),
        (-5, "Zero KB"),
        (999, "999 bytes"),
        (1000, "1.0 KB"),
        (1_500_000, "1.5 MB"),
        (2_000_000_000, "2.0 GB"),
        (3 * 10**15, "3000.0 TB"),
    ],
)
def test_format_bytes(size: int, expected: str) -> None:
    assert format_bytes(size) == expected


def test_shorten_home() -> None:
    assert shorten_home("/mock/home/Library/Caches/x", HOME) == "~/Library/Caches/x"
    assert shorten_home("/mock/home", HOME + "/") == "~"
    assert shorten_home("/mock/homework/x", HOME) == "/mock/homework/x"
    assert shorten_home("/Library/Caches/x", HOME) == "/Library/Caches/x"


def test_render_result_groups_by_category() -> None:
    result = ScanResult(
        descriptor=_app(),
        artifacts=[
            FoundArtifact(f"{HOME}/Library/Caches/Widget", 2_000, NodeKind.DIRECTORY, ArtifactCategory.CACHES),
            FoundArtifact(
                f"{HOME}/Library/Preferences/com.example.widget.plist",
                500,
                NodeKind.FILE,
                ArtifactCategory.PREFERENCES,
            ),
            FoundArtifact(f"{HOME}/.widget", 100, NodeKind.DIRECTORY, ArtifactCategory.BINARY_DISCOVERED),
        ],
    )
    console = Console(record=True, width=200)

    render_result(console, result, HOME)

    text = console.export_text()
    assert "com.example.widget" in text
    assert "Caches" in text
    assert "Preferences" in text
    assert "Found in App Binary" in text
    assert "~/Library/Caches/Widget" in text
    assert "2.6 KB" in text
    assert text.index("Caches") < text.index("Preferences")


def test_render_empty_result() -> None:
    console = Console(record=True, width=120)
    render_result(console, ScanResult(descriptor=_app(), artifacts=[]), HOME)
    assert "No leftover files found." in console.export_text()
