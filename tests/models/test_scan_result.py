from __future__ import annotations

import pytest

from appsweep.models.app import ApplicationDescriptor, developer_name_for
from appsweep.models.enums import ArtifactCategory, NodeKind
from appsweep.models.scan import FoundArtifact, ScanResult


def _app() -> ApplicationDescriptor:
    return ApplicationDescriptor(
        bundle_identifier="com.example.widget",
        bundle_name="Widget",
        bundle_location="/Applications/Widget.app",
    )


def _artifact(path: str, size: int, category: ArtifactCategory, selected: bool = True) -> FoundArtifact:
    return FoundArtifact(location=path, size=size, kind=NodeKind.FILE, category=category, selected=selected)


def test_descriptor_requires_identifier() -> None:
    with pytest.raises(ValueError):
        ApplicationDescriptor(bundle_identifier="", bundle_name="X", bundle_location="/X.app")


@pytest.mark.parametrize("identifier", ["widget", "com..widget", ".widget", "com.example."])
def test_descriptor_requires_dotted_identifier(identifier: str) -> None:
    with pytest.raises(ValueError):
        ApplicationDescriptor(bundle_identifier=identifier, bundle_name="Widget", bundle_location="/Widget.app")


def test_two_segment_identifier_is_accepted() -> None:
    app = ApplicationDescriptor(bundle_identifier="io.widget", bundle_name="Widget", bundle_location="/Widget.app")
    assert app.developer_name is None


def test_descriptor_developer_name_must_prefix_identifier() -> None:
    with pytest.raises(ValueError):
        ApplicationDescriptor(
            bundle_identifier="com.example.widget",
            bundle_name="Widget",
            bundle_location="/Widget.app",
            developer_name="org.other",
        )


def test_developer_name_for() -> None:
    assert developer_name_for("com.example.widget") == "com.example"
    assert developer_name_for("com.example") is None
    assert developer_name_for("widget") is None


def test_effective_name_prefers_display_name() -> None:
    app = _app()
    assert app.effective_name == "Widget"
    app.display_name = "Widget Pro"
    assert app.effective_name == "Widget Pro"


def test_aggregates() -> None:
    result = ScanResult(
        descriptor=_app(),
        artifacts=[
            _artifact("/a", 100, ArtifactCategory.CACHES),
            _artifact("/b", 50, ArtifactCategory.PREFERENCES, selected=False),
            _artifact("/c", 25, ArtifactCategory.CACHES),
        ],
    )
    assert result.total_size == 175
    assert result.selected_size == 125
    assert result.selected_count == 2
    assert [a.location for a in result.selected_artifacts()] == ["/a", "/c"]


def test_grouping_follows_category_order() -> None:
    result = ScanResult(
        descriptor=_app(),
        artifacts=[
            _artifact("/home", 1, ArtifactCategory.HOME_DIRECTORY),
            _artifact("/cache1", 1, ArtifactCategory.CACHES),
            _artifact("/support", 1, ArtifactCategory.APPLICATION_SUPPORT),
            _artifact("/cache2", 1, ArtifactCategory.CACHES),
        ],
    )
    groups = result.grouped_by_category()
    assert [cat for cat, _ in groups] == [
        ArtifactCategory.APPLICATION_SUPPORT,
        ArtifactCategory.CACHES,
        ArtifactCategory.HOME_DIRECTORY,
    ]
    assert [a.location for a in groups[1][1]] == ["/cache1", "/cache2"]


def test_to_dict() -> None:
    result = ScanResult(descriptor=_app(), artifacts=[_artifact("/a", 3, ArtifactCategory.LOGS)])
    payload = result.to_dict()
    assert payload["application"]["bundleIdentifier"] == "com.example.widget"
    assert payload["artifacts"] == [
        {"location": "/a", "size": 3, "isDirectory": False, "category": "logs", "selected": True}
    ]
    assert payload["totalSize"] == 3


def test_category_labels() -> None:
    assert ArtifactCategory.SAVED_STATE.label == "Saved Application State"
    assert all(cat.label for cat in ArtifactCategory)
