"""Collection path resolution tests."""

from __future__ import annotations

from firebase_schema_validator.collection_paths import (
    CollectionPathModel,
    RootCollection,
    SubCollection,
)
from firebase_schema_validator.diagnostics import ErrorKind


def _resolve(*declarations):
    model = CollectionPathModel()
    for declaration in declarations:
        model.register(declaration)
    return model.resolve()


def test_full_paths_join_parent_and_segment() -> None:
    assert RootCollection("FirebaseUser", "users").full_path == "users"
    assert SubCollection("Notification", "users", "notifications").full_path == (
        "users/notifications"
    )


def test_out_of_order_declarations_resolve_to_fixed_point() -> None:
    resolution = _resolve(
        SubCollection("Read", "users/notifications", "reads"),
        SubCollection("Notification", "users", "notifications"),
        RootCollection("FirebaseUser", "users"),
    )

    assert resolution.issues == ()
    assert [collection.full_path for collection in resolution.resolved] == [
        "users/notifications/reads",
        "users/notifications",
        "users",
    ]
    depths = {collection.full_path: collection.depth for collection in resolution.resolved}
    assert depths == {"users": 0, "users/notifications": 1, "users/notifications/reads": 2}
    assert resolution.full_paths() == frozenset(depths)


def test_missing_parent_is_reported_with_declared_path() -> None:
    resolution = _resolve(
        RootCollection("FirebaseUser", "users"),
        SubCollection("Notification", "users", "notifications"),
        SubCollection("Ghost", "ghost", "x"),
    )

    assert [issue.error_kind for issue in resolution.issues] == [ErrorKind.UNRESOLVED_PARENT]
    issue = resolution.issues[0]
    assert issue.path == "x"
    assert issue.reference == "ghost"
    assert "not declared" in issue.message
    assert len(resolution.resolved) == 2


def test_cycle_members_are_reported_once_each() -> None:
    resolution = _resolve(
        SubCollection("A", "B", "A"),
        SubCollection("B", "A", "B"),
    )

    assert [issue.error_kind for issue in resolution.issues] == [
        ErrorKind.UNRESOLVED_PARENT,
        ErrorKind.UNRESOLVED_PARENT,
    ]
    assert [(issue.path, issue.reference) for issue in resolution.issues] == [
        ("A", "B"),
        ("B", "A"),
    ]
    assert resolution.resolved == ()


def test_descendants_of_an_unresolved_parent_are_each_reported() -> None:
    resolution = _resolve(
        SubCollection("Lost", "ghost", "lost"),
        SubCollection("LostChild", "ghost/lost", "child"),
    )

    assert [issue.reference for issue in resolution.issues] == ["ghost", "ghost/lost"]
    assert "never resolves" in resolution.issues[1].message


def test_duplicate_path_under_same_parent_is_a_conflict() -> None:
    model = CollectionPathModel()
    model.register(RootCollection("FirebaseUser", "users"))
    model.register(SubCollection("Notification", "users", "notifications"))

    issues = model.register(SubCollection("Duplicate", "users", "notifications"))

    assert [issue.error_kind for issue in issues] == [ErrorKind.CONFLICT]
    assert issues[0].path == "users/notifications"
    assert issues[0].reference == "Notification"
    assert len(model) == 2


def test_same_segment_under_different_parents_is_allowed() -> None:
    resolution = _resolve(
        RootCollection("FirebaseUser", "users"),
        RootCollection("FirebaseAdmin", "admins"),
        SubCollection("UserNotification", "users", "notifications"),
        SubCollection("AdminNotification", "admins", "notifications"),
    )

    assert resolution.issues == ()
    assert len(resolution.resolved) == 4


def test_empty_and_separator_segments_are_invalid() -> None:
    resolution = _resolve(
        RootCollection("Empty", ""),
        RootCollection("Nested", "users/extra"),
        SubCollection("Orphan", "", "child"),
    )

    assert [issue.error_kind for issue in resolution.issues] == [
        ErrorKind.INVALID_DECLARATION,
        ErrorKind.INVALID_DECLARATION,
        ErrorKind.INVALID_DECLARATION,
    ]
    assert resolution.resolved == ()
