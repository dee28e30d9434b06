"""Storage tree builder tests."""

from __future__ import annotations

from firebase_schema_validator.diagnostics import ErrorKind
from firebase_schema_validator.storage_tree import StorageNode, build_tree


def _node(name: str, *children: StorageNode) -> StorageNode:
    return StorageNode(name=name, children=tuple(children))


def test_valid_forest_has_no_conflicts_and_preorder_paths() -> None:
    tree = build_tree(
        [
            _node("users", _node("avatars"), _node("documents", _node("invoices"))),
            _node("public"),
        ],
        collect_all=True,
    )

    assert tree.is_valid
    assert tree.paths() == (
        "users",
        "users/avatars",
        "users/documents",
        "users/documents/invoices",
        "public",
    )


def test_duplicate_children_produce_one_conflict_at_full_path() -> None:
    tree = build_tree(
        [_node("users", _node("avatars"), _node("avatars"))],
        entity_name="UserStorage",
        collect_all=True,
    )

    assert len(tree.conflicts) == 1
    conflict = tree.conflicts[0]
    assert conflict.error_kind == ErrorKind.CONFLICT
    assert conflict.path == "users.avatars"
    assert conflict.entity_name == "UserStorage"


def test_sibling_names_are_case_sensitive() -> None:
    tree = build_tree([_node("a"), _node("A")], collect_all=True)

    assert tree.is_valid


def test_duplicate_root_names_conflict() -> None:
    tree = build_tree([_node("a"), _node("a")], collect_all=True)

    assert [conflict.path for conflict in tree.conflicts] == ["a"]


def test_same_name_under_different_parents_is_allowed() -> None:
    tree = build_tree(
        [_node("users", _node("avatars")), _node("groups", _node("avatars"))],
        collect_all=True,
    )

    assert tree.is_valid


def test_empty_and_separator_names_are_conflicts() -> None:
    tree = build_tree(
        [_node("users", _node(""), _node("a/b"))],
        collect_all=True,
    )

    assert [conflict.path for conflict in tree.conflicts] == ["users.", "users.a/b"]
    assert "empty" in tree.conflicts[0].message
    assert "'/'" in tree.conflicts[1].message


def test_collect_all_reports_every_conflict_in_preorder() -> None:
    roots = [
        _node("users", _node("x", _node("deep"), _node("deep")), _node("x")),
        _node("users"),
    ]

    tree = build_tree(roots, collect_all=True)

    assert [conflict.path for conflict in tree.conflicts] == [
        "users.x.deep",
        "users.x",
        "users",
    ]


def test_first_mode_stops_at_first_conflict() -> None:
    roots = [
        _node("users", _node("x", _node("deep"), _node("deep")), _node("x")),
        _node("users"),
    ]

    tree = build_tree(roots, collect_all=False)

    assert [conflict.path for conflict in tree.conflicts] == ["users.x.deep"]
    assert tree.roots == tuple(roots)
