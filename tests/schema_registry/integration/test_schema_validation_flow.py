"""End-to-end schema validation flow tests."""

from __future__ import annotations

from pathlib import Path

from firebase_schema_validator.auth_domains import AuthDomainDeclaration, AuthKind, AuthModule
from firebase_schema_validator.collection_paths import RootCollection, SubCollection
from firebase_schema_validator.declaration_ingestion import (
    dump_declarations,
    parse_declarations,
    read_declarations,
    write_declarations,
)
from firebase_schema_validator.diagnostics import ErrorKind
from firebase_schema_validator.field_directives import EntityDeclaration, FieldDirective, GeoIndex
from firebase_schema_validator.literal_values import of_double, of_enumeration, of_null
from firebase_schema_validator.schema_registry import RegistryState, validate_declarations
from firebase_schema_validator.storage_tree import StorageDeclaration, StorageNode


def test_users_notifications_resolve_and_ghost_parent_is_unresolved() -> None:
    valid = validate_declarations(
        [
            RootCollection("FirebaseUser", "users"),
            SubCollection("FirebaseNotification", "users", "notifications"),
        ]
    )
    assert valid.state == RegistryState.VALIDATED

    rejected = validate_declarations(
        [
            RootCollection("FirebaseUser", "users"),
            SubCollection("FirebaseNotification", "users", "notifications"),
            SubCollection("Ghost", "ghost", "x"),
        ]
    )

    assert rejected.state == RegistryState.REJECTED
    assert len(rejected.issues) == 1
    issue = rejected.issues[0]
    assert issue.error_kind == ErrorKind.UNRESOLVED_PARENT
    assert (issue.path, issue.reference) == ("x", "ghost")


def test_administrator_bound_to_undeclared_collection_is_unknown() -> None:
    report = validate_declarations(
        [
            AuthDomainDeclaration(
                entity_name="AdminAuthConfig",
                kind=AuthKind.ADMINISTRATOR,
                bound_collection="admins",
                region="europe-west1",
                enabled_modules=frozenset({AuthModule.SIGN_IN}),
            )
        ]
    )

    assert [issue.error_kind for issue in report.issues] == [ErrorKind.UNKNOWN_COLLECTION]


def test_auth_domain_bound_to_unresolved_sub_collection_is_unknown() -> None:
    report = validate_declarations(
        [
            SubCollection("Orphan", "ghost", "admins"),
            AuthDomainDeclaration(
                entity_name="AdminAuthConfig",
                kind=AuthKind.ADMINISTRATOR,
                bound_collection="ghost/admins",
                region="europe-west1",
                enabled_modules=frozenset({AuthModule.SIGN_IN}),
            ),
        ]
    )

    assert [issue.error_kind for issue in report.issues] == [
        ErrorKind.UNRESOLVED_PARENT,
        ErrorKind.UNKNOWN_COLLECTION,
    ]


def test_duplicate_avatars_under_users_conflict() -> None:
    report = validate_declarations(
        [
            StorageDeclaration(
                entity_name="UserStorage",
                roots=(
                    StorageNode("users", (StorageNode("avatars"), StorageNode("avatars"))),
                ),
            )
        ]
    )

    assert [(issue.error_kind, issue.path) for issue in report.issues] == [
        (ErrorKind.CONFLICT, "users.avatars")
    ]


def _rich_declarations() -> list:
    return [
        RootCollection("FirebaseUser", "users"),
        SubCollection("FirebaseNotification", "users", "notifications"),
        SubCollection("FirebaseRead", "users/notifications", "reads"),
        EntityDeclaration(
            "FirebaseStoresSearch",
            {
                "storeId": FieldDirective(
                    document_identifier=True, include_in_write=False, include_in_copy=False
                ),
                "lat": FieldDirective(default_on_missing=of_double(0)),
                "geohash": FieldDirective(storage_key="gh", default_on_missing=of_null()),
                "status": FieldDirective(
                    default_on_missing=of_enumeration("StoreStatus", "open"),
                    include_in_read=False,
                ),
            },
            GeoIndex(location_field="lat", geohash_field="geohash"),
        ),
        StorageDeclaration(
            "UserStorage",
            (StorageNode("users", (StorageNode("avatars"),)),),
            bucket="gs://example-app.appspot.com",
        ),
        AuthDomainDeclaration(
            entity_name="UserAuthConfig",
            kind=AuthKind.STANDARD_USER,
            bound_collection="users",
            region="europe-west1",
            enabled_modules=frozenset({AuthModule.SESSION, AuthModule.SIGN_IN}),
        ),
    ]


def test_rebuilding_from_serialized_declarations_yields_same_graph() -> None:
    original = validate_declarations(_rich_declarations())
    assert original.graph is not None

    rebuilt = validate_declarations(
        parse_declarations(dump_declarations(original.graph.declarations))
    )

    assert rebuilt.graph is not None
    assert rebuilt.issues == original.issues == ()
    assert rebuilt.graph.collection_paths() == original.graph.collection_paths()
    assert rebuilt.graph.storage_paths() == original.graph.storage_paths()
    assert rebuilt.graph.declarations == original.graph.declarations


def test_rebuilding_rejected_declarations_yields_same_issues(tmp_path: Path) -> None:
    declarations = _rich_declarations() + [
        SubCollection("Ghost", "ghost", "x"),
        RootCollection("DuplicateUser", "users"),
    ]
    original = validate_declarations(declarations)

    output = write_declarations(tmp_path / "declarations.yaml", declarations)
    rebuilt = validate_declarations(read_declarations(output).declarations)

    assert original.state == RegistryState.REJECTED
    assert rebuilt.issues == original.issues


def test_whitespace_in_names_survives_file_round_trip(tmp_path: Path) -> None:
    declarations = [
        RootCollection("FirebaseUser", "users "),
        StorageDeclaration(
            "UserStorage", (StorageNode("users", (StorageNode("a"), StorageNode("a "))),)
        ),
    ]
    original = validate_declarations(declarations)

    output = write_declarations(tmp_path / "declarations.yaml", declarations)
    document = read_declarations(output)
    rebuilt = validate_declarations(document.declarations)

    assert original.issues == ()
    assert rebuilt.issues == original.issues
    assert document.declarations == tuple(declarations)
    assert rebuilt.graph is not None
    assert rebuilt.graph.collection_paths() == ("users ",)
