"""Declarations scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_DECLARATIONS_FILENAME = "declarations.yaml"

_DECLARATIONS_SCAFFOLD_TEMPLATE = """# Schema declarations for firebase-schema-validator.
# Every entry needs a `kind` and the `entity` it was declared on.
# Run `firebase-schema-validator validate --declarations <this file>` to check it.

settings:
  # "all" reports every storage conflict, "first" stops at the first per declaration.
  storage_conflicts: all
  # Treat warning-level findings (e.g. a written document identifier) as errors.
  warnings_as_errors: false

declarations:
  - kind: collection
    entity: FirebaseUser
    path: users

  - kind: subcollection
    entity: FirebaseNotification
    # Full path of the parent collection.
    parent: users
    path: notifications

  - kind: entity
    entity: FirebaseUser
    fields:
      userId:
        document_identifier: true
        include_in_write: false
        include_in_copy: false
      displayName:
        # Persisted key; defaults to the field name.
        storage_key: display_name
        default:
          kind: string
          value: anonymous
      age:
        default:
          kind: integer
          value: 0
      status:
        default:
          kind: enumeration
          type: UserStatus
          member: active

  - kind: storage
    entity: UserStorage
    bucket: "gs://example-app.appspot.com"
    roots:
      - name: users
        children:
          - name: avatars
          - name: documents

  - kind: auth
    entity: UserAuthConfig
    # standardUser or administrator
    auth_kind: standardUser
    collection: users
    region: europe-west1
    # any of: session, signIn, signUp, forgotPassword
    modules:
      - session
      - signIn
      - signUp

  - kind: database
    entity: FirebaseStoresSearch
    name: stores_search
    database_url: "https://example-app.europe-west1.firebasedatabase.app"
"""


def build_declarations_scaffold() -> str:
    """Build a starter declarations file with inline guidance."""
    return _DECLARATIONS_SCAFFOLD_TEMPLATE


def write_declarations_scaffold(output_path: Path | str) -> Path:
    """Write the starter declarations file to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Declarations file already exists: {destination.resolve()}")
    destination.write_text(build_declarations_scaffold(), encoding="utf-8")
    return destination.resolve()
