"""Boundary tests for declaration model dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_declaration_models_do_not_import_registry_ingestion_or_cli() -> None:
    package_dir = _project_root() / "src" / "firebase_schema_validator"
    model_packages = (
        "literal_values",
        "field_directives",
        "storage_tree",
        "collection_paths",
        "auth_domains",
        "database_targets",
        "diagnostics",
    )
    forbidden_import_fragments = (
        "firebase_schema_validator.schema_registry",
        "firebase_schema_validator.declaration_ingestion",
        "firebase_schema_validator.results_writing",
        "firebase_schema_validator.cli",
        "import yaml",
        "import click",
    )

    for package in model_packages:
        for module_path in sorted((package_dir / package).glob("*.py")):
            text = module_path.read_text(encoding="utf-8")
            for fragment in forbidden_import_fragments:
                assert (
                    fragment not in text
                ), f"Forbidden model dependency in {module_path}: {fragment}"
