"""Validation report rendering."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from firebase_schema_validator.schema_registry.schema_graph import SchemaGraph, ValidationReport


class ReportFormat(str, Enum):
    """Supported report output formats."""

    TEXT = "text"
    JSON = "json"


def render_report(report: ValidationReport, report_format: ReportFormat | str) -> str:
    """Render a report in the requested format."""
    resolved_format = ReportFormat(report_format)
    if resolved_format == ReportFormat.JSON:
        return render_json(report)
    return render_text(report)


def render_text(report: ValidationReport) -> str:
    """Render one line per issue followed by a summary line."""
    lines = [
        f"{issue.severity.value.upper()} {issue.error_kind.value} "
        f"[{issue.entity_name}] {issue.path}: {issue.message}"
        for issue in report.issues
    ]
    if report.graph is not None:
        lines.append(f"validated: {_graph_summary(report.graph)}")
    else:
        lines.append(
            f"rejected: {len(report.errors)} error(s), {len(report.warnings)} warning(s)"
        )
    return "\n".join(lines)


def render_json(report: ValidationReport) -> str:
    """Render the report as a JSON document."""
    payload: dict[str, Any] = {
        "state": report.state.value,
        "issues": [issue.as_record() for issue in report.issues],
    }
    if report.graph is not None:
        payload["graph"] = _graph_payload(report.graph)
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _graph_summary(graph: SchemaGraph) -> str:
    storage_nodes = sum(len(paths) for paths in graph.storage_paths().values())
    return (
        f"{len(graph.collections)} collection(s), {storage_nodes} storage node(s), "
        f"{len(graph.auth_domains)} auth domain(s), {len(graph.entities)} entity declaration(s), "
        f"{len(graph.databases)} database(s)"
    )


def _graph_payload(graph: SchemaGraph) -> dict[str, Any]:
    return {
        "collections": [
            {
                "path": collection.full_path,
                "parent": collection.parent_full_path,
                "depth": collection.depth,
                "entity": collection.declaration.entity_name,
            }
            for collection in graph.collections
        ],
        "storage": {
            bucket if bucket is not None else "": list(paths)
            for bucket, paths in graph.storage_paths().items()
        },
        "auth_domains": {
            kind.value: {
                "entity": domain.entity_name,
                "collection": domain.bound_collection,
                "region": domain.region,
                "modules": [module.value for module in domain.ordered_modules()],
            }
            for kind, domain in graph.auth_domains.items()
        },
        "entities": {
            name: {
                field_name: directive.resolved_key(field_name)
                for field_name, directive in entity.fields.items()
                if directive.is_written
            }
            for name, entity in graph.entities.items()
        },
        "databases": {
            name: database.database_url for name, database in graph.databases.items()
        },
    }
