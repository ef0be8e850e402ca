"""JSON export of a resolved build, for inspection and for external renderers."""

import json
import logging
import sys

from constants import ExitCodes


def build_to_dict(build):
    """Convert a sealed BuildModel (or its ResolvedBuild snapshot) to plain data.

    Args:
        build: A sealed BuildModel or a ResolvedBuild.

    Returns:
        dict: JSON-serializable representation, BOMs in import order.
    """
    snapshot = build.snapshot() if hasattr(build, "snapshot") else build
    settings = snapshot.settings
    parent = settings.parent if settings else None
    return {
        "buildTool": snapshot.build_tool,
        "dialect": snapshot.dialect,
        "settings": None if settings is None else {
            "groupId": settings.group_id,
            "artifactId": settings.artifact_id,
            "version": settings.version,
            "name": settings.name,
            "description": settings.description,
            "packaging": settings.packaging,
            "parent": None if parent is None else {
                "groupId": parent.group_id,
                "artifactId": parent.artifact_id,
                "version": parent.version,
            },
        },
        "dependencies": [
            {
                "id": d.id,
                "groupId": d.group_id,
                "artifactId": d.artifact_id,
                "version": d.version,
                "scope": d.scope.value,
                "type": d.type,
                "exclusions": [f"{e.group_id}:{e.artifact_id}" for e in d.exclusions],
                "requested": d.requested,
            }
            for d in snapshot.dependencies
        ],
        "boms": [
            {
                "id": b.id,
                "groupId": b.group_id,
                "artifactId": b.artifact_id,
                "version": b.version,
                "versionProperty": b.version_property,
                "order": b.order,
            }
            for b in snapshot.boms
        ],
        "repositories": [
            {
                "id": r.id,
                "name": r.name,
                "url": r.url,
                "snapshotsEnabled": r.snapshots_enabled,
            }
            for r in snapshot.repositories
        ],
        "properties": dict(snapshot.properties),
        "plugins": [{"id": plugin_id, "version": version} for plugin_id, version in snapshot.plugins],
    }


def export_json(build, path):
    """Exports the resolved build to a JSON file.

    Args:
        build: A sealed BuildModel or a ResolvedBuild.
        path (str): File path to export the JSON.
    """
    data = build_to_dict(build)
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
