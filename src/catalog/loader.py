"""Load a catalog definition from YAML or JSON.

Expected layout (all sections optional)::

    platform:
      default_version: 2.1.1.RELEASE
      versions: [2.2.0.M3, 2.1.1.RELEASE]
      compatibility_range: 1.5.0.RELEASE
      snapshot_repository: spring-snapshots
    env:
      gradle: {dependency_management_plugin_version: ..., versions: [{range: ..., version: ...}]}
      kotlin: {default_version: ..., versions: [...]}
      maven: {parent: {group_id: ..., artifact_id: ..., version: ..., include_platform_bom: false}}
    languages: [{id: java, default: true}]
    packagings: [{id: jar, default: true}]
    types: [{id: maven-project, tags: {build: maven, format: project}}]
    repositories: {spring-milestones: {name: ..., url: ..., snapshots_enabled: false}}
    boms: {the-bom: {group_id: ..., artifact_id: ..., mappings: [{range: ..., version: ...}]}}
    dependencies:
      - name: Web
        content: [{id: web, facets: [web]}]
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterable, List

import yaml

from errors import CatalogIntegrityError, InvalidVersionError

from .builder import CatalogBuilder, bom_mapping, dependency_mapping, version_mapping
from .catalog import MetadataCatalog

logger = logging.getLogger(__name__)

_DEPENDENCY_KEYS = {
    "id", "group_id", "artifact_id", "version", "scope", "name", "description",
    "facets", "starter", "type", "exclusions", "bom", "repository",
    "compatibility_range", "mappings",
}
_PLATFORM_SETTINGS = {
    "platform_group_id", "starter_prefix", "root_starter_id", "web_starter_id",
    "test_starter_id", "web_facet", "java_version", "snapshot_repository",
    "milestone_repository",
}


def load_catalog(path: str) -> MetadataCatalog:
    """Read and validate a catalog file.

    Args:
        path: YAML or JSON file; ``.json`` files are read with the json module.

    Raises:
        OSError: If the file cannot be read.
        CatalogIntegrityError: If the content is malformed or inconsistent.

    Returns:
        MetadataCatalog
    """
    logger.info("Loading catalog from %s", path)
    with open(path, "r", encoding="utf-8") as fh:
        if os.path.splitext(path)[1].lower() == ".json":
            try:
                data = json.load(fh)
            except json.JSONDecodeError as exc:
                raise CatalogIntegrityError([f"cannot parse {path}: {exc}"]) from exc
        else:
            try:
                data = yaml.safe_load(fh)
            except yaml.YAMLError as exc:
                raise CatalogIntegrityError([f"cannot parse {path}: {exc}"]) from exc
    return catalog_from_dict(data or {})


def catalog_from_dict(data: Dict[str, Any]) -> MetadataCatalog:
    """Build a catalog from an already parsed mapping.

    Raises:
        CatalogIntegrityError: On unknown keys, bad version ranges or integrity problems.
    """
    if not isinstance(data, dict):
        raise CatalogIntegrityError(["catalog root must be a mapping"])
    try:
        return _populate(CatalogBuilder(), data).build()
    except InvalidVersionError as exc:
        raise CatalogIntegrityError([str(exc)]) from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogIntegrityError([f"malformed catalog entry: {exc}"]) from exc


def _populate(builder: CatalogBuilder, data: Dict[str, Any]) -> CatalogBuilder:
    platform = dict(data.get("platform") or {})
    settings = {k: platform.pop(k) for k in list(platform) if k in _PLATFORM_SETTINGS}
    for alias in ("root_starter", "web_starter", "test_starter"):
        if alias in platform:
            settings[f"{alias}_id"] = platform.pop(alias)
    if "group_id" in platform:
        settings["platform_group_id"] = platform.pop("group_id")
    default_version = platform.pop("default_version", None)
    compatibility_range = platform.pop("compatibility_range", None)
    builder.set_platform(
        default_version=str(default_version) if default_version is not None else None,
        versions=[str(v) for v in platform.pop("versions", ()) or ()],
        compatibility_range=str(compatibility_range) if compatibility_range is not None else None,
        **settings,
    )
    if platform:
        raise KeyError(f"unknown platform keys {sorted(platform)}")

    env = data.get("env") or {}
    gradle = env.get("gradle") or {}
    if gradle.get("dependency_management_plugin_version"):
        builder.set_platform(dependency_management_plugin_version=str(gradle["dependency_management_plugin_version"]))
    if gradle.get("versions"):
        builder.set_build_tool_versions("gradle", *(
            version_mapping(str(m["range"]), str(m["version"])) for m in gradle["versions"]
        ))
    kotlin = env.get("kotlin") or {}
    if kotlin:
        builder.set_kotlin_versions(
            str(kotlin.get("default_version")) if kotlin.get("default_version") else None,
            *(version_mapping(str(m["range"]), str(m["version"])) for m in kotlin.get("versions") or ()),
        )
    parent = (env.get("maven") or {}).get("parent")
    if parent:
        builder.set_maven_parent(
            parent["group_id"], parent["artifact_id"], str(parent["version"]),
            bool(parent.get("include_platform_bom", False)),
        )

    for entry in data.get("languages") or ():
        builder.add_language(entry["id"], entry.get("name"), bool(entry.get("default", False)))
    for entry in data.get("packagings") or ():
        builder.add_packaging(entry["id"], entry.get("name"), bool(entry.get("default", False)))
    for entry in data.get("types") or ():
        tags = entry.get("tags") or {}
        builder.add_type(
            entry["id"], tags["build"], tags.get("dialect"), tags.get("format", "project"),
            entry.get("name"), bool(entry.get("default", False)),
        )

    for repo_id, attrs in _entries(data.get("repositories")):
        builder.add_repository(
            repo_id, attrs.get("name", repo_id), attrs["url"],
            bool(attrs.get("snapshots_enabled", False)), bool(attrs.get("releases_enabled", True)),
        )

    for bom_id, attrs in _entries(data.get("boms")):
        mappings = [
            bom_mapping(str(m["range"]), str(m["version"]), m.get("repositories") or (),
                        m.get("additional_boms") or ())
            for m in attrs.get("mappings") or ()
        ]
        extra = {}
        if "order" in attrs:
            extra["order"] = int(attrs["order"])
        if attrs.get("version_property"):
            extra["version_property"] = attrs["version_property"]
        if attrs.get("additional_boms"):
            extra["additional_boms"] = tuple(attrs["additional_boms"])
        builder.add_bom(
            bom_id, attrs["group_id"], attrs["artifact_id"],
            str(attrs["version"]) if attrs.get("version") is not None else None,
            attrs.get("repositories") or (), mappings, **extra,
        )

    for group in data.get("dependencies") or ():
        if "content" in group:
            for entry in group["content"] or ():
                _add_dependency(builder, entry, category=group.get("name"))
        else:
            _add_dependency(builder, group)
    return builder


def _entries(section: Any) -> Iterable:
    """Yield (id, attrs) from either an id-keyed mapping or a list of dicts with ids."""
    if not section:
        return []
    if isinstance(section, dict):
        return list(section.items())
    return [(entry["id"], entry) for entry in section]


def _add_dependency(builder: CatalogBuilder, entry: Dict[str, Any], category: str = None) -> None:
    unknown = set(entry) - _DEPENDENCY_KEYS
    if unknown:
        raise KeyError(f"unknown keys {sorted(unknown)} for dependency '{entry.get('id')}'")
    mappings: List = [
        dependency_mapping(
            str(m["range"]),
            version=str(m["version"]) if m.get("version") is not None else None,
            group_id=m.get("group_id"), artifact_id=m.get("artifact_id"),
            repositories=m.get("repositories") or (),
        )
        for m in entry.get("mappings") or ()
    ]
    builder.add_dependency(
        entry["id"],
        group_id=entry.get("group_id"),
        artifact_id=entry.get("artifact_id"),
        version=str(entry["version"]) if entry.get("version") is not None else None,
        scope=entry.get("scope"),
        facets=entry.get("facets") or (),
        starter=bool(entry.get("starter", True)),
        exclusions=entry.get("exclusions") or (),
        mappings=mappings,
        compatibility_range=entry.get("compatibility_range"),
        name=entry.get("name"),
        description=entry.get("description"),
        category=category,
        type=entry.get("type"),
        bom=entry.get("bom"),
        repository=entry.get("repository"),
    )
