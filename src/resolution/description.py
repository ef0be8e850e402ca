"""Resolved project attributes: the request completed with catalog defaults."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from constants import BuildTools, Constants, GradleDialects
from errors import UnknownIdentifier, UnsupportedPlatformVersion
from versioning import Version, parse_version

from .request import ProjectRequest

logger = logging.getLogger(__name__)

DEFAULT_APPLICATION_NAME = "Application"
_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")
_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")


def clean_package_name(text: Optional[str], default: str = Constants.DEFAULT_PACKAGE_NAME) -> str:
    """Turn free text into a valid package name.

    Invalid characters are removed, all-digit segments are folded into the
    previous segment and leading digits are dropped, so "org.acme.foo-1.4.5"
    becomes "org.acme.foo145" and "org.acme.42foo" becomes "org.acme.foo".
    """
    if not text or not text.strip():
        return default
    parts = []
    for raw in text.strip().split("."):
        segment = _NON_IDENTIFIER.sub("", raw)
        if not segment:
            continue
        if segment.isdigit():
            if parts:
                parts[-1] += segment
            continue
        segment = segment.lstrip("0123456789")
        if segment:
            parts.append(segment)
    return ".".join(parts).lower() or default


def generate_application_name(name: Optional[str]) -> str:
    """Derive the main class name: "demo" -> "DemoApplication", "my-app" -> "MyAppApplication"."""
    if not name:
        return DEFAULT_APPLICATION_NAME
    words = [w for w in _WORD_SPLIT.split(name) if w]
    candidate = "".join(w[:1].upper() + w[1:] for w in words)
    if not candidate or candidate[0].isdigit():
        return DEFAULT_APPLICATION_NAME
    if candidate.endswith(DEFAULT_APPLICATION_NAME):
        return candidate
    return candidate + DEFAULT_APPLICATION_NAME


@dataclass(frozen=True)
class ProjectDescription:
    """The attributes customizers activate on and read."""

    platform_version: Version
    build_tool: Optional[str] = None
    dialect: Optional[str] = None
    type: Optional[str] = None
    language: Optional[str] = None
    language_version: Optional[str] = None
    packaging: Optional[str] = None
    group_id: str = Constants.DEFAULT_GROUP_ID
    artifact_id: str = Constants.DEFAULT_ARTIFACT_ID
    version: str = Constants.DEFAULT_PROJECT_VERSION
    name: Optional[str] = None
    description: Optional[str] = None
    package_name: str = Constants.DEFAULT_PACKAGE_NAME
    application_name: str = DEFAULT_APPLICATION_NAME
    dependencies: Tuple[str, ...] = field(default_factory=tuple)
    build_tool_version: Optional[str] = None

    @classmethod
    def from_request(cls, request: ProjectRequest, catalog) -> "ProjectDescription":
        """Complete ``request`` with the catalog defaults.

        Raises:
            UnknownIdentifier: If the request names a type the catalog lacks.
            UnsupportedPlatformVersion: If neither the request nor the catalog gives a platform version.
        """
        build_type = _select_type(request, catalog)
        build_tool = request.build_tool or (build_type.build_tool if build_type else None)
        dialect = request.dialect or (build_type.dialect if build_type else None)
        if build_tool == BuildTools.GRADLE.value and dialect is None:
            dialect = GradleDialects.GROOVY.value

        language = request.language
        if language is None:
            default_language = catalog.default_language()
            language = default_language.id if default_language else None
        packaging = request.packaging
        if packaging is None:
            default_packaging = catalog.default_packaging()
            packaging = default_packaging.id if default_packaging else None

        if request.platform_version:
            platform_version = parse_version(request.platform_version)
        else:
            platform_version = catalog.default_platform_version()
        if platform_version is None:
            raise UnsupportedPlatformVersion(None, message="No platform version requested and the catalog defines none")

        group_id = request.group_id or Constants.DEFAULT_GROUP_ID
        artifact_id = request.artifact_id or Constants.DEFAULT_ARTIFACT_ID
        name = request.name or artifact_id
        package_name = clean_package_name(
            request.package_name or f"{group_id}.{artifact_id}", Constants.DEFAULT_PACKAGE_NAME
        )
        return cls(
            platform_version=platform_version,
            build_tool=build_tool,
            dialect=dialect,
            type=build_type.id if build_type else None,
            language=language,
            language_version=request.language_version,
            packaging=packaging,
            group_id=group_id,
            artifact_id=artifact_id,
            version=request.version or Constants.DEFAULT_PROJECT_VERSION,
            name=name,
            description=request.description or Constants.DEFAULT_DESCRIPTION,
            package_name=package_name,
            application_name=request.application_name or generate_application_name(name),
            dependencies=tuple(dict.fromkeys(request.dependencies)),
            build_tool_version=catalog.settings.build_tool_version(build_tool, platform_version),
        )


def _select_type(request: ProjectRequest, catalog):
    """The requested type, else the first type matching the requested build tool, else the default."""
    if request.type is not None:
        build_type = catalog.get_type(request.type)
        if build_type is None:
            raise UnknownIdentifier("type", request.type)
        return build_type
    if request.build_tool is not None:
        for build_type in catalog.get_types():
            if build_type.build_tool != request.build_tool:
                continue
            if request.dialect is None or build_type.dialect == request.dialect:
                return build_type
        return None
    return catalog.default_type()
