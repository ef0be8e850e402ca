"""Rejects requests that reference ids the catalog does not know."""

from __future__ import annotations

import logging

from errors import UnknownIdentifier

from .request import ProjectRequest

logger = logging.getLogger(__name__)


class RequestValidator:
    """Checks every id of a ProjectRequest against a MetadataCatalog.

    The resolver runs the same checks again, so a caller that skips the
    validator gets the same errors.
    """

    def __init__(self, catalog):
        self.catalog = catalog

    def validate(self, request: ProjectRequest) -> None:
        """Raise UnknownIdentifier for the first unknown id found."""
        catalog = self.catalog
        if request.type is not None and catalog.get_type(request.type) is None:
            raise UnknownIdentifier("type", request.type)
        if request.language is not None and catalog.get_language(request.language) is None:
            raise UnknownIdentifier("language", request.language)
        if request.packaging is not None and catalog.get_packaging(request.packaging) is None:
            raise UnknownIdentifier("packaging", request.packaging)
        self._validate_build_tool(request)
        for dependency_id in request.dependencies:
            if catalog.get_dependency(dependency_id) is None:
                raise UnknownIdentifier("dependency", dependency_id)
        logger.debug("Request validated: %d dependencies", len(request.dependencies))

    def _validate_build_tool(self, request: ProjectRequest) -> None:
        tools = self.catalog.build_tools()
        # Catalogs without tagged types accept any build tool.
        if not tools:
            return
        build_tool = request.build_tool
        if build_tool is not None and build_tool not in tools:
            raise UnknownIdentifier("build tool", build_tool)
        if request.dialect is None:
            return
        if build_tool is None:
            build_tool = self._implied_build_tool(request)
        if build_tool is None:
            dialects = {d for tool_dialects in tools.values() for d in tool_dialects}
        else:
            dialects = set(tools.get(build_tool, ()))
        if request.dialect not in dialects:
            raise UnknownIdentifier("dialect", request.dialect)

    def _implied_build_tool(self, request: ProjectRequest):
        """Build tool of the requested type, else of the catalog's default type."""
        if request.type is not None:
            build_type = self.catalog.get_type(request.type)
        else:
            build_type = self.catalog.default_type()
        return build_type.build_tool if build_type is not None else None
