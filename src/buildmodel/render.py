"""Renderer interface for turning a resolved build into build-tool syntax.

Concrete renderers live outside this project; they are registered per
(build tool, dialect) and must only read the build they are given.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from errors import UnknownIdentifier

from .model import BuildModel, ResolvedBuild

logger = logging.getLogger(__name__)


class BuildRenderer(ABC):
    """Serializes a ResolvedBuild into one build tool's native syntax."""

    build_tool: str = ""
    dialect: Optional[str] = None

    @abstractmethod
    def render(self, build: ResolvedBuild) -> str:
        """Return the build file content for ``build``."""
        raise NotImplementedError


class RendererRegistry:
    """Renderers keyed by (build tool, dialect)."""

    def __init__(self):
        self._renderers: Dict[Tuple[str, Optional[str]], BuildRenderer] = {}

    def register(self, renderer: BuildRenderer) -> None:
        key = (renderer.build_tool, renderer.dialect)
        if key in self._renderers:
            logger.warning("Replacing renderer for %s/%s", renderer.build_tool, renderer.dialect)
        self._renderers[key] = renderer

    def get(self, build_tool: str, dialect: Optional[str] = None) -> BuildRenderer:
        """Return the renderer for the key, falling back to the tool's dialect-less renderer.

        Raises:
            UnknownIdentifier: If no renderer is registered for the build tool.
        """
        renderer = self._renderers.get((build_tool, dialect)) or self._renderers.get((build_tool, None))
        if renderer is None:
            label = f"{build_tool}/{dialect}" if dialect else build_tool
            raise UnknownIdentifier("renderer", label)
        return renderer

    def render(self, build: BuildModel) -> str:
        """Render a sealed build model with the renderer matching its build tool."""
        renderer = self.get(build.build_tool or "", build.dialect)
        return renderer.render(build.snapshot())
