"""Tool-agnostic build model populated by the customizer pipeline."""

from .model import (
    BomImport,
    BuildDependency,
    BuildModel,
    BuildSettings,
    ParentPom,
    ResolvedBuild,
)
from .render import BuildRenderer, RendererRegistry

__all__ = [
    "BomImport",
    "BuildDependency",
    "BuildModel",
    "BuildSettings",
    "ParentPom",
    "ResolvedBuild",
    "BuildRenderer",
    "RendererRegistry",
]
