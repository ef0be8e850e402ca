"""Metadata catalog package.

- models.py: frozen catalog entries (dependencies, BOMs, repositories, options)
- catalog.py: MetadataCatalog and its construction-time validation
- builder.py: fluent CatalogBuilder
- loader.py: YAML/JSON catalog source loading
"""

from .models import (
    BillOfMaterials,
    BuildType,
    CatalogSettings,
    CoordinateOverride,
    Dependency,
    Exclusion,
    Language,
    Mapping,
    MavenParent,
    Packaging,
    Repository,
    ResolvedBom,
)
from .catalog import CatalogValidator, MetadataCatalog
from .builder import CatalogBuilder, bom_mapping, dependency_mapping, version_mapping
from .loader import catalog_from_dict, load_catalog

__all__ = [
    "BillOfMaterials",
    "BuildType",
    "CatalogSettings",
    "CoordinateOverride",
    "Dependency",
    "Exclusion",
    "Language",
    "Mapping",
    "MavenParent",
    "Packaging",
    "Repository",
    "ResolvedBom",
    "CatalogValidator",
    "MetadataCatalog",
    "CatalogBuilder",
    "bom_mapping",
    "dependency_mapping",
    "version_mapping",
    "catalog_from_dict",
    "load_catalog",
]
