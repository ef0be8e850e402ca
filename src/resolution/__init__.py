"""Request resolution: validation, description and build model assembly."""

from .request import ProjectRequest, split_ids
from .description import ProjectDescription, clean_package_name, generate_application_name
from .validator import RequestValidator
from .resolver import ProjectResolver, resolve

__all__ = [
    "ProjectRequest",
    "split_ids",
    "ProjectDescription",
    "clean_package_name",
    "generate_application_name",
    "RequestValidator",
    "ProjectResolver",
    "resolve",
]
