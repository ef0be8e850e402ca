"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INVALID_REQUEST = 2
    CATALOG_ERROR = 3


class BuildTools(Enum):
    """Build tools known to the built-in customizers.

    Args:
        Enum (string): Build tool identifiers.
    """

    MAVEN = "maven"
    GRADLE = "gradle"


class GradleDialects(Enum):
    """Gradle build script dialects."""

    GROOVY = "groovy"
    KOTLIN = "kotlin"


class DependencyScope(Enum):
    """Mutually exclusive dependency scopes of the build model.

    Args:
        Enum (string): Scope identifiers.
    """

    COMPILE = "compile"
    RUNTIME = "runtime"
    PROVIDED = "provided"
    TEST_COMPILE = "test_compile"
    TEST_RUNTIME = "test_runtime"
    ANNOTATION_PROCESSOR = "annotation_processor"

    @classmethod
    def from_text(cls, text: Optional[str]) -> "DependencyScope":
        """Parse a scope name; accepts catalog aliases like "test" or "compileOnly"."""
        if text is None or isinstance(text, cls):
            return text or cls.COMPILE
        key = str(text).strip().replace("-", "_")
        alias = _SCOPE_ALIASES.get(key.lower())
        if alias is not None:
            return alias
        try:
            return cls(key.lower())
        except ValueError as exc:
            raise ValueError(f"Unknown dependency scope '{text}'") from exc


_SCOPE_ALIASES = {
    "test": DependencyScope.TEST_COMPILE,
    "testcompile": DependencyScope.TEST_COMPILE,
    "testruntime": DependencyScope.TEST_RUNTIME,
    "compileonly": DependencyScope.PROVIDED,
    "annotationprocessor": DependencyScope.ANNOTATION_PROCESSOR,
}


class Facets(Enum):
    """Facet tags with built-in meaning."""

    WEB = "web"
    JPA = "jpa"
    JSON = "json"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "INITFORGE_LOG_LEVEL"
    ENV_LOG_FORMAT = "INITFORGE_LOG_FORMAT"
    ENV_CONFIG = "INITFORGE_CONFIG"
    ENV_CATALOG = "INITFORGE_CATALOG"

    DEFAULT_CATALOG_PATH = "catalog.yml"
    DEFAULT_GROUP_ID = "com.example"
    DEFAULT_ARTIFACT_ID = "demo"
    DEFAULT_PACKAGE_NAME = "com.example.demo"
    DEFAULT_DESCRIPTION = "Demo project"
    WAR_PACKAGING = "war"
    DEFAULT_BOM_ORDER = 2147483647
    DEFAULT_PROJECT_VERSION = "0.0.1-SNAPSHOT"

    PLATFORM_GROUP_ID = "org.springframework.boot"
    PLATFORM_STARTER_PREFIX = "spring-boot-starter-"
    ROOT_STARTER_ID = "root_starter"
    WEB_STARTER_ID = "web"
    TEST_STARTER_ID = "test"

    JAVA_VERSION = "1.8"
    SOURCE_ENCODING = "UTF-8"


def _candidate_config_paths() -> list:
    """Return the config file locations in priority order."""
    paths = []
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        paths.append(env_path)
    paths.append(os.path.join(os.getcwd(), "initforge.yml"))
    xdg = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    paths.append(os.path.join(xdg, "initforge", "initforge.yml"))
    return paths


def _apply_overrides(data: Dict[str, Any]) -> None:
    """Apply known keys of a config mapping onto Constants."""
    defaults = data.get("defaults") or {}
    if isinstance(defaults, dict):
        for key in ("group_id", "artifact_id", "package_name", "description"):
            if defaults.get(key):
                setattr(Constants, f"DEFAULT_{key.upper()}", str(defaults[key]))
    if data.get("catalog"):
        Constants.DEFAULT_CATALOG_PATH = str(data["catalog"])
    logging_cfg = data.get("logging") or {}
    if isinstance(logging_cfg, dict) and logging_cfg.get("format"):
        Constants.LOG_FORMAT = str(logging_cfg["format"])


def _load_yaml_config(path: Optional[str] = None) -> Optional[str]:
    """Load the first available YAML config file and apply it to Constants.

    Args:
        path: Explicit config path; when omitted the default locations are searched.

    Returns:
        The path that was applied, or None when no config file exists.
    """
    candidates = [path] if path else _candidate_config_paths()
    for candidate in candidates:
        if not candidate or not os.path.isfile(candidate):
            continue
        with open(candidate, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            logging.getLogger(__name__).warning("Ignoring config file %s: expected a mapping", candidate)
            return None
        _apply_overrides(data)
        return candidate
    return None
