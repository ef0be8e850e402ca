"""initforge: resolve a project request into a build model.

Loads the metadata catalog, resolves the request given on the command line
and prints (or exports) the resulting build model as JSON.
"""

import json
import logging
import sys

from args import parse_args
from catalog import load_catalog
from cli_config import add_log_file_handler, apply_cli_overrides, catalog_path
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import CatalogIntegrityError, InitforgeError
from export import build_to_dict, export_json
from resolution import ProjectRequest, ProjectResolver


def build_request(args):
    """Map parsed CLI arguments onto a ProjectRequest."""
    return ProjectRequest(
        type=args.TYPE,
        build_tool=args.BUILD_TOOL,
        dialect=args.DIALECT,
        language=args.LANGUAGE,
        language_version=args.LANGUAGE_VERSION,
        packaging=args.PACKAGING,
        platform_version=args.PLATFORM_VERSION,
        dependencies=args.DEPENDENCIES,
        group_id=args.GROUP_ID,
        artifact_id=args.ARTIFACT_ID,
        name=args.NAME,
        description=args.DESCRIPTION,
        package_name=args.PACKAGE_NAME,
    )


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    apply_cli_overrides(args)
    configure_logging()
    if args.LOG_FILE:
        add_log_file_handler(args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    path = catalog_path(args)
    try:
        catalog = load_catalog(path)
    except FileNotFoundError:
        logging.error("Catalog file not found: %s, aborting", path)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except OSError as e:
        logging.error("IO error: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except CatalogIntegrityError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CATALOG_ERROR.value)

    try:
        build = ProjectResolver(catalog).resolve(build_request(args))
    except InitforgeError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.INVALID_REQUEST.value)

    if args.OUTPUT:
        export_json(build, args.OUTPUT)
    elif not args.QUIET:
        print(json.dumps(build_to_dict(build), ensure_ascii=False, indent=4))

    sys.exit(ExitCodes.SUCCESS.value)

if __name__ == "__main__":
    main()
