"""Argument parsing functionality for initforge."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Args:
        argv (list, optional): Arguments to parse; defaults to sys.argv[1:].
    """
    parser = argparse.ArgumentParser(
        prog="initforge",
        description=(
            "initforge - resolve a project request into a build model"
        ),
        add_help=True,
    )

    parser.add_argument("--catalog",
                        dest="CATALOG",
                        help="Path to the metadata catalog (YAML or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)

    parser.add_argument("-t", "--type",
                        dest="TYPE",
                        help="Project type id from the catalog, i.e: maven-project",
                        action="store", type=str)
    parser.add_argument("--build-tool",
                        dest="BUILD_TOOL",
                        help="Build tool id, i.e: maven, gradle",
                        action="store", type=str)
    parser.add_argument("--dialect",
                        dest="DIALECT",
                        help="Build script dialect, i.e: groovy, kotlin",
                        action="store", type=str)
    parser.add_argument("-l", "--language",
                        dest="LANGUAGE",
                        help="Language id, i.e: java, kotlin",
                        action="store", type=str)
    parser.add_argument("--language-version",
                        dest="LANGUAGE_VERSION",
                        help="Language (JVM) version",
                        action="store", type=str)
    parser.add_argument("-p", "--packaging",
                        dest="PACKAGING",
                        help="Packaging id, i.e: jar, war",
                        action="store", type=str)
    parser.add_argument("-b", "--platform-version",
                        dest="PLATFORM_VERSION",
                        help="Platform version, defaults to the catalog default",
                        action="store", type=str)
    parser.add_argument("-d", "--dependencies",
                        dest="DEPENDENCIES",
                        help="Dependency ids, comma separated; can be used multiple times",
                        action="append", type=str,
                        default=[])

    parser.add_argument("--group-id",
                        dest="GROUP_ID",
                        help=f"Project group id (default: {Constants.DEFAULT_GROUP_ID})",
                        action="store", type=str)
    parser.add_argument("--artifact-id",
                        dest="ARTIFACT_ID",
                        help=f"Project artifact id (default: {Constants.DEFAULT_ARTIFACT_ID})",
                        action="store", type=str)
    parser.add_argument("--name",
                        dest="NAME",
                        help="Project name (default: the artifact id)",
                        action="store", type=str)
    parser.add_argument("--description",
                        dest="DESCRIPTION",
                        help="Project description",
                        action="store", type=str)
    parser.add_argument("--package-name",
                        dest="PACKAGE_NAME",
                        help="Base package name (default: derived from group and artifact ids)",
                        action="store", type=str)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output JSON file",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    return parser.parse_args(argv)
