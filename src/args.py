"""Argument parsing functionality for modtree."""

import argparse
from constants import Constants

def _add_common(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

def _add_loader_type(parser):
    parser.add_argument("-t", "--type",
                        dest="loader_type",
                        help="Mod loader family, i.e: forge, neoforge, fabric",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_LOADERS,
                        required=True)

def build_parser():
    """Builds the argument parser with all sub-commands."""
    parser = argparse.ArgumentParser(
        prog="modtree",
        description=(
            "modtree - Resolve mod-loader versions into distribution module trees"
        ),
        add_help=True,
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    resolve = sub.add_parser("resolve",
                             help="Resolve a loader version into a module tree")
    _add_loader_type(resolve)
    resolve.add_argument("-m", "--minecraft",
                         dest="MINECRAFT_VERSION",
                         help="Minecraft version, i.e: 1.20.1",
                         action="store", type=str,
                         required=True)
    resolve.add_argument("-v", "--version",
                         dest="LOADER_VERSION",
                         help="Loader version or promotion (recommended, latest)",
                         action="store", type=str,
                         default="recommended")
    resolve.add_argument("--root",
                         dest="ROOT",
                         help="Distribution root directory",
                         action="store", type=str)
    resolve.add_argument("--base-url",
                         dest="BASE_URL",
                         help="Public URL the distribution root is served from",
                         action="store", type=str)
    resolve.add_argument("--java",
                         dest="JAVA",
                         help="Java executable used to run installers",
                         action="store", type=str)
    resolve.add_argument("--invalidate-cache",
                         dest="INVALIDATE_CACHE",
                         help="Re-run the installer even if cached output exists.",
                         action="store_true")
    resolve.add_argument("--discard-output",
                         dest="DISCARD_OUTPUT",
                         help="Delete the installer output once resolution completes.",
                         action="store_true")
    resolve.add_argument("-o", "--output",
                         dest="OUTPUT",
                         help="Path to output JSON file",
                         action="store", type=str)
    _add_common(resolve)

    promote = sub.add_parser("promote",
                             help="Print the loader version behind a promotion label")
    _add_loader_type(promote)
    promote.add_argument("-m", "--minecraft",
                         dest="MINECRAFT_VERSION",
                         help="Minecraft version, i.e: 1.20.1",
                         action="store", type=str,
                         required=True)
    promote.add_argument("-p", "--promotion",
                         dest="PROMOTION",
                         help="Promotion label (recommended, latest)",
                         action="store", type=str.lower,
                         choices=Constants.PROMOTIONS,
                         default="recommended")
    _add_common(promote)

    identify = sub.add_parser("identify",
                              help="Infer canonical identities for mod jars")
    _add_loader_type(identify)
    identify.add_argument("JARS",
                          help="Mod jar files",
                          nargs="+", type=str)
    identify.add_argument("--hints",
                          dest="HINTS",
                          help="JSON file with static analysis results per jar",
                          action="store", type=str)
    identify.add_argument("--base-url",
                          dest="BASE_URL",
                          help="Public URL mods are served from; emits mod modules when set",
                          action="store", type=str)
    identify.add_argument("-o", "--output",
                          dest="OUTPUT",
                          help="Path to output JSON file",
                          action="store", type=str)
    _add_common(identify)

    return parser

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
