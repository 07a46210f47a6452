"""modtree - Resolve mod-loader versions into distribution module trees.

    Returns:
        int: Exit code
"""
import sys
import logging
import json
import os

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import ResolveSettings, apply_overrides, load_config
from errors import ModtreeError
from inference import (
    MetadataInferenceEngine,
    build_mod_module,
    find_hint,
    get_profile,
    load_hints,
    scan_unit,
)
from loaders import get_resolver
from repository.structure import join_url
from versioning.models import MinecraftVersion
from versioning.parser import is_promotion_version
from versioning.resolvers import get_promotion_resolver

logger = logging.getLogger(__name__)


def setup_logging(args):
    """Configure logging from --loglevel / --logfile."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def export_json(data, path):
    """Exports ``data`` to a JSON file.

    Args:
        data: JSON-serializable payload.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def emit(data, path=None):
    """Write ``data`` to ``path`` when given, otherwise print it."""
    if path:
        export_json(data, path)
    else:
        print(json.dumps(data, indent=4))


def resolve_loader_version(family, minecraft_version, label):
    """Return a concrete loader version, resolving promotion labels."""
    if not is_promotion_version(label):
        return label
    resolver = get_promotion_resolver(family)
    version = resolver.resolve(minecraft_version, label)
    logger.info("Resolved %s %s for %s to %s", family, label.lower(), minecraft_version, version)
    return version


def run_resolve(args, settings: ResolveSettings):
    """Resolve a loader into a module tree and emit it as JSON."""
    minecraft_version = MinecraftVersion.parse(args.MINECRAFT_VERSION)
    loader_version = resolve_loader_version(args.loader_type, minecraft_version, args.LOADER_VERSION)

    resolver = get_resolver(
        args.loader_type,
        os.path.abspath(settings.root),
        settings.base_url,
        minecraft_version,
        loader_version,
        invalidate_cache=settings.invalidate_cache,
        discard_output=settings.discard_output,
        java_executable=settings.java_executable,
    )
    if not resolver.is_for_version(minecraft_version, loader_version):
        raise ModtreeError(
            f"{args.loader_type} {loader_version} is not supported for Minecraft {minecraft_version}"
        )

    module = resolver.get_module()
    if is_debug_enabled(logger):
        logger.debug(
            "Resolved module tree",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="resolve",
                outcome="success",
                loader=args.loader_type,
                count=len(module.sub_modules),
            )
        )
    emit(module.to_dict(), getattr(args, "OUTPUT", None))


def run_promote(args):
    """Print the concrete version behind a promotion label."""
    minecraft_version = MinecraftVersion.parse(args.MINECRAFT_VERSION)
    version = get_promotion_resolver(args.loader_type).resolve(minecraft_version, args.PROMOTION)
    print(version)


def run_identify(args, settings: ResolveSettings):
    """Infer identities for each jar; emit mod modules when a base URL is given."""
    engine = MetadataInferenceEngine(get_profile(args.loader_type))
    hints = load_hints(settings.hints)
    base_url = getattr(args, "BASE_URL", None)

    results = []
    for path in args.JARS:
        if not os.path.isfile(path):
            logging.error("File not found: %s, aborting", path)
            sys.exit(ExitCodes.FILE_ERROR.value)
        identity = scan_unit(engine, path, find_hint(hints, path))
        if base_url:
            module = build_mod_module(engine, path, identity, join_url(base_url, os.path.basename(path)))
            results.append(module.to_dict())
        else:
            results.append({
                "file": os.path.basename(path),
                "modId": identity.mod_id,
                "displayName": identity.display_name,
                "version": identity.version,
                "group": identity.group,
            })
    emit(results, getattr(args, "OUTPUT", None))


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.command)
        )

    try:
        config = load_config(getattr(args, "CONFIG", None))
    except (OSError, ValueError) as e:
        logging.error("Unable to load configuration: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    settings = apply_overrides(args, config)

    try:
        if args.command == "resolve":
            run_resolve(args, settings)
        elif args.command == "promote":
            run_promote(args)
        elif args.command == "identify":
            run_identify(args, settings)
    except FileNotFoundError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except (ModtreeError, ValueError) as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.RESOLUTION_ERROR.value)

    sys.exit(ExitCodes.SUCCESS.value)

if __name__ == "__main__":
    main()
