"""Runtime configuration for the CLI.

Settings come from three layers, later ones winning: a YAML/JSON config file,
environment variables, then CLI flags. The merged result is a
``ResolveSettings`` instance handed to the loader resolvers.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass
class ResolveSettings:
    """Merged settings for one CLI invocation."""
    root: str = "."
    base_url: str = "http://localhost/"
    java_executable: str = Constants.JAVA_EXECUTABLE
    invalidate_cache: bool = False
    discard_output: bool = False
    hints: Optional[str] = None


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML or JSON config file into a dict.

    The format is picked from the extension; anything not ending in ``.json``
    is parsed as YAML. A missing path yields an empty config.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file does not parse to a mapping.
    """
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as fh:
        try:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Unable to parse config {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must contain a mapping at the top level")
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def java_from_environment() -> Optional[str]:
    """Java executable from MODTREE_JAVA, else JAVA_HOME/bin/java."""
    explicit = os.environ.get(Constants.ENV_JAVA)
    if explicit and explicit.strip():
        return explicit.strip()
    java_home = os.environ.get(Constants.ENV_JAVA_HOME)
    if java_home and java_home.strip():
        return os.path.join(java_home.strip(), "bin", Constants.JAVA_EXECUTABLE)
    return None


def apply_overrides(args, config: Optional[Dict[str, Any]] = None) -> ResolveSettings:
    """Merge config file, environment and CLI flags into ResolveSettings."""
    config = config or {}
    settings = ResolveSettings()

    if config.get("root"):
        settings.root = str(config["root"])
    if config.get("base_url"):
        settings.base_url = str(config["base_url"])
    if config.get("java_executable"):
        settings.java_executable = str(config["java_executable"])
    if "invalidate_cache" in config:
        settings.invalidate_cache = _as_bool(config["invalidate_cache"])
    if "discard_output" in config:
        settings.discard_output = _as_bool(config["discard_output"])
    if config.get("hints"):
        settings.hints = str(config["hints"])

    env_java = java_from_environment()
    if env_java:
        settings.java_executable = env_java
    env_base = os.environ.get(Constants.ENV_BASE_URL)
    if env_base and env_base.strip():
        settings.base_url = env_base.strip()

    if getattr(args, "ROOT", None):
        settings.root = args.ROOT
    if getattr(args, "BASE_URL", None):
        settings.base_url = args.BASE_URL
    if getattr(args, "JAVA", None):
        settings.java_executable = args.JAVA
    if getattr(args, "INVALIDATE_CACHE", False):
        settings.invalidate_cache = True
    if getattr(args, "DISCARD_OUTPUT", False):
        settings.discard_output = True
    if getattr(args, "HINTS", None):
        settings.hints = args.HINTS

    logger.debug("Effective settings: %s", settings)
    return settings
