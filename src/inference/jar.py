"""Jar scanning: feed packaged units and analyzer hints into the engine."""

from __future__ import annotations

import json
import logging
import os
import zipfile
from typing import Dict, Optional, Tuple

from constants import Constants
from distribution.artifact import generate_artifact
from distribution.maven import maven_components_to_identifier
from distribution.models import Module

from .engine import MetadataInferenceEngine
from .models import ModIdentity, StaticAnalysisHint

logger = logging.getLogger(__name__)


def _read_entry(zf: zipfile.ZipFile, name: str) -> Optional[bytes]:
    try:
        return zf.read(name)
    except KeyError:
        return None


def read_unit(path: str, manifest_file: str) -> Tuple[Optional[bytes], Optional[str]]:
    """Return (declared metadata bytes, MANIFEST.MF text) from a jar.

    Missing entries come back as None. A jar that cannot be opened at all is
    treated like one containing neither.
    """
    try:
        with zipfile.ZipFile(path) as zf:
            declared = _read_entry(zf, manifest_file)
            build_manifest = _read_entry(zf, Constants.EMBEDDED_MANIFEST)
    except (zipfile.BadZipFile, OSError) as e:
        logger.error("Unable to open %s: %s", path, e)
        return None, None
    text = build_manifest.decode("utf-8", errors="replace") if build_manifest is not None else None
    return declared, text


def load_hints(path: Optional[str]) -> Dict[str, StaticAnalysisHint]:
    """Load analyzer output mapping unit paths to ``{"id", "group"}``.

    A missing or unreadable file yields no hints.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Unable to read static analysis hints from %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Static analysis hints in %s are not an object, ignoring.", path)
        return {}

    hints = {}
    for unit_path, entry in data.items():
        if isinstance(entry, dict):
            hints[unit_path] = StaticAnalysisHint(id=entry.get("id"), group=entry.get("group"))
    return hints


def find_hint(hints: Dict[str, StaticAnalysisHint], path: str) -> Optional[StaticAnalysisHint]:
    """Match a hint by exact path, absolute path, then file name."""
    for key in (path, os.path.abspath(path)):
        if key in hints:
            return hints[key]
    name = os.path.basename(path)
    for key, hint in hints.items():
        if os.path.basename(key) == name:
            return hint
    return None


def scan_unit(engine: MetadataInferenceEngine, path: str, hint: Optional[StaticAnalysisHint]) -> ModIdentity:
    """Identify the jar at ``path``."""
    name = os.path.basename(path)
    declared_raw, build_manifest = read_unit(path, engine.profile.manifest_file)
    declared = engine.process(name, declared_raw, hint, build_manifest)
    return engine.identify(name, declared, hint, build_manifest)


def build_mod_module(engine: MetadataInferenceEngine, path: str, identity: ModIdentity, url: str) -> Module:
    """Describe an identified jar as a mod module."""
    group = identity.group or Constants.DEFAULT_MOD_GROUP
    return Module(
        id=maven_components_to_identifier(group, identity.mod_id, identity.version),
        name=identity.display_name,
        type=engine.profile.module_type,
        artifact=generate_artifact(path, url),
    )
