"""Per-family metadata parsers and inference profiles.

Forge and NeoForge describe mods with TOML (``[[mods]]`` tables); Fabric uses
a single JSON object. Parsers raise ``ValueError`` for anything that cannot
be turned into at least one mod entry.
"""
from __future__ import annotations

import json
from typing import Any, Dict

try:
    import tomllib as toml  # type: ignore
except ImportError:  # Python < 3.11
    import tomli as toml  # type: ignore

from constants import Constants, LoaderFamilies
from distribution.models import ModuleType

from .models import LoaderProfile, ModEntry, ModsManifest


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_mods_toml(raw: bytes) -> ModsManifest:
    """Parse ``mods.toml`` / ``neoforge.mods.toml`` content."""
    try:
        data: Dict[str, Any] = toml.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, toml.TOMLDecodeError) as e:
        raise ValueError(f"Invalid TOML: {e}") from e

    mods = []
    for entry in data.get("mods") or []:
        if not isinstance(entry, dict) or not entry.get("modId"):
            continue
        mods.append(ModEntry(
            mod_id=_as_text(entry.get("modId")),
            version=_as_text(entry.get("version")),
            display_name=_as_text(entry.get("displayName")),
            description=_as_text(entry.get("description")).strip(),
        ))
    if not mods:
        raise ValueError("No [[mods]] entries declared")

    return ModsManifest(
        mod_loader=_as_text(data.get("modLoader")),
        loader_version=_as_text(data.get("loaderVersion")),
        mods=mods,
    )


def parse_fabric_mod_json(raw: bytes) -> ModsManifest:
    """Parse ``fabric.mod.json`` content."""
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict) or not data.get("id"):
        raise ValueError("Missing mod id")

    depends = data.get("depends") if isinstance(data.get("depends"), dict) else {}
    return ModsManifest(
        mod_loader=LoaderFamilies.FABRIC.value,
        loader_version=_as_text(depends.get("fabricloader")),
        mods=[ModEntry(
            mod_id=_as_text(data.get("id")),
            version=_as_text(data.get("version")),
            display_name=_as_text(data.get("name") or data.get("id")),
            description=_as_text(data.get("description")),
        )],
    )


FORGE_PROFILE = LoaderProfile(
    family=LoaderFamilies.FORGE.value,
    label="ForgeMod",
    manifest_file=Constants.FORGE_MODS_TOML,
    parser=parse_mods_toml,
    example_mod_id=Constants.FORGE_EXAMPLE_MOD_ID,
    version_placeholder=Constants.FORGE_VERSION_PLACEHOLDER,
    default_loader="javafml",
    module_type=ModuleType.FORGE_MOD,
)

NEOFORGE_PROFILE = LoaderProfile(
    family=LoaderFamilies.NEOFORGE.value,
    label="NeoForgeMod",
    manifest_file=Constants.NEOFORGE_MODS_TOML,
    parser=parse_mods_toml,
    example_mod_id=Constants.FORGE_EXAMPLE_MOD_ID,
    version_placeholder=Constants.FORGE_VERSION_PLACEHOLDER,
    default_loader="javafml",
    module_type=ModuleType.FORGE_MOD,
)

FABRIC_PROFILE = LoaderProfile(
    family=LoaderFamilies.FABRIC.value,
    label="FabricMod",
    manifest_file=Constants.FABRIC_MOD_JSON,
    parser=parse_fabric_mod_json,
    example_mod_id=Constants.FABRIC_EXAMPLE_MOD_ID,
    version_placeholder=Constants.FABRIC_VERSION_PLACEHOLDER,
    default_loader=LoaderFamilies.FABRIC.value,
    module_type=ModuleType.FABRIC_MOD,
)

_PROFILES = {p.family: p for p in (FORGE_PROFILE, NEOFORGE_PROFILE, FABRIC_PROFILE)}


def get_profile(family: str) -> LoaderProfile:
    """Return the inference profile for ``family``.

    Raises:
        ValueError: If the family is not supported.
    """
    profile = _PROFILES.get(family.lower())
    if profile is None:
        raise ValueError(f"Unsupported loader family: {family}")
    return profile
