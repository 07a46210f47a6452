"""Identity inference for packaged units (mod jars).

Declared metadata is frequently incomplete: template projects ship with the
example mod id, and build tools leave version placeholders unexpanded. The
engine combines three signals, in this order of trust:

1. the unit's declared metadata, when it contains no placeholder;
2. the static-analysis hint, for the mod id;
3. a crude guess from the file name.

Every degradation is logged; nothing here raises for bad metadata.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .models import CrudeInference, LoaderProfile, ModEntry, ModIdentity, ModsManifest, StaticAnalysisHint

logger = logging.getLogger(__name__)

IMPLEMENTATION_VERSION_REGEX = re.compile(Constants.IMPLEMENTATION_VERSION_PATTERN)
_CRUDE_NAME_REGEX = re.compile(r"^(?P<name>.+?)[-_ ]+v?(?P<version>\d.*)$", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def capitalize(text: str) -> str:
    """Upper-case the first character only."""
    return text[:1].upper() + text[1:]


def crude_inference(unit_name: str) -> CrudeInference:
    """Guess a name and version from a file name like ``CoolMod-1.0.jar``."""
    stem = unit_name.rsplit(".", 1)[0] if "." in unit_name else unit_name
    match = _CRUDE_NAME_REGEX.match(stem)
    if match is None:
        return CrudeInference(name=stem, version=Constants.FALLBACK_VERSION)
    return CrudeInference(name=match.group("name").strip(), version=match.group("version").strip())


def discern_result(hint_value: Optional[str], crude: str) -> str:
    """Prefer the static-analysis value, falling back to the crude guess."""
    return crude if hint_value is None or hint_value == "" else hint_value


def recover_implementation_version(build_manifest: str) -> Optional[str]:
    """Return the last ``Implementation-Version`` value in a MANIFEST.MF text."""
    version = None
    for line in build_manifest.splitlines():
        match = IMPLEMENTATION_VERSION_REGEX.match(line.strip())
        if match is not None:
            version = match.group(1).strip()
    return version


class MetadataInferenceEngine:
    """Assigns canonical identities to packaged units of one loader family.

    Results are cached per unit name on the instance, so independent scans
    use independent engines.
    """

    def __init__(self, profile: LoaderProfile):
        self.profile = profile
        self._metadata: Dict[str, ModsManifest] = {}

    def parse_declared(self, unit_name: str, raw: Optional[bytes]) -> Optional[ModsManifest]:
        """Parse raw declared metadata, logging when it is absent or malformed."""
        if raw is None:
            logger.error(
                "%s %s does not contain %s file.",
                self.profile.label, unit_name, self.profile.manifest_file,
            )
            return None
        try:
            return self.profile.parser(raw)
        except ValueError as e:
            logger.error(
                "%s %s contains an invalid %s file: %s",
                self.profile.label, unit_name, self.profile.manifest_file, e,
            )
            return None

    def process(
        self,
        unit_name: str,
        raw_declared: Optional[bytes],
        hint: Optional[StaticAnalysisHint],
        build_manifest: Optional[str],
    ) -> ModsManifest:
        """Parse and infer in one step; cached per unit name."""
        cached = self._metadata.get(unit_name)
        if cached is not None:
            return cached
        declared = self.parse_declared(unit_name, raw_declared)
        return self.infer(unit_name, declared, hint, build_manifest)

    def infer(
        self,
        unit_name: str,
        declared: Optional[ModsManifest],
        hint: Optional[StaticAnalysisHint],
        build_manifest: Optional[str],
    ) -> ModsManifest:
        """Resolve placeholders in ``declared`` or synthesize a default record."""
        cached = self._metadata.get(unit_name)
        if cached is not None:
            return cached

        hint_id = hint.id if hint is not None else None
        if hint_id is None:
            logger.error("Static analysis failed to yield metadata for %s %s!", self.profile.label, unit_name)
            logger.error("Is this mod malformatted or does the analyzer need an update?")

        crude = crude_inference(unit_name)
        crude_id = _WHITESPACE.sub("", crude.name.lower())

        if declared is not None:
            for entry in declared.mods:
                self._resolve_entry(unit_name, entry, hint_id, crude, crude_id, build_manifest)
            manifest = declared
        else:
            logger.warning("Synthesizing default metadata for %s %s.", self.profile.label, unit_name)
            manifest = ModsManifest(
                mod_loader=self.profile.default_loader,
                loader_version="",
                mods=[ModEntry(
                    mod_id=discern_result(hint_id, crude_id),
                    version=crude.version,
                    display_name=capitalize(crude.name),
                    description="",
                )],
            )

        self._metadata[unit_name] = manifest
        return manifest

    def _resolve_entry(
        self,
        unit_name: str,
        entry: ModEntry,
        hint_id: Optional[str],
        crude: CrudeInference,
        crude_id: str,
        build_manifest: Optional[str],
    ) -> None:
        if entry.mod_id == self.profile.example_mod_id:
            entry.mod_id = discern_result(hint_id, crude_id)
            entry.display_name = capitalize(crude.name)
            if is_debug_enabled(logger):
                logger.debug(
                    "Replaced example mod id",
                    extra=extra_context(
                        event="decision",
                        component="inference",
                        action="discern_id",
                        outcome="hint" if hint_id else "filename",
                        target=unit_name,
                    ),
                )

        if entry.version == self.profile.version_placeholder:
            version = crude.version
            if build_manifest is None:
                logger.debug(
                    "%s %s contains a version wildcard yet no MANIFEST.MF.. Defaulting to %s",
                    self.profile.label, unit_name, version,
                )
            else:
                recovered = recover_implementation_version(build_manifest)
                if recovered:
                    version = recovered
                logger.debug(
                    "%s %s contains a version wildcard, inferring %s",
                    self.profile.label, unit_name, version,
                )
            entry.version = version

    def identify(
        self,
        unit_name: str,
        declared: Optional[ModsManifest],
        hint: Optional[StaticAnalysisHint],
        build_manifest: Optional[str],
    ) -> ModIdentity:
        """Return the canonical (id, display name, version) for a unit."""
        manifest = self.infer(unit_name, declared, hint, build_manifest)
        primary = manifest.mods[0]
        return ModIdentity(
            mod_id=primary.mod_id,
            display_name=capitalize(primary.display_name),
            version=primary.version,
            group=hint.group if hint is not None else None,
        )
