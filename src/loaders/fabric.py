"""Fabric resolver.

Fabric has no installer step worth driving: Fabric meta serves the launcher
profile directly, and every library it lists is a plain Maven artifact.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List

from constants import Constants, LoaderFamilies
from common.http_client import get_json
from distribution.artifact import generate_artifact
from distribution.maven import get_maven_components
from distribution.models import Module, ModuleType
from errors import IndexFetchError, ManifestFormatError
from versioning.models import MinecraftVersion

from .base import LoaderResolver

logger = logging.getLogger(__name__)


class FabricResolver(LoaderResolver):
    """Fetches the Fabric profile and mirrors its libraries."""

    family = LoaderFamilies.FABRIC.value

    def is_for_version(self, minecraft_version: MinecraftVersion, loader_version: str) -> bool:
        return minecraft_version.major == 1 and minecraft_version.minor >= 14

    def profile_url(self) -> str:
        return (
            f"{Constants.FABRIC_META_URL}/versions/loader/"
            f"{self.minecraft_version}/{self.loader_version}/profile/json"
        )

    def fetch_profile(self) -> Dict[str, Any]:
        status_code, _, data = get_json(self.profile_url())
        if status_code != 200 or not isinstance(data, dict):
            raise IndexFetchError(
                f"Unable to fetch Fabric profile for {self.minecraft_version} / {self.loader_version} "
                f"(status {status_code})"
            )
        for required in ("id", "libraries"):
            if required not in data:
                raise ManifestFormatError(f"Fabric profile is missing '{required}'.. did Fabric change their format?")
        return data

    def get_module(self) -> Module:
        profile = self.fetch_profile()
        manifest_module = self._store_profile(profile)
        libraries = self._process_libraries(profile["libraries"])

        loader_prefix = f"{Constants.FABRIC_GROUP}:{Constants.FABRIC_LOADER_ARTIFACT}:"
        loader = next((m for m in libraries if m.id.startswith(loader_prefix)), None)
        if loader is None:
            raise ManifestFormatError("Fabric profile does not declare fabric-loader.")

        return Module(
            id=loader.id,
            name="Fabric (fabric-loader)",
            type=ModuleType.FABRIC,
            artifact=loader.artifact,
            sub_modules=[manifest_module] + [m for m in libraries if m is not loader],
        )

    def _store_profile(self, profile: Dict[str, Any]) -> Module:
        version_repo = self.repo_structure.get_version_repo_struct()
        name = str(profile["id"])
        destination = version_repo.get_version_manifest(name)
        os.makedirs(os.path.dirname(destination), exist_ok=True)
        with open(destination, "w", encoding="utf-8") as fh:
            json.dump(profile, fh)
        return Module(
            id=name,
            name="Fabric (version.json)",
            type=ModuleType.VERSION_MANIFEST,
            artifact=generate_artifact(destination, version_repo.get_version_manifest_url(self.base_url, name)),
        )

    def _process_libraries(self, entries: List[Any]) -> List[Module]:
        lib_repo = self.repo_structure.get_lib_repo_struct()
        modules: List[Module] = []
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            c = get_maven_components(entry["name"])
            path = lib_repo.get_artifact_by_components(c.group, c.artifact, c.version, c.classifier, c.extension)
            if not lib_repo.artifact_exists(path):
                remote = entry.get("url") or Constants.REPOSITORY_URL_FABRIC
                logger.debug("Library %s not found locally, downloading from %s", entry["name"], remote)
                lib_repo.download_artifact_by_components(
                    remote, c.group, c.artifact, c.version, c.classifier, c.extension
                )
            modules.append(Module(
                id=entry["name"],
                name=f"Fabric ({c.artifact})",
                type=ModuleType.LIBRARY,
                artifact=generate_artifact(
                    path,
                    lib_repo.get_artifact_url_by_components(
                        self.base_url, c.group, c.artifact, c.version, c.classifier, c.extension
                    ),
                ),
            ))
        return modules
