"""Local artifact and version repository layout.

The library repository is Maven-style (group/artifact/version/file) and the
version repository stores one manifest per version name. Both live under a
distribution root and are mirrored publicly under a base URL, so every
absolute path has a matching relative URL path.
"""
from __future__ import annotations

import logging
import os
import posixpath
import shutil
from typing import Optional

from constants import Constants
from common import http_client
from distribution.maven import maven_components_to_path

logger = logging.getLogger(__name__)


def join_url(base_url: str, *parts: str) -> str:
    """Join URL path segments onto ``base_url`` with single slashes."""
    tail = posixpath.join(*[p.strip("/") for p in parts if p])
    return f"{base_url.rstrip('/')}/{tail}"


def copy_overwrite(source: str, destination: str) -> None:
    """Copy ``source`` to ``destination`` replacing any prior copy."""
    os.makedirs(os.path.dirname(destination), exist_ok=True)
    shutil.copyfile(source, destination)


class _BaseRepo:
    """A directory inside the distribution root with a public URL mirror."""

    def __init__(self, absolute_root: str, relative_root: str):
        self._absolute_root = absolute_root
        self._relative_root = relative_root

    def get_container_directory(self) -> str:
        return self._absolute_root

    def get_relative_root(self) -> str:
        return self._relative_root


class LibRepoStructure(_BaseRepo):
    """Maven-layout library repository."""

    def get_artifact_by_components(
        self,
        group: str,
        artifact: str,
        version: str,
        classifier: Optional[str] = None,
        extension: str = "jar",
    ) -> str:
        rel = maven_components_to_path(group, artifact, version, classifier, extension)
        return os.path.join(self._absolute_root, *rel.split("/"))

    def get_artifact_url_by_components(
        self,
        base_url: str,
        group: str,
        artifact: str,
        version: str,
        classifier: Optional[str] = None,
        extension: str = "jar",
    ) -> str:
        rel = maven_components_to_path(group, artifact, version, classifier, extension)
        return join_url(base_url, self._relative_root, rel)

    @staticmethod
    def artifact_exists(path: str) -> bool:
        return os.path.isfile(path)

    def download_artifact_by_components(
        self,
        remote_repository: str,
        group: str,
        artifact: str,
        version: str,
        classifier: Optional[str] = None,
        extension: str = "jar",
    ) -> str:
        """Fetch an artifact from a remote Maven repository into this repo.

        Raises:
            FileNotFoundError: If the remote repository does not serve it.
        """
        rel = maven_components_to_path(group, artifact, version, classifier, extension)
        url = join_url(remote_repository, rel)
        destination = self.get_artifact_by_components(group, artifact, version, classifier, extension)
        logger.info("Downloading %s", url)
        if not http_client.download_file(url, destination, context=artifact):
            raise FileNotFoundError(f"Artifact not available at {url}")
        return destination


class VersionRepoStructure(_BaseRepo):
    """Repository of version manifests keyed by version name."""

    def get_version_manifest(self, name: str) -> str:
        return os.path.join(self._absolute_root, name, f"{name}.json")

    def get_version_manifest_url(self, base_url: str, name: str) -> str:
        return join_url(base_url, self._relative_root, name, f"{name}.json")


class RepoStructure:
    """Root of a distribution on disk for one loader family."""

    def __init__(self, absolute_root: str, relative_root: str, name: str):
        self.absolute_root = absolute_root
        self.relative_root = relative_root
        self.name = name
        repo_abs = os.path.join(absolute_root, Constants.REPO_DIR)
        repo_rel = posixpath.join(relative_root, Constants.REPO_DIR) if relative_root else Constants.REPO_DIR
        self._lib_repo = LibRepoStructure(
            os.path.join(repo_abs, Constants.LIB_DIR),
            posixpath.join(repo_rel, Constants.LIB_DIR),
        )
        self._version_repo = VersionRepoStructure(
            os.path.join(repo_abs, Constants.VERSIONS_DIR),
            posixpath.join(repo_rel, Constants.VERSIONS_DIR),
        )

    def get_lib_repo_struct(self) -> LibRepoStructure:
        return self._lib_repo

    def get_version_repo_struct(self) -> VersionRepoStructure:
        return self._version_repo

    def get_cache_directory(self, version: str) -> str:
        """Per-version installer working directory for this family."""
        return os.path.join(self.absolute_root, Constants.CACHE_DIR, self.name, version)
