"""Shared resolution pipeline for installer-based loaders (Forge, NeoForge).

One run goes through these steps, each fatal on error:

    installer check -> cache decision -> (installer run) -> verification
    -> version manifest -> wildcard substitution -> generated files
    -> manifest libraries -> (output cleanup)

The per-version cache directory is the unit of reuse: once an installer run
has produced a verified manifest there, later runs trust its contents unless
invalidation is requested.
"""
from __future__ import annotations

import dataclasses
import json
import logging
import os
import shutil
from typing import List, Optional, Tuple

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from distribution.artifact import generate_artifact
from distribution.maven import get_maven_components, maven_components_to_identifier, maven_components_to_path
from distribution.models import Module, ModuleType
from errors import InstallerError, ManifestFormatError, MissingArtifactError
from repository.structure import RepoStructure, copy_overwrite

from .installer import run_installer
from .models import GeneratedFileSpec, InstallerLoaderConfig, VersionManifest, parse_version_manifest

logger = logging.getLogger(__name__)


class InstallerPipeline:
    """Drives a loader installer and assembles the resulting module tree."""

    def __init__(
        self,
        repo_structure: RepoStructure,
        base_url: str,
        config: InstallerLoaderConfig,
        java_executable: str = Constants.JAVA_EXECUTABLE,
        invalidate_cache: bool = False,
        discard_output: bool = False,
    ):
        self.repo_structure = repo_structure
        self.base_url = base_url
        self.config = config
        self.java_executable = java_executable
        self.invalidate_cache = invalidate_cache
        self.discard_output = discard_output

    # ------------------------------------------------------------------ paths

    @property
    def cache_dir(self) -> str:
        return self.repo_structure.get_cache_directory(self.config.loader_version)

    def get_version_manifest_path(self, output_dir: str) -> str:
        name = self.config.version_manifest_name
        return os.path.join(output_dir, Constants.VERSIONS_DIR, name, f"{name}.json")

    def installer_path(self) -> str:
        return self.repo_structure.get_lib_repo_struct().get_artifact_by_components(
            self.config.group, self.config.artifact, self.config.installer_version, "installer", "jar"
        )

    # ------------------------------------------------------------------ steps

    def run(self) -> Module:
        """Resolve the loader into a module tree rooted at the hosted loader."""
        installer_path = self.ensure_installer()
        logger.debug(
            "Beginning processing of %s v%s", self.config.display_name, self.config.loader_version
        )

        output_dir = self.cache_dir
        if self.prepare_cache(output_dir):
            self.invoke_installer(installer_path, output_dir)

        self.verify_installer_ran(output_dir)

        logger.debug("Processing Version Manifest")
        manifest, manifest_module = self.process_version_manifest(output_dir)

        specs = self.substitute_wildcards(manifest, self.config.generated_files)

        logger.debug("Processing generated %s files.", self.config.display_name)
        generated = self.process_generated_files(specs, output_dir)

        logger.debug("Processing Libraries")
        libraries = self.process_libraries(manifest, output_dir)

        primary = generated[0]
        root = dataclasses.replace(
            primary,
            type=ModuleType.FORGE_HOSTED,
            sub_modules=[manifest_module] + generated[1:] + libraries,
        )

        if self.discard_output:
            logger.info("Removing installer output at %s..", output_dir)
            shutil.rmtree(output_dir, ignore_errors=False)
            logger.info("Removed installer output successfully.")

        if is_debug_enabled(logger):
            logger.debug(
                "Resolution complete",
                extra=extra_context(
                    event="function_exit",
                    component="pipeline",
                    action="run",
                    outcome="success",
                    loader=self.config.family,
                    count=len(root.sub_modules),
                ),
            )
        return root

    def ensure_installer(self) -> str:
        """Make sure the installer jar is in the artifact repository."""
        lib_repo = self.repo_structure.get_lib_repo_struct()
        path = self.installer_path()
        logger.debug("Checking for %s installer at %s..", self.config.display_name, path)
        if not lib_repo.artifact_exists(path):
            logger.debug("%s installer not found locally, initializing download..", self.config.display_name)
            lib_repo.download_artifact_by_components(
                self.config.remote_repository,
                self.config.group,
                self.config.artifact,
                self.config.installer_version,
                "installer",
                "jar",
            )
        else:
            logger.debug("Using locally discovered %s installer.", self.config.display_name)
        return path

    def prepare_cache(self, output_dir: str) -> bool:
        """Decide whether the installer must run. Returns True to run it."""
        if os.path.isdir(output_dir):
            if not self.invalidate_cache:
                logger.info("Using cached results at %s.", output_dir)
                return False
            logger.info("Removing existing cache %s..", output_dir)
            shutil.rmtree(output_dir)
        os.makedirs(output_dir, exist_ok=True)
        return True

    def invoke_installer(self, installer_path: str, output_dir: str) -> int:
        installer = os.path.join(output_dir, os.path.basename(installer_path))
        shutil.copyfile(installer_path, installer)

        # The installer refuses to run without a launcher profile file.
        with open(os.path.join(output_dir, Constants.INSTALLER_PROFILE_FILE), "w", encoding="utf-8") as fh:
            json.dump({}, fh)

        logger.debug("Starting %s installer.", self.config.display_name)
        code = run_installer(
            self.java_executable, installer, output_dir, f"{self.config.display_name} Installer"
        )
        logger.debug("Installer finished, beginning processing..")
        return code

    def verify_installer_ran(self, output_dir: str) -> None:
        """Require the version manifest; otherwise drop the cache and fail."""
        manifest_path = self.get_version_manifest_path(output_dir)
        if not os.path.isfile(manifest_path):
            shutil.rmtree(output_dir, ignore_errors=True)
            raise InstallerError(
                f"{self.config.display_name} installation failed: {manifest_path} was not produced."
            )

    def process_version_manifest(self, output_dir: str) -> Tuple[VersionManifest, Module]:
        version_repo = self.repo_structure.get_version_repo_struct()
        manifest_path = self.get_version_manifest_path(output_dir)
        name = self.config.version_manifest_name

        try:
            with open(manifest_path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as e:
            raise ManifestFormatError(f"Version manifest {manifest_path} is not valid JSON: {e}") from e
        manifest = parse_version_manifest(data)

        module = Module(
            id=self.config.loader_version,
            name=f"{self.config.display_name} (version.json)",
            type=ModuleType.VERSION_MANIFEST,
            artifact=generate_artifact(manifest_path, version_repo.get_version_manifest_url(self.base_url, name)),
        )
        copy_overwrite(manifest_path, version_repo.get_version_manifest(name))
        return manifest, module

    def substitute_wildcards(
        self, manifest: VersionManifest, specs: Tuple[GeneratedFileSpec, ...]
    ) -> List[GeneratedFileSpec]:
        """Replace wildcard tokens in generated-file versions with manifest values.

        Raises:
            ManifestFormatError: If a wildcard in use has no flag in the manifest.
        """
        resolved = list(specs)
        for wildcard in self.config.wildcards:
            if not any(wildcard.token in s.version for s in resolved):
                continue
            value = manifest.argument_value(wildcard.flag)
            if value is None:
                raise ManifestFormatError(
                    f"{wildcard.label} Version not found.. did {self.config.display_name} change their format?"
                )
            logger.debug("Resolved %s version %s", wildcard.label, value)
            resolved = [
                dataclasses.replace(s, version=s.version.replace(wildcard.token, value))
                if wildcard.token in s.version else s
                for s in resolved
            ]
        return resolved

    def process_generated_files(self, specs: List[GeneratedFileSpec], output_dir: str) -> List[Module]:
        lib_dir = os.path.join(output_dir, "libraries")
        lib_repo = self.repo_structure.get_lib_repo_struct()
        modules: List[Module] = []

        for spec in specs:
            checked: List[str] = []
            located: Optional[Module] = None

            for classifier in spec.classifiers:
                rel = maven_components_to_path(spec.group, spec.artifact, spec.version, classifier)
                local_path = os.path.join(lib_dir, *rel.split("/"))
                checked.append(local_path)
                if not os.path.isfile(local_path):
                    continue

                located = Module(
                    id=maven_components_to_identifier(spec.group, spec.artifact, spec.version, classifier),
                    name=f"{self.config.display_name} ({spec.name})",
                    type=ModuleType.LIBRARY,
                    classpath=spec.classpath,
                    artifact=generate_artifact(
                        local_path,
                        lib_repo.get_artifact_url_by_components(
                            self.base_url, spec.group, spec.artifact, spec.version, classifier
                        ),
                    ),
                )
                copy_overwrite(
                    local_path,
                    lib_repo.get_artifact_by_components(spec.group, spec.artifact, spec.version, classifier),
                )
                break

            if located is not None:
                modules.append(located)
            elif spec.skip_if_not_present:
                logger.debug("Optional file %s not present, skipping.", spec.name)
            else:
                raise MissingArtifactError(
                    f"Required file {spec.name} not found at any expected location:\n\t" + "\n\t".join(checked),
                    checked,
                )

        if not modules:
            raise MissingArtifactError(f"No generated {self.config.display_name} files were located.")
        return modules

    def process_libraries(self, manifest: VersionManifest, output_dir: str) -> List[Module]:
        lib_dir = os.path.join(output_dir, "libraries")
        lib_repo = self.repo_structure.get_lib_repo_struct()
        modules: List[Module] = []

        for entry in manifest.libraries:
            if entry.download is None:
                continue

            local_path = os.path.join(lib_dir, *entry.download.path.split("/"))
            if not os.path.isfile(local_path):
                raise MissingArtifactError(f"Expected library {entry.name} not found!", [local_path])

            c = get_maven_components(entry.name)
            modules.append(Module(
                id=entry.name,
                name=f"{self.config.display_name} ({c.artifact})",
                type=ModuleType.LIBRARY,
                artifact=generate_artifact(
                    local_path,
                    lib_repo.get_artifact_url_by_components(
                        self.base_url, c.group, c.artifact, c.version, c.classifier, c.extension
                    ),
                ),
            ))
            copy_overwrite(
                local_path,
                lib_repo.get_artifact_by_components(c.group, c.artifact, c.version, c.classifier, c.extension),
            )

        return modules
