"""NeoForge resolver."""

from __future__ import annotations

from constants import Constants, LoaderFamilies
from distribution.models import Module
from versioning.models import MinecraftVersion
from versioning.parser import version_gte

from .base import LoaderResolver
from .models import GeneratedFileSpec, InstallerLoaderConfig, Wildcard
from .pipeline import InstallerPipeline

WILDCARD_NEOFORM_VERSION = "${formVersion}"
NEOFORM_VERSION_FLAG = "--fml.neoFormVersion"


class NeoForgeResolver(LoaderResolver):
    """Runs the NeoForge installer and collects what it generates."""

    family = LoaderFamilies.NEOFORGE.value

    def __init__(
        self,
        absolute_root: str,
        relative_root: str,
        base_url: str,
        minecraft_version: MinecraftVersion,
        loader_version: str,
        discard_output: bool = False,
        invalidate_cache: bool = False,
        java_executable: str = Constants.JAVA_EXECUTABLE,
    ):
        super().__init__(absolute_root, relative_root, base_url, minecraft_version, loader_version)
        self.discard_output = discard_output
        self.invalidate_cache = invalidate_cache
        self.java_executable = java_executable
        self.config = self.configure()

    def is_for_version(self, minecraft_version: MinecraftVersion, loader_version: str) -> bool:
        return version_gte(str(minecraft_version), "1.20.1")

    def configure(self) -> InstallerLoaderConfig:
        neoform_unified = f"{self.minecraft_version}-{WILDCARD_NEOFORM_VERSION}"
        group, artifact = Constants.NEOFORGE_GROUP, Constants.NEOFORGE_ARTIFACT
        mc_group, mc_client = Constants.MINECRAFT_GROUP, Constants.MINECRAFT_CLIENT_ARTIFACT
        version = self.loader_version

        return InstallerLoaderConfig(
            family=self.family,
            display_name="Minecraft NeoForge",
            remote_repository=Constants.REPOSITORY_URL_NEOFORGE,
            group=group,
            artifact=artifact,
            installer_version=version,
            loader_version=version,
            version_manifest_name=f"neoforge-{version}",
            generated_files=(
                GeneratedFileSpec("universal jar", group, artifact, version, ("universal",), classpath=False),
                GeneratedFileSpec("client jar", group, artifact, version, ("client",), classpath=False),
                GeneratedFileSpec("client extra", mc_group, mc_client, neoform_unified, ("extra",), classpath=False),
                GeneratedFileSpec("client slim", mc_group, mc_client, neoform_unified, ("slim",), classpath=False),
                GeneratedFileSpec("client srg", mc_group, mc_client, neoform_unified, ("srg",), classpath=False),
            ),
            wildcards=(Wildcard(WILDCARD_NEOFORM_VERSION, NEOFORM_VERSION_FLAG, "NeoForm"),),
        )

    def get_module(self) -> Module:
        return InstallerPipeline(
            self.repo_structure,
            self.base_url,
            self.config,
            java_executable=self.java_executable,
            invalidate_cache=self.invalidate_cache,
            discard_output=self.discard_output,
        ).run()
