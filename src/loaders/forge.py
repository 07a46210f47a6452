"""Forge resolver for installer-based releases (1.12.2 post-ForgeGradle 2 onwards)."""

from __future__ import annotations

from constants import Constants, LoaderFamilies
from distribution.models import Module
from versioning.models import MinecraftVersion
from versioning.parser import is_forge_gradle2, is_version_acceptable

from .base import LoaderResolver
from .models import GeneratedFileSpec, InstallerLoaderConfig, Wildcard
from .pipeline import InstallerPipeline

WILDCARD_MCP_VERSION = "${mcpVersion}"
MCP_VERSION_FLAG = "--fml.mcpVersion"


class ForgeResolver(LoaderResolver):
    """Runs the Forge installer and collects what it generates.

    ``loader_version`` may be given bare (``47.2.0``) or with the game version
    prefix (``1.20.1-47.2.0``); Maven coordinates always use the prefixed form.
    """

    family = LoaderFamilies.FORGE.value

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
        prefix = f"{minecraft_version}-"
        bare = loader_version[len(prefix):] if loader_version.startswith(prefix) else loader_version
        super().__init__(absolute_root, relative_root, base_url, minecraft_version, bare)
        self.full_version = f"{prefix}{bare}"
        self.discard_output = discard_output
        self.invalidate_cache = invalidate_cache
        self.java_executable = java_executable
        self.config = self.configure()

    def is_for_version(self, minecraft_version: MinecraftVersion, loader_version: str) -> bool:
        if minecraft_version.minor == 12 and is_forge_gradle2(loader_version):
            return False
        return is_version_acceptable(minecraft_version, range(12, 22))

    def configure(self) -> InstallerLoaderConfig:
        group, artifact = Constants.FORGE_GROUP, Constants.FORGE_ARTIFACT
        version = self.full_version
        if self.minecraft_version.minor == 12:
            # 1.12.2 installers emit one unclassified forge jar and no MCP artifacts.
            generated_files = (
                GeneratedFileSpec("universal jar", group, artifact, version, ("universal", None), classpath=False),
            )
            wildcards = ()
        else:
            generated_files = self._generated_files(group, artifact, version)
            wildcards = (Wildcard(WILDCARD_MCP_VERSION, MCP_VERSION_FLAG, "MCP"),)

        return InstallerLoaderConfig(
            family=self.family,
            display_name="Minecraft Forge",
            remote_repository=Constants.REPOSITORY_URL_FORGE,
            group=group,
            artifact=artifact,
            installer_version=version,
            loader_version=version,
            version_manifest_name=f"{self.minecraft_version}-forge-{self.loader_version}",
            generated_files=generated_files,
            wildcards=wildcards,
        )

    def _generated_files(self, group: str, artifact: str, version: str):
        mcp_unified = f"{self.minecraft_version}-{WILDCARD_MCP_VERSION}"
        mc_group, mc_client = Constants.MINECRAFT_GROUP, Constants.MINECRAFT_CLIENT_ARTIFACT
        # Before 1.17 the installer does not always emit a separate client jar.
        legacy = self.minecraft_version.minor < 17
        return (
            GeneratedFileSpec("universal jar", group, artifact, version, ("universal",), classpath=False),
            GeneratedFileSpec(
                "client jar", group, artifact, version, ("client",),
                skip_if_not_present=legacy, classpath=False,
            ),
            GeneratedFileSpec("client extra", mc_group, mc_client, mcp_unified, ("extra",), classpath=False),
            GeneratedFileSpec(
                "client slim", mc_group, mc_client, mcp_unified, ("slim", "slim-stable"),
                skip_if_not_present=True, classpath=False,
            ),
            GeneratedFileSpec(
                "client srg", mc_group, mc_client, mcp_unified, ("srg",),
                skip_if_not_present=True, classpath=False,
            ),
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
