"""Loader resolvers.

- pipeline.py: the shared installer-driven resolution pipeline
- installer.py: running the installer subprocess
- neoforge.py / forge.py: installer-based families
- fabric.py: profile-based Fabric resolution
"""

from constants import Constants, LoaderFamilies
from versioning.models import MinecraftVersion

from .base import LoaderResolver
from .fabric import FabricResolver
from .forge import ForgeResolver
from .neoforge import NeoForgeResolver
from .pipeline import InstallerPipeline


def get_resolver(
    family: str,
    absolute_root: str,
    base_url: str,
    minecraft_version: MinecraftVersion,
    loader_version: str,
    *,
    relative_root: str = "",
    invalidate_cache: bool = False,
    discard_output: bool = False,
    java_executable: str = Constants.JAVA_EXECUTABLE,
) -> LoaderResolver:
    """Build the resolver for ``family``.

    Raises:
        ValueError: If the family is unsupported.
    """
    family = family.lower()
    if family == LoaderFamilies.FABRIC.value:
        return FabricResolver(absolute_root, relative_root, base_url, minecraft_version, loader_version)
    installer_based = {
        LoaderFamilies.FORGE.value: ForgeResolver,
        LoaderFamilies.NEOFORGE.value: NeoForgeResolver,
    }
    cls = installer_based.get(family)
    if cls is None:
        raise ValueError(f"Unsupported loader family: {family}")
    return cls(
        absolute_root,
        relative_root,
        base_url,
        minecraft_version,
        loader_version,
        discard_output=discard_output,
        invalidate_cache=invalidate_cache,
        java_executable=java_executable,
    )


__all__ = [
    "LoaderResolver",
    "FabricResolver",
    "ForgeResolver",
    "NeoForgeResolver",
    "InstallerPipeline",
    "get_resolver",
]
