"""Common contract for loader resolvers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from distribution.models import Module
from repository.structure import RepoStructure
from versioning.models import MinecraftVersion


class LoaderResolver(ABC):
    """Resolves one loader version for one game version into a module tree."""

    family: str = ""

    def __init__(
        self,
        absolute_root: str,
        relative_root: str,
        base_url: str,
        minecraft_version: MinecraftVersion,
        loader_version: str,
    ):
        self.base_url = base_url
        self.minecraft_version = minecraft_version
        self.loader_version = loader_version
        self.repo_structure = RepoStructure(absolute_root, relative_root, self.family)

    @abstractmethod
    def is_for_version(self, minecraft_version: MinecraftVersion, loader_version: str) -> bool:
        """Whether this resolver can handle the given combination."""

    @abstractmethod
    def get_module(self) -> Module:
        """Run resolution and return the root module."""
