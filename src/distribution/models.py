"""Data models for the distribution module tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ModuleType(Enum):
    """Role of a module in the launcher distribution manifest."""
    LIBRARY = "Library"
    FORGE_HOSTED = "ForgeHosted"
    FABRIC = "Fabric"
    VERSION_MANIFEST = "VersionManifest"
    FORGE_MOD = "ForgeMod"
    FABRIC_MOD = "FabricMod"


@dataclass(frozen=True)
class Artifact:
    """Content descriptor for a module's file."""
    size: int
    md5: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"size": self.size, "MD5": self.md5, "url": self.url}


@dataclass(frozen=True)
class Module:
    """A node in the resolved module tree.

    ``classpath`` defaults to True and is omitted from the serialized form in
    that case, matching the launcher manifest convention. ``sub_modules`` is
    ordered; consumers rely on position (the version manifest comes first).
    """
    id: str
    name: str
    type: ModuleType
    artifact: Artifact
    classpath: bool = True
    sub_modules: List["Module"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the launcher manifest's camelCase layout."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
        }
        if not self.classpath:
            data["classpath"] = False
        data["artifact"] = self.artifact.to_dict()
        if self.sub_modules:
            data["subModules"] = [m.to_dict() for m in self.sub_modules]
        return data

    def find(self, module_id: str) -> Optional["Module"]:
        """Depth-first lookup of a module by id, including self."""
        if self.id == module_id:
            return self
        for sub in self.sub_modules:
            hit = sub.find(module_id)
            if hit is not None:
                return hit
        return None
