"""Data models for packaged-unit identity inference."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from distribution.models import ModuleType


@dataclass
class ModEntry:
    """One mod declared by a packaged unit. Rewritten in place during inference."""
    mod_id: str
    version: str
    display_name: str
    description: str = ""


@dataclass
class ModsManifest:
    """Parsed self-describing metadata of a packaged unit."""
    mod_loader: str
    loader_version: str
    mods: List[ModEntry] = field(default_factory=list)


@dataclass(frozen=True)
class StaticAnalysisHint:
    """Identity computed by the external bytecode analyzer."""
    id: Optional[str] = None
    group: Optional[str] = None


@dataclass(frozen=True)
class CrudeInference:
    """Name and version guessed from a file name."""
    name: str
    version: str


@dataclass(frozen=True)
class ModIdentity:
    """Canonical identity assigned to a packaged unit."""
    mod_id: str
    display_name: str
    version: str
    group: Optional[str] = None


@dataclass(frozen=True)
class LoaderProfile:
    """Family-specific constants consumed by the shared inference engine."""
    family: str
    label: str
    manifest_file: str
    parser: Callable[[bytes], ModsManifest]
    example_mod_id: str
    version_placeholder: str
    default_loader: str
    module_type: ModuleType
