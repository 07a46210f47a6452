"""Distribution module tree and artifact descriptors."""

from .models import Artifact, Module, ModuleType
from .artifact import generate_artifact
from .maven import (
    MavenComponents,
    get_maven_components,
    maven_components_to_identifier,
    maven_components_to_path,
    maven_identifier_to_path,
)

__all__ = [
    "Artifact",
    "Module",
    "ModuleType",
    "generate_artifact",
    "MavenComponents",
    "get_maven_components",
    "maven_components_to_identifier",
    "maven_components_to_path",
    "maven_identifier_to_path",
]
