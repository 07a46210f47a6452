"""Packaged-unit identity inference.

- models.py: declared metadata, hints and identity records
- profiles.py: per-family parsers and placeholder constants
- engine.py: the shared inference engine
- jar.py: reading jars and analyzer output
"""

from .engine import MetadataInferenceEngine, crude_inference, discern_result
from .jar import build_mod_module, find_hint, load_hints, scan_unit
from .models import ModEntry, ModIdentity, ModsManifest, StaticAnalysisHint
from .profiles import FABRIC_PROFILE, FORGE_PROFILE, NEOFORGE_PROFILE, get_profile

__all__ = [
    "MetadataInferenceEngine",
    "crude_inference",
    "discern_result",
    "build_mod_module",
    "find_hint",
    "load_hints",
    "scan_unit",
    "ModEntry",
    "ModIdentity",
    "ModsManifest",
    "StaticAnalysisHint",
    "FABRIC_PROFILE",
    "FORGE_PROFILE",
    "NEOFORGE_PROFILE",
    "get_profile",
]
