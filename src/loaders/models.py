"""Data models for installer-based loader resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from errors import ManifestFormatError


@dataclass(frozen=True)
class GeneratedFileSpec:
    """An artifact the installer is expected to produce.

    ``classifiers`` are tried in order and the first existing file wins;
    ``(None,)`` means the artifact has no classifier. ``version`` may hold a
    wildcard token that is substituted once the version manifest is read.
    """
    name: str
    group: str
    artifact: str
    version: str
    classifiers: Tuple[Optional[str], ...] = (None,)
    skip_if_not_present: bool = False
    classpath: bool = True


@dataclass(frozen=True)
class Wildcard:
    """A version token resolved from a flag/value pair in the game arguments."""
    token: str
    flag: str
    label: str


@dataclass(frozen=True)
class InstallerLoaderConfig:
    """Family-specific constants driving the shared installer pipeline."""
    family: str
    display_name: str
    remote_repository: str
    group: str
    artifact: str
    installer_version: str
    loader_version: str
    version_manifest_name: str
    generated_files: Tuple[GeneratedFileSpec, ...]
    wildcards: Tuple[Wildcard, ...] = ()


@dataclass(frozen=True)
class LibraryDownload:
    path: str
    url: str
    sha1: Optional[str] = None
    size: Optional[int] = None


@dataclass(frozen=True)
class ManifestLibrary:
    """A library declared by the version manifest; ``download`` None means embedded."""
    name: str
    download: Optional[LibraryDownload] = None


@dataclass(frozen=True)
class VersionManifest:
    """The installer's version.json, reduced to the fields resolution needs."""
    id: str
    libraries: List[ManifestLibrary]
    game_arguments: List[str] = field(default_factory=list)
    time: Optional[str] = None
    release_time: Optional[str] = None
    type: Optional[str] = None
    main_class: Optional[str] = None
    inherits_from: Optional[str] = None

    def argument_value(self, flag: str) -> Optional[str]:
        """Return the value following ``flag`` in the game arguments."""
        return find_argument(self.game_arguments, flag)


def find_argument(args: Sequence[str], flag: str) -> Optional[str]:
    for i, arg in enumerate(args):
        if arg == flag and i + 1 < len(args):
            return args[i + 1]
    return None


def _parse_library(entry: Dict[str, Any]) -> ManifestLibrary:
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestFormatError("Version manifest library is missing 'name'.. did the installer change its format?")
    downloads = entry.get("downloads") or {}
    if not isinstance(downloads, dict):
        raise ManifestFormatError(f"Library {name} has malformed 'downloads'.. did the installer change its format?")
    artifact = downloads.get("artifact")
    if not isinstance(artifact, dict) or not artifact.get("url"):
        return ManifestLibrary(name=name)
    if not artifact.get("path"):
        raise ManifestFormatError(f"Library {name} has a download url but no path.")
    return ManifestLibrary(
        name=name,
        download=LibraryDownload(
            path=artifact["path"],
            url=artifact["url"],
            sha1=artifact.get("sha1"),
            size=artifact.get("size"),
        ),
    )


def parse_version_manifest(data: Any) -> VersionManifest:
    """Build a VersionManifest from parsed JSON.

    Raises:
        ManifestFormatError: If required fields are missing.
    """
    if not isinstance(data, dict):
        raise ManifestFormatError("Version manifest is not a JSON object.")
    for required in ("id", "libraries"):
        if required not in data:
            raise ManifestFormatError(f"Version manifest is missing '{required}'.. did the installer change its format?")
    if not isinstance(data["libraries"], list):
        raise ManifestFormatError("Version manifest 'libraries' is not a list.")

    return VersionManifest(
        id=str(data["id"]),
        libraries=[_parse_library(e) for e in data["libraries"] if isinstance(e, dict)],
        game_arguments=_game_arguments(data),
        time=data.get("time"),
        release_time=data.get("releaseTime"),
        type=data.get("type"),
        main_class=data.get("mainClass"),
        inherits_from=data.get("inheritsFrom"),
    )


def _game_arguments(data: Dict[str, Any]) -> List[str]:
    arguments = data.get("arguments")
    if arguments is None:
        # Pre-1.13 manifests carry a single space-separated string.
        legacy = data.get("minecraftArguments")
        return legacy.split() if isinstance(legacy, str) else []
    if not isinstance(arguments, dict):
        raise ManifestFormatError("Version manifest 'arguments' is not an object.")
    game = arguments.get("game") or []
    if not isinstance(game, list):
        raise ManifestFormatError("Version manifest 'arguments.game' is not a list.")
    return [a for a in game if isinstance(a, str)]
