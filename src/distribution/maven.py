"""Maven coordinate helpers.

Coordinates use the Gradle-style identifier form
``group:artifact:version[:classifier][@extension]``; the extension defaults
to ``jar``.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MavenComponents:
    """Parsed Maven coordinate."""
    group: str
    artifact: str
    version: str
    classifier: Optional[str] = None
    extension: str = "jar"


def get_maven_components(identifier: str) -> MavenComponents:
    """Parse ``group:artifact:version[:classifier][@ext]``.

    Raises:
        ValueError: If the identifier has fewer than three segments.
    """
    ident = identifier.strip()
    extension = "jar"
    if "@" in ident:
        ident, extension = ident.rsplit("@", 1)
    parts = ident.split(":")
    if len(parts) < 3 or not all(parts[:3]):
        raise ValueError(f"Invalid Maven identifier: {identifier!r}")
    classifier = parts[3] if len(parts) > 3 and parts[3] else None
    return MavenComponents(parts[0], parts[1], parts[2], classifier, extension or "jar")


def maven_components_to_identifier(
    group: str,
    artifact: str,
    version: str,
    classifier: Optional[str] = None,
    extension: str = "jar",
) -> str:
    """Inverse of :func:`get_maven_components`."""
    ident = f"{group}:{artifact}:{version}"
    if classifier:
        ident += f":{classifier}"
    return f"{ident}@{extension}"


def maven_components_to_path(
    group: str,
    artifact: str,
    version: str,
    classifier: Optional[str] = None,
    extension: str = "jar",
) -> str:
    """Return the repository-relative path (always ``/``-separated)."""
    filename = f"{artifact}-{version}"
    if classifier:
        filename += f"-{classifier}"
    filename += f".{extension}"
    return posixpath.join(group.replace(".", "/"), artifact, version, filename)


def maven_identifier_to_path(identifier: str) -> str:
    """Shortcut for the repository path of an identifier string."""
    c = get_maven_components(identifier)
    return maven_components_to_path(c.group, c.artifact, c.version, c.classifier, c.extension)
