"""Data models for loader version selection."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

_MC_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")


class PromotionType(Enum):
    """Symbolic version selectors understood by promotion indexes."""
    RECOMMENDED = "recommended"
    LATEST = "latest"


@dataclass(frozen=True)
class MinecraftVersion:
    """A ``major.minor[.revision]`` game version."""
    major: int
    minor: int
    revision: Optional[int] = None
    raw: str = field(default="", compare=False)

    @classmethod
    def parse(cls, text: str) -> "MinecraftVersion":
        """Parse a version string such as ``1.20.1``.

        Raises:
            ValueError: If the text is not a release version.
        """
        match = _MC_VERSION_RE.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid Minecraft version: {text!r}")
        revision = int(match.group(3)) if match.group(3) is not None else None
        return cls(int(match.group(1)), int(match.group(2)), revision, text.strip())

    def __str__(self) -> str:
        if self.raw:
            return self.raw
        base = f"{self.major}.{self.minor}"
        return base if self.revision is None else f"{base}.{self.revision}"
