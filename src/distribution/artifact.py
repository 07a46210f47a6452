"""Artifact descriptor generation."""

from __future__ import annotations

import hashlib
import os

from .models import Artifact


def generate_artifact(path: str, url: str) -> Artifact:
    """Describe the file at ``path`` by size and MD5, served from ``url``."""
    md5 = hashlib.md5()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(64 * 1024), b""):
            md5.update(chunk)
    return Artifact(size=os.path.getsize(path), md5=md5.hexdigest(), url=url)
