"""Shared fixtures for modtree tests."""

import json
import os
import zipfile

import pytest


def write_file(path, content=b"data"):
    """Create ``path`` (and parents) with ``content``."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    mode = "wb" if isinstance(content, bytes) else "w"
    with open(path, mode) as fh:
        fh.write(content)
    return path


def write_json(path, data):
    return write_file(path, json.dumps(data))


def make_jar(path, entries):
    """Build a zip at ``path`` from a name -> text/bytes mapping."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def jar_factory(tmp_path):
    """Return a helper creating jars under a temporary directory."""
    def _make(name, entries):
        return make_jar(str(tmp_path / "mods" / name), entries)
    return _make
