"""Tests for loader resolver selection, version gating and Fabric resolution."""

import json
import os
from unittest.mock import patch

import pytest

from conftest import write_file
from distribution.models import ModuleType
from errors import IndexFetchError, ManifestFormatError
from loaders import FabricResolver, ForgeResolver, NeoForgeResolver, get_resolver
from versioning.models import MinecraftVersion

BASE_URL = "https://cdn.example.com/"
MC = MinecraftVersion.parse("1.20.1")

FABRIC_PROFILE = {
    "id": "fabric-loader-0.15.11-1.20.1",
    "inheritsFrom": "1.20.1",
    "type": "release",
    "mainClass": "net.fabricmc.loader.impl.launch.knot.KnotClient",
    "libraries": [
        {"name": "org.ow2.asm:asm:9.6", "url": "https://maven.fabricmc.net/"},
        {"name": "net.fabricmc:intermediary:1.20.1", "url": "https://maven.fabricmc.net/"},
        {"name": "net.fabricmc:fabric-loader:0.15.11", "url": "https://maven.fabricmc.net/"},
    ],
}


def _fake_download(url, destination, *, context):
    write_file(destination, url.encode())
    return True


class TestGetResolver:
    @pytest.mark.parametrize("family, cls", [
        ("forge", ForgeResolver),
        ("NeoForge", NeoForgeResolver),
        ("fabric", FabricResolver),
    ])
    def test_families(self, tmp_path, family, cls):
        assert isinstance(get_resolver(family, str(tmp_path), BASE_URL, MC, "1.0"), cls)

    def test_unknown_family(self, tmp_path):
        with pytest.raises(ValueError):
            get_resolver("quilt", str(tmp_path), BASE_URL, MC, "1.0")

    def test_settings_forwarded(self, tmp_path):
        resolver = get_resolver(
            "neoforge", str(tmp_path), BASE_URL, MinecraftVersion.parse("1.20.4"), "20.4.80",
            invalidate_cache=True, discard_output=True, java_executable="/jdk/bin/java",
        )
        assert resolver.invalidate_cache is True
        assert resolver.discard_output is True
        assert resolver.java_executable == "/jdk/bin/java"


class TestIsForVersion:
    def test_forge(self, tmp_path):
        resolver = ForgeResolver(str(tmp_path), "", BASE_URL, MC, "47.2.0")
        assert resolver.is_for_version(MC, "47.2.0")
        assert resolver.is_for_version(MinecraftVersion.parse("1.12.2"), "14.23.5.2860")
        assert not resolver.is_for_version(MinecraftVersion.parse("1.12.2"), "14.23.5.2847")
        assert not resolver.is_for_version(MinecraftVersion.parse("1.7.10"), "10.13.4.1614")

    def test_neoforge(self, tmp_path):
        resolver = NeoForgeResolver(str(tmp_path), "", BASE_URL, MinecraftVersion.parse("1.20.4"), "20.4.80")
        assert resolver.is_for_version(MinecraftVersion.parse("1.20.4"), "20.4.80")
        assert resolver.is_for_version(MinecraftVersion.parse("1.21"), "21.0.1")
        assert not resolver.is_for_version(MinecraftVersion.parse("1.19.2"), "43.0.0")

    def test_fabric(self, tmp_path):
        resolver = FabricResolver(str(tmp_path), "", BASE_URL, MC, "0.15.11")
        assert resolver.is_for_version(MinecraftVersion.parse("1.14"), "0.15.11")
        assert not resolver.is_for_version(MinecraftVersion.parse("1.12.2"), "0.15.11")


class TestForgeConfig:
    def test_legacy_client_jar_optional(self, tmp_path):
        resolver = ForgeResolver(str(tmp_path), "", BASE_URL, MinecraftVersion.parse("1.16.5"), "36.2.39")
        client = next(s for s in resolver.config.generated_files if s.name == "client jar")
        assert client.skip_if_not_present is True
        assert resolver.config.installer_version == "1.16.5-36.2.39"

    def test_modern_client_jar_required(self, tmp_path):
        resolver = ForgeResolver(str(tmp_path), "", BASE_URL, MC, "47.2.0")
        client = next(s for s in resolver.config.generated_files if s.name == "client jar")
        assert client.skip_if_not_present is False


class TestFabricResolver:
    def _resolve(self, tmp_path, profile=FABRIC_PROFILE):
        resolver = FabricResolver(str(tmp_path), "", BASE_URL, MC, "0.15.11")
        with patch("loaders.fabric.get_json", return_value=(200, {}, profile)) as mock_get_json, \
                patch("common.http_client.download_file", side_effect=_fake_download) as mock_download:
            root = resolver.get_module()
        return root, mock_get_json, mock_download

    def test_module_tree(self, tmp_path):
        root, mock_get_json, _ = self._resolve(tmp_path)

        assert mock_get_json.call_args[0][0] == (
            "https://meta.fabricmc.net/v2/versions/loader/1.20.1/0.15.11/profile/json"
        )
        assert root.id == "net.fabricmc:fabric-loader:0.15.11"
        assert root.type == ModuleType.FABRIC
        assert root.sub_modules[0].type == ModuleType.VERSION_MANIFEST
        assert root.sub_modules[0].id == "fabric-loader-0.15.11-1.20.1"
        assert [m.id for m in root.sub_modules[1:]] == [
            "org.ow2.asm:asm:9.6", "net.fabricmc:intermediary:1.20.1"
        ]
        assert root.artifact.url == (
            f"{BASE_URL}repo/lib/net/fabricmc/fabric-loader/0.15.11/fabric-loader-0.15.11.jar"
        )

    def test_profile_stored_in_version_repository(self, tmp_path):
        self._resolve(tmp_path)
        stored = os.path.join(
            str(tmp_path), "repo", "versions", "fabric-loader-0.15.11-1.20.1", "fabric-loader-0.15.11-1.20.1.json"
        )
        with open(stored, encoding="utf-8") as fh:
            assert json.load(fh)["id"] == "fabric-loader-0.15.11-1.20.1"

    def test_existing_libraries_not_downloaded(self, tmp_path):
        _, _, first = self._resolve(tmp_path)
        assert first.call_count == 3
        _, _, second = self._resolve(tmp_path)
        second.assert_not_called()

    def test_fetch_failure(self, tmp_path):
        resolver = FabricResolver(str(tmp_path), "", BASE_URL, MC, "0.15.11")
        with patch("loaders.fabric.get_json", return_value=(404, {}, None)):
            with pytest.raises(IndexFetchError):
                resolver.get_module()

    def test_profile_without_loader(self, tmp_path):
        profile = dict(FABRIC_PROFILE, libraries=FABRIC_PROFILE["libraries"][:1])
        with pytest.raises(ManifestFormatError):
            self._resolve(tmp_path, profile)

    def test_profile_missing_libraries(self, tmp_path):
        profile = {"id": "fabric-loader-0.15.11-1.20.1"}
        with pytest.raises(ManifestFormatError):
            self._resolve(tmp_path, profile)
