"""Tests for packaged-unit identity inference."""

import logging

import pytest

from inference.engine import (
    MetadataInferenceEngine,
    capitalize,
    crude_inference,
    discern_result,
    recover_implementation_version,
)
from inference.models import ModEntry, ModsManifest, StaticAnalysisHint
from inference.profiles import (
    FABRIC_PROFILE,
    FORGE_PROFILE,
    NEOFORGE_PROFILE,
    get_profile,
    parse_fabric_mod_json,
    parse_mods_toml,
)

MODS_TOML = b"""
modLoader="javafml"
loaderVersion="[47,)"
license="MIT"

[[mods]]
modId="examplemod"
version="${file.jarVersion}"
displayName="Example Mod"
description='''
An example.
'''
"""

MANIFEST_MF = "Manifest-Version: 1.0\r\nImplementation-Title: coolmod\r\nImplementation-Version: 3.2.1\r\n"


def _declared(mod_id="examplemod", version="${file.jarVersion}", display_name="Example Mod"):
    return ModsManifest("javafml", "[47,)", [ModEntry(mod_id, version, display_name)])


class TestHelpers:
    @pytest.mark.parametrize("name, expected", [
        ("CoolMod-1.0.jar", ("CoolMod", "1.0")),
        ("jei_1.20.1-forge-15.2.0.27.jar", ("jei", "1.20.1-forge-15.2.0.27")),
        ("Some Mod v2.3.jar", ("Some Mod", "2.3")),
        ("noversion.jar", ("noversion", "0.0.0")),
    ])
    def test_crude_inference(self, name, expected):
        crude = crude_inference(name)
        assert (crude.name, crude.version) == expected

    def test_discern_result(self):
        assert discern_result("fromhint", "crude") == "fromhint"
        assert discern_result(None, "crude") == "crude"
        assert discern_result("", "crude") == "crude"

    def test_capitalize_first_character_only(self):
        assert capitalize("coolMod") == "CoolMod"
        assert capitalize("") == ""

    def test_recover_implementation_version(self):
        assert recover_implementation_version(MANIFEST_MF) == "3.2.1"
        assert recover_implementation_version("Manifest-Version: 1.0\n") is None


class TestProfiles:
    def test_parse_mods_toml(self):
        manifest = parse_mods_toml(MODS_TOML)
        assert manifest.mod_loader == "javafml"
        assert manifest.mods[0].mod_id == "examplemod"
        assert manifest.mods[0].description == "An example."

    def test_parse_mods_toml_without_mods(self):
        with pytest.raises(ValueError):
            parse_mods_toml(b'modLoader="javafml"\n')

    def test_parse_mods_toml_invalid(self):
        with pytest.raises(ValueError):
            parse_mods_toml(b"[[mods]\nbroken")

    def test_parse_fabric_mod_json(self):
        manifest = parse_fabric_mod_json(
            b'{"schemaVersion": 1, "id": "modid", "version": "${version}", "name": "Example", '
            b'"depends": {"fabricloader": ">=0.15"}}'
        )
        assert manifest.loader_version == ">=0.15"
        assert manifest.mods[0].display_name == "Example"

    def test_get_profile(self):
        assert get_profile("Forge") is FORGE_PROFILE
        assert get_profile("neoforge") is NEOFORGE_PROFILE
        assert NEOFORGE_PROFILE.manifest_file == "META-INF/neoforge.mods.toml"
        with pytest.raises(ValueError):
            get_profile("quilt")


class TestInference:
    def test_hint_wins_over_filename(self):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        manifest = engine.infer(
            "CoolMod-1.0.jar", _declared(), StaticAnalysisHint(id="coolmod_hint", group="com.cool"), MANIFEST_MF
        )
        entry = manifest.mods[0]
        assert entry.mod_id == "coolmod_hint"
        assert entry.display_name == "CoolMod"
        assert entry.version == "3.2.1"

    def test_filename_used_without_hint(self, caplog):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        with caplog.at_level(logging.ERROR):
            manifest = engine.infer("CoolMod-1.0.jar", _declared(), None, None)
        entry = manifest.mods[0]
        assert entry.mod_id == "coolmod"
        assert entry.version == "1.0"
        assert any("Static analysis failed" in r.getMessage() for r in caplog.records)

    def test_filename_id_strips_whitespace(self):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        manifest = engine.infer("Cool Mod-1.0.jar", _declared(), StaticAnalysisHint(), None)
        assert manifest.mods[0].mod_id == "coolmod"

    def test_declared_values_kept_when_concrete(self):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        manifest = engine.infer(
            "whatever-9.9.jar", _declared("realmod", "2.0.0", "Real Mod"), StaticAnalysisHint(id="other"), MANIFEST_MF
        )
        entry = manifest.mods[0]
        assert (entry.mod_id, entry.version, entry.display_name) == ("realmod", "2.0.0", "Real Mod")

    def test_placeholder_without_build_manifest_uses_filename_version(self, caplog):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        with caplog.at_level(logging.DEBUG, logger="inference.engine"):
            manifest = engine.infer("realmod-4.5.6.jar", _declared("realmod"), StaticAnalysisHint(id="realmod"), None)
        assert manifest.mods[0].version == "4.5.6"
        assert "no MANIFEST.MF" in caplog.text

    def test_placeholder_with_manifest_lacking_version(self):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        manifest = engine.infer(
            "realmod-4.5.6.jar", _declared("realmod"), StaticAnalysisHint(id="realmod"), "Manifest-Version: 1.0\n"
        )
        assert manifest.mods[0].version == "4.5.6"

    def test_synthesized_defaults_without_metadata(self, caplog):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        with caplog.at_level(logging.WARNING):
            manifest = engine.infer("mystery.jar", None, None, None)
        entry = manifest.mods[0]
        assert (entry.mod_id, entry.version, entry.display_name) == ("mystery", "0.0.0", "Mystery")
        assert manifest.mod_loader == "javafml"
        assert any("Synthesizing default metadata" in r.getMessage() for r in caplog.records)

    def test_fabric_placeholders(self):
        engine = MetadataInferenceEngine(FABRIC_PROFILE)
        declared = ModsManifest("fabric", "", [ModEntry("modid", "${version}", "Example")])
        manifest = engine.infer("sodium-fabric-0.5.8.jar", declared, StaticAnalysisHint(id="sodium"), None)
        assert manifest.mods[0].mod_id == "sodium"
        assert manifest.mods[0].version == "0.5.8"

    def test_results_cached_per_unit(self):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        first = engine.infer("CoolMod-1.0.jar", _declared(), StaticAnalysisHint(id="a"), None)
        second = engine.infer("CoolMod-1.0.jar", _declared(), StaticAnalysisHint(id="b"), None)
        assert second is first
        assert second.mods[0].mod_id == "a"

    def test_independent_engines_do_not_share_cache(self):
        first = MetadataInferenceEngine(FORGE_PROFILE).infer(
            "CoolMod-1.0.jar", _declared(), StaticAnalysisHint(id="a"), None
        )
        second = MetadataInferenceEngine(FORGE_PROFILE).infer(
            "CoolMod-1.0.jar", _declared(), StaticAnalysisHint(id="b"), None
        )
        assert first.mods[0].mod_id == "a"
        assert second.mods[0].mod_id == "b"


class TestParseDeclared:
    def test_missing_metadata_logged(self, caplog):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        with caplog.at_level(logging.ERROR):
            assert engine.parse_declared("x.jar", None) is None
        assert "does not contain META-INF/mods.toml" in caplog.text

    def test_invalid_metadata_logged(self, caplog):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        with caplog.at_level(logging.ERROR):
            assert engine.parse_declared("x.jar", b"not = [toml") is None
        assert "contains an invalid" in caplog.text

    def test_process_end_to_end(self):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        manifest = engine.process("CoolMod-1.0.jar", MODS_TOML, StaticAnalysisHint(id="coolmod"), MANIFEST_MF)
        assert manifest.mods[0].mod_id == "coolmod"
        assert manifest.mods[0].version == "3.2.1"

    def test_identify(self):
        engine = MetadataInferenceEngine(FORGE_PROFILE)
        identity = engine.identify(
            "coolMod-1.0.jar", _declared(), StaticAnalysisHint(id="coolmod", group="com.cool"), None
        )
        assert identity.mod_id == "coolmod"
        assert identity.display_name == "CoolMod"
        assert identity.version == "1.0"
        assert identity.group == "com.cool"
