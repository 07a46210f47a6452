"""Tests for Maven coordinate helpers."""

import pytest

from distribution.maven import (
    get_maven_components,
    maven_components_to_identifier,
    maven_components_to_path,
    maven_identifier_to_path,
)


class TestGetMavenComponents:
    def test_three_part_identifier_defaults_to_jar(self):
        c = get_maven_components("org.ow2.asm:asm:9.6")
        assert (c.group, c.artifact, c.version, c.classifier, c.extension) == (
            "org.ow2.asm", "asm", "9.6", None, "jar"
        )

    def test_classifier_and_extension(self):
        c = get_maven_components("net.neoforged:neoforge:20.4.80:universal@zip")
        assert c.classifier == "universal"
        assert c.extension == "zip"

    @pytest.mark.parametrize("bad", ["", "onlygroup", "group:artifact", "::1.0"])
    def test_invalid_identifiers_raise(self, bad):
        with pytest.raises(ValueError):
            get_maven_components(bad)


class TestIdentifierAndPath:
    def test_identifier_always_carries_extension(self):
        assert maven_components_to_identifier("a.b", "c", "1.0") == "a.b:c:1.0@jar"
        assert maven_components_to_identifier("a.b", "c", "1.0", "slim") == "a.b:c:1.0:slim@jar"

    def test_path_layout(self):
        assert (
            maven_components_to_path("net.minecraft", "client", "1.20.4-20231207.154220", "srg")
            == "net/minecraft/client/1.20.4-20231207.154220/client-1.20.4-20231207.154220-srg.jar"
        )

    def test_identifier_to_path(self):
        assert maven_identifier_to_path("net.fabricmc:fabric-loader:0.15.3") == (
            "net/fabricmc/fabric-loader/0.15.3/fabric-loader-0.15.3.jar"
        )
