"""Tests for version parsing helpers."""

import pytest

from versioning.models import MinecraftVersion, PromotionType
from versioning.parser import (
    is_forge_gradle2,
    is_promotion_version,
    is_version_acceptable,
    parse_promotion,
    version_gte,
)


class TestMinecraftVersion:
    def test_parse_with_and_without_revision(self):
        v = MinecraftVersion.parse("1.20.1")
        assert (v.major, v.minor, v.revision) == (1, 20, 1)
        assert str(v) == "1.20.1"
        assert MinecraftVersion.parse("1.21").revision is None

    @pytest.mark.parametrize("bad", ["", "1", "1.20.1-pre1", "24w14a"])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            MinecraftVersion.parse(bad)


class TestPromotionLabels:
    def test_is_promotion_version(self):
        assert is_promotion_version("recommended")
        assert is_promotion_version(" LATEST ")
        assert not is_promotion_version("47.2.0")

    def test_parse_promotion(self):
        assert parse_promotion("Latest") is PromotionType.LATEST
        with pytest.raises(ValueError):
            parse_promotion("stable")


class TestVersionChecks:
    def test_is_version_acceptable(self):
        assert is_version_acceptable(MinecraftVersion.parse("1.20.1"), range(13, 22))
        assert not is_version_acceptable(MinecraftVersion.parse("1.12.2"), range(13, 22))

    def test_version_gte_numeric(self):
        assert version_gte("1.20.10", "1.20.2")
        assert not version_gte("1.19.4", "1.20")

    def test_is_forge_gradle2(self):
        assert is_forge_gradle2("1.12.2-14.23.5.2847")
        assert is_forge_gradle2("1.12.2-14.23.4.2760")
        assert not is_forge_gradle2("1.12.2-14.23.5.2851")
