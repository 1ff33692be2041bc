"""
Tests for Configuration
=======================
Tests for the persistent Config and GenerationOptions.
"""

import dataclasses
import json

import pytest

from longpass.config import Config, DEFAULTS, GenerationOptions
from longpass.core.errors import ConfigError


class TestConfig:
    """Tests for Config."""

    def test_defaults_without_file(self, tmp_path):
        """Missing file yields defaults."""
        config = Config(tmp_path / "none.json")
        assert config.get("generator", "count") == DEFAULTS["generator"]["count"]
        assert config.cache_dir is not None

    def test_deep_merge(self, tmp_path):
        """User values override defaults per key."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"generator": {"count": 3}}))
        config = Config(path)
        assert config.get("generator", "count") == 3
        assert config.get("generator", "shuffle") is False

    def test_corrupt_file(self, tmp_path):
        """Invalid JSON falls back to defaults."""
        path = tmp_path / "config.json"
        path.write_text("{broken")
        assert Config(path).get("generator", "count") == 10

    def test_non_object_section_dropped(self, tmp_path):
        """A section that is not an object falls back to its defaults."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"generator": 3, "rulesets": {"cache_dir": ""}}))
        config = Config(path)
        assert config.get("generator", "count") == 10
        assert config.cache_dir is None

    def test_unknown_section_ignored(self, tmp_path):
        """Lookups in a dropped unknown section return None."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"extra": ["x"]}))
        assert Config(path).get("extra", "x") is None

    def test_loaded_config_does_not_share_defaults(self, tmp_path):
        """Each Config owns its own copy of DEFAULTS."""
        config = Config(tmp_path / "none.json")
        config._data["generator"]["count"] = 99
        assert DEFAULTS["generator"]["count"] == 10

    def test_cache_dir_wrong_type(self, tmp_path):
        """A non-string cache_dir is a config error."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"rulesets": {"cache_dir": 5}}))
        with pytest.raises(ConfigError):
            Config(path).cache_dir

    def test_cache_disabled(self, tmp_path):
        """Empty cache_dir disables caching."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"rulesets": {"cache_dir": ""}}))
        assert Config(path).cache_dir is None


class TestGenerationOptions:
    """Tests for GenerationOptions."""

    def test_defaults(self):
        opts = GenerationOptions()
        assert opts.count == 10
        assert not opts.shuffle and not opts.show_entropy and not opts.list_only

    def test_frozen(self):
        """Options cannot be changed once built."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            GenerationOptions().count = 5

    @pytest.mark.parametrize("field, value", [
        ("count", "5"),
        ("count", 2.5),
        ("count", True),
        ("count", None),
        ("workers", "4"),
    ])
    def test_non_integer_rejected(self, field, value):
        """count and workers must be real integers."""
        with pytest.raises(ConfigError, match=field):
            GenerationOptions(**{field: value})

    @pytest.mark.parametrize("field, value", [("count", -1), ("workers", 0)])
    def test_out_of_range_rejected(self, field, value):
        """Negative counts and empty worker pools are rejected."""
        with pytest.raises(ConfigError, match=field):
            GenerationOptions(**{field: value})

    def test_zero_count_allowed(self):
        """Zero passphrases is a valid request."""
        assert GenerationOptions(count=0).count == 0
