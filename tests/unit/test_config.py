"""Unit tests for the YAML config registry."""

import pytest

from atscore.utils.config import ConfigRegistry, get_config


@pytest.mark.unit
class TestConfigRegistry:
    """Test loading and caching of YAML configs."""

    def test_loads_and_caches(self, tmp_path):
        """Test a config is read once and then served from the cache."""
        (tmp_path / "scoring.yaml").write_text("weights:\n  keyword_match: 0.5\n")
        registry = ConfigRegistry(tmp_path)

        assert not registry.is_cached("scoring")
        config = registry.get_config("scoring")

        assert config == {"weights": {"keyword_match": 0.5}}
        assert registry.is_cached("scoring")
        assert registry.get_config("scoring") is config

    def test_interpolation_resolved(self, tmp_path):
        """Test OmegaConf interpolations are resolved on load."""
        (tmp_path / "limits.yaml").write_text("base: 10\ndouble: ${base}\n")

        config = ConfigRegistry(tmp_path).get_config("limits")

        assert config["double"] == 10

    def test_missing_config_raises(self, tmp_path):
        registry = ConfigRegistry(tmp_path)

        with pytest.raises(FileNotFoundError, match="nonexistent"):
            registry.get_config("nonexistent")

    def test_clear_cache(self, tmp_path):
        (tmp_path / "a.yaml").write_text("x: 1\n")
        registry = ConfigRegistry(tmp_path)
        registry.get_config("a")

        registry.clear_cache()

        assert not registry.is_cached("a")


@pytest.mark.unit
class TestPackagedConfigs:
    """Test the configs shipped with the package load."""

    @pytest.mark.parametrize("name", ["keyword_tables", "job_vocabulary", "scoring"])
    def test_packaged_config_loads(self, name):
        assert isinstance(get_config(name), dict)

    def test_scoring_weights_sum_to_one(self):
        weights = get_config("scoring")["weights"]

        assert sum(weights.values()) == pytest.approx(1.0)
