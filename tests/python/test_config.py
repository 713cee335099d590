"""
Tests for selector threshold configuration.
"""

import numpy as np
import pytest

import mlrow
from mlrow import ConfigError, DenseMLRow, SparseMLRow, choose_representation

from conftest import values_with_nnz


class TestDefaults:

    def test_constants(self):
        assert mlrow.MIN_SIZE_FOR_SPARSE_REPRESENTATION == 1000
        assert mlrow.MAX_DENSITY_FOR_SPARSE_REPRESENTATION == 0.5

    def test_default_thresholds(self):
        assert mlrow.get_thresholds() == (1000, 0.5)

    def test_config_properties(self):
        config = mlrow.get_config()
        assert config.min_size_for_sparse == 1000
        assert config.max_density_for_sparse == 0.5


class TestSetThresholds:

    def test_set_min_size(self):
        mlrow.set_thresholds(min_size=10)
        assert mlrow.get_thresholds() == (10, 0.5)
        assert isinstance(choose_representation(values_with_nnz(20, 1)), SparseMLRow)

    def test_set_max_density(self):
        mlrow.set_thresholds(max_density=0.1)
        # 200 of 1000 is below the default density but above 0.1
        assert isinstance(choose_representation(values_with_nnz(1000, 200)), DenseMLRow)

    def test_reset(self):
        mlrow.set_thresholds(min_size=1, max_density=1.0)
        mlrow.reset_thresholds()
        assert mlrow.get_thresholds() == (1000, 0.5)

    @pytest.mark.parametrize("kwargs", [
        {"min_size": -1},
        {"min_size": "many"},
        {"min_size": 999.9},
        {"min_size": True},
        {"max_density": True},
        {"max_density": 1.5},
        {"max_density": -0.1},
        {"max_density": "dense"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            mlrow.set_thresholds(**kwargs)
        assert mlrow.get_thresholds() == (1000, 0.5)

    def test_invalid_value_leaves_other_untouched(self):
        with pytest.raises(ConfigError):
            mlrow.set_thresholds(min_size=5, max_density=2.0)
        assert mlrow.get_thresholds() == (1000, 0.5)


class TestThresholdsContext:

    def test_override_and_restore(self):
        with mlrow.thresholds(min_size=4, max_density=0.3) as active:
            assert active == (4, 0.3)
            assert mlrow.get_thresholds() == (4, 0.3)
        assert mlrow.get_thresholds() == (1000, 0.5)

    def test_restore_on_error(self):
        with pytest.raises(RuntimeError):
            with mlrow.thresholds(min_size=4):
                raise RuntimeError("boom")
        assert mlrow.get_thresholds() == (1000, 0.5)

    def test_nested(self):
        with mlrow.thresholds(min_size=4):
            with mlrow.thresholds(max_density=0.2):
                assert mlrow.get_thresholds() == (4, 0.2)
            assert mlrow.get_thresholds() == (4, 0.5)


class TestEnvironment:

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MLROW_MIN_SPARSE_SIZE", "50")
        monkeypatch.setenv("MLROW_MAX_SPARSE_DENSITY", "0.25")
        mlrow.reset_thresholds()
        assert mlrow.get_thresholds() == (50, 0.25)

    def test_explicit_set_beats_env(self, monkeypatch):
        monkeypatch.setenv("MLROW_MIN_SPARSE_SIZE", "50")
        mlrow.reset_thresholds()
        mlrow.set_thresholds(min_size=7)
        assert mlrow.get_thresholds() == (7, 0.5)

    def test_invalid_env(self, monkeypatch):
        monkeypatch.setenv("MLROW_MAX_SPARSE_DENSITY", "lots")
        mlrow.reset_thresholds()
        with pytest.raises(ConfigError):
            mlrow.get_thresholds()
        # Every later read fails too
        with pytest.raises(ConfigError):
            mlrow.get_thresholds()

    def test_invalid_env_applies_nothing(self, monkeypatch):
        monkeypatch.setenv("MLROW_MIN_SPARSE_SIZE", "50")
        monkeypatch.setenv("MLROW_MAX_SPARSE_DENSITY", "lots")
        mlrow.reset_thresholds()
        with pytest.raises(ConfigError):
            mlrow.get_thresholds()
        monkeypatch.delenv("MLROW_MAX_SPARSE_DENSITY")
        assert mlrow.get_thresholds() == (50, 0.5)

    def test_fractional_env_size(self, monkeypatch):
        monkeypatch.setenv("MLROW_MIN_SPARSE_SIZE", "999.9")
        mlrow.reset_thresholds()
        with pytest.raises(ConfigError):
            mlrow.get_thresholds()

    def test_env_override_logged(self, monkeypatch, caplog):
        monkeypatch.setenv("MLROW_MIN_SPARSE_SIZE", "50")
        mlrow.reset_thresholds()
        with caplog.at_level("INFO", logger="mlrow.config"):
            mlrow.get_thresholds()
        assert "MLROW_MIN_SPARSE_SIZE override: min_size=50" in caplog.text


class TestMinSizeValues:

    def test_integer_like_accepted(self):
        mlrow.set_thresholds(min_size=np.int64(12))
        assert mlrow.get_thresholds() == (12, 0.5)
        mlrow.set_thresholds(min_size=" 30 ")
        assert mlrow.get_thresholds() == (30, 0.5)

    def test_fractional_not_truncated(self):
        with pytest.raises(ConfigError):
            mlrow.set_thresholds(min_size=999.9)
        with pytest.raises(ConfigError):
            mlrow.set_thresholds(min_size="999.9")
        assert mlrow.get_thresholds() == (1000, 0.5)
