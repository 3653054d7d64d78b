"""
Unit tests for ranklist/config/ modules.

Tests:
- settings.py: environment-backed settings
- params.py: engine and sampler parameter models
"""

import math
import pytest


# =============================================================================
# Settings Tests (CFG-001 to CFG-007)
# =============================================================================

class TestSettings:
    """Test application settings."""

    def test_defaults(self, settings):
        """CFG-001: Default values."""
        assert settings.assets_dir == "assets"
        assert settings.state_dir == ".ranklist"
        assert settings.initial_fit_iterations == 50
        assert settings.update_fit_iterations == 10
        assert settings.sampler_strategy == "informative"

    def test_environment_overrides(self, monkeypatch):
        """CFG-002: RANKLIST_* variables override defaults."""
        from ranklist.config.settings import Settings

        monkeypatch.setenv("RANKLIST_ASSETS_DIR", "/srv/lists")
        monkeypatch.setenv("RANKLIST_INITIAL_FIT_ITERATIONS", "100")
        monkeypatch.setenv("RANKLIST_SAMPLER_STRATEGY", "uniform")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.assets_dir == "/srv/lists"
        assert settings.initial_fit_iterations == 100
        assert settings.sampler_strategy == "uniform"
        assert settings.log_level == "DEBUG"

    def test_unknown_strategy_rejected(self, monkeypatch):
        """CFG-003: An unknown sampler strategy is a configuration error."""
        from ranklist.config.settings import Settings

        monkeypatch.setenv("RANKLIST_SAMPLER_STRATEGY", "random-walk")

        with pytest.raises(ValueError):
            Settings()

    def test_negative_iterations_rejected(self):
        """CFG-004: Iteration budgets cannot be negative."""
        from ranklist.config.settings import Settings

        with pytest.raises(ValueError):
            Settings(update_fit_iterations=-1)

    def test_singleton(self):
        """CFG-005: get_settings() returns one shared instance."""
        from ranklist.config.settings import get_settings

        assert get_settings() is get_settings()

    def test_configure(self):
        """CFG-006: configure() overrides known fields and validates."""
        from ranklist.config.settings import configure, get_settings

        configure(update_fit_iterations=3, not_a_setting=True)

        assert get_settings().update_fit_iterations == 3
        assert not hasattr(get_settings(), "not_a_setting")

        with pytest.raises(ValueError):
            configure(sampler_strategy="nope")

    def test_to_dict(self, settings):
        """CFG-007: Settings serialize to a flat dict."""
        data = settings.to_dict()

        assert data["sampler_strategy"] == "informative"
        assert data["initial_fit_iterations"] == 50


# =============================================================================
# Parameter Tests (CFG-010 to CFG-014)
# =============================================================================

class TestParameters:
    """Test parameter models."""

    def test_sampler_defaults(self):
        """CFG-010: Sampler defaults match the tuned constants."""
        from ranklist.config.params import SamplerParams

        params = SamplerParams()

        assert params.top_bias_power == 0.15
        assert params.proximity_alpha == 4.0
        assert params.recent_pair_penalty == 0.35
        assert params.wilson_z == 1.96

    def test_engine_defaults(self):
        """CFG-011: Engine defaults."""
        from ranklist.config.params import EngineParams

        params = EngineParams()

        assert params.min_ability == 1e-6
        assert params.display_base == 1000.0
        assert params.display_scale == 100.0

    def test_extra_fields_forbidden(self):
        """CFG-012: Unknown parameters are rejected."""
        from pydantic import ValidationError
        from ranklist.config.params import EngineParams

        with pytest.raises(ValidationError):
            EngineParams(temperature=2.0)

    def test_bounds(self):
        """CFG-013: Out-of-range values are rejected."""
        from pydantic import ValidationError
        from ranklist.config.params import SamplerParams

        with pytest.raises(ValidationError):
            SamplerParams(recent_pair_penalty=1.5)
        with pytest.raises(ValidationError):
            SamplerParams(min_weight=0.01)

    def test_custom_params_change_ratings(self):
        """CFG-014: Display scale flows into the engine."""
        from ranklist.config.params import EngineParams
        from ranklist.ranking.bradley_terry import RankingEngine

        engine = RankingEngine.from_abilities([0.75, 0.25], EngineParams(display_scale=10.0))

        assert engine.display_rating(0) == pytest.approx(1000.0 + 10.0 * math.log(1.5))
