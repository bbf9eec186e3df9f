"""Tests for AnalysisConfig validation."""
import pytest

from mindnest.services.analysis_service.config import AnalysisConfig


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_defaults(self):
        config = AnalysisConfig()
        assert (config.confidence_min, config.confidence_max) == (0.7, 1.0)
        assert config.max_recommendations == 3
        assert config.excerpt_length == 200
        assert config.excerpt_marker == "..."

    @pytest.mark.parametrize("low,high", [(0.5, 1.0), (0.9, 0.8), (0.8, 1.2)])
    def test_invalid_confidence_bounds(self, low, high):
        with pytest.raises(ValueError):
            AnalysisConfig(confidence_min=low, confidence_max=high)

    def test_recommendation_cap_enforced(self):
        with pytest.raises(ValueError):
            AnalysisConfig(max_recommendations=4)

    def test_excerpt_length_must_be_positive(self):
        with pytest.raises(ValueError):
            AnalysisConfig(excerpt_length=0)

    def test_config_is_immutable(self):
        with pytest.raises(Exception):  # FrozenInstanceError
            AnalysisConfig().excerpt_length = 10
