"""Analysis Service configuration.

The confidence score is synthetic (no model backs it); its bounds are kept
as a documented contract for the UI.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for the analysis orchestrator."""

    # Synthetic confidence is drawn uniformly from [min, max)
    confidence_min: float = 0.7
    confidence_max: float = 1.0

    # Recommendation list cap
    max_recommendations: int = 3

    # Crisis signal excerpt
    excerpt_length: int = 200
    excerpt_marker: str = "..."

    # Version tracking for logs and /health
    lexicon_version: str = "2026.10.01"

    def __post_init__(self):
        if not 0.7 <= self.confidence_min < self.confidence_max <= 1.0:
            raise ValueError(
                "Confidence bounds must satisfy 0.7 <= min < max <= 1.0, "
                f"got [{self.confidence_min}, {self.confidence_max})"
            )
        if not 0 <= self.max_recommendations <= 3:
            raise ValueError(
                f"max_recommendations must be 0-3, got {self.max_recommendations}"
            )
        if self.excerpt_length < 1:
            raise ValueError(f"excerpt_length must be positive, got {self.excerpt_length}")
