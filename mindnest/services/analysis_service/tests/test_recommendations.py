"""Tests for recommendation generation and journal insights."""
import random

from mindnest.shared.models import AnalysisResult, RiskLevel, Sentiment
from mindnest.services.analysis_service.recommendations import (
    WELLBEING_SUGGESTIONS,
    generate_recommendations,
    journal_insight,
    personalized_recommendations,
)

PROFESSIONAL = "Consider reaching out to a mental health professional"
GROUNDING = "Practice grounding techniques like deep breathing"
BREATHING = "Try the 4-7-8 breathing technique"
SOCIAL = "Connect with supportive friends or family"
POSITIVE = "Keep up the positive momentum"


class TestGenerateRecommendations:
    """Tests for the recommendation decision table."""

    def test_neutral_low_has_none(self):
        assert generate_recommendations(Sentiment.NEUTRAL, ("neutral",), RiskLevel.LOW) == ()

    def test_negative_gets_professional_support_first(self):
        recs = generate_recommendations(Sentiment.NEGATIVE, ("neutral",), RiskLevel.LOW)
        assert recs == (PROFESSIONAL, GROUNDING)

    def test_high_risk_triggers_support_even_if_positive(self):
        recs = generate_recommendations(Sentiment.POSITIVE, ("happy",), RiskLevel.HIGH)
        assert recs[:2] == (PROFESSIONAL, GROUNDING)
        assert recs[2] == POSITIVE

    def test_anxious_gets_breathing(self):
        recs = generate_recommendations(Sentiment.NEUTRAL, ("anxious",), RiskLevel.LOW)
        assert recs[0] == BREATHING

    def test_sad_gets_social_connection(self):
        recs = generate_recommendations(Sentiment.NEUTRAL, ("sad",), RiskLevel.LOW)
        assert recs[0] == SOCIAL

    def test_positive_gets_reinforcement(self):
        recs = generate_recommendations(Sentiment.POSITIVE, ("happy",), RiskLevel.LOW)
        assert recs[0] == POSITIVE

    def test_capped_at_three_in_discovery_order(self):
        recs = generate_recommendations(
            Sentiment.NEGATIVE, ("sad", "anxious"), RiskLevel.HIGH
        )
        assert recs == (PROFESSIONAL, GROUNDING, BREATHING)

    def test_no_duplicates(self):
        recs = generate_recommendations(
            Sentiment.NEGATIVE, ("anxious", "sad"), RiskLevel.MEDIUM, limit=10
        )
        assert len(recs) == len(set(recs))

    def test_custom_limit(self):
        recs = generate_recommendations(Sentiment.NEGATIVE, ("sad",), RiskLevel.LOW, limit=1)
        assert recs == (PROFESSIONAL,)


class TestPersonalizedRecommendations:
    """Tests for general wellbeing suggestions."""

    def test_default_returns_first_three(self):
        assert personalized_recommendations() == list(WELLBEING_SUGGESTIONS[:3])

    def test_negative_limit_returns_empty(self):
        assert personalized_recommendations(-1) == []


class TestJournalInsight:
    """Tests for journal insight text."""

    def test_insight_is_one_of_templates(self):
        result = AnalysisResult(
            sentiment=Sentiment.POSITIVE,
            emotions=("happy", "grateful"),
            themes=(),
            risk_level=RiskLevel.LOW,
            confidence=0.9,
        )
        seen = {journal_insight(result, random.Random(seed)) for seed in range(50)}
        assert any("positive sentiment" in text for text in seen)
        assert any("(happy, grateful)" in text for text in seen)
        assert len(seen) <= 4
