"""Tests for analysis domain models."""
import pytest

from mindnest.shared.models import (
    AnalysisOutcome,
    AnalysisResult,
    ContextTag,
    CrisisSeverity,
    CrisisSignal,
    RiskLevel,
    Sentiment,
)


def make_result(**overrides):
    values = dict(
        sentiment=Sentiment.NEUTRAL,
        emotions=("neutral",),
        themes=(),
        risk_level=RiskLevel.LOW,
        confidence=0.8,
    )
    values.update(overrides)
    return AnalysisResult(**values)


class TestContextTag:
    """Tests for ContextTag parsing."""

    def test_parse_string_values(self):
        assert ContextTag.parse("journal") is ContextTag.JOURNAL
        assert ContextTag.parse(" Chat ") is ContextTag.CHAT

    def test_parse_passes_enum_through(self):
        assert ContextTag.parse(ContextTag.COMMUNITY) is ContextTag.COMMUNITY

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown context tag"):
            ContextTag.parse("forum")


class TestAnalysisResult:
    """Tests for AnalysisResult validation."""

    def test_valid_result(self):
        result = make_result(recommendations=("a", "b", "c"))
        assert result.confidence == 0.8
        assert len(result.recommendations) == 3

    @pytest.mark.parametrize("confidence", [0.69, 1.0, 1.5])
    def test_confidence_out_of_range(self, confidence):
        with pytest.raises(ValueError):
            make_result(confidence=confidence)

    def test_top_of_range_serializes_below_one(self):
        result = make_result(confidence=1 - 2 ** -53)
        assert result.to_dict()["confidence"] == 0.999

    def test_serialized_confidence_rounded(self):
        assert make_result(confidence=0.81234).to_dict()["confidence"] == 0.812

    def test_empty_emotions_rejected(self):
        with pytest.raises(ValueError):
            make_result(emotions=())

    def test_too_many_recommendations_rejected(self):
        with pytest.raises(ValueError):
            make_result(recommendations=("a", "b", "c", "d"))

    def test_result_is_immutable(self):
        result = make_result()
        with pytest.raises(Exception):  # FrozenInstanceError
            result.sentiment = Sentiment.POSITIVE

    def test_to_dict_uses_plain_values(self):
        data = make_result(themes=("work",)).to_dict()
        assert data["sentiment"] == "neutral"
        assert data["risk_level"] == "low"
        assert data["themes"] == ["work"]
        assert "timestamp" in data


class TestCrisisSignal:
    """Tests for CrisisSignal validation."""

    def test_critical_signal_escalates(self):
        signal = CrisisSignal(
            severity=CrisisSeverity.CRITICAL,
            matched_phrase_count=3,
            escalate=True,
            source_excerpt="text",
        )
        assert signal.to_dict()["escalate"] is True

    def test_zero_count_rejected(self):
        with pytest.raises(ValueError):
            CrisisSignal(
                severity=CrisisSeverity.MEDIUM,
                matched_phrase_count=0,
                escalate=False,
                source_excerpt="",
            )

    def test_escalate_must_match_severity(self):
        with pytest.raises(ValueError):
            CrisisSignal(
                severity=CrisisSeverity.HIGH,
                matched_phrase_count=2,
                escalate=True,
                source_excerpt="text",
            )


class TestAnalysisOutcome:
    """Tests for AnalysisOutcome."""

    def test_no_signal_needs_no_crisis_response(self):
        outcome = AnalysisOutcome(
            result=make_result(), crisis_signal=None, context_tag=ContextTag.JOURNAL
        )
        assert outcome.requires_crisis_response is False
        assert outcome.to_dict()["crisis"] is None
        assert outcome.to_dict()["context"] == "journal"

    def test_signal_needs_crisis_response(self):
        signal = CrisisSignal(
            severity=CrisisSeverity.MEDIUM,
            matched_phrase_count=1,
            escalate=False,
            source_excerpt="hopeless",
        )
        outcome = AnalysisOutcome(
            result=make_result(), crisis_signal=signal, context_tag=ContextTag.CHAT
        )
        assert outcome.requires_crisis_response is True
        assert outcome.to_dict()["crisis"]["severity"] == "medium"
