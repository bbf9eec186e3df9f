"""Tests for ContentModerator."""
import pytest

from mindnest.shared.lexicon import LexiconStore
from mindnest.services.moderation_service.moderator import (
    REJECTION_REASON,
    ContentModerator,
    ModerationDecision,
)


@pytest.fixture
def moderator():
    return ContentModerator(LexiconStore())


class TestModerate:
    """Tests for ContentModerator.moderate."""

    def test_supportive_post_approved(self, moderator):
        decision = moderator.moderate("Sending you all good vibes this week")
        assert decision == ModerationDecision(approved=True)
        assert decision.to_dict() == {"approved": True}

    def test_blocked_term_rejected(self, moderator):
        decision = moderator.moderate("Click here, this is not a SCAM")
        assert decision.approved is False
        assert decision.reason == REJECTION_REASON
        assert decision.matched_terms == ("scam",)

    def test_all_matches_reported(self, moderator):
        decision = moderator.moderate("spam full of hate and violence")
        assert decision.matched_terms == ("hate", "spam", "violence")

    def test_to_dict_includes_reason(self, moderator):
        assert moderator.moderate("spam").to_dict() == {
            "approved": False,
            "reason": REJECTION_REASON,
        }

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text_approved(self, moderator, text):
        assert moderator.moderate(text).approved is True
