"""Chat companion reply selection.

Replies are fixed, static text. Crisis handling uses the shared analysis
engine, so the companion and the journal agree on what counts as a crisis.
When a crisis signal is present the companion never picks a topic reply;
it returns the crisis response with lifeline details.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from mindnest.shared.models import AnalysisOutcome, ContextTag
from mindnest.services.analysis_service.analyzer import TextAnalyzer

logger = logging.getLogger(__name__)


CRISIS_RESPONSE = (
    "I'm very concerned about what you've shared. Your life has value and there "
    "are people who want to help. Please consider reaching out to a crisis hotline "
    "immediately. In the US, you can call 988 for the Suicide & Crisis Lifeline. "
    "Would you like me to help you find local emergency resources?"
)

# (trigger substrings, reply), checked in order
TOPIC_RESPONSES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (
        ("anxious", "anxiety"),
        "I understand you're feeling anxious. Anxiety can be overwhelming, but there "
        "are techniques that can help. Try the 4-7-8 breathing technique: breathe in "
        "for 4 counts, hold for 7, exhale for 8. Would you like me to guide you "
        "through some other grounding exercises?",
    ),
    (
        ("sad", "depressed"),
        "I hear that you're feeling sad. It's important to acknowledge these feelings "
        "rather than push them away. Sometimes sadness is our mind's way of processing "
        "difficult experiences. Have you been able to engage in any activities that "
        "usually bring you joy recently?",
    ),
    (
        ("stressed", "stress"),
        "Stress can really take a toll on both our mental and physical health. Let's "
        "work on some stress management techniques. Have you tried progressive muscle "
        "relaxation or mindfulness meditation? I can guide you through either of these.",
    ),
    (
        ("sleep", "insomnia"),
        "Sleep issues can significantly impact mental health. Good sleep hygiene is "
        "crucial. Try establishing a consistent bedtime routine, avoiding screens an "
        "hour before bed, and creating a calm environment. Are there specific thoughts "
        "keeping you awake at night?",
    ),
    (
        ("thank", "help"),
        "I'm glad I could help! Remember, seeking support is a sign of strength, not "
        "weakness. It's wonderful that you're taking steps to care for your mental "
        "health. Is there anything specific you'd like to work on or discuss further?",
    ),
)

SUPPORTIVE_RESPONSES: Tuple[str, ...] = (
    "Thank you for sharing that with me. It takes courage to open up about your "
    "feelings. Can you tell me more about what's been on your mind lately?",
    "I appreciate you trusting me with your thoughts. Your feelings are valid, and "
    "it's important to process them. What's been the most challenging part of your day?",
    "I'm here to listen and support you. Everyone faces difficult times, and you're "
    "not alone in this. What kind of support would be most helpful for you right now?",
    "It sounds like you're going through a lot. Remember that it's okay to not be "
    "okay sometimes. What are some things that have helped you cope in the past?",
)


@dataclass(frozen=True)
class CompanionReply:
    """Bot reply plus the analysis it was based on."""
    message: str
    is_crisis: bool
    outcome: AnalysisOutcome

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "type": "crisis" if self.is_crisis else "normal",
            "analysis": self.outcome.result.to_dict(),
            "crisis": (
                self.outcome.crisis_signal.to_dict() if self.outcome.crisis_signal else None
            ),
        }


class CompanionResponder:
    """Chooses companion replies for chat messages."""

    def __init__(
        self,
        analyzer: Optional[TextAnalyzer] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize responder.

        Args:
            analyzer: Shared text analyzer
            rng: Random source for the supportive fallback replies
        """
        self.analyzer = analyzer or TextAnalyzer()
        self._rng = rng or random.Random()

    def reply(self, message: Optional[str]) -> CompanionReply:
        """Build a reply for one user chat message."""
        outcome = self.analyzer.analyze(message, ContextTag.CHAT)

        if outcome.requires_crisis_response:
            logger.warning(
                "COMPANION_CRISIS_REPLY",
                extra={"severity": outcome.crisis_signal.severity.value}
            )
            return CompanionReply(message=CRISIS_RESPONSE, is_crisis=True, outcome=outcome)

        lowered = (message or "").lower()
        for triggers, response in TOPIC_RESPONSES:
            if any(trigger in lowered for trigger in triggers):
                return CompanionReply(message=response, is_crisis=False, outcome=outcome)

        return CompanionReply(
            message=self._rng.choice(SUPPORTIVE_RESPONSES),
            is_crisis=False,
            outcome=outcome,
        )
