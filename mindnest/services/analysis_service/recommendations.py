"""Coping recommendations and journal insight text.

The decision table is evaluated top to bottom. Entries are appended in
order, duplicates skipped, and the list is cut at the limit.
"""
import random
from typing import Callable, List, Optional, Sequence, Tuple

from mindnest.shared.models import AnalysisResult, RiskLevel, Sentiment

Rule = Tuple[Callable[[Sentiment, Sequence[str], RiskLevel], bool], Tuple[str, ...]]

RECOMMENDATION_RULES: Tuple[Rule, ...] = (
    (
        lambda s, e, r: s is Sentiment.NEGATIVE or r is RiskLevel.HIGH,
        (
            "Consider reaching out to a mental health professional",
            "Practice grounding techniques like deep breathing",
        ),
    ),
    (
        lambda s, e, r: "anxious" in e,
        (
            "Try the 4-7-8 breathing technique",
            "Consider progressive muscle relaxation",
        ),
    ),
    (
        lambda s, e, r: "sad" in e,
        (
            "Connect with supportive friends or family",
            "Engage in activities that usually bring you joy",
        ),
    ),
    (
        lambda s, e, r: s is Sentiment.POSITIVE,
        (
            "Keep up the positive momentum",
            "Consider sharing your success with others",
        ),
    ),
)

WELLBEING_SUGGESTIONS: Tuple[str, ...] = (
    "Try a 10-minute morning meditation to start your day positively",
    "Consider journaling about three things you're grateful for",
    "Take a short walk outside to boost your mood naturally",
    "Practice deep breathing exercises when feeling stressed",
    "Connect with a friend or family member today",
    "Listen to calming music or nature sounds",
    "Set a consistent sleep schedule for better mental health",
)


def generate_recommendations(
    sentiment: Sentiment,
    emotions: Sequence[str],
    risk_level: RiskLevel,
    limit: int = 3,
) -> Tuple[str, ...]:
    """Build up to `limit` recommendations from the decision table.

    Args:
        sentiment: Classified sentiment
        emotions: Extracted emotion tags
        risk_level: Assessed risk level
        limit: Maximum entries to return

    Returns:
        Ordered, duplicate-free recommendations
    """
    selected: List[str] = []
    for applies, entries in RECOMMENDATION_RULES:
        if not applies(sentiment, emotions, risk_level):
            continue
        for entry in entries:
            if len(selected) >= limit:
                return tuple(selected)
            if entry not in selected:
                selected.append(entry)
    return tuple(selected[:limit])


def personalized_recommendations(limit: int = 3) -> List[str]:
    """General wellbeing suggestions for the dashboard."""
    return list(WELLBEING_SUGGESTIONS[:max(limit, 0)])


def journal_insight(result: AnalysisResult, rng: Optional[random.Random] = None) -> str:
    """One reflective sentence to store alongside a journal entry."""
    insights = [
        f"Your journal entry shows {result.sentiment.value} sentiment. "
        "This reflects your current emotional state.",
        f"The emotions detected ({', '.join(result.emotions)}) suggest "
        "you're processing various feelings.",
        "Consider practicing mindfulness exercises to maintain emotional balance.",
        "Your self-reflection shows good emotional awareness - keep journaling regularly.",
    ]
    return (rng or random).choice(insights)
