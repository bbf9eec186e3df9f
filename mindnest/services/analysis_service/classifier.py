"""Keyword classifier: sentiment, emotions, themes and risk level.

Two matching policies are used deliberately:
- Sentiment and emotions use exact token membership. Sentiment compares
  counts strictly (ties are neutral); emotions need a single hit.
- Themes and risk use substring containment on the lowercased raw text,
  because theme keywords are loose mentions and risk entries span tokens.

Risk is presence based and checks the high tier first. It is not a count
comparison like sentiment, and the two policies must stay separate.
"""
import logging
from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from mindnest.shared.models import NEUTRAL_EMOTION, RiskLevel, Sentiment
from mindnest.shared.lexicon import (
    EMOTION_PREFIX,
    NEGATIVE_SENTIMENT,
    POSITIVE_SENTIMENT,
    RISK_HIGH_PHRASES,
    RISK_MEDIUM_WORDS,
    THEME_PREFIX,
    LexiconStore,
    get_lexicon,
)

logger = logging.getLogger(__name__)


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


class TextClassifier:
    """Pure keyword classifier over a fixed lexicon.

    Every category is resolved in __init__, so a lexicon missing a required
    category raises UnknownCategory at construction, never mid-request.
    """

    def __init__(self, lexicon: Optional[LexiconStore] = None):
        """Initialize classifier.

        Args:
            lexicon: Keyword store (defaults to the process-wide lexicon)
        """
        self.lexicon = lexicon if lexicon is not None else get_lexicon()

        self._positive = self.lexicon.lookup(POSITIVE_SENTIMENT)
        self._negative = self.lexicon.lookup(NEGATIVE_SENTIMENT)
        self._emotions: Dict[str, FrozenSet[str]] = {
            name: self.lexicon.lookup(EMOTION_PREFIX + name)
            for name in self.lexicon.names_with_prefix(EMOTION_PREFIX)
        }
        self._themes: Dict[str, FrozenSet[str]] = {
            name: self.lexicon.lookup(THEME_PREFIX + name)
            for name in self.lexicon.names_with_prefix(THEME_PREFIX)
        }
        self._high_risk = self.lexicon.lookup(RISK_HIGH_PHRASES)
        self._medium_risk = self.lexicon.lookup(RISK_MEDIUM_WORDS)

        logger.info(
            "TEXT_CLASSIFIER_INITIALIZED",
            extra={
                "lexicon_version": self.lexicon.version,
                "emotion_count": len(self._emotions),
                "theme_count": len(self._themes),
            }
        )

    def classify_sentiment(self, tokens: Sequence[str]) -> Sentiment:
        """Compare positive and negative token counts.

        Every occurrence counts, so "good good bad" is positive.
        """
        positive_count = sum(1 for token in tokens if token in self._positive)
        negative_count = sum(1 for token in tokens if token in self._negative)

        if positive_count > negative_count:
            return Sentiment.POSITIVE
        if negative_count > positive_count:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL

    def extract_emotions(self, tokens: Sequence[str]) -> Tuple[str, ...]:
        """Emotion tags with at least one keyword among the tokens.

        Returns:
            Tags in lexicon order, or ("neutral",) when nothing matches
        """
        token_set = set(tokens)
        emotions = tuple(
            name for name, keywords in self._emotions.items()
            if not token_set.isdisjoint(keywords)
        )
        return emotions or (NEUTRAL_EMOTION,)

    def extract_themes(self, raw_text: Optional[str]) -> Tuple[str, ...]:
        """Theme tags whose keywords appear anywhere in the text."""
        lowered = (raw_text or "").lower()
        if not lowered:
            return ()
        return tuple(
            name for name, keywords in self._themes.items()
            if _contains_any(lowered, keywords)
        )

    def assess_risk_level(self, raw_text: Optional[str]) -> RiskLevel:
        """High phrases win over medium words regardless of counts."""
        lowered = (raw_text or "").lower()
        if _contains_any(lowered, self._high_risk):
            return RiskLevel.HIGH
        if _contains_any(lowered, self._medium_risk):
            return RiskLevel.MEDIUM
        return RiskLevel.LOW
