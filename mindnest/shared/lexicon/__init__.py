"""Fixed keyword lexicon shared by all analysis stages."""
from .store import (
    CRISIS_PHRASES,
    DEFAULT_LEXICON,
    EMOTION_PREFIX,
    MODERATION_BLOCKED_TERMS,
    NEGATIVE_SENTIMENT,
    POSITIVE_SENTIMENT,
    RISK_HIGH_PHRASES,
    RISK_MEDIUM_WORDS,
    THEME_PREFIX,
    LexiconStore,
    UnknownCategory,
    get_lexicon,
)

__all__ = [
    "CRISIS_PHRASES",
    "DEFAULT_LEXICON",
    "EMOTION_PREFIX",
    "MODERATION_BLOCKED_TERMS",
    "NEGATIVE_SENTIMENT",
    "POSITIVE_SENTIMENT",
    "RISK_HIGH_PHRASES",
    "RISK_MEDIUM_WORDS",
    "THEME_PREFIX",
    "LexiconStore",
    "UnknownCategory",
    "get_lexicon",
]
