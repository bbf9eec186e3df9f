"""Keyword lexicon shared by every analysis stage.

All keyword and phrase sets used for matching live here, seeded once at
import time and never mutated. Category names are dotted:
``emotion.<name>``, ``theme.<name>``, ``risk.<tier>``, ``crisis.phrases``.

Matching policy per category family:
- sentiment / emotion: exact token membership
- theme / risk / crisis / moderation: substring of lowercased raw text
"""
import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)


class UnknownCategory(KeyError):
    """Lookup of a category that was never registered.

    A programming error: the lexicon is fixed at startup, so this should
    surface immediately and never be defaulted away.
    """

    def __init__(self, category: str):
        super().__init__(category)
        self.category = category

    def __str__(self) -> str:
        return f"Unknown lexicon category: {self.category!r}"


POSITIVE_SENTIMENT = "positive_sentiment"
NEGATIVE_SENTIMENT = "negative_sentiment"
EMOTION_PREFIX = "emotion."
THEME_PREFIX = "theme."
RISK_MEDIUM_WORDS = "risk.medium_words"
RISK_HIGH_PHRASES = "risk.high_phrases"
CRISIS_PHRASES = "crisis.phrases"
MODERATION_BLOCKED_TERMS = "moderation.blocked_terms"


# Insertion order matters: emotions and themes are reported in this order.
DEFAULT_LEXICON: Dict[str, FrozenSet[str]] = {
    POSITIVE_SENTIMENT: frozenset({
        "happy", "good", "great", "wonderful", "amazing",
        "love", "joy", "excited", "grateful", "blessed",
    }),
    NEGATIVE_SENTIMENT: frozenset({
        "sad", "bad", "terrible", "awful", "hate",
        "angry", "depressed", "anxious", "worried", "stressed",
    }),

    "emotion.happy": frozenset({"happy", "joy", "excited", "cheerful", "elated"}),
    "emotion.sad": frozenset({"sad", "down", "blue", "melancholy", "depressed"}),
    "emotion.anxious": frozenset({
        "anxious", "worried", "nervous", "stressed", "stressful", "overwhelmed",
    }),
    "emotion.angry": frozenset({"angry", "mad", "frustrated", "irritated", "furious"}),
    "emotion.grateful": frozenset({"grateful", "thankful", "blessed", "appreciative"}),
    "emotion.hopeful": frozenset({"hopeful", "optimistic", "confident", "positive"}),
    "emotion.lonely": frozenset({"lonely", "isolated", "alone", "disconnected"}),

    # Substring matched: "job" implies work, "parent" matches "parents".
    "theme.work": frozenset({"work", "job", "career"}),
    "theme.family": frozenset({"family", "parent", "sibling"}),
    "theme.relationships": frozenset({"relationship", "partner", "friend"}),
    "theme.health": frozenset({"health", "medical", "doctor"}),
    "theme.education": frozenset({"school", "study", "exam"}),

    RISK_MEDIUM_WORDS: frozenset({"hopeless", "worthless", "burden", "give up"}),
    RISK_HIGH_PHRASES: frozenset({
        "suicide", "kill myself", "end it all", "no point living",
    }),

    # Broader than risk.high_phrases; each distinct hit raises severity.
    CRISIS_PHRASES: frozenset({
        "suicide",
        "kill myself",
        "end it all",
        "hurt myself",
        "want to die",
        "hopeless",
        "no point",
        "give up",
        "cant go on",
        "self harm",
        "overdose",
    }),

    MODERATION_BLOCKED_TERMS: frozenset({"spam", "scam", "hate", "violence"}),
}


class LexiconStore:
    """Immutable category -> keyword set table.

    Keywords are lowercased and stripped on load. Empty categories are
    rejected so that a typo in the table fails at startup rather than
    silently matching nothing.
    """

    def __init__(
        self,
        table: Optional[Mapping[str, Iterable[str]]] = None,
        version: str = "2026.10.01",
    ):
        """Build the store.

        Args:
            table: Category name to keywords (defaults to DEFAULT_LEXICON)
            version: Lexicon version string for logs and health checks
        """
        source = DEFAULT_LEXICON if table is None else table
        entries: Dict[str, FrozenSet[str]] = {}
        for category, keywords in source.items():
            normalized = frozenset(
                kw.strip().lower() for kw in keywords if kw and kw.strip()
            )
            if not normalized:
                raise ValueError(f"Lexicon category {category!r} has no keywords")
            entries[category.strip().lower()] = normalized

        self._entries: Mapping[str, FrozenSet[str]] = MappingProxyType(entries)
        self.version = version

        logger.info(
            "LEXICON_LOADED",
            extra={
                "lexicon_version": version,
                "category_count": len(entries),
                "keyword_count": sum(len(v) for v in entries.values()),
            }
        )

    def lookup(self, category: str) -> FrozenSet[str]:
        """Return the keyword set for a category.

        Raises:
            UnknownCategory: If the category is not registered
        """
        try:
            return self._entries[category]
        except KeyError:
            logger.error("LEXICON_UNKNOWN_CATEGORY", extra={"category": category})
            raise UnknownCategory(category) from None

    def categories(self) -> List[str]:
        return list(self._entries)

    def names_with_prefix(self, prefix: str) -> List[str]:
        """Short names of categories under a prefix, in registration order.

        ``names_with_prefix("emotion.")`` -> ``["happy", "sad", ...]``
        """
        return [c[len(prefix):] for c in self._entries if c.startswith(prefix)]

    def __contains__(self, category: object) -> bool:
        return category in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Module-level singleton, built on first use
_lexicon: Optional[LexiconStore] = None


def get_lexicon() -> LexiconStore:
    """Get the process-wide LexiconStore."""
    global _lexicon
    if _lexicon is None:
        _lexicon = LexiconStore()
    return _lexicon
