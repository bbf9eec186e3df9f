"""Crisis phrase detection and severity mapping.

Counts distinct crisis phrases present in the text and maps the count to
a severity tier. Runs independently of the classifier so that a problem in
sentiment or emotion extraction can never suppress a crisis signal.
"""
import logging
from typing import Optional

from mindnest.shared.models import CrisisSeverity, CrisisSignal
from mindnest.shared.utils import fingerprint_text
from mindnest.shared.lexicon import (
    CRISIS_PHRASES,
    LexiconStore,
    get_lexicon,
)

logger = logging.getLogger(__name__)

CRITICAL_PHRASE_COUNT = 3
HIGH_PHRASE_COUNT = 2

# Straight and curly apostrophes are dropped before matching, so "can't go on"
# and "cant go on" are the same phrase.
_APOSTROPHES = str.maketrans("", "", "'\u2018\u2019")


def normalize_for_matching(text: str) -> str:
    """Lowercase text and strip apostrophes."""
    return text.lower().translate(_APOSTROPHES)


def severity_for_count(count: int) -> CrisisSeverity:
    """Map a distinct phrase count (>= 1) to a severity tier.

    Raises:
        ValueError: If count is below 1 (no signal should exist)
    """
    if count < 1:
        raise ValueError(f"Severity is undefined for {count} matches")
    if count >= CRITICAL_PHRASE_COUNT:
        return CrisisSeverity.CRITICAL
    if count == HIGH_PHRASE_COUNT:
        return CrisisSeverity.HIGH
    return CrisisSeverity.MEDIUM


def build_excerpt(text: str, limit: int = 200, marker: str = "...") -> str:
    """First `limit` characters of text, with marker appended if cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + marker


class CrisisDetector:
    """Detects crisis phrases and builds CrisisSignal records.

    Signals are returned to the caller. Persistence, delivery and
    resolution tracking belong to the notification subsystem.
    """

    def __init__(
        self,
        lexicon: Optional[LexiconStore] = None,
        excerpt_length: int = 200,
        excerpt_marker: str = "...",
    ):
        """Initialize detector.

        Args:
            lexicon: Keyword store (defaults to the process-wide lexicon)
            excerpt_length: Characters of source text kept in the signal
            excerpt_marker: Appended to truncated excerpts
        """
        self.lexicon = lexicon if lexicon is not None else get_lexicon()
        self.excerpt_length = excerpt_length
        self.excerpt_marker = excerpt_marker
        # Sorted so matched_phrases is deterministic
        self._phrases = tuple(sorted(
            {normalize_for_matching(phrase) for phrase in self.lexicon.lookup(CRISIS_PHRASES)}
        ))

        logger.info(
            "CRISIS_DETECTOR_INITIALIZED",
            extra={
                "lexicon_version": self.lexicon.version,
                "crisis_phrase_count": len(self._phrases),
            }
        )

    def detect(self, raw_text: Optional[str]) -> Optional[CrisisSignal]:
        """Scan text for crisis phrases.

        Args:
            raw_text: User-authored text

        Returns:
            CrisisSignal if any phrase matched, None otherwise

        Logs:
            - CRISIS_SIGNAL_DETECTED (critical) when a signal is produced
        """
        text = raw_text or ""
        normalized = normalize_for_matching(text)
        matched = tuple(phrase for phrase in self._phrases if phrase in normalized)
        if not matched:
            return None

        severity = severity_for_count(len(matched))
        signal = CrisisSignal(
            severity=severity,
            matched_phrase_count=len(matched),
            escalate=severity is CrisisSeverity.CRITICAL,
            source_excerpt=build_excerpt(text, self.excerpt_length, self.excerpt_marker),
            matched_phrases=matched,
        )

        logger.critical(
            "CRISIS_SIGNAL_DETECTED",
            extra={
                "text_fingerprint": fingerprint_text(text),
                "severity": severity.value,
                "matched_phrase_count": len(matched),
                "escalate": signal.escalate,
            }
        )
        return signal
