"""Community post moderation.

Rejects posts containing blocked terms. Matching is substring based on the
lowercased text, using the shared lexicon.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from mindnest.shared.lexicon import MODERATION_BLOCKED_TERMS, LexiconStore, get_lexicon
from mindnest.shared.utils import fingerprint_text

logger = logging.getLogger(__name__)

REJECTION_REASON = "Content contains inappropriate language"


@dataclass(frozen=True)
class ModerationDecision:
    """Whether a post may be published."""
    approved: bool
    reason: Optional[str] = None
    matched_terms: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        result = {"approved": self.approved}
        if self.reason:
            result["reason"] = self.reason
        return result


class ContentModerator:
    """Blocked-term moderator for community content."""

    def __init__(self, lexicon: Optional[LexiconStore] = None):
        self.lexicon = lexicon if lexicon is not None else get_lexicon()
        self._blocked_terms = tuple(sorted(self.lexicon.lookup(MODERATION_BLOCKED_TERMS)))

    def moderate(self, text: Optional[str]) -> ModerationDecision:
        """Decide whether text may be published.

        Args:
            text: Post or comment body

        Returns:
            ModerationDecision, rejected if any blocked term is present
        """
        lowered = (text or "").lower()
        matched = tuple(term for term in self._blocked_terms if term in lowered)

        if not matched:
            return ModerationDecision(approved=True)

        logger.warning(
            "CONTENT_REJECTED",
            extra={
                "text_fingerprint": fingerprint_text(text or ""),
                "matched_term_count": len(matched),
            }
        )
        return ModerationDecision(
            approved=False,
            reason=REJECTION_REASON,
            matched_terms=matched,
        )
