"""Tokenizer for sentiment and emotion matching.

Lowercases text and splits on runs of non-word characters. Total and
stateless: any string (or None) yields a list, possibly empty.
"""
import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)


class Tokenizer:
    """Splits free text into lowercase word tokens.

    "I'm SO happy!!" -> ["i", "m", "so", "happy"]
    """

    def __init__(self):
        """Initialize with a precompiled split pattern."""
        self._split_pattern = re.compile(r"\W+")

    def tokenize(self, text: Optional[str]) -> List[str]:
        """Tokenize text.

        Args:
            text: Raw input text

        Returns:
            Ordered list of non-empty lowercase tokens
        """
        if not text:
            return []
        return [token for token in self._split_pattern.split(text.lower()) if token]


# Module-level singleton for performance
_tokenizer: Optional[Tokenizer] = None


def get_tokenizer() -> Tokenizer:
    """Get the singleton Tokenizer instance."""
    global _tokenizer
    if _tokenizer is None:
        _tokenizer = Tokenizer()
    return _tokenizer


def tokenize(text: Optional[str]) -> List[str]:
    """Convenience function to tokenize text."""
    return get_tokenizer().tokenize(text)
