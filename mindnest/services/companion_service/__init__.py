"""Companion Service: static chat companion replies driven by text analysis."""

from .responder import (
    CRISIS_RESPONSE,
    SUPPORTIVE_RESPONSES,
    TOPIC_RESPONSES,
    CompanionReply,
    CompanionResponder,
)

__all__ = [
    "CRISIS_RESPONSE",
    "SUPPORTIVE_RESPONSES",
    "TOPIC_RESPONSES",
    "CompanionReply",
    "CompanionResponder",
]
