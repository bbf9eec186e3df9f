"""Moderation Service: blocked-term screening for community posts."""

from .moderator import ContentModerator, ModerationDecision, REJECTION_REASON

__all__ = ["ContentModerator", "ModerationDecision", "REJECTION_REASON"]
