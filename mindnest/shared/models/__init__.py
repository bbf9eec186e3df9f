"""Shared domain models for the MindNest analysis engine."""
from .analysis import (
    Sentiment,
    RiskLevel,
    CrisisSeverity,
    ContextTag,
    AnalysisResult,
    CrisisSignal,
    AnalysisOutcome,
    NEUTRAL_EMOTION,
)

__all__ = [
    "Sentiment",
    "RiskLevel",
    "CrisisSeverity",
    "ContextTag",
    "AnalysisResult",
    "CrisisSignal",
    "AnalysisOutcome",
    "NEUTRAL_EMOTION",
]
