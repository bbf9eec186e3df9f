"""Analysis Service: keyword-based text analysis for MindNest.

One shared engine for every surface that needs to read user text:
journal entries, community posts and companion chat.

Components:
- tokenizer.py: Lowercase word tokenizer
- classifier.py: Sentiment, emotion, theme and risk-level classification
- recommendations.py: Coping recommendation table and journal insight text
- analyzer.py: TextAnalyzer orchestrator (the public entry point)
- config.py: AnalysisConfig
- handler.py: Flask HTTP endpoints (/health, /ready, /analyze, /moderate, /chat)

Usage:
    from mindnest.services.analysis_service import TextAnalyzer
    analyzer = TextAnalyzer()
    outcome = analyzer.analyze("I feel so happy today", "journal")
    if outcome.requires_crisis_response:
        ...  # warn the user and forward outcome.crisis_signal
"""

from .analyzer import TextAnalyzer
from .classifier import TextClassifier
from .config import AnalysisConfig
from .recommendations import (
    generate_recommendations,
    journal_insight,
    personalized_recommendations,
)
from .tokenizer import Tokenizer, tokenize

__all__ = [
    "TextAnalyzer",
    "TextClassifier",
    "AnalysisConfig",
    "generate_recommendations",
    "journal_insight",
    "personalized_recommendations",
    "Tokenizer",
    "tokenize",
]
