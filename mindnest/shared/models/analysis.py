"""Text analysis domain models.

Defines the enums and value objects produced by the analysis engine.
Two severity scales live here on purpose: RiskLevel colours the UI,
CrisisSeverity drives escalation. They are never converted into each other.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Sentiment(Enum):
    """Coarse polarity derived from keyword counts."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class RiskLevel(Enum):
    """Three-tier self-harm language classification for display."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CrisisSeverity(Enum):
    """Severity of a crisis signal, keyed on distinct phrase hits."""
    MEDIUM = "medium"       # 1 phrase
    HIGH = "high"           # 2 phrases
    CRITICAL = "critical"   # 3+ phrases: escalate


class ContextTag(Enum):
    """UI surface the text originated from.

    Carried through for logging and future per-surface tuning; it does not
    change classification today.
    """
    JOURNAL = "journal"
    COMMUNITY = "community"
    CHAT = "chat"

    @classmethod
    def parse(cls, value) -> "ContextTag":
        """Accept a ContextTag or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(tag.value for tag in cls)
            raise ValueError(f"Unknown context tag {value!r}, expected one of: {allowed}")


NEUTRAL_EMOTION = "neutral"


@dataclass(frozen=True)
class AnalysisResult:
    """Output of one classification pass.

    Immutable and owned by the caller; the engine keeps no reference.
    Emotions and themes are distinct tags in lexicon registration order.
    """
    sentiment: Sentiment
    emotions: Tuple[str, ...]
    themes: Tuple[str, ...]
    risk_level: RiskLevel
    confidence: float       # synthetic, 0.7 <= c < 1.0
    recommendations: Tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if not 0.7 <= self.confidence < 1.0:
            raise ValueError(f"Confidence must be in [0.7, 1.0), got {self.confidence}")
        if not self.emotions:
            raise ValueError("Emotions must not be empty")
        if len(self.recommendations) > 3:
            raise ValueError(
                f"At most 3 recommendations allowed, got {len(self.recommendations)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "sentiment": self.sentiment.value,
            "emotions": list(self.emotions),
            "themes": list(self.themes),
            "risk_level": self.risk_level.value,
            # Capped so rounding never reports 1.0
            "confidence": min(round(self.confidence, 3), 0.999),
            "recommendations": list(self.recommendations),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class CrisisSignal:
    """Crisis phrases were found in user text.

    Handed to the caller, who forwards it to the notification subsystem.
    The engine never tracks acknowledgement or resolution.
    """
    severity: CrisisSeverity
    matched_phrase_count: int
    escalate: bool
    source_excerpt: str
    matched_phrases: Tuple[str, ...] = ()
    detected_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if self.matched_phrase_count < 1:
            raise ValueError(
                f"Crisis signal needs at least one match, got {self.matched_phrase_count}"
            )
        if self.escalate != (self.severity is CrisisSeverity.CRITICAL):
            raise ValueError("escalate must be set iff severity is critical")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "severity": self.severity.value,
            "matched_phrase_count": self.matched_phrase_count,
            "escalate": self.escalate,
            "source_excerpt": self.source_excerpt,
            "matched_phrases": list(self.matched_phrases),
            "detected_at": self.detected_at.isoformat(),
        }


@dataclass(frozen=True)
class AnalysisOutcome:
    """Everything one analyze() call returns."""
    result: AnalysisResult
    crisis_signal: Optional[CrisisSignal]
    context_tag: ContextTag

    @property
    def requires_crisis_response(self) -> bool:
        """Caller must warn the user and forward the signal."""
        return self.crisis_signal is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "context": self.context_tag.value,
            "analysis": self.result.to_dict(),
            "crisis": self.crisis_signal.to_dict() if self.crisis_signal else None,
        }
