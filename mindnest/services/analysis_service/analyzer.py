"""Analysis orchestrator - the single entry point for text analysis.

Journal entries, community posts and chat messages all go through
TextAnalyzer.analyze(). It runs crisis detection and the four classifier
stages, draws the synthetic confidence score, picks recommendations and
returns an immutable AnalysisOutcome. It performs no I/O beyond logging
and holds no per-call state.

Failure policy:
- Crisis detection runs first and its signal is always returned.
- Each classifier stage is isolated: an unexpected error is logged and the
  stage falls back to its neutral default, leaving the others untouched.
- If the result itself cannot be assembled, a minimal result is built in
  its place so the crisis signal still reaches the caller.
- UnknownCategory is a configuration bug and always propagates.
"""
import logging
import math
import random
import time
from typing import Callable, Optional, Tuple, TypeVar, Union

from mindnest.shared.lexicon import LexiconStore, UnknownCategory, get_lexicon
from mindnest.shared.models import (
    NEUTRAL_EMOTION,
    AnalysisOutcome,
    AnalysisResult,
    ContextTag,
    RiskLevel,
    Sentiment,
)
from mindnest.shared.utils import fingerprint_text
from mindnest.services.crisis_engine.detector import CrisisDetector
from .classifier import TextClassifier
from .config import AnalysisConfig
from .recommendations import generate_recommendations
from .tokenizer import Tokenizer, get_tokenizer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TextAnalyzer:
    """Orchestrates classification, crisis detection and recommendations."""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        lexicon: Optional[LexiconStore] = None,
        tokenizer: Optional[Tokenizer] = None,
        classifier: Optional[TextClassifier] = None,
        crisis_detector: Optional[CrisisDetector] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize analyzer with its stages.

        Args:
            config: Orchestrator configuration
            lexicon: Keyword store shared by classifier and detector
            tokenizer: Word tokenizer
            classifier: Keyword classifier (built from lexicon if omitted)
            crisis_detector: Crisis phrase detector (built from lexicon if omitted)
            rng: Random source for the synthetic confidence score
        """
        self.config = config or AnalysisConfig()
        self.lexicon = lexicon if lexicon is not None else get_lexicon()
        self.tokenizer = tokenizer or get_tokenizer()
        self.classifier = classifier or TextClassifier(self.lexicon)
        self.crisis_detector = crisis_detector or CrisisDetector(
            self.lexicon,
            excerpt_length=self.config.excerpt_length,
            excerpt_marker=self.config.excerpt_marker,
        )
        self._rng = rng or random.Random()

        logger.info(
            "TEXT_ANALYZER_INITIALIZED",
            extra={
                "lexicon_version": self.lexicon.version,
                "max_recommendations": self.config.max_recommendations,
            }
        )

    def analyze(
        self,
        text: Optional[str],
        context_tag: Union[ContextTag, str],
    ) -> AnalysisOutcome:
        """Analyze one piece of user-authored text.

        Empty or whitespace-only text is not an error: it yields a neutral,
        low-risk result with no crisis signal.

        Args:
            text: Free text from the user
            context_tag: Surface the text came from (journal/community/chat)

        Returns:
            AnalysisOutcome with the result and an optional crisis signal

        Raises:
            ValueError: If context_tag is not a known surface
            UnknownCategory: If the lexicon is misconfigured

        Logs:
            - ANALYSIS_STARTED: Before stages run
            - ANALYSIS_COMPLETED: After the result is assembled
        """
        context = ContextTag.parse(context_tag)
        text = text or ""
        start_time = time.perf_counter()
        text_fingerprint = fingerprint_text(text)

        logger.info(
            "ANALYSIS_STARTED",
            extra={
                "context": context.value,
                "text_fingerprint": text_fingerprint,
                "text_length": len(text),
            }
        )

        crisis_signal = self.crisis_detector.detect(text)

        tokens = self._run_stage("tokenize", lambda: self.tokenizer.tokenize(text), [])
        sentiment = self._run_stage(
            "sentiment",
            lambda: self.classifier.classify_sentiment(tokens),
            Sentiment.NEUTRAL,
        )
        emotions = self._run_stage(
            "emotions",
            lambda: self.classifier.extract_emotions(tokens),
            (NEUTRAL_EMOTION,),
        )
        themes = self._run_stage(
            "themes",
            lambda: self.classifier.extract_themes(text),
            (),
        )
        risk_level = self._run_stage(
            "risk_level",
            lambda: self.classifier.assess_risk_level(text),
            RiskLevel.LOW,
        )

        result = self._assemble_result(sentiment, emotions, themes, risk_level)

        logger.info(
            "ANALYSIS_COMPLETED",
            extra={
                "context": context.value,
                "text_fingerprint": text_fingerprint,
                "sentiment": result.sentiment.value,
                "emotions": list(result.emotions),
                "themes": list(result.themes),
                "risk_level": result.risk_level.value,
                "crisis_severity": crisis_signal.severity.value if crisis_signal else None,
                "latency_ms": (time.perf_counter() - start_time) * 1000,
            }
        )

        return AnalysisOutcome(result=result, crisis_signal=crisis_signal, context_tag=context)

    def _run_stage(self, stage: str, compute: Callable[[], T], fallback: T) -> T:
        """Run one classifier stage, isolating unexpected failures."""
        try:
            return compute()
        except UnknownCategory:
            raise
        except Exception as e:
            logger.error(
                "ANALYSIS_STAGE_FAILED",
                extra={
                    "stage": stage,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "action": "USING_NEUTRAL_DEFAULT",
                }
            )
            return fallback

    def _assemble_result(
        self,
        sentiment: Sentiment,
        emotions: Tuple[str, ...],
        themes: Tuple[str, ...],
        risk_level: RiskLevel,
    ) -> AnalysisResult:
        """Build the result, degrading to a minimal one if that fails.

        The minimal result keeps the assessed risk level and uses the
        configured confidence floor, which AnalysisConfig has already
        validated, so building it cannot fail.
        """
        try:
            return AnalysisResult(
                sentiment=sentiment,
                emotions=emotions,
                themes=themes,
                risk_level=risk_level,
                confidence=self._draw_confidence(),
                recommendations=generate_recommendations(
                    sentiment, emotions, risk_level, limit=self.config.max_recommendations
                ),
            )
        except UnknownCategory:
            raise
        except Exception as e:
            logger.error(
                "ANALYSIS_RESULT_FAILED",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "action": "USING_MINIMAL_RESULT",
                }
            )
            return AnalysisResult(
                sentiment=Sentiment.NEUTRAL,
                emotions=(NEUTRAL_EMOTION,),
                themes=(),
                risk_level=risk_level,
                confidence=self.config.confidence_min,
            )

    def _draw_confidence(self) -> float:
        """Synthetic confidence, uniform over [min, max).

        uniform() can return max itself through rounding, so the draw is
        clamped to the largest float below max.
        """
        low = self.config.confidence_min
        high = self.config.confidence_max
        return min(self._rng.uniform(low, high), math.nextafter(high, low))
