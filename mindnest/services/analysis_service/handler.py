"""Analysis Service HTTP handler.

Thin shell around the analysis engine for the web app. The engine itself
does no I/O; this module owns the side effects the engine reports:
- crisis signals are forwarded to the notification stream
- the response carries static crisis resources so the UI can warn the user

User ids are hashed before logging or forwarding.
"""
import logging
import os
from typing import Optional

from flask import Flask, jsonify, request

from mindnest.shared.models import AnalysisOutcome, ContextTag
from mindnest.shared.lexicon import LexiconStore
from mindnest.shared.utils import configure_hash_salt, hash_user_id, is_hash_salt_configured
from mindnest.services.companion_service import CompanionResponder
from mindnest.services.crisis_engine import CrisisNotificationPublisher
from mindnest.services.moderation_service import ContentModerator
from .analyzer import TextAnalyzer
from .config import AnalysisConfig

logger = logging.getLogger(__name__)

app = Flask(__name__)

configure_hash_salt(
    os.getenv("PII_HASH_SALT", "default_dev_salt_change_in_production_32chars")
)

config = AnalysisConfig(
    lexicon_version=os.getenv("LEXICON_VERSION", "2026.10.01"),
)
lexicon = LexiconStore(version=config.lexicon_version)
analyzer = TextAnalyzer(config=config, lexicon=lexicon)
moderator = ContentModerator(lexicon=lexicon)
responder = CompanionResponder(analyzer=analyzer)

crisis_publisher = CrisisNotificationPublisher(
    stream_name=os.getenv("KINESIS_STREAM_NAME", "mindnest-crisis-notifications"),
    enabled=os.getenv("CRISIS_PUBLISHING_ENABLED", "true").lower() == "true",
)


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": "analysis-service",
        "lexicon_version": config.lexicon_version,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - verifies the lexicon loaded and hashing is keyed."""
    if len(lexicon) == 0:
        return jsonify({"status": "not_ready", "reason": "lexicon_empty"}), 503
    if not is_hash_salt_configured():
        return jsonify({"status": "not_ready", "reason": "hash_salt_not_configured"}), 503
    return jsonify({"status": "ready"}), 200


@app.route("/analyze", methods=["POST"])
def analyze_text():
    """Analyze a journal entry, community post or chat message.

    Request Body:
        {
            "text": "User text",
            "context": "journal" | "community" | "chat",
            "user_id": "user_123" (optional)
        }

    Response:
        {
            "context": "journal",
            "analysis": {...},
            "crisis": {...} | null,
            "crisis_ui": {...} (only when a crisis signal was produced)
        }

    Error Handling:
        Malformed requests get 400. Any other error returns a medium-risk
        response with crisis resources attached; the handler never fails open.
    """
    data = request.get_json(silent=True)
    if not data:
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "empty_body"})
        return jsonify({"error": "Request body required"}), 400

    text = data.get("text")
    if text is None or not isinstance(text, str):
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "missing_text"})
        return jsonify({"error": "Missing required field: text"}), 400

    try:
        context = ContextTag.parse(data.get("context", "journal"))
    except ValueError as e:
        logger.warning("ANALYZE_REQUEST_INVALID", extra={"reason": "unknown_context"})
        return jsonify({"error": str(e)}), 400

    user_id_hash = hash_user_id(str(data.get("user_id", "anonymous")))

    try:
        outcome = analyzer.analyze(text, context)
    except Exception as e:
        logger.error(
            "ANALYZE_ERROR",
            extra={
                "error": str(e),
                "error_type": type(e).__name__,
                "action": "DEFAULTING_TO_MEDIUM_RISK",
            }
        )
        return jsonify({
            "context": context.value,
            "analysis": None,
            "crisis": None,
            "risk_level": "medium",
            "error": "Analysis error - defaulting to medium risk",
            "crisis_ui": _get_crisis_ui(),
        }), 200

    response = outcome.to_dict()
    if outcome.requires_crisis_response:
        _forward_crisis(outcome, user_id_hash)
        response["crisis_ui"] = _get_crisis_ui()

    return jsonify(response), 200


@app.route("/moderate", methods=["POST"])
def moderate_text():
    """Screen a community post before publishing.

    Request Body:
        {"text": "Post body"}
    """
    data = request.get_json(silent=True) or {}
    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({"error": "Missing required field: text"}), 400

    return jsonify(moderator.moderate(text).to_dict()), 200


@app.route("/chat", methods=["POST"])
def chat_reply():
    """Reply to a companion chat message.

    Request Body:
        {"message": "User message", "user_id": "user_123" (optional)}
    """
    data = request.get_json(silent=True) or {}
    message = data.get("message")
    if not isinstance(message, str) or not message.strip():
        return jsonify({"error": "Missing required field: message"}), 400

    reply = responder.reply(message)
    response = reply.to_dict()
    if reply.is_crisis:
        user_id_hash = hash_user_id(str(data.get("user_id", "anonymous")))
        _forward_crisis(reply.outcome, user_id_hash)
        response["crisis_ui"] = _get_crisis_ui()

    return jsonify(response), 200


def _forward_crisis(outcome: AnalysisOutcome, user_id_hash: str) -> Optional[bool]:
    """Forward a crisis signal to the notification stream.

    Args:
        outcome: Analysis outcome carrying the signal
        user_id_hash: Hashed originating user id

    Returns:
        Publish result, or None if there was no signal
    """
    signal = outcome.crisis_signal
    if signal is None:
        return None

    logger.critical(
        "CRISIS_DETECTED_FORWARDING",
        extra={
            "user_id_hash": user_id_hash,
            "context": outcome.context_tag.value,
            "severity": signal.severity.value,
            "escalate": signal.escalate,
            "action": "PUBLISHING_TO_KINESIS",
        }
    )

    published = crisis_publisher.publish(signal, user_id_hash, outcome.context_tag)
    if not published:
        logger.error(
            "CRISIS_FORWARD_FAILED",
            extra={
                "user_id_hash": user_id_hash,
                "action": "MANUAL_REVIEW_REQUIRED",
            }
        )
    return published


def _get_crisis_ui() -> dict:
    """Static crisis resources shown alongside a crisis warning."""
    return {
        "title": "Crisis Support Resources",
        "message": (
            "Crisis indicators detected. If you're in immediate danger, please "
            "contact emergency services or a crisis line right now."
        ),
        "resources": [
            {
                "name": "988 Suicide & Crisis Lifeline",
                "phone": "988",
                "description": "24/7 crisis support - call or text",
                "priority": 1,
            },
            {
                "name": "Crisis Text Line",
                "text": "HOME to 741741",
                "description": "Text-based crisis support",
                "priority": 2,
            },
            {
                "name": "Emergency Services",
                "phone": "911",
                "description": "Immediate danger",
                "priority": 3,
            },
        ],
        "show_emergency": True,
    }


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8001"))
    app.run(host="0.0.0.0", port=port, debug=False)
