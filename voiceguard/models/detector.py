import logging
import math
from typing import Callable, List, Optional, Tuple

from voiceguard.models.analyzers import (
    analyze_audio_events,
    analyze_repetition,
    analyze_timing,
)
from voiceguard.models.keywords import SCAM_KEYWORDS, language_name
from voiceguard.models.types import (
    AnalysisVerdict,
    SignalScore,
    TranscriptionInput,
)

logger = logging.getLogger("uvicorn")

KEYWORD_WEIGHT = 15

# Call-risk tiers, first match wins.
CALL_TIERS = (
    (60, "fraud"),
    (30, "spam"),
)

RECOMMENDATIONS = {
    "ai_fraud": (
        "HIGH RISK: This appears to be an AI-generated voice with multiple fraud "
        "indicators. End the call immediately and do not provide any personal information."
    ),
    "ai": (
        "This voice shows characteristics of AI generation. Exercise caution and "
        "verify the caller's identity through official channels."
    ),
    "fraud": (
        "Multiple fraud indicators detected. Do not share personal or financial "
        "information. Verify through official channels."
    ),
    "spam": (
        "Potential spam call detected. Be cautious about any requests for personal information."
    ),
    "uncertain": (
        "Unable to determine with high confidence. If suspicious, verify the "
        "caller's identity independently."
    ),
    "clear": (
        "No significant concerns detected. Standard verification practices are "
        "still recommended for sensitive matters."
    ),
}

# Ordered by severity. Evaluation order matters.
RECOMMENDATION_RULES: Tuple[Tuple[Callable[[str, Optional[str]], bool], str], ...] = (
    (lambda voice, call: voice == "ai" and call == "fraud", "ai_fraud"),
    (lambda voice, call: voice == "ai", "ai"),
    (lambda voice, call: call == "fraud", "fraud"),
    (lambda voice, call: call == "spam", "spam"),
    (lambda voice, call: voice == "uncertain", "uncertain"),
)


def score_voice(transcription: TranscriptionInput, normalized_text: str) -> SignalScore:
    """Sum the timing, audio-event and repetition signals into one AI score."""
    words = transcription.words
    return SignalScore.combine(
        analyze_timing(words),
        analyze_audio_events(transcription.audioEvents, len(words)),
        analyze_repetition(normalized_text),
    )


def classify_voice(ai_score: float) -> Tuple[str, float]:
    """
    Map an AI score to (voice_type, confidence).

    Confidence stays unrounded here. The human branch is capped at 95 by
    its own min(); a strongly negative score does not raise it further.
    """
    if ai_score >= 50:
        return "ai", min(95, 50 + ai_score)
    if ai_score >= 25:
        # Peaks at 75 in the middle of the band (37.5)
        return "uncertain", 50 + (25 - abs(ai_score - 37.5))
    return "human", min(95, 70 + (25 - ai_score))


def scan_keywords(normalized_text: str) -> SignalScore:
    """
    Substring scan of every phrase in every category.
    A phrase scores once per category no matter how often it occurs.
    """
    score = 0.0
    indicators = []
    for category, phrases in SCAM_KEYWORDS.items():
        for phrase in phrases:
            if phrase.lower() in normalized_text:
                indicators.append(f'{category}: "{phrase}"')
                score += KEYWORD_WEIGHT
    return SignalScore(score=score, labels=tuple(indicators))


def classify_call(scam_score: float) -> Optional[str]:
    """None when no keyword matched at all, otherwise safe/spam/fraud."""
    if scam_score <= 0:
        return None
    for threshold, tier in CALL_TIERS:
        if scam_score >= threshold:
            return tier
    return "safe"


def recommend(voice_type: str, call_classification: Optional[str]) -> str:
    for matches, key in RECOMMENDATION_RULES:
        if matches(voice_type, call_classification):
            return RECOMMENDATIONS[key]
    return RECOMMENDATIONS["clear"]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def analyze_transcription(transcription: TranscriptionInput) -> AnalysisVerdict:
    """Run the full engine over one transcription. Pure, no I/O."""
    normalized_text = (transcription.text or "").lower()

    voice = score_voice(transcription, normalized_text)
    voice_type, confidence = classify_voice(voice.score)

    risk = scan_keywords(normalized_text)
    call_classification = classify_call(risk.score)

    indicators: List[str] = list(risk.labels)
    verdict = AnalysisVerdict(
        voiceType=voice_type,
        confidence=round_half_up(confidence),
        language=language_name(transcription.languageCode),
        artifacts=list(voice.labels),
        riskIndicators=indicators or None,
        callClassification=call_classification,
        recommendation=recommend(voice_type, call_classification),
        transcription=transcription.text or "",
    )

    logger.info(
        "Analysis complete: voice=%s confidence=%d ai_score=%.1f call=%s scam_score=%.0f "
        "artifacts=%d indicators=%d",
        verdict.voiceType, verdict.confidence, voice.score,
        verdict.callClassification, risk.score, len(verdict.artifacts), len(indicators),
    )
    return verdict
