"""
Voice-authenticity signals computed from a transcription.

Each analyzer is a pure function returning a SignalScore: positive weights
push toward a synthetic voice, negative weights toward a live human.
"""

from typing import Sequence

import numpy as np

from voiceguard.models.types import AudioEvent, SignalScore, TranscriptWord

# --- Timing ---
CONSISTENT_TIMING_STDDEV = 0.05     # seconds
CONSISTENT_TIMING_MIN_GAPS = 5      # strictly more gaps than this
CONSISTENT_TIMING_WEIGHT = 25
HESITATION_MIN_WORDS = 10           # strictly more words than this
HESITATION_BAND = (0.5, 2.0)        # open interval, seconds
NO_HESITATION_WEIGHT = 15

# --- Audio events ---
BREATH_MARKERS = ("breath", "inhale")
LAUGH_MARKERS = ("laugh",)
COUGH_MARKERS = ("cough",)
NO_BREATH_MIN_WORDS = 20
NO_BREATH_WEIGHT = 20
HUMAN_SOUND_WEIGHT = -30

# --- Lexical ---
REPETITION_MIN_TOKENS = 20
REPETITION_MAX_RATIO = 0.3
REPETITION_WEIGHT = 15


def word_gaps(words: Sequence[TranscriptWord]) -> np.ndarray:
    """Silence between consecutive words: start(i) - end(i-1)."""
    if len(words) < 2:
        return np.zeros(0)
    starts = np.array([w.start for w in words[1:]], dtype=float)
    ends = np.array([w.end for w in words[:-1]], dtype=float)
    return starts - ends


def analyze_timing(words: Sequence[TranscriptWord]) -> SignalScore:
    gaps = word_gaps(words)
    score = 0.0
    labels = []

    if len(gaps) > 2:
        # Population std (ddof=0)
        std_dev = float(gaps.std())
        if std_dev < CONSISTENT_TIMING_STDDEV and len(gaps) > CONSISTENT_TIMING_MIN_GAPS:
            labels.append("Unnaturally consistent timing")
            score += CONSISTENT_TIMING_WEIGHT

    if len(words) > HESITATION_MIN_WORDS:
        low, high = HESITATION_BAND
        has_pause = bool(np.any((gaps > low) & (gaps < high)))
        if not has_pause:
            labels.append("No natural hesitations detected")
            score += NO_HESITATION_WEIGHT

    return SignalScore(score=score, labels=tuple(labels))


def _has_event(events: Sequence[AudioEvent], markers) -> bool:
    for event in events:
        kind = (event.type or "").lower()
        if any(m in kind for m in markers):
            return True
    return False


def analyze_audio_events(events: Sequence[AudioEvent], word_count: int) -> SignalScore:
    score = 0.0
    labels = []

    if not _has_event(events, BREATH_MARKERS) and word_count > NO_BREATH_MIN_WORDS:
        labels.append("No breath sounds detected")
        score += NO_BREATH_WEIGHT

    # Laughter or coughing only lowers the score, no label.
    if _has_event(events, LAUGH_MARKERS) or _has_event(events, COUGH_MARKERS):
        score += HUMAN_SOUND_WEIGHT

    return SignalScore(score=score, labels=tuple(labels))


def analyze_repetition(text: str) -> SignalScore:
    """
    Vocabulary diversity over whitespace tokens.
    Punctuation stays attached, so "now" and "now," are different tokens.
    """
    tokens = text.split()
    if len(tokens) <= REPETITION_MIN_TOKENS:
        return SignalScore()

    ratio = len(set(tokens)) / len(tokens)
    if ratio < REPETITION_MAX_RATIO:
        return SignalScore(score=REPETITION_WEIGHT, labels=("High word repetition pattern",))
    return SignalScore()
