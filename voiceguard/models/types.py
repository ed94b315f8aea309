from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

VoiceType = Literal["human", "ai", "uncertain"]
CallClassification = Literal["safe", "spam", "fraud"]


class TranscriptWord(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = ""
    start: float
    end: float


class AudioEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str  # "breath", "laugh", "cough", ...


class TranscriptionInput(BaseModel):
    """One transcription as handed over by the speech-to-text provider."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    languageCode: str = "en"
    words: List[TranscriptWord] = Field(default_factory=list)
    audioEvents: List[AudioEvent] = Field(default_factory=list)


@dataclass(frozen=True)
class SignalScore:
    """Signed score plus the labels of the signals that contributed to it."""

    score: float = 0.0
    labels: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def combine(cls, *parts: "SignalScore") -> "SignalScore":
        return cls(
            score=sum(p.score for p in parts),
            labels=tuple(label for p in parts for label in p.labels),
        )


class AnalysisVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    voiceType: VoiceType
    confidence: int = Field(ge=0, le=100)
    language: str
    artifacts: List[str] = Field(default_factory=list)
    riskIndicators: Optional[List[str]] = None     # absent when nothing matched
    callClassification: Optional[CallClassification] = None
    recommendation: str
    transcription: str = ""
