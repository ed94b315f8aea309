import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel

from voiceguard.api.auth import verify_api_key
from voiceguard.config import get_max_audio_bytes
from voiceguard.models.detector import analyze_transcription
from voiceguard.models.types import AnalysisVerdict, TranscriptionInput
from voiceguard.utils.audio import (
    DEFAULT_MIME_TYPE,
    check_audio_size,
    decode_audio_payload,
)
from voiceguard.utils.elevenlabs import elevenlabs_client, to_transcription_input
from voiceguard.utils.errors import MissingInput

logger = logging.getLogger("uvicorn")

router = APIRouter()


class AnalyzeRequest(BaseModel):
    audio: Optional[str] = None      # base64
    mimeType: Optional[str] = None


async def _analyze_audio(audio_bytes: bytes, mime_type: str) -> AnalysisVerdict:
    logger.info(f"Received audio for analysis, mimeType: {mime_type}, size: {round(len(audio_bytes) / 1024)} KB")

    payload = await elevenlabs_client.transcribe_async(audio_bytes, mime_type=mime_type)
    transcription = to_transcription_input(payload)
    preview = transcription.text[:200]
    logger.info(
        f"Transcription received: {len(transcription.words)} words, "
        f"{len(transcription.audioEvents)} audio events, text=\"{preview}{'...' if len(transcription.text) > 200 else ''}\""
    )
    return analyze_transcription(transcription)


@router.post(
    "/analyze-voice",
    response_model=AnalysisVerdict,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_api_key)],
)
async def analyze_voice(request: AnalyzeRequest):
    audio_bytes = decode_audio_payload(request.audio)
    return await _analyze_audio(audio_bytes, request.mimeType or DEFAULT_MIME_TYPE)


@router.post(
    "/analyze-voice/file",
    response_model=AnalysisVerdict,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_api_key)],
)
async def analyze_voice_file(file: UploadFile = File(...)):
    """
    Multipart variant of /analyze-voice.

    Field name: file
    """
    # Read at most one byte past the ceiling
    max_bytes = get_max_audio_bytes()
    audio_bytes = await file.read(max_bytes + 1)
    if not audio_bytes:
        raise MissingInput("Uploaded file is empty")
    check_audio_size(len(audio_bytes), max_bytes)
    return await _analyze_audio(audio_bytes, file.content_type or DEFAULT_MIME_TYPE)


@router.post(
    "/analyze-transcription",
    response_model=AnalysisVerdict,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_api_key)],
)
async def analyze_transcription_route(transcription: TranscriptionInput):
    """Score a transcript the caller already holds. No provider call."""
    return analyze_transcription(transcription)
