import asyncio
import logging
import numbers
from typing import Optional

import aiohttp

from voiceguard.config import (
    get_elevenlabs_api_key,
    get_stt_model,
    get_stt_timeout_seconds,
    get_stt_url,
)
from voiceguard.models.types import AudioEvent, TranscriptionInput, TranscriptWord
from voiceguard.utils.audio import DEFAULT_MIME_TYPE, extension_for_mime
from voiceguard.utils.errors import MalformedProviderResponse, ProviderUnavailable


class ElevenLabsClient:
    def __init__(self):
        self.logger = logging.getLogger("uvicorn")

    async def transcribe_async(
        self,
        audio_bytes: bytes,
        mime_type: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> dict:
        """
        Sends audio to ElevenLabs Speech-to-Text with audio-event tagging enabled.
        Returns the raw JSON object. Transport failures and non-200 statuses raise
        ProviderUnavailable, a body that is not a JSON object raises
        MalformedProviderResponse. Nothing is retried here.
        """
        api_key = get_elevenlabs_api_key()
        if not api_key:
            self.logger.error("ELEVENLABS_API_KEY not configured")
            raise ProviderUnavailable("ElevenLabs API key not configured")

        if timeout_seconds is None:
            timeout_seconds = get_stt_timeout_seconds()
        mime_type = mime_type or DEFAULT_MIME_TYPE

        data = aiohttp.FormData()
        data.add_field(
            "file", audio_bytes,
            filename=f"audio.{extension_for_mime(mime_type)}",
            content_type=mime_type,
        )
        data.add_field("model_id", get_stt_model())
        data.add_field("tag_audio_events", "true")
        data.add_field("diarize", "true")

        headers = {"xi-api-key": api_key}
        self.logger.info(f"ElevenLabs: sending {len(audio_bytes)} bytes for STT (timeout={timeout_seconds}s)")

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    get_stt_url(),
                    data=data,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=timeout_seconds),
                ) as response:
                    if response.status != 200:
                        error_text = await response.text(errors="replace")
                        self.logger.error(f"ElevenLabs STT error {response.status}: {error_text[:500]}")
                        raise ProviderUnavailable(f"Speech-to-text failed: {response.status}")
                    try:
                        result = await response.json(content_type=None)
                    except ValueError as e:
                        raise MalformedProviderResponse(f"Speech-to-text returned invalid JSON: {e}")
        except asyncio.TimeoutError:
            self.logger.warning(f"ElevenLabs STT timed out (>{timeout_seconds}s)")
            raise ProviderUnavailable("Speech-to-text timed out")
        except aiohttp.ClientError as e:
            self.logger.error(f"ElevenLabs client exception: {e}")
            raise ProviderUnavailable(f"Speech-to-text request failed: {e}")

        # Empty body decodes to None
        if not isinstance(result, dict):
            raise MalformedProviderResponse("Speech-to-text response was not a JSON object")

        text = result.get("text") if isinstance(result.get("text"), str) else ""
        self.logger.info(
            f"ElevenLabs: got transcript ({len(text)} chars), language={result.get('language_code')}"
        )
        return result


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def to_transcription_input(payload) -> TranscriptionInput:
    """
    Map a provider response onto TranscriptionInput.
    Missing or malformed words/audio_events degrade to empty lists.
    """
    if not isinstance(payload, dict):
        raise MalformedProviderResponse("Speech-to-text response was not a JSON object")

    text = payload.get("text")
    if not isinstance(text, str):
        text = ""

    language_code = payload.get("language_code")
    if not isinstance(language_code, str) or not language_code:
        language_code = "en"

    raw_words = payload.get("words")
    words = []
    for entry in raw_words if isinstance(raw_words, list) else []:
        if not isinstance(entry, dict):
            continue
        start, end = entry.get("start"), entry.get("end")
        if not (_is_number(start) and _is_number(end)):
            continue
        word_text = entry.get("text")
        words.append(TranscriptWord(
            text=word_text if isinstance(word_text, str) else "",
            start=float(start),
            end=float(end),
        ))

    raw_events = payload.get("audio_events")
    events = []
    for entry in raw_events if isinstance(raw_events, list) else []:
        if isinstance(entry, dict) and isinstance(entry.get("type"), str):
            events.append(AudioEvent(type=entry["type"]))

    return TranscriptionInput(
        text=text,
        languageCode=language_code,
        words=words,
        audioEvents=events,
    )


# Singleton
elevenlabs_client = ElevenLabsClient()
