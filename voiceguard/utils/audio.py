import base64
import binascii
from typing import Optional

from voiceguard.config import get_max_audio_bytes
from voiceguard.utils.errors import InvalidAudio, MissingInput, PayloadTooLarge

DEFAULT_MIME_TYPE = "audio/webm"


def estimated_decoded_size(audio_base64: str) -> float:
    # base64 carries 3 bytes per 4 characters
    return len(audio_base64) * 3 / 4


def check_audio_size(size: float, max_bytes: Optional[int] = None) -> None:
    if max_bytes is None:
        max_bytes = get_max_audio_bytes()
    if size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise PayloadTooLarge(f"Audio file too large. Maximum size is {limit_mb:g}MB.")


def decode_audio_payload(audio_base64, max_bytes: Optional[int] = None) -> bytes:
    """
    Validate and decode a base64 audio payload.
    The size ceiling is checked on the estimate before decoding.
    """
    if not audio_base64:
        raise MissingInput("No audio data provided")

    # Tolerate data URLs ("data:audio/webm;base64,....")
    if audio_base64.startswith("data:") and "," in audio_base64:
        audio_base64 = audio_base64.split(",", 1)[1]

    check_audio_size(estimated_decoded_size(audio_base64), max_bytes)

    try:
        audio_bytes = base64.b64decode(audio_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidAudio(f"Audio payload is not valid base64: {e}")

    if not audio_bytes:
        raise MissingInput("No audio data provided")
    return audio_bytes


def extension_for_mime(mime_type) -> str:
    mime_type = (mime_type or DEFAULT_MIME_TYPE).lower()
    if "mpeg" in mime_type:
        return "mp3"
    if "wav" in mime_type:
        return "wav"
    return "webm"
