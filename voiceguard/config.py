"""
Environment configuration for the VoiceGuard API.

- ELEVENLABS_API_KEY: speech-to-text provider credential (required for /analyze-voice)
- ELEVENLABS_STT_URL / ELEVENLABS_STT_MODEL: provider endpoint and model id
- STT_TIMEOUT_SECONDS: total timeout for one provider call
- MAX_AUDIO_BYTES: decoded audio ceiling (default 5 MiB)
- API_KEY: when set, requests must send it as x-api-key
- CORS_ORIGINS: comma-separated origins, "*" allows all
- APP_ENV / DEBUG_VALIDATION_ERRORS: expose validation details outside production

Values are read on each call so tests can monkeypatch the environment.
"""

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_STT_URL = "https://api.elevenlabs.io/v1/speech-to-text"
DEFAULT_STT_MODEL = "scribe_v2"
DEFAULT_STT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_AUDIO_BYTES = 5 * 1024 * 1024


def _env_truthy(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "y", "on")


def get_elevenlabs_api_key():
    return (os.getenv("ELEVENLABS_API_KEY") or "").strip() or None


def get_stt_url() -> str:
    return (os.getenv("ELEVENLABS_STT_URL") or "").strip() or DEFAULT_STT_URL


def get_stt_model() -> str:
    return (os.getenv("ELEVENLABS_STT_MODEL") or "").strip() or DEFAULT_STT_MODEL


def get_stt_timeout_seconds() -> float:
    raw = (os.getenv("STT_TIMEOUT_SECONDS") or "").strip()
    try:
        return float(raw) if raw else DEFAULT_STT_TIMEOUT_SECONDS
    except ValueError:
        return DEFAULT_STT_TIMEOUT_SECONDS


def get_max_audio_bytes() -> int:
    raw = (os.getenv("MAX_AUDIO_BYTES") or "").strip()
    try:
        return int(raw) if raw else DEFAULT_MAX_AUDIO_BYTES
    except ValueError:
        return DEFAULT_MAX_AUDIO_BYTES


def get_api_key():
    """Return the API key clients must present, or None when auth is disabled."""
    return (os.getenv("API_KEY") or "").strip() or None


def get_cors_origins() -> list:
    raw = (os.getenv("CORS_ORIGINS") or "*").strip()
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def is_debug() -> bool:
    app_env = os.getenv("APP_ENV", "production").lower()
    return _env_truthy("DEBUG_VALIDATION_ERRORS") or app_env in ("dev", "development", "local")
