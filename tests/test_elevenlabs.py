import asyncio

import pytest
from aiohttp import test_utils, web

from voiceguard.utils.elevenlabs import ElevenLabsClient, to_transcription_input
from voiceguard.utils.errors import MalformedProviderResponse, ProviderUnavailable


def test_full_response_mapping():
    payload = {
        "text": "Hello there",
        "language_code": "tam",
        "words": [
            {"text": "Hello", "start": 0.0, "end": 0.4, "type": "word"},
            {"text": "there", "start": 0.5, "end": 0.9, "type": "word"},
        ],
        "audio_events": [{"type": "laughter"}],
    }
    transcription = to_transcription_input(payload)
    assert transcription.text == "Hello there"
    assert transcription.languageCode == "tam"
    assert [w.text for w in transcription.words] == ["Hello", "there"]
    assert transcription.words[1].start == 0.5
    assert transcription.audioEvents[0].type == "laughter"


def test_missing_fields_degrade_to_empty():
    transcription = to_transcription_input({})
    assert transcription.text == ""
    assert transcription.languageCode == "en"
    assert transcription.words == []
    assert transcription.audioEvents == []


def test_malformed_entries_are_skipped():
    payload = {
        "text": "hi",
        "words": [{"text": "hi"}, {"start": "0", "end": 1}, {"start": 0, "end": 0.2}, "junk"],
        "audio_events": [{"kind": "breath"}, {"type": None}, {"type": "cough"}],
    }
    transcription = to_transcription_input(payload)
    assert len(transcription.words) == 1
    assert [e.type for e in transcription.audioEvents] == ["cough"]


def test_non_list_words_treated_as_empty():
    transcription = to_transcription_input({"text": "hi", "words": None, "audio_events": "x"})
    assert transcription.words == []
    assert transcription.audioEvents == []


@pytest.mark.parametrize("payload", [None, [], "text"])
def test_non_object_response_is_malformed(payload):
    with pytest.raises(MalformedProviderResponse):
        to_transcription_input(payload)


def test_missing_api_key_is_provider_failure(monkeypatch):
    monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
    with pytest.raises(ProviderUnavailable) as exc_info:
        asyncio.run(ElevenLabsClient().transcribe_async(b"audio", mime_type="audio/wav"))
    assert exc_info.value.message == "ElevenLabs API key not configured"


def run_against(monkeypatch, handler, **kwargs):
    """Run transcribe_async against a local server that answers with handler."""
    async def run():
        app = web.Application()
        app.router.add_post("/v1/speech-to-text", handler)
        server = test_utils.TestServer(app)
        await server.start_server()
        try:
            monkeypatch.setenv("ELEVENLABS_STT_URL", str(server.make_url("/v1/speech-to-text")))
            return await ElevenLabsClient().transcribe_async(b"audio-bytes", **kwargs)
        finally:
            await server.close()

    monkeypatch.setenv("ELEVENLABS_API_KEY", "test-key")
    monkeypatch.delenv("ELEVENLABS_STT_MODEL", raising=False)
    return asyncio.run(run())


def test_request_form_and_headers(monkeypatch):
    received = {}

    async def handler(request):
        form = await request.post()
        received["api_key"] = request.headers.get("xi-api-key")
        received["fields"] = {k: form[k] for k in ("model_id", "tag_audio_events", "diarize")}
        upload = form["file"]
        received["file"] = (upload.filename, upload.content_type, upload.file.read())
        return web.json_response({"text": "hello", "language_code": "en", "words": []})

    result = run_against(monkeypatch, handler, mime_type="audio/mpeg")
    assert result["text"] == "hello"
    assert received["api_key"] == "test-key"
    assert received["fields"] == {"model_id": "scribe_v2", "tag_audio_events": "true", "diarize": "true"}
    assert received["file"] == ("audio.mp3", "audio/mpeg", b"audio-bytes")


def test_non_success_status_is_provider_failure(monkeypatch):
    async def handler(request):
        return web.Response(status=500, text="internal error")

    with pytest.raises(ProviderUnavailable) as exc_info:
        run_against(monkeypatch, handler)
    assert exc_info.value.message == "Speech-to-text failed: 500"


def test_undecodable_error_body_is_provider_failure(monkeypatch):
    async def handler(request):
        return web.Response(status=502, body=b"\xff\xfe\xfa bad gateway", content_type="text/plain", charset="utf-8")

    with pytest.raises(ProviderUnavailable) as exc_info:
        run_against(monkeypatch, handler)
    assert exc_info.value.message == "Speech-to-text failed: 502"


@pytest.mark.parametrize("body", [b"not json", b"", b"[1, 2]"])
def test_non_object_body_is_malformed(monkeypatch, body):
    async def handler(request):
        return web.Response(status=200, body=body, content_type="application/json")

    with pytest.raises(MalformedProviderResponse):
        run_against(monkeypatch, handler)


def test_timeout_is_provider_failure(monkeypatch):
    async def handler(request):
        await asyncio.sleep(0.5)
        return web.json_response({"text": "late"})

    with pytest.raises(ProviderUnavailable):
        run_against(monkeypatch, handler, timeout_seconds=0.05)
