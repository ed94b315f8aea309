import pytest
from fastapi.testclient import TestClient

from voiceguard.main import app
from voiceguard.models.types import TranscriptWord


def words_with_gaps(gaps, duration=0.3):
    """Build consecutive words separated by the given silences."""
    words = []
    t = 0.0
    for i in range(len(gaps) + 1):
        words.append(TranscriptWord(text=f"w{i}", start=t, end=t + duration))
        t += duration
        if i < len(gaps):
            t += gaps[i]
    return words


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    return TestClient(app)
