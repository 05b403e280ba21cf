import json

import numpy as np
import pytest
from fastapi.testclient import TestClient

from api import create_app
from config import Config
from domain.errors import TranscoderError, TranscriptionError
from domain.models import DecodedAudio, Transcript, TranscriptSegment
from ports.progress import ProgressPort
from ports.transcoder import TranscoderPort
from ports.transcription import TranscriptionPort
from use_cases.process_video import ProcessVideoUseCase


class StubTranscoder(TranscoderPort):
    def extract_audio(self, video_path):
        if video_path.endswith(".broken"):
            raise TranscoderError("FFmpeg command failed", path=video_path, cause="Invalid data")
        return video_path.rsplit(".", 1)[0] + "_audio.wav"

    def is_available(self):
        return True


class StubTranscription(TranscriptionPort):
    def __init__(self, loaded=True, fail_load=False):
        self.loaded = loaded
        self.fail_load = fail_load
        self.loads = []

    def load(self, model_id, device="cpu"):
        self.loads.append((model_id, device))
        if self.fail_load:
            raise TranscriptionError("Failed to load Whisper model", cause="no such model")
        self.loaded = True

    def transcribe(self, audio, language=None):
        return Transcript.from_segments([
            TranscriptSegment(0.0, 1.0, "one"),
            TranscriptSegment(4.0, 5.0, "two"),
        ])

    def model_name(self):
        return "stub"

    def is_loaded(self):
        return self.loaded


class SilentProgress(ProgressPort):
    def report(self, job_id, stage, progress=0.0, detail=None):
        pass


@pytest.fixture()
def config(monkeypatch):
    monkeypatch.setenv("PAUSE_THRESHOLD", "1.0")
    Config.reset()
    yield Config()
    Config.reset()


def _client(config, transcription=None):
    use_case = ProcessVideoUseCase(
        transcoder=StubTranscoder(),
        transcription=transcription or StubTranscription(),
        progress=SilentProgress(),
        decoder=lambda path: DecodedAudio(np.zeros(160, dtype=np.float32), 16000, 1),
    )
    return TestClient(create_app(use_case=use_case, cfg=config))


def test_health_reports_adapters_and_config(config):
    resp = _client(config).get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["transcoder_available"] is True
    assert body["transcription_loaded"] is True
    assert body["model"] == "stub"
    assert body["config"]["pause_threshold"] == 1.0


def test_extract_returns_audio_path(config):
    resp = _client(config).post("/v1/audio/extract", json={"video_path": "/videos/talk.mp4"})

    assert resp.status_code == 200
    assert resp.json() == {"audio_path": "/videos/talk_audio.wav"}


def test_transcoder_failure_is_reported_with_context(config):
    resp = _client(config).post("/v1/audio/extract", json={"video_path": "/videos/talk.broken"})

    assert resp.status_code == 502
    body = resp.json()
    assert body["error"] == "TranscoderError"
    assert "/videos/talk.broken" in body["detail"]
    assert "Invalid data" in body["detail"]


def test_transcribe_persists_and_returns_transcript(config, tmp_path):
    audio_path = tmp_path / "talk_audio.wav"

    resp = _client(config).post("/v1/audio/transcribe", json={"audio_path": str(audio_path)})

    assert resp.status_code == 200
    body = resp.json()
    assert body["transcript_path"] == str(tmp_path / "talk_audio.json")
    assert body["transcript"]["text"] == "one two"
    assert body["duration"] == 5.0
    assert json.loads((tmp_path / "talk_audio.json").read_text())["text"] == "one two"


def test_transcribe_loads_the_model_on_first_request(config, tmp_path):
    transcription = StubTranscription(loaded=False)
    client = _client(config, transcription)

    for name in ("a.wav", "b.wav"):
        resp = client.post("/v1/audio/transcribe", json={"audio_path": str(tmp_path / name)})
        assert resp.status_code == 200

    assert transcription.loads == [(config.whisper_model, config.whisper_device)]


def test_model_load_failure_is_reported(config, tmp_path):
    client = _client(config, StubTranscription(loaded=False, fail_load=True))

    resp = client.post("/v1/audio/transcribe", json={"audio_path": str(tmp_path / "a.wav")})

    assert resp.status_code == 502
    assert resp.json()["error"] == "TranscriptionError"


def test_cut_points_from_inline_transcript(config):
    payload = {
        "transcript": {
            "segments": [
                {"start": 0, "end": 2, "text": "a"},
                {"start": 5, "end": 7, "text": "b"},
            ],
            "text": "a b",
        },
    }

    resp = _client(config).post("/v1/transcripts/cuts", json=payload)

    assert resp.status_code == 200
    assert resp.json()["cut_points"] == [
        {"start_time": 0.0, "end_time": 2.0, "description": "Segment 1"},
        {"start_time": 5.0, "end_time": 7.0, "description": "Segment 2"},
    ]


def test_cut_points_from_transcript_file_with_custom_threshold(config, tmp_path):
    path = tmp_path / "t.json"
    path.write_text(json.dumps({
        "segments": [{"start": 0, "end": 2, "text": "a"}, {"start": 5, "end": 7, "text": "b"}],
        "text": "a b",
    }))

    resp = _client(config).post(
        "/v1/transcripts/cuts", json={"transcript_path": str(path), "pause_threshold": 5.0}
    )

    assert resp.status_code == 200
    assert len(resp.json()["cut_points"]) == 1


def test_cut_points_for_missing_transcript_file(config, tmp_path):
    resp = _client(config).post(
        "/v1/transcripts/cuts", json={"transcript_path": str(tmp_path / "missing.json")}
    )

    assert resp.status_code == 404
    assert resp.json()["error"] == "MediaIoError"


def test_cut_points_need_a_transcript(config):
    resp = _client(config).post("/v1/transcripts/cuts", json={})

    assert resp.status_code == 400


def test_negative_threshold_is_a_validation_error(config):
    resp = _client(config).post(
        "/v1/transcripts/cuts", json={"transcript": {"segments": []}, "pause_threshold": -1}
    )

    assert resp.status_code == 422
