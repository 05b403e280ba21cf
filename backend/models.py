from typing import List, Optional
from pydantic import BaseModel, Field


class TranscriptSegmentDTO(BaseModel):
    """One persisted transcript segment"""
    start: float
    end: float
    text: str


class TranscriptDTO(BaseModel):
    """Persisted transcript: {"segments": [...], "text": "..."}"""
    segments: List[TranscriptSegmentDTO] = []
    text: str = ""


class CutPointDTO(BaseModel):
    """Cut point as exchanged with the clip editor"""
    start_time: float
    end_time: float
    description: str


class ExtractAudioRequest(BaseModel):
    video_path: str


class ExtractAudioResponse(BaseModel):
    audio_path: str


class TranscribeRequest(BaseModel):
    audio_path: str
    language: Optional[str] = None


class TranscribeResponse(BaseModel):
    transcript_path: str
    transcript: TranscriptDTO
    duration: float
    model: str


class CutPointsRequest(BaseModel):
    """Either a persisted transcript path or an inline transcript"""
    transcript_path: Optional[str] = None
    transcript: Optional[TranscriptDTO] = None
    pause_threshold: Optional[float] = Field(default=None, ge=0.0)


class CutPointsResponse(BaseModel):
    cut_points: List[CutPointDTO]


class HealthResponse(BaseModel):
    status: str = "ok"
    transcoder_available: bool
    transcription_loaded: bool
    model: Optional[str] = None
    config: dict = {}
