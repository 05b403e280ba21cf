"""faster-whisper adapter for transcription of decoded samples."""

from .transcription import FasterWhisperTranscriptionAdapter

__all__ = ["FasterWhisperTranscriptionAdapter"]
