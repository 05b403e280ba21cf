"""TranscoderPort — abstract interface for pulling audio out of video files."""

from abc import ABC, abstractmethod


class TranscoderPort(ABC):
    @abstractmethod
    def extract_audio(self, video_path: str) -> str:
        """Extract a 16kHz mono WAV next to the video. Returns the WAV path."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the transcoder binary can be executed."""
