"""TranscriptionPort — abstract interface for ASR engines."""

from abc import ABC, abstractmethod
from typing import Optional

from domain.models import DecodedAudio, Transcript


class TranscriptionPort(ABC):
    @abstractmethod
    def load(self, model_id: str, device: str = "cpu") -> None:
        """Load the ASR model onto the specified device."""

    @abstractmethod
    def transcribe(
        self,
        audio: DecodedAudio,
        language: Optional[str] = None,
    ) -> Transcript:
        """Transcribe mono 16kHz samples into timestamped segments."""

    @abstractmethod
    def model_name(self) -> str:
        """Return the human-readable model name for API responses."""

    @abstractmethod
    def is_loaded(self) -> bool:
        """Whether the model has been loaded and is ready for inference."""
