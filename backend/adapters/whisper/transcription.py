"""FasterWhisperTranscriptionAdapter — CPU/GPU Whisper ASR over decoded samples.

Receives the decoder's mono 16kHz float32 buffer directly, so no temporary
WAV is written. Decoding is greedy (beam_size=1) with automatic language
detection unless a language is requested.
"""

import logging
from typing import Optional

from domain.errors import TranscriptionError
from domain.models import DecodedAudio, Transcript, TranscriptSegment
from ports.transcription import TranscriptionPort

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "base.en"
EXPECTED_SAMPLE_RATE = 16000


class FasterWhisperTranscriptionAdapter(TranscriptionPort):
    def __init__(self, compute_type: str = "int8", beam_size: int = 1):
        self._compute_type = compute_type
        self._beam_size = beam_size
        self._model_id = DEFAULT_MODEL
        self._model = None

    def load(self, model_id: str = DEFAULT_MODEL, device: str = "cpu") -> None:
        """Load the Whisper model."""
        from faster_whisper import WhisperModel

        self._model_id = model_id
        logger.info(f"Loading Whisper model {model_id} (device={device}, compute_type={self._compute_type})...")
        try:
            self._model = WhisperModel(model_id, device=device, compute_type=self._compute_type)
        except Exception as e:
            logger.error(f"Failed to load Whisper model '{model_id}': {e}")
            raise TranscriptionError("Failed to load Whisper model", cause=str(e)) from e
        logger.info("Whisper model loaded")

    def transcribe(
        self,
        audio: DecodedAudio,
        language: Optional[str] = None,
    ) -> Transcript:
        if self._model is None:
            raise TranscriptionError("Whisper adapter not loaded")
        if audio.sample_rate != EXPECTED_SAMPLE_RATE or audio.channels != 1:
            raise TranscriptionError(
                "Whisper expects mono 16kHz audio",
                cause=f"got {audio.channels} ch @ {audio.sample_rate}Hz",
            )

        logger.info(f"Transcribing {audio.duration:.2f}s of audio")
        try:
            raw_segments, info = self._model.transcribe(
                audio.samples,
                language=language,
                beam_size=self._beam_size,
            )
            segments = [
                TranscriptSegment(start=float(seg.start), end=float(seg.end), text=seg.text.strip())
                for seg in raw_segments
            ]
        except Exception as e:
            logger.error(f"Whisper transcription error: {e}", exc_info=True)
            raise TranscriptionError("Failed to run Whisper inference", cause=str(e)) from e

        logger.info(
            f"Transcribed {len(segments)} segments "
            f"(language={getattr(info, 'language', language)})"
        )
        return Transcript.from_segments(segments)

    def model_name(self) -> str:
        return f"whisper-{self._model_id}"

    def is_loaded(self) -> bool:
        return self._model is not None
