"""ProcessVideoUseCase — orchestrates extract → decode → transcribe → cut.

Accepts all ports via dependency injection, so the pipeline runs against
fakes in tests and against ffmpeg/Whisper in production. Each step is also
exposed on its own for callers that drive the pipeline one command at a time.
"""

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from decoding import decode_and_normalize
from domain.errors import ClipEditorUnavailableError
from domain.models import CutPoint, DecodedAudio, Transcript
from ports.clip_editor import ClipEditorPort
from ports.progress import ProgressPort
from ports.transcoder import TranscoderPort
from ports.transcription import TranscriptionPort
from segmentation import DEFAULT_PAUSE_THRESHOLD, segment_by_pauses
from transcript_files import read_transcript, transcript_path_for, write_transcript

logger = logging.getLogger(__name__)


@dataclass
class ProcessRequest:
    """All parameters for a full video run."""
    video_path: str
    output_path: Optional[str] = None
    language: Optional[str] = None
    pause_threshold: float = DEFAULT_PAUSE_THRESHOLD
    apply_zoom_effects: bool = False


@dataclass
class ProcessResult:
    audio_path: str
    transcript_path: str
    transcript: Transcript
    cut_points: list[CutPoint] = field(default_factory=list)
    output_path: Optional[str] = None


class ProcessVideoUseCase:
    def __init__(
        self,
        transcoder: TranscoderPort,
        transcription: TranscriptionPort,
        progress: ProgressPort,
        decoder: Callable[[str], DecodedAudio] = decode_and_normalize,
        clip_editor: Optional[ClipEditorPort] = None,
    ):
        self._transcoder = transcoder
        self._transcription = transcription
        self._progress = progress
        self._decoder = decoder
        self._clip_editor = clip_editor

    @property
    def transcoder(self) -> TranscoderPort:
        return self._transcoder

    @property
    def transcription(self) -> TranscriptionPort:
        return self._transcription

    def extract_audio(self, video_path: str) -> str:
        return self._transcoder.extract_audio(video_path)

    def transcribe_audio(
        self, audio_path: str, language: Optional[str] = None, job_id: Optional[str] = None
    ) -> tuple[str, Transcript]:
        """Decode, transcribe and persist. Returns (transcript_path, transcript).

        A job started here is finished here; a caller passing job_id owns it.
        """
        owns_job = job_id is None
        job_id = job_id or uuid.uuid4().hex[:12]
        try:
            self._progress.report(job_id, "decoding", detail=Path(audio_path).name)
            audio = self._decoder(audio_path)

            self._progress.report(job_id, "transcribing", detail=f"{audio.duration:.1f}s")
            transcript = self._transcription.transcribe(audio, language=language)

            transcript_path = write_transcript(transcript, transcript_path_for(audio_path))
            return str(transcript_path), transcript
        finally:
            if owns_job:
                self._progress.finish(job_id)

    def analyze(
        self, transcript_path: str, pause_threshold: float = DEFAULT_PAUSE_THRESHOLD
    ) -> list[CutPoint]:
        return segment_by_pauses(read_transcript(transcript_path), pause_threshold)

    def render(
        self,
        video_path: str,
        cut_points: list[CutPoint],
        output_path: str,
        apply_zoom_effects: bool = False,
    ) -> str:
        if self._clip_editor is None:
            raise ClipEditorUnavailableError("No clip editor configured", path=video_path)
        return self._clip_editor.render(
            video_path, cut_points, output_path, apply_zoom_effects=apply_zoom_effects
        )

    def execute(self, req: ProcessRequest) -> ProcessResult:
        """Run the full pipeline. Rendering runs only when output_path is set."""
        job_id = uuid.uuid4().hex[:12]
        try:
            # 1. Pull the audio track out of the video
            self._progress.report(job_id, "extracting", detail=Path(req.video_path).name)
            audio_path = self.extract_audio(req.video_path)

            # 2. Decode + transcribe, transcript saved next to the audio
            transcript_path, transcript = self.transcribe_audio(
                audio_path, language=req.language, job_id=job_id
            )

            # 3. Cut points from pauses
            self._progress.report(job_id, "segmenting", detail=f"{len(transcript.segments)} segments")
            cut_points = segment_by_pauses(transcript, req.pause_threshold)

            result = ProcessResult(
                audio_path=audio_path,
                transcript_path=transcript_path,
                transcript=transcript,
                cut_points=cut_points,
            )

            # 4. Optional render
            if req.output_path:
                self._progress.report(job_id, "rendering", detail=f"{len(cut_points)} clips")
                result.output_path = self.render(
                    req.video_path, cut_points, req.output_path, req.apply_zoom_effects
                )

            logger.info(
                f"Processed {req.video_path}: {len(transcript.segments)} segments, "
                f"{len(cut_points)} cut points"
            )
            return result
        finally:
            self._progress.finish(job_id)
