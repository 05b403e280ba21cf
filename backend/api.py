"""HTTP surface for the desktop shell: extract, transcribe and cut commands."""

import logging
import threading
from functools import partial
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from config import (
    Config,
    create_media_prober,
    create_progress_adapter,
    create_transcoder,
    create_transcription_adapter,
    get_config,
)
from decoding import decode_and_normalize
from domain.errors import (
    AudioPipelineError,
    ClipEditorUnavailableError,
    DecodeError,
    MediaIoError,
    TranscoderError,
    TranscriptFormatError,
    TranscriptionError,
    UnsupportedFormatError,
)
from mappers import cut_points_to_dtos, dto_to_transcript, transcript_to_dto
from models import (
    CutPointsRequest,
    CutPointsResponse,
    ExtractAudioRequest,
    ExtractAudioResponse,
    HealthResponse,
    TranscribeRequest,
    TranscribeResponse,
)
from segmentation import segment_by_pauses
from use_cases.process_video import ProcessVideoUseCase

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    MediaIoError: 404,
    UnsupportedFormatError: 415,
    TranscriptFormatError: 400,
    DecodeError: 422,
    TranscoderError: 502,
    TranscriptionError: 502,
    ClipEditorUnavailableError: 501,
}


def build_use_case(cfg: Config) -> ProcessVideoUseCase:
    decoder = partial(
        decode_and_normalize,
        prober=create_media_prober(),
        target_rate=cfg.target_sample_rate,
    )
    return ProcessVideoUseCase(
        transcoder=create_transcoder(cfg),
        transcription=create_transcription_adapter(cfg),
        progress=create_progress_adapter(),
        decoder=decoder,
    )


def create_app(use_case: Optional[ProcessVideoUseCase] = None, cfg: Optional[Config] = None) -> FastAPI:
    cfg = cfg or get_config()
    use_case = use_case or build_use_case(cfg)

    app = FastAPI(title="Cutpoint Studio", version="0.1.0")
    app.state.use_case = use_case
    app.state.config = cfg
    model_lock = threading.Lock()

    def ensure_model_loaded() -> None:
        # LOAD_MODEL_ON_STARTUP=false defers loading to the first transcribe request
        with model_lock:
            if not use_case.transcription.is_loaded():
                use_case.transcription.load(cfg.whisper_model, device=cfg.whisper_device)

    @app.exception_handler(AudioPipelineError)
    async def pipeline_error_handler(request: Request, exc: AudioPipelineError):
        status = next(
            (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 500
        )
        logger.error(f"{request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=status,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.get("/health", response_model=HealthResponse)
    def health():
        transcription = use_case.transcription
        return HealthResponse(
            transcoder_available=use_case.transcoder.is_available(),
            transcription_loaded=transcription.is_loaded(),
            model=transcription.model_name() if transcription.is_loaded() else None,
            config=cfg.as_dict(),
        )

    @app.post("/v1/audio/extract", response_model=ExtractAudioResponse)
    def extract_audio(req: ExtractAudioRequest):
        return ExtractAudioResponse(audio_path=use_case.extract_audio(req.video_path))

    @app.post("/v1/audio/transcribe", response_model=TranscribeResponse)
    def transcribe_audio(req: TranscribeRequest):
        ensure_model_loaded()
        transcript_path, transcript = use_case.transcribe_audio(
            req.audio_path, language=req.language or cfg.language
        )
        duration = transcript.segments[-1].end if transcript.segments else 0.0
        return TranscribeResponse(
            transcript_path=transcript_path,
            transcript=transcript_to_dto(transcript),
            duration=duration,
            model=use_case.transcription.model_name(),
        )

    @app.post("/v1/transcripts/cuts", response_model=CutPointsResponse)
    def cut_points(req: CutPointsRequest):
        threshold = req.pause_threshold if req.pause_threshold is not None else cfg.pause_threshold
        if req.transcript is not None:
            points = segment_by_pauses(dto_to_transcript(req.transcript), threshold)
        elif req.transcript_path:
            points = use_case.analyze(req.transcript_path, threshold)
        else:
            raise HTTPException(status_code=400, detail="Provide transcript or transcript_path")
        return CutPointsResponse(cut_points=cut_points_to_dtos(points))

    return app
