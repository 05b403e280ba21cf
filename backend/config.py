import os
import logging
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8001
DEFAULT_TARGET_SAMPLE_RATE = 16000
DEFAULT_PAUSE_THRESHOLD = 1.0
DEFAULT_FFMPEG_BINARY = "ffmpeg"
DEFAULT_WHISPER_MODEL = "base.en"


class Config:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super(Config, cls).__new__(cls)
            instance._initialize()
            cls._instance = instance
        return cls._instance

    def _initialize(self):
        self.host = os.environ.get("HOST", DEFAULT_HOST)
        self.port = int(os.environ.get("PORT", DEFAULT_PORT))
        self.debug = os.environ.get("DEBUG", "0") == "1"
        self.target_sample_rate = int(os.environ.get("TARGET_SAMPLE_RATE", DEFAULT_TARGET_SAMPLE_RATE))
        self.pause_threshold = float(os.environ.get("PAUSE_THRESHOLD", DEFAULT_PAUSE_THRESHOLD))
        self.ffmpeg_binary = os.environ.get("FFMPEG_BINARY", DEFAULT_FFMPEG_BINARY)
        self.whisper_model = os.environ.get("WHISPER_MODEL", DEFAULT_WHISPER_MODEL)
        self.whisper_device = os.environ.get("WHISPER_DEVICE", "cpu").lower()
        self.whisper_compute_type = os.environ.get("WHISPER_COMPUTE_TYPE", "int8")
        self.load_model_on_startup = os.environ.get("LOAD_MODEL_ON_STARTUP", "true").lower() == "true"

        # Empty or "auto" means let the model detect the language
        language = os.environ.get("LANGUAGE", "").strip()
        self.language: Optional[str] = None if language in ("", "auto") else language

        if self.pause_threshold < 0:
            raise ValueError(f"PAUSE_THRESHOLD must be >= 0, got {self.pause_threshold}")

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next Config() re-reads the environment."""
        cls._instance = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "target_sample_rate": self.target_sample_rate,
            "pause_threshold": self.pause_threshold,
            "ffmpeg_binary": self.ffmpeg_binary,
            "whisper_model": self.whisper_model,
            "whisper_device": self.whisper_device,
            "whisper_compute_type": self.whisper_compute_type,
            "language": self.language or "auto",
        }


def get_config() -> Config:
    return Config()


def create_media_prober():
    """Create the container prober (always libsndfile)."""
    from adapters.libsndfile.reader import SoundFileProber
    return SoundFileProber()


def create_transcoder(cfg: Config):
    """Create the audio extraction adapter (always FFmpeg)."""
    from adapters.ffmpeg.transcoder import FFmpegTranscoderAdapter
    return FFmpegTranscoderAdapter(binary=cfg.ffmpeg_binary, sample_rate=cfg.target_sample_rate)


def create_transcription_adapter(cfg: Config):
    """Create the Whisper adapter and load it when LOAD_MODEL_ON_STARTUP is set.

    Uses a lazy import so faster-whisper is only loaded when transcription is used.
    """
    from adapters.whisper.transcription import FasterWhisperTranscriptionAdapter
    transcription = FasterWhisperTranscriptionAdapter(compute_type=cfg.whisper_compute_type)
    if cfg.load_model_on_startup:
        transcription.load(cfg.whisper_model, device=cfg.whisper_device)
    logger.info(f"Transcription adapter: {type(transcription).__name__} ({cfg.whisper_model})")
    return transcription


def create_progress_adapter():
    from adapters.local.log_progress import LogProgressAdapter
    return LogProgressAdapter()
