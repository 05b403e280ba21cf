"""FFmpegTranscoderAdapter — audio extraction from video via ffmpeg."""

import os
import logging
import subprocess
from pathlib import Path

from domain.errors import TranscoderError
from ports.transcoder import TranscoderPort

logger = logging.getLogger(__name__)


class FFmpegTranscoderAdapter(TranscoderPort):
    def __init__(self, binary: str = "ffmpeg", sample_rate: int = 16000):
        self._binary = binary
        self._sample_rate = sample_rate

    def output_path_for(self, video_path: str) -> str:
        video = Path(video_path)
        if not video.stem:
            raise TranscoderError("Invalid video file path", path=video_path)
        return str(video.parent / f"{video.stem}_audio.wav")

    def extract_audio(self, video_path: str) -> str:
        output_path = self.output_path_for(video_path)
        cmd = [
            self._binary,
            "-i", video_path,
            "-vn",
            "-acodec", "pcm_s16le",
            "-ar", str(self._sample_rate),
            "-ac", "1",
            "-y",
            output_path,
        ]
        logger.info(f"Extracting audio: {video_path} -> {output_path}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            logger.error(f"Failed to run {self._binary}: {e}")
            raise TranscoderError(f"Failed to run {self._binary}", path=video_path, cause=str(e)) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            logger.error(f"Error extracting audio: {stderr}")
            if os.path.exists(output_path):
                os.unlink(output_path)
            raise TranscoderError("FFmpeg command failed", path=video_path, cause=stderr or None)
        return output_path

    def is_available(self) -> bool:
        try:
            subprocess.run([self._binary, "-version"], capture_output=True)
        except OSError:
            return False
        return True
