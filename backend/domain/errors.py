"""Error taxonomy for the audio pipeline.

Decoder errors carry the offending path and the underlying cause so a bad
file, a missing codec and a filesystem problem read differently.
"""

from typing import Optional


class AudioPipelineError(Exception):
    """Base class for every failure the pipeline reports to callers."""

    def __init__(self, message: str, path: Optional[str] = None, cause: Optional[str] = None):
        self.message = message
        self.path = path
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        details = []
        if self.path:
            details.append(f"path={self.path}")
        if self.cause:
            details.append(f"cause={self.cause}")
        if not details:
            return self.message
        return f"{self.message} ({', '.join(details)})"


class MediaIoError(AudioPipelineError):
    """The file could not be opened or read."""


class UnsupportedFormatError(AudioPipelineError):
    """No decodable audio track was found."""


class DecodeError(AudioPipelineError):
    """The packet stream failed in a way that stops the whole decode."""


class PacketDecodeError(AudioPipelineError):
    """A single packet could not be decoded; the decode can continue."""


class TranscoderError(AudioPipelineError):
    """The external transcoder could not produce an audio file."""


class TranscriptionError(AudioPipelineError):
    """The speech model could not produce a transcript."""


class TranscriptFormatError(AudioPipelineError):
    """A persisted transcript or cut-point file has the wrong shape."""


class ClipEditorUnavailableError(AudioPipelineError):
    """No clip editor is configured for rendering."""
