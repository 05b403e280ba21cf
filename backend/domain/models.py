"""Framework-agnostic domain models for Cutpoint Studio.

Processing logic works on these dataclasses only. The Pydantic DTOs in
models.py describe the persisted JSON shape, with mappers at the boundary.
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

# Codec marker for a track the container lists but no decoder recognizes.
CODEC_NULL = "null"


@dataclass(frozen=True)
class DecodedAudio:
    """Normalized sample buffer produced by the decoder.

    Writeable arrays are copied and frozen; an already read-only float32
    array is kept as is.
    """
    samples: np.ndarray
    sample_rate: int
    channels: int

    def __post_init__(self):
        samples = np.asarray(self.samples, dtype=np.float32)
        if samples.flags.writeable:
            samples = samples.copy()
            samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    @property
    def duration(self) -> float:
        if not self.sample_rate:
            return 0.0
        return len(self.samples) / self.sample_rate


@dataclass
class TranscriptSegment:
    """A single transcribed speech segment in seconds from the start."""
    start: float
    end: float
    text: str


@dataclass
class Transcript:
    """Ordered segments plus the space-joined text built at construction."""
    segments: list[TranscriptSegment] = field(default_factory=list)
    text: str = ""

    @classmethod
    def from_segments(cls, segments: list[TranscriptSegment]) -> "Transcript":
        return cls(
            segments=list(segments),
            text=" ".join(seg.text for seg in segments),
        )


@dataclass
class CutPoint:
    """A proposed edit interval handed to the clip editor."""
    start_time: float
    end_time: float
    description: str


@dataclass(frozen=True)
class Track:
    """A stream listed by a container."""
    id: int
    codec: str
    sample_rate: Optional[int] = None
    channels: Optional[int] = None


@dataclass(frozen=True)
class Packet:
    """One unit of encoded data pulled from a container."""
    track_id: int
    data: object


@dataclass
class AudioBlock:
    """Decoded samples for one packet, shaped (frames, channels)."""
    data: np.ndarray
    sample_rate: int
    channels: int

    @property
    def frames(self) -> int:
        return int(self.data.shape[0])
