"""Audio decoding: turns a media file into mono float32 samples at 16kHz.

The pipeline is: open → probe → pick the first track with a real codec →
pull packets until end of stream → convert each decoded block to float32 →
downmix → resample. A corrupt packet is logged and skipped; anything wrong
with the stream itself aborts the decode with DecodeError.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

import numpy as np

from domain.errors import (
    DecodeError,
    MediaIoError,
    PacketDecodeError,
    UnsupportedFormatError,
)
from domain.models import CODEC_NULL, AudioBlock, DecodedAudio, Track
from normalization import downmix_to_mono, resample_nearest
from ports.media import MediaProberPort, MediaReaderPort

logger = logging.getLogger(__name__)

TARGET_SAMPLE_RATE = 16000

Resampler = Callable[[np.ndarray, int, int], np.ndarray]


class SampleConverter:
    """Converts decoded blocks to planar float32 in [-1.0, 1.0).

    Sized from the first block it sees and reused for the rest of the track,
    so the scratch buffer is allocated once per decode.
    """

    def __init__(self, capacity: int, channels: int):
        self.capacity = capacity
        self.channels = channels
        self._buffer = np.empty((channels, capacity), dtype=np.float32)

    def convert(self, block: AudioBlock) -> np.ndarray:
        """Return a (channels, frames) view into the scratch buffer."""
        if block.channels != self.channels:
            raise PacketDecodeError(
                "Channel count changed mid-stream",
                cause=f"expected {self.channels}, got {block.channels}",
            )
        frames = block.frames
        if frames > self.capacity:
            self._buffer = np.empty((self.channels, frames), dtype=np.float32)
            self.capacity = frames

        out = self._buffer[:, :frames]
        data = block.data
        kind = data.dtype.kind
        if kind == "f":
            out[...] = data.T
        elif kind == "i":
            out[...] = data.T / float(2 ** (data.dtype.itemsize * 8 - 1))
        elif kind == "u":
            half = float(2 ** (data.dtype.itemsize * 8 - 1))
            out[...] = (data.T - half) / half
        else:
            raise PacketDecodeError("Unsupported sample format", cause=str(data.dtype))
        return out


def _extension_hint(path: str) -> Optional[str]:
    suffix = Path(path).suffix
    return suffix[1:].lower() if len(suffix) > 1 else None


def _default_prober() -> MediaProberPort:
    from adapters.libsndfile.reader import SoundFileProber
    return SoundFileProber()


def select_track(tracks: list[Track]) -> Track:
    """Return the first track whose codec is recognized."""
    for track in tracks:
        if track.codec != CODEC_NULL:
            return track
    raise UnsupportedFormatError("No supported audio track found")


def _read_track(reader: MediaReaderPort, path: str) -> tuple[np.ndarray, int, Optional[int]]:
    """Pull every packet of the selected track. Returns (planar buffer, channels, rate)."""
    track = select_track(reader.tracks())
    try:
        decoder = reader.make_decoder(track)
    except Exception as e:
        raise UnsupportedFormatError(
            "Failed to create decoder", path=path, cause=f"codec={track.codec}: {e}"
        ) from e

    converter: Optional[SampleConverter] = None
    chunks: list[np.ndarray] = []
    packet_index = 0
    skipped_foreign = 0
    skipped_corrupt = 0

    while True:
        try:
            packet = reader.next_packet()
        except EOFError:
            break
        except Exception as e:
            raise DecodeError("Error reading packet", path=path, cause=str(e)) from e

        if packet.track_id != track.id:
            skipped_foreign += 1
            continue

        packet_index += 1
        try:
            block = decoder.decode(packet)
            if converter is None:
                converter = SampleConverter(block.frames, block.channels)
            chunks.append(converter.convert(block).copy())
        except PacketDecodeError as e:
            skipped_corrupt += 1
            logger.warning(f"Error decoding packet {packet_index} of {path}: {e}")

    if skipped_foreign:
        logger.debug(f"Ignored {skipped_foreign} packets from other tracks in {path}")
    if skipped_corrupt:
        logger.warning(f"Skipped {skipped_corrupt}/{packet_index} corrupt packets in {path}")

    channels = converter.channels if converter else (track.channels or 1)
    if len(chunks) == 1:
        planar = chunks[0]
    elif chunks:
        planar = np.concatenate(chunks, axis=1)
        chunks.clear()
    else:
        planar = np.empty((channels, 0), dtype=np.float32)
    return planar.reshape(-1), channels, track.sample_rate


def decode_and_normalize(
    path: Union[str, os.PathLike],
    prober: Optional[MediaProberPort] = None,
    target_rate: int = TARGET_SAMPLE_RATE,
    resampler: Resampler = resample_nearest,
) -> DecodedAudio:
    """Decode a media file to mono float32 samples at target_rate.

    Raises MediaIoError when the file cannot be opened, UnsupportedFormatError
    when no audio track can be decoded and DecodeError when the packet stream
    fails. The file handle is closed on every path.
    """
    path = os.fspath(path)
    prober = prober or _default_prober()

    try:
        source = open(path, "rb")
    except OSError as e:
        raise MediaIoError("Failed to open audio file", path=path, cause=str(e)) from e

    with source:
        try:
            reader = prober.probe(source, hint=_extension_hint(path))
        except UnsupportedFormatError as e:
            raise UnsupportedFormatError(e.message, path=path, cause=e.cause) from e
        except OSError as e:
            raise MediaIoError("Failed to read audio file", path=path, cause=str(e)) from e

        with reader:
            try:
                samples, channels, source_rate = _read_track(reader, path)
            except UnsupportedFormatError as e:
                if e.path:
                    raise
                raise UnsupportedFormatError(e.message, path=path, cause=e.cause) from e

    mono = downmix_to_mono(samples, channels)
    source_rate = source_rate or target_rate
    if source_rate != target_rate:
        logger.debug(f"Resampling {path} from {source_rate}Hz to {target_rate}Hz")
        mono = resampler(mono, source_rate, target_rate)

    # Buffer is owned by this call; freezing it lets DecodedAudio keep it uncopied
    mono = np.asarray(mono, dtype=np.float32)
    mono.setflags(write=False)
    audio = DecodedAudio(samples=mono, sample_rate=target_rate, channels=1)
    logger.info(
        f"Decoded {path}: {channels} ch @ {source_rate}Hz -> "
        f"{len(audio.samples)} samples ({audio.duration:.2f}s) @ {target_rate}Hz"
    )
    return audio
