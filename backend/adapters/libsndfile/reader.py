"""SoundFileProber — container probing and PCM packet reading via libsndfile.

libsndfile exposes exactly one audio stream per file, so the reader lists a
single track (id 0). Packets are fixed-size blocks of frames read in the
narrowest dtype that holds the file's subtype without loss; conversion to
float happens later in the decoder's sample converter.
"""

import logging
from typing import BinaryIO, Optional

import numpy as np
import soundfile

from domain.errors import PacketDecodeError, UnsupportedFormatError
from domain.models import CODEC_NULL, AudioBlock, Packet, Track
from ports.media import MediaProberPort, MediaReaderPort, PacketDecoderPort

logger = logging.getLogger(__name__)

TRACK_ID = 0

# Frames per packet. Matches a typical compressed-frame order of magnitude.
DEFAULT_BLOCK_FRAMES = 4096

_INT16_SUBTYPES = {"PCM_S8", "PCM_U8", "PCM_16", "ULAW", "ALAW", "IMA_ADPCM", "MS_ADPCM", "GSM610"}
_INT32_SUBTYPES = {"PCM_24", "PCM_32"}


def packet_dtype(subtype: str) -> str:
    """Read dtype that holds a libsndfile subtype without loss."""
    if subtype in _INT16_SUBTYPES:
        return "int16"
    if subtype in _INT32_SUBTYPES:
        return "int32"
    if subtype == "DOUBLE":
        return "float64"
    return "float32"


class PcmPacketDecoder(PacketDecoderPort):
    """Validates a block of PCM frames against the track's channel layout."""

    def __init__(self, track: Track):
        self._track = track
        self._channels = track.channels or 1

    def decode(self, packet: Packet) -> AudioBlock:
        data = np.asarray(packet.data)
        if data.ndim == 1 and self._channels == 1:
            data = data.reshape(-1, 1)
        if data.ndim != 2 or data.shape[1] != self._channels:
            raise PacketDecodeError(
                "Packet does not match track layout",
                cause=f"shape={data.shape}, channels={self._channels}",
            )
        return AudioBlock(data=data, sample_rate=self._track.sample_rate, channels=self._channels)


class SoundFileReader(MediaReaderPort):
    def __init__(self, sound_file: soundfile.SoundFile, block_frames: int = DEFAULT_BLOCK_FRAMES):
        self._file = sound_file
        self._block_frames = block_frames
        self._dtype = packet_dtype(sound_file.subtype)

    def tracks(self) -> list[Track]:
        codec = self._file.subtype if self._file.channels > 0 and self._file.subtype else CODEC_NULL
        return [
            Track(
                id=TRACK_ID,
                codec=codec,
                sample_rate=self._file.samplerate,
                channels=self._file.channels,
            )
        ]

    def next_packet(self) -> Packet:
        data = self._file.read(self._block_frames, dtype=self._dtype, always_2d=True)
        if len(data) == 0:
            raise EOFError("end of stream")
        return Packet(track_id=TRACK_ID, data=data)

    def make_decoder(self, track: Track) -> PacketDecoderPort:
        return PcmPacketDecoder(track)

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


class SoundFileProber(MediaProberPort):
    def __init__(self, block_frames: int = DEFAULT_BLOCK_FRAMES):
        self._block_frames = block_frames

    def probe(self, source: BinaryIO, hint: Optional[str] = None) -> MediaReaderPort:
        known_formats = soundfile.available_formats()
        try:
            sound_file = soundfile.SoundFile(source)
        except soundfile.SoundFileError as e:
            cause = str(e)
            if hint and hint.upper() not in known_formats:
                cause += f"; extension '.{hint}' is not a libsndfile format"
            raise UnsupportedFormatError("Failed to probe media format", cause=cause) from e

        if hint and hint.upper() in known_formats and sound_file.format != hint.upper():
            logger.debug(f"Extension hint '{hint}' but probed format is {sound_file.format}")
        logger.debug(
            f"Probed {sound_file.format}/{sound_file.subtype}: "
            f"{sound_file.samplerate}Hz, {sound_file.channels} ch, {sound_file.frames} frames"
        )
        return SoundFileReader(sound_file, block_frames=self._block_frames)
