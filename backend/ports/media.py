"""MediaPorts — abstract container probing, packet reading and decoding."""

from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from domain.models import AudioBlock, Packet, Track


class PacketDecoderPort(ABC):
    @abstractmethod
    def decode(self, packet: Packet) -> AudioBlock:
        """Decode one packet. Raises PacketDecodeError for a bad packet."""


class MediaReaderPort(ABC):
    @abstractmethod
    def tracks(self) -> list[Track]:
        """Return every track the container lists, in container order."""

    @abstractmethod
    def next_packet(self) -> Packet:
        """Return the next packet. Raises EOFError at end of stream."""

    @abstractmethod
    def make_decoder(self, track: Track) -> PacketDecoderPort:
        """Build a decoder for the given track's codec parameters."""

    def close(self) -> None:
        """Release container resources. The source stream is owned by the caller."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class MediaProberPort(ABC):
    @abstractmethod
    def probe(self, source: BinaryIO, hint: Optional[str] = None) -> MediaReaderPort:
        """Detect the container format of an open byte stream.

        hint is the file extension without the dot, used only to improve
        probing. Raises UnsupportedFormatError when nothing matches.
        """
