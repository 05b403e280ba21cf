"""libsndfile adapter for container probing and PCM packet reading."""

from .reader import SoundFileProber

__all__ = ["SoundFileProber"]
