"""Shared pytest fixtures."""

import numpy as np
import pytest
import soundfile as sf


@pytest.fixture()
def write_wav(tmp_path):
    """Write samples shaped (frames,) or (frames, channels) to a WAV file."""

    def _write(name, data, sample_rate, subtype="FLOAT"):
        path = tmp_path / name
        sf.write(str(path), np.asarray(data), sample_rate, subtype=subtype)
        return path

    return _write
