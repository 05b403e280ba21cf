"""Channel downmixing and sample-rate conversion for decoded audio.

Both functions take and return flat float32 buffers. The resampler is a
nearest-neighbour picker, good enough for speech models; a bandlimited
resampler can replace it as long as it keeps the same signature
(samples, source_rate, target_rate) -> samples.
"""

import numpy as np


def downmix_to_mono(samples: np.ndarray, channels: int) -> np.ndarray:
    """Average a planar buffer down to one channel.

    The buffer holds each channel contiguously: channel c's sample i sits at
    offset i + c * samples_per_channel. The output has len // channels
    samples; a trailing partial frame is dropped.
    """
    samples = np.asarray(samples, dtype=np.float32)
    if channels <= 1:
        return samples

    samples_per_channel = len(samples) // channels
    planes = samples[: samples_per_channel * channels].reshape(channels, samples_per_channel)
    return planes.mean(axis=0, dtype=np.float32)


def resample_nearest(samples: np.ndarray, source_rate: int, target_rate: int) -> np.ndarray:
    """Nearest-neighbour resample.

    Output length is floor(len * target_rate / source_rate) and output i is
    taken from source index floor(i * source_rate / target_rate). Indices
    past the end of the source truncate the output instead of padding it.
    """
    if source_rate <= 0 or target_rate <= 0:
        raise ValueError(f"Sample rates must be positive, got {source_rate} -> {target_rate}")

    samples = np.asarray(samples, dtype=np.float32)
    if source_rate == target_rate or len(samples) == 0:
        return samples

    new_len = len(samples) * target_rate // source_rate
    indices = np.arange(new_len, dtype=np.int64) * source_rate // target_rate
    in_bounds = indices < len(samples)
    if not in_bounds.all():
        indices = indices[: int(np.argmin(in_bounds))]
    return samples[indices]
