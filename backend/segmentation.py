"""Pause-based cut-point detection over transcript segments."""

import logging
import os
from typing import Union

from domain.models import CutPoint, Transcript
from transcript_files import read_transcript

logger = logging.getLogger(__name__)

DEFAULT_PAUSE_THRESHOLD = 1.0


def segment_by_pauses(
    transcript: Transcript,
    pause_threshold_seconds: float = DEFAULT_PAUSE_THRESHOLD,
) -> list[CutPoint]:
    """Split a transcript into contiguous cut points at long pauses.

    A gap between one segment's end and the next segment's start that is
    strictly greater than pause_threshold_seconds closes the current cut
    point. The first cut point starts at 0.0 and the last always ends at the
    final segment's end, so an empty transcript is the only input that
    yields no cut points.

    Segments are expected in non-decreasing start order and are not sorted
    here. Overlapping or out-of-order segments give a negative gap, which
    never triggers a break and is absorbed into the current cut point.

    Args:
        transcript: Transcript whose segments are in start order.
        pause_threshold_seconds: Silence length that counts as a natural break.

    Returns:
        List of CutPoint, described "Segment 1", "Segment 2", ...

    Raises:
        ValueError: pause_threshold_seconds is negative. This is a parameter
            check only; no transcript content is ever rejected.
    """
    if pause_threshold_seconds < 0:
        raise ValueError(f"pause_threshold_seconds must be >= 0, got {pause_threshold_seconds}")

    segments = transcript.segments
    cut_points: list[CutPoint] = []
    current_start = 0.0

    for prev, curr in zip(segments, segments[1:]):
        pause_duration = curr.start - prev.end
        if pause_duration > pause_threshold_seconds:
            cut_points.append(CutPoint(
                start_time=current_start,
                end_time=prev.end,
                description=f"Segment {len(cut_points) + 1}",
            ))
            current_start = curr.start

    if segments:
        cut_points.append(CutPoint(
            start_time=current_start,
            end_time=segments[-1].end,
            description=f"Segment {len(cut_points) + 1}",
        ))

    logger.info(
        f"Found {len(cut_points)} cut points in {len(segments)} segments "
        f"(pause threshold {pause_threshold_seconds}s)"
    )
    return cut_points


def analyze_transcript_for_cuts(
    transcript_path: Union[str, os.PathLike],
    pause_threshold_seconds: float = DEFAULT_PAUSE_THRESHOLD,
) -> list[CutPoint]:
    """Load a persisted transcript and propose cut points for it."""
    transcript = read_transcript(transcript_path)
    return segment_by_pauses(transcript, pause_threshold_seconds)
