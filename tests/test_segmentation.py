import copy

import numpy as np
import pytest

from domain.models import CutPoint, Transcript, TranscriptSegment
from segmentation import analyze_transcript_for_cuts, segment_by_pauses
from transcript_files import write_transcript


def _transcript(*spans):
    return Transcript.from_segments([TranscriptSegment(start, end, text) for start, end, text in spans])


def test_long_pause_splits_into_two_cut_points():
    cut_points = segment_by_pauses(_transcript((0, 2, "a"), (5, 7, "b")), 1.0)

    assert cut_points == [
        CutPoint(start_time=0.0, end_time=2, description="Segment 1"),
        CutPoint(start_time=5, end_time=7, description="Segment 2"),
    ]


def test_short_pause_keeps_a_single_cut_point():
    cut_points = segment_by_pauses(_transcript((0, 2, "a"), (2.5, 4, "b")), 1.0)

    assert cut_points == [CutPoint(start_time=0.0, end_time=4, description="Segment 1")]


def test_empty_transcript_has_no_cut_points():
    assert segment_by_pauses(Transcript(), 1.0) == []


def test_single_segment_gives_one_cut_point():
    cut_points = segment_by_pauses(_transcript((0.0, 3.5, "hello")))

    assert cut_points == [CutPoint(start_time=0.0, end_time=3.5, description="Segment 1")]


def test_timeline_starts_at_zero_even_when_speech_starts_later():
    cut_points = segment_by_pauses(_transcript((4.0, 6.0, "late"), (6.5, 8.0, "start")))

    assert cut_points == [CutPoint(start_time=0.0, end_time=8.0, description="Segment 1")]


def test_gap_equal_to_threshold_is_not_a_break():
    cut_points = segment_by_pauses(_transcript((0, 1, "a"), (2, 3, "b")), 1.0)

    assert len(cut_points) == 1


def test_overlapping_segments_are_absorbed_without_a_break():
    # Second segment starts before the first ends: negative gap, no break
    transcript = _transcript((0, 5, "a"), (3, 4, "b"), (9, 10, "c"))

    cut_points = segment_by_pauses(transcript, 1.0)

    assert cut_points == [
        CutPoint(start_time=0.0, end_time=4, description="Segment 1"),
        CutPoint(start_time=9, end_time=10, description="Segment 2"),
    ]


def test_descriptions_are_numbered_sequentially():
    transcript = _transcript((0, 1, "a"), (3, 4, "b"), (6, 7, "c"), (9, 10, "d"))

    cut_points = segment_by_pauses(transcript, 0.5)

    assert [cp.description for cp in cut_points] == [f"Segment {i}" for i in range(1, 5)]


def test_input_transcript_is_not_modified():
    transcript = _transcript((0, 2, "a"), (5, 7, "b"))
    before = copy.deepcopy(transcript)

    segment_by_pauses(transcript, 1.0)

    assert transcript == before


def test_negative_threshold_is_rejected():
    with pytest.raises(ValueError):
        segment_by_pauses(_transcript((0, 1, "a")), -0.1)


def test_analyze_reads_persisted_transcript(tmp_path):
    path = write_transcript(_transcript((0, 2, "a"), (5, 7, "b")), tmp_path / "talk.json")

    cut_points = analyze_transcript_for_cuts(path, 1.0)

    assert [(cp.start_time, cp.end_time) for cp in cut_points] == [(0.0, 2.0), (5.0, 7.0)]


def _random_transcript(rng):
    count = int(rng.integers(1, 30))
    t = float(rng.uniform(0.0, 3.0))
    segments = []
    for i in range(count):
        start = t + float(rng.uniform(0.0, 3.0))
        end = start + float(rng.uniform(0.0, 4.0))
        segments.append(TranscriptSegment(start=start, end=end, text=f"w{i}"))
        t = end
    return Transcript.from_segments(segments)


@pytest.mark.parametrize("seed", range(40))
def test_cut_points_cover_the_transcript_span(seed):
    rng = np.random.default_rng(seed)
    transcript = _random_transcript(rng)
    threshold = float(rng.uniform(0.0, 2.5))
    segments = transcript.segments

    cut_points = segment_by_pauses(transcript, threshold)

    gaps = [curr.start - prev.end for prev, curr in zip(segments, segments[1:])]
    breaks = [gap for gap in gaps if gap > threshold]
    assert len(cut_points) == len(breaks) + 1

    assert cut_points[0].start_time == 0.0
    assert cut_points[-1].end_time == segments[-1].end
    for cp in cut_points:
        assert cp.start_time <= cp.end_time

    # Consecutive cut points never overlap; the space between them is a detected pause
    for prev, curr in zip(cut_points, cut_points[1:]):
        assert curr.start_time - prev.end_time > threshold

    # Every segment falls inside exactly one cut point
    for seg in segments:
        owners = [cp for cp in cut_points if cp.start_time <= seg.start and seg.end <= cp.end_time]
        assert len(owners) == 1

    # Cut points plus the pauses between them tile [0, last end]
    covered = sum(cp.end_time - cp.start_time for cp in cut_points) + sum(breaks)
    assert covered == pytest.approx(segments[-1].end)
