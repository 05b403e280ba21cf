"""Domain <-> DTO mappers.

Converts between the domain dataclasses and the Pydantic DTOs that define
the persisted JSON shape. The transcript's text field is carried over as
stored, never rebuilt from the segments.
"""

from domain.models import CutPoint, Transcript, TranscriptSegment
from models import CutPointDTO, TranscriptDTO, TranscriptSegmentDTO


def segment_to_dto(seg: TranscriptSegment) -> TranscriptSegmentDTO:
    return TranscriptSegmentDTO(start=seg.start, end=seg.end, text=seg.text)


def dto_to_segment(dto: TranscriptSegmentDTO) -> TranscriptSegment:
    return TranscriptSegment(start=dto.start, end=dto.end, text=dto.text)


def transcript_to_dto(transcript: Transcript) -> TranscriptDTO:
    """Convert a domain Transcript to its persisted DTO."""
    return TranscriptDTO(
        segments=[segment_to_dto(seg) for seg in transcript.segments],
        text=transcript.text,
    )


def dto_to_transcript(dto: TranscriptDTO) -> Transcript:
    """Convert a persisted DTO to a domain Transcript, preserving order."""
    return Transcript(
        segments=[dto_to_segment(seg) for seg in dto.segments],
        text=dto.text,
    )


def cut_points_to_dtos(cut_points: list[CutPoint]) -> list[CutPointDTO]:
    return [
        CutPointDTO(start_time=cp.start_time, end_time=cp.end_time, description=cp.description)
        for cp in cut_points
    ]


def dtos_to_cut_points(dtos: list[CutPointDTO]) -> list[CutPoint]:
    return [
        CutPoint(start_time=dto.start_time, end_time=dto.end_time, description=dto.description)
        for dto in dtos
    ]
