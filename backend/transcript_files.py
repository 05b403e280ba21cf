"""Reading and writing transcript and cut-point JSON files."""

import logging
import os
from pathlib import Path
from typing import Union

from pydantic import TypeAdapter, ValidationError

from domain.errors import MediaIoError, TranscriptFormatError
from domain.models import CutPoint, Transcript
from mappers import cut_points_to_dtos, dto_to_transcript, dtos_to_cut_points, transcript_to_dto
from models import CutPointDTO, TranscriptDTO

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_cut_points_adapter = TypeAdapter(list[CutPointDTO])


def transcript_path_for(audio_path: PathLike) -> Path:
    """Transcripts live next to their audio file with a .json suffix."""
    return Path(audio_path).with_suffix(".json")


def _read_text(path: PathLike) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise MediaIoError("Failed to read file", path=os.fspath(path), cause=str(e)) from e


def _write_text(path: PathLike, content: str) -> Path:
    output = Path(path)
    try:
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        raise MediaIoError("Failed to write file", path=os.fspath(path), cause=str(e)) from e
    return output


def read_transcript(path: PathLike) -> Transcript:
    content = _read_text(path)
    try:
        dto = TranscriptDTO.model_validate_json(content)
    except ValidationError as e:
        raise TranscriptFormatError(
            "Failed to parse transcript", path=os.fspath(path), cause=str(e)
        ) from e
    return dto_to_transcript(dto)


def write_transcript(transcript: Transcript, path: PathLike) -> Path:
    output = _write_text(path, transcript_to_dto(transcript).model_dump_json(indent=2))
    logger.info(f"Saved transcript ({len(transcript.segments)} segments) to {output}")
    return output


def read_cut_points(path: PathLike) -> list[CutPoint]:
    content = _read_text(path)
    try:
        dtos = _cut_points_adapter.validate_json(content)
    except ValidationError as e:
        raise TranscriptFormatError(
            "Failed to parse cut points", path=os.fspath(path), cause=str(e)
        ) from e
    return dtos_to_cut_points(dtos)


def write_cut_points(cut_points: list[CutPoint], path: PathLike) -> Path:
    payload = _cut_points_adapter.dump_json(cut_points_to_dtos(cut_points), indent=2)
    output = _write_text(path, payload.decode("utf-8"))
    logger.info(f"Saved {len(cut_points)} cut points to {output}")
    return output
