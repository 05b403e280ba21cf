"""ClipEditorPort — abstract interface for assembling clips from cut points."""

from abc import ABC, abstractmethod

from domain.models import CutPoint


class ClipEditorPort(ABC):
    @abstractmethod
    def render(
        self,
        video_path: str,
        cut_points: list[CutPoint],
        output_path: str,
        apply_zoom_effects: bool = False,
    ) -> str:
        """Cut the video at the given points and join the clips. Returns output_path."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the editing backend is installed."""
