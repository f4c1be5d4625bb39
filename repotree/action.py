"""Actions a user performs on a file, drawn as fading beams."""

from __future__ import annotations

from typing import Optional

from .commitlog import Colour
from .file import RepoFile
from .geometry import Vec2

Rgba = tuple[float, float, float, float]
Vertex = tuple[Vec2, Rgba, tuple[float, float]]


class Action:
    """Progresses from 0 to 1; touches the target when it starts."""

    colour: Colour = (1.0, 1.0, 1.0)

    def __init__(self, source: object, target: RepoFile, added_time: float) -> None:
        self.source = source
        self.target = target
        self.added_time = added_time
        self.progress = 0.0
        self.rate = 0.5

    def is_finished(self) -> bool:
        return self.progress >= 1.0

    def logic(self, dt: float, pending: int = 1) -> None:
        """Advance; the more actions the user has pending, the faster (up to 10x)."""
        if self.progress >= 1.0:
            return
        if self.progress == 0.0:
            self.target.touch(self.colour)
        action_rate = min(10.0, self.rate * max(1.0, float(pending)))
        self.progress = min(self.progress + action_rate * dt, 1.0)

    def quad(self, source_pos: Vec2) -> Optional[list[Vertex]]:
        """The beam from the user to the file as four vertices, or None when done."""
        if self.is_finished():
            return None

        dest = self.target.absolute_pos()
        offset = (dest - source_pos).normal().perpendicular() * (self.target.size * 0.5)
        offset_src = offset * 0.3

        alpha = 1.0 - self.progress
        r, g, b = self.colour
        col1: Rgba = (r, g, b, alpha)
        col2: Rgba = (r, g, b, alpha * 0.1)

        return [
            (source_pos - offset_src, col2, (0.0, 0.0)),
            (source_pos + offset_src, col2, (0.0, 1.0)),
            (dest + offset, col1, (1.0, 1.0)),
            (dest - offset, col1, (1.0, 0.0)),
        ]


class CreateAction(Action):
    colour: Colour = (0.0, 1.0, 0.0)


class RemoveAction(Action):
    """Removes the target file once complete."""

    colour: Colour = (1.0, 0.0, 0.0)

    def logic(self, dt: float, pending: int = 1) -> None:
        old_progress = self.progress
        super().logic(dt, pending)
        if old_progress < 1.0 and self.progress >= 1.0:
            self.target.remove()


class ModifyAction(Action):
    colour: Colour = (1.0, 0.7, 0.3)