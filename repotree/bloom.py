"""A growable buffer of bloom quads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .geometry import Vec2

Rgba = tuple[float, float, float, float]


@dataclass(frozen=True)
class BloomVertex:
    """One corner of a bloom quad."""

    pos: Vec2
    colour: Rgba
    texcoord: Rgba


class BloomBuffer:
    """Collects bloom quads, four vertices each, reusing storage across resets."""

    def __init__(self, capacity: int = 0) -> None:
        self._capacity = max(0, capacity)
        self._data: list[BloomVertex] = []
        self._count = 0

    def add(self, pos: Vec2, dims: Vec2, colour: Rgba, texcoord: Rgba) -> None:
        """Append a quad with its corner at pos and size dims."""
        corners = (
            pos,
            pos + Vec2(dims.x, 0.0),
            pos + dims,
            pos + Vec2(0.0, dims.y),
        )
        start = self._count
        self._count += 4
        if self._count > self._capacity:
            self._capacity = self._count * 2
        self._data[start:start + 4] = [BloomVertex(c, colour, texcoord) for c in corners]

    def reset(self) -> None:
        """Forget the vertices but keep the capacity."""
        self._count = 0

    def vertices(self) -> int:
        return self._count

    def capacity(self) -> int:
        return self._capacity

    def __iter__(self) -> Iterator[BloomVertex]:
        return iter(self._data[: self._count])