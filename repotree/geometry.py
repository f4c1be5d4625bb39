"""Two-dimensional vectors used for layout and drawing."""

from __future__ import annotations

import hashlib
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> Vec2:
        return Vec2(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> Vec2:
        return Vec2(self.x / scale, self.y / scale)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length2(self) -> float:
        """Squared length."""
        return self.x * self.x + self.y * self.y

    def normal(self) -> Vec2:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / length, self.y / length)

    def perpendicular(self) -> Vec2:
        """The vector turned a quarter turn anticlockwise."""
        return Vec2(-self.y, self.x)

    def rotate(self, s: float, c: float) -> Vec2:
        """Rotate by the angle whose sine is s and cosine is c."""
        return Vec2(self.x * c - self.y * s, self.x * s + self.y * c)


def vec2_hash(text: str) -> Vec2:
    """A stable pseudo-random offset for a string, each component in [-0.5, 0.5]."""
    digest = hashlib.md5(text.encode("utf-8", "surrogateescape")).digest()
    x = int.from_bytes(digest[0:2], "big") / 65535.0 - 0.5
    y = int.from_bytes(digest[2:4], "big") / 65535.0 - 0.5
    return Vec2(x, y)