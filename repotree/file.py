"""A file shown in the tree: position, fading and expiry."""

from __future__ import annotations

from typing import Optional, Protocol

from .commitlog import WHITE, Colour, colour_hash
from .geometry import Vec2

FILE_DIAMETER = 8.0
DEFAULT_IDLE_TIME = 60.0


class _Dir(Protocol):
    pos: Vec2

    def add_visible(self) -> None: ...

    def file_updated(self, user_initiated: bool) -> None: ...


def _blend(a: Colour, wa: float, b: Colour, wb: float) -> Colour:
    return (a[0] * wa + b[0] * wb, a[1] * wa + b[1] * wb, a[2] * wa + b[2] * wb)


class RepoFile:
    """A file node; it fades out after `idle_time` seconds without actions and
    then queues itself on the shared `removed` list."""

    def __init__(
        self,
        fullpath: str,
        colour: Colour = WHITE,
        tagid: int = 0,
        removed: Optional[list[RepoFile]] = None,
        idle_time: float = DEFAULT_IDLE_TIME,
    ) -> None:
        self.tagid = tagid
        self.removed: list[RepoFile] = removed if removed is not None else []
        self.idle_time = idle_time

        self.hidden = True
        self.selected = False
        self.size = FILE_DIAMETER
        self.radius = self.size * 0.5
        self.graphic_ratio = 1.0
        self.speed = 5.0

        self.file_colour: Colour = colour
        self.touch_colour: Colour = WHITE

        self.elapsed = 0.0
        self.last_action = 0.0
        self.expiring = False
        self.removing = False

        self.pos = Vec2(0.0, 0.0)
        self.dest = Vec2(0.0, 0.0)
        self.distance = 0.0
        self.dir: Optional[_Dir] = None

        self.fullpath = fullpath
        slash = fullpath.rfind("/")
        if slash != -1:
            self.path = fullpath[: slash + 1]
            self.name = fullpath[slash + 1:]
        else:
            self.path = ""
            self.name = fullpath

        dot = self.name.rfind(".")
        self.ext = self.name[dot + 1:] if dot != -1 and dot != len(self.name) - 1 else ""

    def __repr__(self) -> str:
        return f"RepoFile({self.fullpath!r})"

    def touch(self, colour: Colour) -> None:
        """Record an action on the file, showing it and cancelling expiry."""
        if self.removing:
            return

        self.last_action = self.elapsed
        self.touch_colour = colour

        if self.expiring:
            for index, f in enumerate(self.removed):
                if f is self:
                    del self.removed[index]
                    break
            self.expiring = False

        self.set_hidden(False)
        if self.dir is not None:
            self.dir.file_updated(True)

    def remove(self, force: bool = False) -> None:
        """Start fading the file out; with force it can no longer be touched."""
        self.last_action = self.elapsed - self.idle_time
        if force:
            self.removing = True

    def set_hidden(self, hidden: bool) -> None:
        if self.hidden and not hidden and self.dir is not None:
            self.dir.add_visible()
        self.hidden = hidden

    def colourize(self) -> None:
        """Recolour from the extension."""
        self.file_colour = colour_hash(self.ext) if self.ext else WHITE

    def current_colour(self) -> Colour:
        """The display colour, blending from the touch colour over one second."""
        if self.selected:
            return WHITE
        lc = self.elapsed - self.last_action
        if lc < 1.0:
            return _blend(self.touch_colour, 1.0 - lc, self.file_colour, lc)
        return self.file_colour

    def alpha(self) -> float:
        """Opacity; fades to zero over one second once idle."""
        idle = self.elapsed - self.last_action
        if idle > self.idle_time:
            return 1.0 - min(idle - self.idle_time, 1.0)
        return 1.0

    def absolute_pos(self) -> Vec2:
        if self.dir is None:
            return self.pos
        return self.pos + self.dir.pos

    def overlaps(self, point: Vec2) -> bool:
        """Whether a point falls within the file's square."""
        centre = self.absolute_pos()
        half_x = self.size * 0.5
        half_y = half_x * self.graphic_ratio
        return (
            centre.x - half_x <= point.x <= centre.x + half_x
            and centre.y - half_y <= point.y <= centre.y + half_y
        )

    def logic(self, dt: float) -> None:
        """Advance time, move towards the destination and handle expiry."""
        self.elapsed += dt

        target = self.dest * self.distance
        accel = target - self.pos
        step = accel * (self.speed * dt)
        if step.length2() > accel.length2():
            step = accel
        self.pos = self.pos + step

        if not self.expiring and self.elapsed - self.last_action >= self.idle_time + 1.0:
            self.expiring = True
            if not any(f is self for f in self.removed):
                self.removed.append(self)

        if self.hidden and not self.removing:
            self.elapsed = 0.0