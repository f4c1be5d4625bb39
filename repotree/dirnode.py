"""Directory nodes: the tree that files hang from."""

from __future__ import annotations

import math
from typing import Optional

from .commitlog import Colour
from .file import FILE_DIAMETER, RepoFile
from .geometry import Vec2

DIR_PADDING = 1.5
MIN_DIR_SIZE = 15.0

Rgba = tuple[float, float, float, float]


def calc_file_dest(max_files: int, file_no: int) -> Vec2:
    """Unit direction for file `file_no` of `max_files` spread round a ring."""
    arc = 1.0 / float(max_files)
    frac = arc * 0.5 + arc * file_no
    return Vec2(math.sin(frac * math.pi * 2.0), math.cos(frac * math.pi * 2.0))


class DirNode:
    """A directory in the tree, holding files and child directories.

    Every node registers itself in `dirmap` under its path, which always ends
    in a slash.
    """

    def __init__(
        self,
        parent: Optional[DirNode] = None,
        abspath: str = "/",
        dirmap: Optional[dict[str, DirNode]] = None,
    ) -> None:
        if dirmap is None:
            dirmap = parent.dirmap if parent is not None else {}
        self.dirmap: dict[str, DirNode] = dirmap

        self.abspath = ""
        self._change_path(abspath)

        self.children: list[DirNode] = []
        self.files: list[RepoFile] = []

        self.parent: Optional[DirNode] = None
        self.path_token = ""
        self.path_token_offset = 0
        self.depth = 1
        self._set_parent(parent)

        self.pos = parent.pos if parent is not None else Vec2(0.0, 0.0)
        self.spos = Vec2(0.0, 0.0)
        self.accel = Vec2(0.0, 0.0)
        self.prev_accel = Vec2(0.0, 0.0)
        self.node_normal = Vec2(0.0, 0.0)

        radius = FILE_DIAMETER * 0.5
        self.file_area = radius * radius * math.pi

        self.visible_count = 0
        self.visible = False
        self.position_initialized = False

        self.since_node_visible = 0.0
        self.since_last_file_change = 0.0
        self.since_last_node_change = 0.0

        self.area = 0.0
        self.radius = 1.0
        self.parent_radius = 1.0
        self.colour: Rgba = (1.0, 1.0, 1.0, 1.0)

        self.calc_radius()
        self.calc_colour()

    def __repr__(self) -> str:
        return f"DirNode({self.abspath!r})"

    # -- path bookkeeping -------------------------------------------------

    def _change_path(self, abspath: str) -> None:
        if self.dirmap.get(self.abspath) is self:
            del self.dirmap[self.abspath]
        self.abspath = abspath if abspath.endswith("/") else abspath + "/"
        self.dirmap[self.abspath] = self

    def _adjust_path(self) -> None:
        self.path_token_offset = len(self.abspath)
        if self.parent is not None:
            start = self.parent.path_token_offset
            self.path_token = self.abspath[start:len(self.abspath) - 1]

    def _set_parent(self, parent: Optional[DirNode]) -> None:
        if parent is not None and self.parent is parent:
            return
        self.parent = parent
        self._adjust_path()
        self.depth = 1 if parent is None else parent.depth + 1

    def _discard(self) -> None:
        for child in self.children:
            child._discard()
        if self.dirmap.get(self.abspath) is self:
            del self.dirmap[self.abspath]

    def prefixed_by(self, path: str) -> bool:
        """Whether path names this directory or one of its ancestors."""
        if not path:
            return False
        if not path.endswith("/"):
            path += "/"
        return self.abspath.startswith(path)

    def common_path_prefix(self, text: str) -> str:
        """The longest shared prefix of this path and text ending in a slash."""
        slash = -1
        for index, (a, b) in enumerate(zip(self.abspath, text)):
            if a != b:
                break
            if a == "/":
                slash = index
        return text[:slash + 1] if slash != -1 else ""

    # -- structure --------------------------------------------------------

    def root(self) -> DirNode:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def is_parent(self, node: Optional[DirNode]) -> bool:
        """Whether node is an ancestor of this directory."""
        if node is self.parent:
            return True
        if self.parent is None:
            return False
        return self.parent.is_parent(node)

    def add_node(self, node: DirNode) -> None:
        """Add a child, first moving under it any children it prefixes."""
        for child in list(self.children):
            if child.prefixed_by(node.abspath):
                self.children.remove(child)
                node.add_node(child)
        self.children.append(node)
        node._set_parent(self)
        self.node_updated(False)

    def find_dirs(self, path: str) -> list[DirNode]:
        """Directories closest to the root that are prefixed by path."""
        if self.prefixed_by(path):
            return [self]
        found: list[DirNode] = []
        for child in self.children:
            found.extend(child.find_dirs(path))
        return found

    def files_recursive(self) -> list[RepoFile]:
        """Files of this directory and all below it."""
        collected: list[RepoFile] = []
        self._collect_files(collected)
        return collected

    def _collect_files(self, collected: list[RepoFile]) -> None:
        collected[0:0] = self.files
        for child in self.children:
            child._collect_files(collected)

    def add_file(self, f: RepoFile) -> bool:
        """Place a file in the tree, creating directories as needed.

        A root whose path does not cover the file gains a new parent; callers
        should follow `root()` afterwards.
        """
        if not f.path.startswith(self.abspath):
            if self.parent is not None:
                return False
            common = self.common_path_prefix(f.path) or "/"
            newparent = DirNode(None, common, self.dirmap)
            newparent.add_node(self)
            return newparent.add_file(f)

        if (
            self.parent is None
            and self.abspath == "/"
            and f.path != self.abspath
            and not self.files
            and not self.children
        ):
            self._change_path(f.path)

        if f.path == self.abspath:
            self.files.append(f)
            if not f.hidden:
                self.visible_count += 1
            f.dir = self
            self.file_updated(False)
            return True

        added = False
        for child in self.children:
            if child.add_file(f):
                added = True
                break

        if added and self.parent is not None:
            return True

        # a file whose path prefixes this one's is really a directory
        for existing in self.files:
            if f.path.startswith(existing.fullpath):
                existing.remove(True)
                break

        if added:
            return True

        node = DirNode(self, f.path, self.dirmap)
        node.add_file(f)
        self.add_node(node)

        commonpath = ""
        common_pos = Vec2(0.0, 0.0)
        for child in self.children:
            common = child.common_path_prefix(f.path)
            if len(common) > len(self.abspath) and common != f.path:
                commonpath = common
                common_pos = child.pos
                break

        if len(commonpath) > len(self.abspath):
            cnode = DirNode(self, commonpath, self.dirmap)
            cnode.pos = common_pos
            for child in list(self.children):
                if child.prefixed_by(commonpath):
                    self.children.remove(child)
                    cnode.add_node(child)
            self.add_node(cnode)

        return True

    def remove_file(self, f: RepoFile) -> bool:
        """Take a file out of the tree, pruning directories left empty."""
        if not f.path.startswith(self.abspath):
            return False

        if f.path == self.abspath:
            for index, existing in enumerate(self.files):
                if existing is f:
                    del self.files[index]
                    if not f.hidden:
                        self.visible_count -= 1
                    self.file_updated(False)
                    return True
            return False

        for child in self.children:
            if child.remove_file(f):
                if not child.files and not child.children:
                    self.children.remove(child)
                    child._discard()
                    self.node_updated(False)
                return True

        return False

    # -- visibility and counts --------------------------------------------

    def add_visible(self) -> None:
        self.visible_count += 1
        self.visible = True

    def is_visible(self) -> bool:
        if self.visible:
            return True
        if any(child.is_visible() for child in self.children):
            self.visible = True
            return True
        return False

    def empty(self) -> bool:
        return self.visible_count == 0 and not self.children

    def total_dir_count(self) -> int:
        return 1 + sum(child.total_dir_count() for child in self.children)

    def total_file_count(self) -> int:
        return self.visible_count + sum(child.visible_count for child in self.children)

    # -- updates ----------------------------------------------------------

    def file_updated(self, user_initiated: bool) -> None:
        self.calc_radius()
        self.since_last_file_change = 0.0
        self.node_updated(user_initiated)

    def node_updated(self, user_initiated: bool) -> None:
        if user_initiated:
            self.since_last_node_change = 0.0
        self.calc_radius()
        self.update_file_positions()
        if self.parent is not None:
            self.parent.node_updated(True)

    def update_file_positions(self) -> None:
        """Arrange visible files in rings of growing diameter."""
        max_files = 1
        diameter = 1
        file_no = 0
        distance = 0.0
        files_left = self.visible_count

        for f in self.files:
            if f.hidden:
                f.dest = Vec2(0.0, 0.0)
                f.distance = 0.0
                continue

            f.dest = calc_file_dest(max_files, file_no)
            f.distance = distance

            files_left -= 1
            file_no += 1

            if file_no >= max_files:
                diameter += 1
                distance += FILE_DIAMETER
                max_files = int(max(1.0, diameter * math.pi))
                if files_left < max_files:
                    max_files = files_left
                file_no = 0

    def calc_radius(self) -> None:
        total_file_area = self.file_area * self.visible_count
        self.area = total_file_area + sum(child.area for child in self.children)
        self.radius = max(1.0, math.sqrt(self.area)) * DIR_PADDING
        self.parent_radius = max(1.0, math.sqrt(total_file_area) * DIR_PADDING)

    def average_file_colour(self) -> Colour:
        """Mean colour of visible files, combined with the children's means."""
        r = g = b = 0.0
        count = 0
        for f in self.files:
            if f.hidden:
                continue
            cr, cg, cb = f.current_colour()
            r, g, b = r + cr, g + cg, b + cb
            count += 1
        if count > 0:
            r, g, b = r / count, g / count, b / count

        count = 0
        for child in self.children:
            cr, cg, cb = child.average_file_colour()
            r, g, b = r + cr, g + cg, b + cb
            count += 1
        if count > 0:
            r, g, b = r / count, g / count, b / count

        return (r, g, b)

    def calc_colour(self) -> None:
        """Blend a grey brightened by recent change with the visible files' colours."""
        brightness = max(0.6, 1.0 - min(1.0, self.since_last_node_change / 3.0))
        r = g = b = brightness
        a = 1.0
        count = 0
        for f in self.files:
            if f.hidden:
                continue
            cr, cg, cb = f.current_colour()
            r += cr * brightness
            g += cg * brightness
            b += cb * brightness
            a += f.alpha()
            count += 1
        scale = float(count) + 1.0
        self.colour = (r / scale, g / scale, b / scale, a / scale)