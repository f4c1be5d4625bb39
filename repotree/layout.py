"""Force-directed movement of directory nodes."""

from __future__ import annotations

import math
import random
from typing import Iterable

from .dirnode import DirNode
from .geometry import Vec2, vec2_hash

FORCE_GRAVITY = 10.0

_ZERO = Vec2(0.0, 0.0)
_rng = random.Random()


def distance_to_parent(node: DirNode) -> float:
    """Gap between the node's edge and its parent's file ring; negative on overlap."""
    parent = node.parent
    if parent is None:
        raise ValueError(f"{node.abspath!r} has no parent")
    posd = (parent.pos - node.pos).length()
    return posd - (node.radius + parent.parent_radius)


def apply_force_dir(node: DirNode, other: DirNode) -> None:
    """Push node away from other when their circles overlap."""
    if other is node:
        return

    direction = other.pos - node.pos
    posd2 = direction.length2()
    sumradius = node.radius + other.radius

    if posd2 - sumradius * sumradius > 0.0:
        return

    posd = math.sqrt(posd2)

    # coincident nodes get a random nudge
    if posd < 0.00001:
        nudge = Vec2(float(_rng.randrange(100) - 50), float(_rng.randrange(100) - 50))
        node.accel = node.accel + nudge.normal()
        return

    distance = posd - node.radius - other.radius
    node.accel = node.accel + direction.normal() * distance


def _interacts(node: DirNode, other: DirNode) -> bool:
    if other is node or other is node.parent or other.parent is node:
        return False
    if node.is_parent(other) or other.is_parent(node):
        return False
    return True


def apply_forces(node: DirNode, neighbours: Iterable[DirNode]) -> int:
    """Accumulate the forces on node and everything below it.

    `neighbours` are the candidate nodes to repel from (for instance those
    found near the node in a spatial index); ancestors and descendants are
    skipped. Returns how many neighbour interactions were applied.
    """
    candidates = list(neighbours)
    loops = 0

    for child in node.children:
        loops += apply_forces(child, candidates)

    parent = node.parent
    if parent is None:
        return loops

    seen: set[int] = set()
    for other in candidates:
        if not _interacts(node, other) or id(other) in seen:
            continue
        seen.add(id(other))
        apply_force_dir(node, other)
        loops += 1

    # always interact with the parent, however far away
    apply_force_dir(node, parent)

    # sit on the parent's radius
    parent_dist = distance_to_parent(node)
    node.accel = node.accel + (parent.pos - node.pos).normal() * (FORCE_GRAVITY * parent_dist)

    # drift outwards along the grandparent-to-parent direction
    grandparent = parent.parent
    if grandparent is not None:
        edge_normal = (parent.pos - grandparent.pos).normal()
        dest = parent.pos + edge_normal * (parent.radius + node.radius) - node.pos
        node.accel = node.accel + dest

    # repel from visible siblings
    siblings = parent.children
    if siblings:
        sib_accel = _ZERO
        visible = 1
        for sibling in siblings:
            if sibling is node or not sibling.is_visible():
                continue
            visible += 1
            sib_accel = sib_accel - (sibling.pos - node.pos).normal()

        if visible > 1:
            slice_size = (parent.radius * math.pi) / float(visible + 1)
            node.accel = node.accel + sib_accel * slice_size

    return loops


def rotate(node: DirNode, s: float, c: float) -> None:
    """Rotate every node below the root about the origin."""
    if node.parent is not None:
        node.pos = node.pos.rotate(s, c)
        node.spos = node.spos.rotate(s, c)
    for child in node.children:
        rotate(child, s, c)


def update_spline_point(node: DirNode, dt: float) -> None:
    """Ease the edge's control point towards the midpoint to the parent."""
    parent = node.parent
    if parent is None:
        return

    td = (parent.pos - node.pos) * 0.5
    mid = node.pos + td
    delta = mid - node.spos

    # never trail more than half the edge behind
    if delta.length2() > td.length2():
        node.spos = node.spos + delta.normal() * (delta.length() - td.length())

    node.spos = node.spos + delta * min(1.0, dt * 2.0)


def set_initial_position(node: DirNode) -> None:
    """Place a new node just off its parent, offset by a stable hash of its path."""
    parent = node.parent
    if parent is None:
        raise ValueError(f"{node.abspath!r} has no parent")

    grandparent = parent.parent
    pos = parent.pos
    if grandparent is not None:
        pos = pos + ((parent.pos - grandparent.pos).normal() * 2.0 + vec2_hash(node.abspath)).normal()
    else:
        pos = pos + vec2_hash(node.abspath)

    node.pos = pos
    node.spos = pos - (parent.pos - pos) * 0.5
    node.position_initialized = True


def move(node: DirNode, dt: float, elasticity: float = 0.0) -> None:
    """Apply the accumulated acceleration; the root stays at the origin."""
    if node.parent is None:
        node.pos = _ZERO
        return

    if not node.empty() and not node.position_initialized:
        set_initial_position(node)

    node.pos = node.pos + node.accel * dt

    if elasticity > 0.0:
        diff = node.accel - node.prev_accel
        m = dt * elasticity
        accel3 = node.prev_accel * (1.0 - m) + diff * m
        node.pos = node.pos + accel3
        node.prev_accel = accel3

    node.accel = _ZERO


def logic(node: DirNode, dt: float, elasticity: float = 0.0) -> None:
    """Advance node, its files and its children by dt seconds."""
    move(node, dt, elasticity)
    update_spline_point(node, dt)

    if node.parent is not None:
        node.node_normal = (node.pos - node.parent.pos).normal()

    for f in list(node.files):
        f.logic(dt)

    for child in node.children:
        logic(child, dt, elasticity)

    node.calc_colour()

    if node.visible:
        node.since_node_visible += dt
    node.since_last_file_change += dt
    node.since_last_node_change += dt