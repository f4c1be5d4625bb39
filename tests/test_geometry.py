import math

import pytest

from repotree.geometry import Vec2, vec2_hash


def test_add_then_subtract_round_trips():
    a = Vec2(1.5, -2.25)
    b = Vec2(-7.0, 3.5)
    assert (a + b) - b == a


def test_scalar_multiplication_both_sides():
    v = Vec2(2.0, -3.0)
    assert v * 2.0 == 2.0 * v
    assert (v * 2.0) - v == v


def test_length_of_pythagorean_vector():
    assert Vec2(3.0, 4.0).length() == pytest.approx(5.0)


def test_length2_is_square_of_length():
    v = Vec2(1.25, -6.5)
    assert v.length2() == pytest.approx(v.length() ** 2)


@pytest.mark.parametrize("v", [Vec2(3.0, 4.0), Vec2(-0.01, 0.02), Vec2(100.0, 0.0)])
def test_normal_has_unit_length_and_same_direction(v):
    n = v.normal()
    assert n.length() == pytest.approx(1.0)
    assert n.x * v.y - n.y * v.x == pytest.approx(0.0, abs=1e-9)
    assert n.x * v.x + n.y * v.y > 0


def test_normal_of_zero_is_zero():
    assert Vec2(0.0, 0.0).normal() == Vec2(0.0, 0.0)


def test_perpendicular_is_orthogonal_and_same_length():
    v = Vec2(2.0, 5.0)
    p = v.perpendicular()
    assert v.x * p.x + v.y * p.y == pytest.approx(0.0)
    assert p.length() == pytest.approx(v.length())


def test_rotate_identity():
    v = Vec2(1.0, 2.0)
    assert v.rotate(0.0, 1.0) == v


def test_rotate_preserves_length_and_inverts():
    v = Vec2(3.0, -1.0)
    angle = 0.7
    r = v.rotate(math.sin(angle), math.cos(angle))
    assert r.length() == pytest.approx(v.length())
    back = r.rotate(math.sin(-angle), math.cos(-angle))
    assert back.x == pytest.approx(v.x)
    assert back.y == pytest.approx(v.y)


def test_vec2_hash_is_stable_and_bounded():
    first = vec2_hash("/src/lib/")
    assert vec2_hash("/src/lib/") == first
    for text in ["/", "/a/", "/src/lib/", "/docs/"]:
        h = vec2_hash(text)
        assert -0.5 <= h.x <= 0.5
        assert -0.5 <= h.y <= 0.5


def test_vec2_hash_differs_between_paths():
    assert vec2_hash("/src/") != vec2_hash("/docs/")