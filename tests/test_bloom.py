from repotree.bloom import BloomBuffer, BloomVertex
from repotree.geometry import Vec2

COLOUR = (0.5, 0.25, 1.0, 1.0)
TEXCOORD = (3.0, 1.0, 2.0, 0.0)


def test_new_buffer_is_empty():
    buf = BloomBuffer(16)
    assert buf.vertices() == 0
    assert buf.capacity() == 16
    assert list(buf) == []


def test_add_quad_corners():
    buf = BloomBuffer()
    buf.add(Vec2(1.0, 2.0), Vec2(10.0, 20.0), COLOUR, TEXCOORD)
    assert buf.vertices() == 4
    positions = [v.pos for v in buf]
    assert positions == [
        Vec2(1.0, 2.0),
        Vec2(1.0, 2.0) + Vec2(10.0, 0.0),
        Vec2(1.0, 2.0) + Vec2(10.0, 20.0),
        Vec2(1.0, 2.0) + Vec2(0.0, 20.0),
    ]
    assert all(v.colour == COLOUR and v.texcoord == TEXCOORD for v in buf)


def test_growth_doubles_needed_size():
    buf = BloomBuffer()
    buf.add(Vec2(0.0, 0.0), Vec2(1.0, 1.0), COLOUR, TEXCOORD)
    assert buf.capacity() == 8


def test_capacity_never_below_vertices():
    buf = BloomBuffer(4)
    for i in range(25):
        buf.add(Vec2(float(i), 0.0), Vec2(1.0, 1.0), COLOUR, TEXCOORD)
        assert buf.capacity() >= buf.vertices()
    assert buf.vertices() == 100


def test_existing_capacity_is_kept_when_sufficient():
    buf = BloomBuffer(64)
    buf.add(Vec2(0.0, 0.0), Vec2(1.0, 1.0), COLOUR, TEXCOORD)
    assert buf.capacity() == 64


def test_reset_keeps_capacity_and_overwrites():
    buf = BloomBuffer()
    buf.add(Vec2(0.0, 0.0), Vec2(1.0, 1.0), COLOUR, TEXCOORD)
    buf.add(Vec2(5.0, 5.0), Vec2(1.0, 1.0), COLOUR, TEXCOORD)
    capacity = buf.capacity()
    buf.reset()
    assert buf.vertices() == 0
    assert buf.capacity() == capacity
    buf.add(Vec2(9.0, 9.0), Vec2(2.0, 2.0), COLOUR, TEXCOORD)
    vertices = list(buf)
    assert len(vertices) == 4
    assert vertices[0] == BloomVertex(Vec2(9.0, 9.0), COLOUR, TEXCOORD)