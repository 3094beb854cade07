import pytest

from gtecore.texture import Texture


def test_new_texture_starts_on_first_frame():
    t = Texture()
    assert t.frame == 1
    assert t.frames == 1
    assert t.texture_id == 0
    assert t.is_cloned is False


def test_set_size_and_position():
    t = Texture()
    t.set_size(64, 32)
    t.set_position(10, 20)
    assert (t.width, t.height) == (64, 32)
    assert (t.x, t.y) == (10, 20)


def test_next_frame_advances_then_wraps():
    t = Texture(frames=3)
    seen = []
    for _ in range(4):
        t.next_frame()
        seen.append(t.frame)
    assert seen == [2, 3, 1, 2]


def test_single_frame_texture_stays_on_frame_one():
    t = Texture()
    t.next_frame()
    assert t.frame == 1


@pytest.mark.parametrize("frame", [1, 2, 5])
def test_set_frame(frame):
    t = Texture(frames=5)
    t.set_frame(frame)
    assert t.frame == frame


def test_set_texture_id_marks_clone():
    t = Texture()
    t.set_texture_id(7)
    assert t.texture_id == 7
    assert t.is_cloned is True