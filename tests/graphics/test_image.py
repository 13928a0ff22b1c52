import math

import numpy as np
import pytest

from pixelquad.graphics.image import allocate_frame, blue_level, draw


@pytest.mark.parametrize("width,height", [(1, 1), (3, 5), (256, 256), (640, 480)])
@pytest.mark.parametrize("t", [0.0, 0.37, 12.5])
def test_every_pixel_opaque_and_size_fixed(width, height, t):
    frame = allocate_frame(width, height)
    draw(frame, width, height, t)

    assert frame.nbytes == width * height * 4
    assert np.all(frame[:, :, 3] == 255)


def test_red_and_green_follow_position():
    w, h = 7, 3
    frame = allocate_frame(w, h)
    draw(frame, w, h, 0.5)

    for y in range(h):
        for x in range(w):
            assert frame[y, x, 0] == (x * 256 // w) % 256
            assert frame[y, x, 1] == (y * 256 // h) % 256


def test_red_and_green_do_not_depend_on_time():
    a = allocate_frame(32, 16)
    b = allocate_frame(32, 16)
    draw(a, 32, 16, 0.0)
    draw(b, 32, 16, 4.2)

    assert np.array_equal(a[:, :, :2], b[:, :, :2])


def test_blue_uniform_across_frame():
    frame = allocate_frame(40, 30)
    draw(frame, 40, 30, 0.9)

    assert np.all(frame[:, :, 2] == blue_level(0.9))


def test_known_pixel_at_time_zero():
    frame = allocate_frame(256, 256)
    draw(frame, 256, 256, 0.0)

    # frame is indexed [y, x]
    assert list(frame[0, 128]) == [128, 0, 255, 255]


def test_blue_bottoms_out_at_pi_over_three():
    assert blue_level(math.pi / 3) == 0


@pytest.mark.parametrize("t,expected", [(0.5, 137), (0.2, 234), (1.0, 1)])
def test_blue_level_known_values(t, expected):
    assert blue_level(t) == expected


def test_blue_level_rounds_half_up(monkeypatch):
    # 128 + 128 * (1 / 256) == 128.5
    monkeypatch.setattr(math, "cos", lambda x: 1.0 / 256.0)

    assert blue_level(0.0) == 129


def test_blue_channel_matches_known_value():
    frame = allocate_frame(5, 5)
    draw(frame, 5, 5, 0.2)

    assert np.all(frame[:, :, 2] == 234)


@pytest.mark.parametrize("t", [0.1, 0.7, 1.3, 5.0])
def test_blue_is_periodic(t):
    assert blue_level(t) == blue_level(t + 2 * math.pi / 3)


def test_blue_level_within_byte_range():
    for i in range(200):
        assert 0 <= blue_level(i * 0.05) <= 255


def test_draw_overwrites_previous_contents():
    frame = np.full((4, 4, 4), 7, dtype=np.uint8)
    fresh = allocate_frame(4, 4)

    draw(frame, 4, 4, 2.0)
    draw(fresh, 4, 4, 2.0)

    assert np.array_equal(frame, fresh)


def test_accepts_bytearray():
    buf = bytearray(2 * 2 * 4)
    draw(buf, 2, 2, 0.0)

    assert buf[3::4] == bytearray([255] * 4)
    assert buf[2::4] == bytearray([255] * 4)
    # pixel (1, 0): R = 128
    assert buf[4] == 128


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        draw(bytearray(10), 2, 2, 0.0)


def test_non_positive_size_rejected():
    with pytest.raises(ValueError):
        allocate_frame(0, 10)
    with pytest.raises(ValueError):
        draw(bytearray(0), 0, 0, 0.0)


def test_read_only_buffer_rejected():
    with pytest.raises(ValueError):
        draw(bytes(16), 2, 2, 0.0)


def test_wrong_dtype_rejected():
    with pytest.raises(ValueError):
        draw(np.zeros((2, 2, 4), dtype=np.float32), 2, 2, 0.0)
