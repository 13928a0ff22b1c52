# pixelquad/graphics/image.py
"""
Procedural RGBA8 frame generation.

The frame is a row-major `(height, width, 4)` uint8 image:
    R = x * 256 // width
    G = y * 256 // height
    B = one level for the whole frame, oscillating with cos(3t)
    A = 255
"""

from __future__ import annotations

import math
from typing import Union

import numpy as np
from numpy.typing import NDArray

CHANNELS = 4

FrameBuffer = NDArray[np.uint8]
WritableBuffer = Union[FrameBuffer, bytearray, memoryview]


def allocate_frame(width: int, height: int) -> FrameBuffer:
    """Allocate a zeroed, contiguous frame of `width * height * 4` bytes."""
    _check_size(width, height)
    return np.zeros((height, width, CHANNELS), dtype=np.uint8)


def blue_level(t: float) -> int:
    """clamp(round(128 + 128 * cos(3t)), 0, 255), rounding halves up."""
    value = 128.0 + 128.0 * math.cos(3.0 * t)
    return min(max(math.floor(value + 0.5), 0), 255)


def draw(buffer: WritableBuffer, width: int, height: int, t: float) -> None:
    """Write every pixel of `buffer` for time `t`."""
    _check_size(width, height)
    pixels = _as_pixels(buffer, width, height)

    # int64 keeps x * 256 from overflowing on very wide frames.
    xs = np.arange(width, dtype=np.int64)
    ys = np.arange(height, dtype=np.int64)
    red = ((xs * 256) // width) % 256
    green = ((ys * 256) // height) % 256

    pixels[:, :, 0] = red[np.newaxis, :]
    pixels[:, :, 1] = green[:, np.newaxis]
    pixels[:, :, 2] = blue_level(t)
    pixels[:, :, 3] = 255


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Frame size must be positive, got {width}x{height}")


def _as_pixels(buffer: WritableBuffer, width: int, height: int) -> FrameBuffer:
    expected = width * height * CHANNELS

    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise ValueError(f"Frame buffer must be uint8, got {buffer.dtype}")
        if not buffer.flags.c_contiguous:
            raise ValueError("Frame buffer must be C-contiguous")
        flat = buffer.reshape(-1)
    else:
        flat = np.frombuffer(buffer, dtype=np.uint8)
        if not flat.flags.writeable:
            raise ValueError("Frame buffer is read-only")

    if flat.size != expected:
        raise ValueError(
            f"Frame buffer holds {flat.size} bytes, expected {expected} "
            f"for {width}x{height} RGBA"
        )
    return flat.reshape(height, width, CHANNELS)
