from typing import Iterable, List

import moderngl
import pygame
import pytest

from pixelquad.core.clock import ManualClock


class FakeMember:
    def __init__(self, location: int = 0):
        self.location = location
        self.value = None


class FakeProgram:
    def __init__(self, members):
        self._members = members
        self.released = False

    def get(self, key, default):
        return self._members.get(key, default)

    def __getitem__(self, key):
        return self._members[key]

    def release(self):
        self.released = True


class FakeBuffer:
    def __init__(self, data: bytes):
        self.data = data
        self.released = False

    def release(self):
        self.released = True


class FakeVertexArray:
    def __init__(self, ctx, program, content):
        self._ctx = ctx
        self.program = program
        self.content = content
        self.released = False

    def render(self, mode, vertices=-1):
        self._ctx.calls.append(("render", mode, vertices))

    def release(self):
        self.released = True


class FakeTexture:
    def __init__(self, size, components, dtype):
        self.size = size
        self.components = components
        self.dtype = dtype
        self.filter = None
        self.locations: List[int] = []
        self.writes: List[bytes] = []
        self.released = False

    def use(self, location=0):
        self.locations.append(location)

    def write(self, data):
        self.writes.append(bytes(data))

    def release(self):
        self.released = True


class FakeContext:
    """Records the GL calls the pipeline makes; no driver needed."""

    def __init__(self, members=None, program_error: str | None = None):
        self.members = (
            members
            if members is not None
            else {"vertex_pos": FakeMember(location=0), "cols": FakeMember()}
        )
        self.program_error = program_error
        self.calls: list = []
        self.buffers: List[FakeBuffer] = []
        self.textures: List[FakeTexture] = []
        self.viewport = (0, 0, 0, 0)

    def program(self, vertex_shader, fragment_shader):
        self.calls.append(("program",))
        if self.program_error is not None:
            raise moderngl.Error(self.program_error)
        self.sources = (vertex_shader, fragment_shader)
        return FakeProgram(self.members)

    def buffer(self, data):
        buf = FakeBuffer(data)
        self.buffers.append(buf)
        return buf

    def vertex_array(self, program, content):
        return FakeVertexArray(self, program, content)

    def texture(self, size, components, dtype="f1"):
        tex = FakeTexture(size, components, dtype)
        self.textures.append(tex)
        return tex

    def clear(self, red=0.0, green=0.0, blue=0.0, alpha=0.0):
        self.calls.append(("clear", red, green, blue, alpha))


class FakeWindow:
    def __init__(self, settings, ctx=None):
        self.settings = settings
        self.ctx = ctx or FakeContext()
        self.size = (settings.width, settings.height)
        self.swaps = 0
        self.resizes: list = []
        self.closed = False

    def swap(self):
        self.swaps += 1
        self.ctx.calls.append(("swap",))

    def resize(self, width, height):
        self.resizes.append((width, height))

    def close(self):
        self.closed = True


class ScriptedEvents:
    """
    Event source that returns one scripted batch per poll, then
    empty batches once the script runs out.
    """

    def __init__(self, batches: Iterable[Iterable[pygame.event.Event]]):
        self._batches = [list(b) for b in batches]
        self.polls = 0

    def __call__(self):
        self.polls += 1
        if self._batches:
            return self._batches.pop(0)
        return []


def close_after(polls: int) -> ScriptedEvents:
    """Source that stays quiet for `polls` polls and then requests a close."""
    return ScriptedEvents([[]] * polls + [[pygame.event.Event(pygame.QUIT)]])


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def ctx():
    return FakeContext()
