# pixelquad/graphics/pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import moderngl
import numpy as np

from pixelquad.errors import PipelineStateError, ShaderBuildError
from pixelquad.graphics.image import CHANNELS, WritableBuffer
from pixelquad.graphics.shaders import (
    FRAGMENT_SHADER,
    POSITION_ATTRIBUTE,
    TEXTURE_UNIFORM,
    VERTEX_SHADER,
)

logger = logging.getLogger(__name__)

# Two triangles covering clip space [-1, 1] x [-1, 1].
QUAD_VERTICES = np.array(
    [
        -1.0, -1.0,
        -1.0, 1.0,
        1.0, 1.0,
        -1.0, -1.0,
        1.0, -1.0,
        1.0, 1.0,
    ],
    dtype=np.float32,
)  # fmt: skip
QUAD_VERTEX_COUNT = len(QUAD_VERTICES) // 2

TEXTURE_UNIT = 0
CLEAR_COLOR = (0.0, 0.5, 0.0, 1.0)


class PipelineState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RELEASED = "released"


@dataclass(frozen=True, slots=True)
class GPUResources:
    """Every GL object the pipeline owns, created together in `setup()`."""

    program: moderngl.Program
    vbo: moderngl.Buffer
    vao: moderngl.VertexArray
    texture: moderngl.Texture
    position_location: int


def _build_program(ctx: moderngl.Context) -> moderngl.Program:
    try:
        return ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)
    except moderngl.Error as e:
        log = str(e)
        stage = "link" if "Linker" in log else "compile"
        raise ShaderBuildError(stage, log) from e


class GPUPipeline:
    """
    Program, full-screen quad and texture used to show one CPU-side frame.

    Lifecycle: UNINITIALIZED -> setup() -> READY -> release() -> RELEASED.
    Resources live for the whole run; release() is only for process exit.
    """

    def __init__(
        self,
        ctx: moderngl.Context,
        width: int,
        height: int,
        swap: Callable[[], None],
    ):
        self.ctx = ctx
        self.width = width
        self.height = height
        self._swap = swap

        self.state = PipelineState.UNINITIALIZED
        self._resources: GPUResources | None = None

    @property
    def resources(self) -> GPUResources:
        if self.state is not PipelineState.READY or self._resources is None:
            raise PipelineStateError(
                f"GPU resources unavailable in state {self.state.value}"
            )
        return self._resources

    def setup(self) -> None:
        if self.state is not PipelineState.UNINITIALIZED:
            raise PipelineStateError(
                f"setup() called in state {self.state.value}"
            )

        program = _build_program(self.ctx)

        position = program.get(POSITION_ATTRIBUTE, None)
        if position is None:
            program.release()
            raise ShaderBuildError(
                "link", f"Linked program has no active '{POSITION_ATTRIBUTE}' attribute"
            )

        sampler = program.get(TEXTURE_UNIFORM, None)
        if sampler is not None:
            sampler.value = TEXTURE_UNIT

        vbo = vao = None
        try:
            vbo = self.ctx.buffer(QUAD_VERTICES.tobytes())
            vao = self.ctx.vertex_array(program, [(vbo, "2f", POSITION_ATTRIBUTE)])
            texture = self._create_texture(self.width, self.height)
        except Exception:
            for obj in (vao, vbo, program):
                if obj is not None:
                    obj.release()
            raise

        self._resources = GPUResources(
            program=program,
            vbo=vbo,
            vao=vao,
            texture=texture,
            position_location=position.location,
        )
        self.state = PipelineState.READY

        logger.info(
            "Pipeline ready: %dx%d texture, '%s' at location %d",
            self.width,
            self.height,
            POSITION_ATTRIBUTE,
            position.location,
        )

    def upload_frame(self, buffer: WritableBuffer, width: int, height: int) -> None:
        """Replace the whole texture image with `buffer` (RGBA8, width x height)."""
        res = self.resources

        data = memoryview(buffer).cast("B")
        expected = width * height * CHANNELS
        if data.nbytes != expected:
            raise ValueError(
                f"Frame holds {data.nbytes} bytes, expected {expected} "
                f"for {width}x{height} RGBA"
            )

        texture = res.texture
        if texture.size != (width, height):
            # Re-specifying the image at a new size reallocates storage.
            logger.debug(
                "Reallocating texture %s -> %s", texture.size, (width, height)
            )
            texture.release()
            texture = self._create_texture(width, height)
            self._resources = GPUResources(
                program=res.program,
                vbo=res.vbo,
                vao=res.vao,
                texture=texture,
                position_location=res.position_location,
            )
            self.width, self.height = width, height

        texture.write(data)

    def present(self) -> None:
        res = self.resources

        self.ctx.clear(*CLEAR_COLOR)
        res.texture.use(location=TEXTURE_UNIT)
        res.vao.render(moderngl.TRIANGLES, vertices=QUAD_VERTEX_COUNT)

        self._swap()

    def release(self) -> None:
        if self._resources is not None:
            self._resources.vao.release()
            self._resources.vbo.release()
            self._resources.texture.release()
            self._resources.program.release()
            self._resources = None
        self.state = PipelineState.RELEASED

    def _create_texture(self, width: int, height: int) -> moderngl.Texture:
        texture = self.ctx.texture((width, height), CHANNELS, dtype="f1")
        texture.filter = (moderngl.NEAREST, moderngl.NEAREST)
        texture.use(location=TEXTURE_UNIT)
        return texture
