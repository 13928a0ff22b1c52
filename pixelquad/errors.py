from __future__ import annotations


class PixelQuadError(RuntimeError):
    """Base class for all harness errors."""


class ClockError(PixelQuadError):
    """The system time source could not be read."""


class WindowCreationError(PixelQuadError):
    """The window or its OpenGL context could not be created."""


class PipelineStateError(PixelQuadError):
    """A pipeline operation was called in the wrong lifecycle state."""


class ShaderBuildError(PixelQuadError):
    """
    Shader compilation or program linking failed.

    `stage` is either "compile" or "link"; `log` holds the driver diagnostic.
    """

    def __init__(self, stage: str, log: str):
        self.stage = stage
        self.log = log
        super().__init__(f"Shader {stage} failed:\n{log}")
