# pixelquad/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PacingMode(str, Enum):
    """How the loop waits between frames."""

    VSYNC = "vsync"
    TARGET_FPS = "target_fps"


class ResizePolicy(str, Enum):
    """What a window resize does to the rendered image."""

    FIXED_INTERNAL = "fixed_internal"


@dataclass(frozen=True, slots=True)
class WindowSettings:
    title: str = "Hello, world!"
    width: int = 256
    height: int = 256
    vsync: bool = True
    resizable: bool = True

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Window size must be positive, got {self.width}x{self.height}"
            )


@dataclass(frozen=True, slots=True)
class PacingSettings:
    """
    Frame pacing policy.

    VSYNC relies solely on the blocking buffer swap. TARGET_FPS sleeps
    whatever is left of `1 / target_fps` after each frame.
    """

    mode: PacingMode = PacingMode.VSYNC
    target_fps: int = 60

    def __post_init__(self):
        if self.target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {self.target_fps}")

    @property
    def frame_duration(self) -> float:
        return 1.0 / self.target_fps


@dataclass(frozen=True, slots=True)
class ReportSettings:
    interval_seconds: float = 1.0

    def __post_init__(self):
        if self.interval_seconds <= 0.0:
            raise ValueError(
                f"Report interval must be positive, got {self.interval_seconds}"
            )


@dataclass(frozen=True, slots=True)
class AppSettings:
    """Top-level configuration for the harness."""

    window: WindowSettings = field(default_factory=WindowSettings)
    pacing: PacingSettings = field(default_factory=PacingSettings)
    report: ReportSettings = field(default_factory=ReportSettings)
    resize_policy: ResizePolicy = ResizePolicy.FIXED_INTERNAL
