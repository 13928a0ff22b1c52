# pixelquad/core/timing.py
import time
from dataclasses import dataclass, field
from typing import Callable

from pixelquad.config import PacingMode, PacingSettings


@dataclass
class FramePacer:
    """
    Waits between frames according to one pacing policy.

    VSYNC never sleeps; the buffer swap already blocks until the display
    is ready. TARGET_FPS sleeps until the next frame deadline.
    """

    settings: PacingSettings = field(default_factory=PacingSettings)
    sleep: Callable[[float], None] = time.sleep

    _deadline: float | None = None

    def start(self, now: float) -> None:
        """Call this right before the main loop starts."""
        self._deadline = now + self.settings.frame_duration

    def wait(self, now: float) -> float:
        """
        Block until the next frame is due.
        Returns the number of seconds slept.
        """
        if self.settings.mode is PacingMode.VSYNC:
            return 0.0

        if self._deadline is None:
            self.start(now)
            return 0.0

        remaining = self._deadline - now
        if remaining > 0.0:
            self.sleep(remaining)
            self._deadline += self.settings.frame_duration
            return remaining

        # Behind schedule: restart from now instead of bursting to catch up.
        self._deadline = now + self.settings.frame_duration
        return 0.0
