# pixelquad/core/scheduler.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from pixelquad.core.clock import Clock
from pixelquad.core.events import EventLoop
from pixelquad.core.timing import FramePacer
from pixelquad.graphics.image import FrameBuffer, draw

logger = logging.getLogger(__name__)


class FramePresenter(Protocol):
    def upload_frame(self, buffer: FrameBuffer, width: int, height: int) -> None: ...

    def present(self) -> None: ...


@dataclass(slots=True)
class RenderState:
    width: int
    height: int
    running: bool = True
    frame_count_since_report: int = 0
    last_report_time: float = 0.0
    frame_index: int = 0
    window_size: tuple[int, int] | None = None


def print_fps(count: int) -> None:
    print(f"fps: {count}")


class FrameScheduler:
    """
    Runs the per-iteration sequence:
    poll -> generate -> upload -> draw/swap -> count -> pace.
    """

    def __init__(
        self,
        clock: Clock,
        events: EventLoop,
        presenter: FramePresenter,
        buffer: FrameBuffer,
        state: RenderState,
        *,
        report: Callable[[int], None] = print_fps,
        report_interval: float = 1.0,
        pacer: Optional[FramePacer] = None,
    ):
        self.clock = clock
        self.events = events
        self.presenter = presenter
        self.buffer = buffer
        self.state = state
        self.report = report
        self.report_interval = report_interval
        self.pacer = pacer or FramePacer()

    def start(self) -> None:
        now = self.clock.now()
        self.state.last_report_time = now
        self.state.frame_count_since_report = 0
        self.pacer.start(now)

    def step(self) -> bool:
        """
        Run one iteration. Returns False once the loop should stop; nothing
        is drawn or presented on the iteration that observes a close.
        """
        state = self.state

        self.events.apply(state, self.events.poll_once())
        if not state.running:
            return False

        draw(self.buffer, state.width, state.height, self.clock.now())
        self.presenter.upload_frame(self.buffer, state.width, state.height)
        self.presenter.present()

        state.frame_index += 1
        state.frame_count_since_report += 1

        now = self.clock.now()
        if now - state.last_report_time >= self.report_interval:
            self.report(state.frame_count_since_report)
            state.frame_count_since_report = 0
            state.last_report_time = now

        self.pacer.wait(self.clock.now())
        return True

    def run(self, max_frames: Optional[int] = None) -> int:
        """Loop until a close is requested (or `max_frames` frames ran)."""
        self.start()

        frames = 0
        while self.state.running:
            if max_frames is not None and frames >= max_frames:
                break
            if self.step():
                frames += 1

        logger.info("Render loop stopped after %d frames", self.state.frame_index)
        return frames
