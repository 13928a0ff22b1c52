# pixelquad/app.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from pixelquad.config import AppSettings, WindowSettings
from pixelquad.core.clock import Clock, ElapsedClock, MonotonicClock
from pixelquad.core.events import EventLoop, EventSource
from pixelquad.core.scheduler import FrameScheduler, RenderState, print_fps
from pixelquad.core.timing import FramePacer
from pixelquad.graphics.image import allocate_frame
from pixelquad.graphics.pipeline import GPUPipeline
from pixelquad.graphics.window import Window

logger = logging.getLogger(__name__)


class Application:
    """
    Acquires the window, builds the pipeline and runs the frame loop.

    Window creation and shader failures propagate; a close request is the
    only normal way out and yields exit code 0.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        *,
        window_factory: Callable[[WindowSettings], Window] = Window,
        clock: Optional[Clock] = None,
        event_source: Optional[EventSource] = None,
        report: Callable[[int], None] = print_fps,
    ):
        self.settings = settings or AppSettings()
        self._window_factory = window_factory
        self._clock = clock or MonotonicClock()
        self._event_source = event_source
        self._report = report

        self.window: Window | None = None
        self.pipeline: GPUPipeline | None = None
        self.scheduler: FrameScheduler | None = None

    def run(self, max_frames: Optional[int] = None) -> int:
        settings = self.settings
        width, height = settings.window.width, settings.window.height

        self.window = self._window_factory(settings.window)
        try:
            self.pipeline = GPUPipeline(
                self.window.ctx, width, height, swap=self.window.swap
            )
            self.pipeline.setup()

            clock = ElapsedClock(self._clock)
            clock.start()
            logger.info("Starting render loop at %dx%d", width, height)

            events = EventLoop(self._event_source, on_resize=self.window.resize)

            self.scheduler = FrameScheduler(
                clock,
                events,
                self.pipeline,
                allocate_frame(width, height),
                RenderState(width=width, height=height, window_size=self.window.size),
                report=self._report,
                report_interval=settings.report.interval_seconds,
                pacer=FramePacer(settings.pacing),
            )
            self.scheduler.run(max_frames=max_frames)
        finally:
            if self.pipeline is not None:
                self.pipeline.release()
            self.window.close()

        return 0
