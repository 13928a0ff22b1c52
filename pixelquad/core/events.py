# pixelquad/core/events.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Union

import pygame

if TYPE_CHECKING:
    from pixelquad.core.scheduler import RenderState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CloseRequested:
    pass


@dataclass(frozen=True, slots=True)
class Resized:
    width: int
    height: int


Event = Union[CloseRequested, Resized]

EventSource = Callable[[], Iterable[pygame.event.Event]]
ResizeHandler = Callable[[int, int], None]


def translate(event: pygame.event.Event) -> Optional[Event]:
    """Map a pygame event to a harness event; None for anything ignored."""
    if event.type in (pygame.QUIT, pygame.WINDOWCLOSE):
        return CloseRequested()
    if event.type == pygame.VIDEORESIZE:
        return Resized(int(event.w), int(event.h))
    return None


class EventLoop:
    """
    Drains the platform queue once per iteration and applies the
    resulting transitions to a RenderState.
    """

    def __init__(
        self,
        source: Optional[EventSource] = None,
        on_resize: Optional[ResizeHandler] = None,
    ):
        self._source = source or pygame.event.get
        self._on_resize = on_resize

    def poll_once(self) -> List[Event]:
        events: List[Event] = []
        for raw in self._source():
            event = translate(raw)
            if event is not None:
                events.append(event)
        return events

    def apply(self, state: RenderState, events: Iterable[Event]) -> None:
        for event in events:
            if isinstance(event, CloseRequested):
                state.running = False
            elif isinstance(event, Resized):
                # The frame buffer and texture keep their size.
                state.window_size = (event.width, event.height)
                if self._on_resize is not None:
                    self._on_resize(event.width, event.height)
                logger.debug("Resize to %dx%d", event.width, event.height)
