# pixelquad/graphics/window.py
from __future__ import annotations

import logging

import moderngl
import pygame

from pixelquad.config import WindowSettings
from pixelquad.errors import WindowCreationError

logger = logging.getLogger(__name__)


class Window:
    """
    Manages the OS Window and OpenGL Context.
    """

    def __init__(self, settings: WindowSettings):
        self.settings = settings

        try:
            if not pygame.get_init():
                pygame.init()

            pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
            pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
            pygame.display.gl_set_attribute(
                pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE
            )
            pygame.display.gl_set_attribute(pygame.GL_DOUBLEBUFFER, 1)

            flags = pygame.OPENGL | pygame.DOUBLEBUF
            if settings.resizable:
                flags |= pygame.RESIZABLE

            self._screen = pygame.display.set_mode(
                (settings.width, settings.height),
                flags,
                vsync=1 if settings.vsync else 0,
            )
            pygame.display.set_caption(settings.title)

            self.ctx = moderngl.create_context()
        except (pygame.error, moderngl.Error) as e:
            pygame.quit()
            raise WindowCreationError(f"Could not create window: {e}") from e

        self._size = (settings.width, settings.height)

        version = self.ctx.version_code
        logger.info(
            "OpenGL Context Created: %s.%s", str(version)[0], str(version)[1:]
        )

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        """
        Follow the OS window size.

        Only the default framebuffer viewport changes; the rendered image
        keeps its own resolution and is stretched to fill the window.
        Moving the viewport at all departs from a plain surface resize, which
        would leave the image pinned to its original corner.

        `width`/`height` come from the resize event and are logical sizes;
        the viewport is taken from the live window size pygame reports.
        """
        self._size = (width, height)
        drawable_w, drawable_h = pygame.display.get_window_size()
        self.ctx.viewport = (0, 0, drawable_w, drawable_h)
        logger.debug("Window resized to %dx%d", width, height)

    def swap(self) -> None:
        pygame.display.flip()

    def close(self) -> None:
        pygame.quit()
