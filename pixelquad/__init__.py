from pixelquad.app import Application
from pixelquad.config import AppSettings

__all__ = ["Application", "AppSettings"]
