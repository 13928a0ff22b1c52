"""
Procedural frame harness.

Generates an RGBA gradient on the CPU every frame, uploads it as a texture
and draws it on a full-screen quad. Prints the measured frame rate once a
second. Close the window to quit.

Set PIXELQUAD_PROFILE=1 to write cProfile stats to .debug/.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from pixelquad.app import Application
from pixelquad.debug.profiler import profile


@profile(out_dir=Path(".debug"), enabled=os.environ.get("PIXELQUAD_PROFILE") == "1")
def main() -> int:
    """Main entrypoint for the harness."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return Application().run()


if __name__ == "__main__":
    sys.exit(main())
