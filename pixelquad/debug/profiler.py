from __future__ import annotations

import cProfile
import functools
import io
import pstats
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

# Calls counted as one presented frame each.
FRAME_CALLS = (
    "<built-in method pygame.display.flip>",
    "<built-in method pygame.display.update>",
)


def count_frames(stats: pstats.Stats) -> int:
    frame_count = 0
    internal_stats = getattr(stats, "stats", {})
    for (_, _, name), (_, nc, _, _, _) in internal_stats.items():
        if name in FRAME_CALLS:
            frame_count += nc
    return frame_count


def profile(
    *, out_dir: Path, enabled: bool = True
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Profiling decorator.

    Writes `<name>.prof` plus tottime/cumtime/calls text reports to
    `out_dir` and prints the average frame rate of the profiled run.
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        if not enabled:
            return fn

        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            profiler = cProfile.Profile()
            profiler.enable()
            try:
                return fn(*args, **kwargs)
            finally:
                profiler.disable()
                _dump_stats(profiler, out_dir, fn.__name__)

        return wrapper

    return decorator


def _dump_stats(profiler: cProfile.Profile, out_dir: Path, base: str) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)

    prof_path = out_dir / f"{base}.prof"
    profiler.dump_stats(prof_path)
    print(f"[profile] wrote {prof_path}")

    try:
        stats = pstats.Stats(str(prof_path))
    except (EOFError, TypeError):
        print("[profile] Warning: No data collected.")
        return

    for cmd in ("tottime", "cumtime", "calls"):
        path = out_dir / f"{base}.{cmd}.txt"
        buf = io.StringIO()
        pstats.Stats(str(prof_path), stream=buf).sort_stats(cmd).print_stats(30)
        path.write_text(buf.getvalue())
        print(f"[profile] wrote {path}")

    frame_count = count_frames(stats)
    total_time = getattr(stats, "total_tt", 0)

    print(f"[profile] Total Time: {total_time:.4f}s")
    if frame_count > 0 and total_time > 0:
        print(f"[profile] Average FPS: {frame_count / total_time:.2f}")
