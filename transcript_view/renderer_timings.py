"""Optional phase timing for the render pipeline.

Enabled by setting TRANSCRIPT_VIEW_DEBUG_TIMING to "1", "true" or "yes".
When disabled every helper here is a no-op.
"""

import os
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Union

DEBUG_TIMING = os.getenv("TRANSCRIPT_VIEW_DEBUG_TIMING", "").lower() in (
    "1",
    "true",
    "yes",
)

# Stat name -> list of (duration, item_id)
_timing_stats: dict[str, list[tuple[float, str]]] = {}
_current_item_id = ""


def set_current_item(item_id: str) -> None:
    """Attribute subsequent timing_stat samples to this item."""
    global _current_item_id
    if DEBUG_TIMING:
        _current_item_id = item_id


def reset_timing_stats(*names: str) -> None:
    """Start collecting samples for the given stat names, discarding old ones."""
    _timing_stats.clear()
    for name in names:
        _timing_stats[name] = []


@contextmanager
def log_timing(
    phase: Union[str, Callable[[], str]],
    t_start: Optional[float] = None,
) -> Iterator[None]:
    """Print the wall time spent in a phase.

    phase may be a callable so the label can depend on work done inside the block.
    """
    if not DEBUG_TIMING:
        yield
        return

    t_phase = time.time()
    try:
        yield
    finally:
        t_now = time.time()
        name = phase() if callable(phase) else phase
        line = f"[TIMING] {name:40s} {t_now - t_phase:8.3f}s"
        if t_start is not None:
            line += f" (total: {t_now - t_start:8.3f}s)"
        print(line, flush=True)


@contextmanager
def timing_stat(name: str) -> Iterator[None]:
    """Record the duration of the block under a stat name, if it is being collected."""
    if not DEBUG_TIMING or name not in _timing_stats:
        yield
        return

    t_start = time.time()
    try:
        yield
    finally:
        _timing_stats[name].append((time.time() - t_start, _current_item_id))


def report_timing_statistics(limit: int = 10) -> None:
    """Print totals and the slowest samples for every collected stat."""
    if not DEBUG_TIMING:
        return
    for name, samples in _timing_stats.items():
        if not samples:
            continue
        total = sum(duration for duration, _ in samples)
        print(f"[TIMING] {name}: {len(samples)} ops, {total:.3f}s total", flush=True)
        for duration, item_id in sorted(samples, reverse=True)[:limit]:
            print(f"[TIMING]   {item_id}: {duration * 1000:.1f}ms", flush=True)
