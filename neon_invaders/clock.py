"""
Frame clock for Neon Invaders.

Turns a stream of monotonic millisecond timestamps (one per display
refresh) into bounded delta-times that drive the simulation step.  The
clock re-requests itself every frame until stopped, so exactly one
chain must be live at a time: :meth:`FrameClock.start` cancels any
previous chain before starting a new one.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Callable, Optional

from neon_invaders.config import MAX_FRAME_DT
from neon_invaders.utils.functions import clamp

FrameCallback = Callable[[float], None]


@dataclass
class FrameQueue:
    """Display-frame request queue.

    The display loop calls :meth:`dispatch` once per refresh.  Only the
    callbacks requested before that dispatch began are run; anything
    requested while dispatching waits for the next refresh.
    """

    _pending: dict[int, FrameCallback] = field(default_factory=dict, repr=False)
    _ids: itertools.count = field(
        default_factory=lambda: itertools.count(1), repr=False,
    )

    def request(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    def dispatch(self, timestamp: float) -> int:
        """Run this frame's callbacks with *timestamp* (ms).  Returns the count."""
        batch = list(self._pending.items())
        ran = 0
        for handle, callback in batch:
            # Cancelled by an earlier callback in this batch?
            if self._pending.pop(handle, None) is None:
                continue
            callback(timestamp)
            ran += 1
        return ran

    def __len__(self) -> int:
        return len(self._pending)


class FrameClock:
    """Self-rescheduling frame loop producing clamped delta-times."""

    def __init__(
        self,
        step: Callable[[float], object],
        frames: FrameQueue,
        is_paused: Callable[[], bool] = lambda: False,
        max_dt: float = MAX_FRAME_DT,
    ) -> None:
        self.step = step
        self.frames = frames
        self.is_paused = is_paused
        self.max_dt = max_dt
        self.last_timestamp: float = 0.0
        self.last_dt: float = 0.0
        self._handle: Optional[int] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self, timestamp: float) -> None:
        """(Re)start the chain at *timestamp*, replacing any live one."""
        self.stop()
        self.last_timestamp = timestamp
        self.tick(timestamp)

    def stop(self) -> None:
        self.frames.cancel(self._handle)
        self._handle = None

    def tick(self, timestamp: float) -> None:
        """Handle one display frame, then request the next."""
        dt = (timestamp - self.last_timestamp) / 1000.0
        self.last_timestamp = timestamp
        # Clock anomalies (dt <= 0) become zero motion.
        self.last_dt = clamp(dt, 0.0, self.max_dt)
        if not self.is_paused():
            self.step(self.last_dt)
        self._handle = self.frames.request(self.tick)
