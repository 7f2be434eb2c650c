"""
Deferred task scheduler for Neon Invaders.

Runs callbacks after a delay measured in seconds of elapsed time.  The
owner advances the scheduler explicitly, so it is independent of the
frame clock (and keeps running while the game is paused).
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class ScheduledTask:
    """A single pending callback.  Cancelling twice is harmless."""

    due: float
    callback: Callable[[], None]
    seq: int = 0
    cancelled: bool = False
    done: bool = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class Scheduler:
    """Runs :class:`ScheduledTask` callbacks once their delay has elapsed."""

    now: float = 0.0
    _tasks: list[ScheduledTask] = field(default_factory=list, repr=False)
    _counter: itertools.count = field(
        default_factory=itertools.count, repr=False,
    )

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Schedule *callback* to run *delay* seconds from now."""
        task = ScheduledTask(
            due=self.now + max(delay, 0.0),
            callback=callback,
            seq=next(self._counter),
        )
        self._tasks.append(task)
        return task

    def advance(self, seconds: float) -> int:
        """Move time forward by *seconds* and run every task that fell due.

        Tasks run in due order (ties in scheduling order).  Returns the
        number of callbacks executed.
        """
        if seconds > 0:
            self.now += seconds
        due = sorted(
            (t for t in self._tasks if t.pending and t.due <= self.now),
            key=lambda t: (t.due, t.seq),
        )
        ran = 0
        for task in due:
            # An earlier callback may have cancelled this one.
            if not task.pending:
                continue
            task.done = True
            task.callback()
            ran += 1
        self._tasks = [t for t in self._tasks if t.pending]
        return ran

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if t.pending)

    def cancel_all(self) -> None:
        """Cancel every pending task."""
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
