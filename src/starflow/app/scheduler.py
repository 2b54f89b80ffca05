"""
Frame Schedulers

The render scheduler never draws on the spot: it asks a frame scheduler to
run its flush "on the next frame". The frame scheduler is passed in
explicitly, so the same mount runs under an asyncio loop in an application
and under a manually stepped clock in tests.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Protocol

from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]

DEFAULT_FRAME_INTERVAL = 1 / 60


class FrameScheduler(Protocol):
    """Invoke a callback once, on the next frame."""

    def request_frame(self, callback: FrameCallback) -> None: ...


class ManualFrameScheduler:
    """
    Frame scheduler driven by explicit `run_frame()` calls.

    Callbacks requested while a frame is running are deferred to the next
    frame, like a browser's animation-frame queue.
    """

    def __init__(self):
        self._queue: List[FrameCallback] = []
        self.frames = 0

    def request_frame(self, callback: FrameCallback) -> None:
        self._queue.append(callback)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._queue)

    def run_frame(self) -> int:
        """
        Run the callbacks queued so far; return how many ran.

        If a callback raises, the callbacks after it in the batch go back to
        the front of the queue for the next frame and the error propagates.
        """
        batch, self._queue = self._queue, []
        self.frames += 1
        for i, callback in enumerate(batch):
            try:
                callback()
            except Exception:
                self._queue[:0] = batch[i + 1:]
                raise
        return len(batch)

    def run_until_idle(self, max_frames: int = 100) -> int:
        """Run frames until nothing is queued; return the number of frames run."""
        ran = 0
        while self._queue:
            if ran >= max_frames:
                raise RuntimeError(f"frame queue still busy after {max_frames} frames")
            self.run_frame()
            ran += 1
        return ran


class AsyncioFrameScheduler:
    """
    Frame scheduler backed by an asyncio event loop.

    Each request is run `frame_interval` seconds later (on the next loop
    iteration when the interval is 0). Without an explicit loop the running
    loop at request time is used.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, frame_interval: float = DEFAULT_FRAME_INTERVAL):
        if frame_interval < 0:
            raise ConfigurationError(f"frame_interval must be >= 0, got {frame_interval}")
        self._loop = loop
        self.frame_interval = frame_interval

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def request_frame(self, callback: FrameCallback) -> None:
        if self.frame_interval:
            self.loop.call_later(self.frame_interval, callback)
        else:
            self.loop.call_soon(callback)
