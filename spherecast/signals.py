"""
State shared between a background render and whoever displays it.

The render thread is the only writer of the pixel buffer and the display side
is the only reader; both go through the buffer's lock so a pixel is never
observed half written. Progress, cancellation, "new pixels available" and
"render active" are independent signals that are polled, never waited on
under the buffer lock.
"""

from __future__ import annotations
import threading
from dataclasses import dataclass, field
from typing import Optional

import numpy as np


class PixelBuffer:
    """Row-major RGB byte image, top row first, 3 bytes per pixel."""

    def __init__(self, lock: Optional[threading.Lock] = None):
        """Create an empty buffer.

        Args:
            lock: Mutex guarding every read and write; a private one is
                created when omitted
        """
        self.lock = lock if lock is not None else threading.Lock()
        self.width = 0
        self.height = 0
        self._data = bytearray()

    def resize(self, width: int, height: int) -> None:
        """Resize to width x height and clear every pixel to black."""
        with self.lock:
            self.width = width
            self.height = height
            self._data = bytearray(width * height * 3)

    def write_pixel(self, i: int, j: int, rgb: tuple[int, int, int]) -> None:
        """Store one pixel at column i, row j."""
        idx = (j * self.width + i) * 3
        with self.lock:
            self._data[idx:idx + 3] = bytes(rgb)

    def read_pixel(self, i: int, j: int) -> tuple[int, int, int]:
        idx = (j * self.width + i) * 3
        with self.lock:
            r, g, b = self._data[idx:idx + 3]
        return r, g, b

    def snapshot(self) -> tuple[int, int, bytes]:
        """Copy out (width, height, pixels) consistently."""
        with self.lock:
            return self.width, self.height, bytes(self._data)

    def to_array(self) -> np.ndarray:
        """Copy the buffer as a (height, width, 3) uint8 array."""
        width, height, data = self.snapshot()
        return np.frombuffer(data, dtype=np.uint8).reshape((height, width, 3)).copy()

    def is_empty(self) -> bool:
        with self.lock:
            return len(self._data) == 0

    def __len__(self) -> int:
        with self.lock:
            return len(self._data)


class ProgressSignal:
    """Fraction of pixels completed, in [0, 1].

    Within one render the stored value never decreases; `reset` starts the
    next render from zero.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value = 0.0

    def store(self, value: float) -> None:
        value = min(max(value, 0.0), 1.0)
        with self._lock:
            if value > self._value:
                self._value = value

    def load(self) -> float:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0.0


@dataclass
class RenderSignals:
    """The flags a render loop reports through.

    Attributes:
        progress: Fraction of pixels committed so far
        cancel: Set by the consumer to stop the render
        dirty: Set by the render when the buffer has unread changes,
            cleared by the consumer after it copies the buffer
        active: Set while a render task is running
    """
    progress: ProgressSignal = field(default_factory=ProgressSignal)
    cancel: threading.Event = field(default_factory=threading.Event)
    dirty: threading.Event = field(default_factory=threading.Event)
    active: threading.Event = field(default_factory=threading.Event)

    def reset(self) -> None:
        """Prepare for a new render."""
        self.progress.reset()
        self.cancel.clear()
        self.dirty.clear()
