"""
Background render sessions.

A RenderSession owns the render thread and the state a display loop polls:
the pixel buffer, progress, the dirty flag and the active flag. Only one
render runs at a time; starting another cancels and joins the previous one.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import time
from typing import Optional, Dict, Any, Tuple

from .camera import Camera, CameraSettings
from .shapes import Scene
from .signals import PixelBuffer, RenderSignals

logger = logging.getLogger(__name__)


class RenderSession:
    """Runs renders on a background thread and exposes their progress."""

    def __init__(
        self,
        settings: Optional[CameraSettings] = None,
        buffer: Optional[PixelBuffer] = None,
        signals: Optional[RenderSignals] = None,
    ):
        """Create an idle session.

        Args:
            settings: Initial camera configuration
            buffer: Shared output buffer (a new one if None)
            signals: Shared progress/cancel/dirty/active signals (new if None)
        """
        self.settings = settings if settings else CameraSettings()
        self.buffer = buffer if buffer is not None else PixelBuffer()
        self.signals = signals if signals is not None else RenderSignals()
        self.render_thread: Optional[threading.Thread] = None
        self.lock = threading.Lock()
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.completed = False
        self.error: Optional[str] = None
        self.render_count = 0

    def configure(self, settings: CameraSettings) -> None:
        """Replace the camera configuration used by the next render."""
        with self.lock:
            self.settings = dataclasses.replace(settings)

    def begin_render(
        self,
        scene: Scene,
        buffer: Optional[PixelBuffer] = None,
        signals: Optional[RenderSignals] = None,
    ) -> None:
        """Start rendering scene in the background and return immediately.

        Any render already in flight is cancelled and joined first. The
        buffer is resized to the new image size and cleared to black before
        the thread starts.

        Args:
            scene: Scene to render; must not be modified while rendering
            buffer: Output buffer to use from now on (keeps current if None)
            signals: Signal bundle to use from now on (keeps current if None)
        """
        with self.lock:
            self._stop_thread()

            if buffer is not None:
                self.buffer = buffer
            if signals is not None:
                self.signals = signals

            camera = Camera(self.settings)
            self.buffer.resize(camera.image_width, camera.image_height)
            self.signals.reset()
            self.signals.active.set()

            self.completed = False
            self.error = None
            self.start_time = time.monotonic()
            self.end_time = None
            self.render_count += 1

            self.render_thread = threading.Thread(
                target=self._render_worker,
                args=(camera, scene, self.buffer, self.signals),
                name=f"render-{self.render_count}",
                daemon=True
            )
            self.render_thread.start()

    def _render_worker(self, camera: Camera, scene: Scene, buffer: PixelBuffer, signals: RenderSignals) -> None:
        """Worker thread for rendering."""
        try:
            if camera.render(scene, buffer, signals):
                signals.progress.store(1.0)
                self.completed = True
            signals.dirty.set()
        except Exception as e:
            logger.exception("Render failed")
            self.error = str(e)
        finally:
            self.end_time = time.monotonic()
            signals.active.clear()

    def _stop_thread(self) -> None:
        if self.render_thread is not None:
            self.signals.cancel.set()
            self.render_thread.join()
            self.render_thread = None

    def request_cancel(self) -> bool:
        """Ask the current render to stop. Returns False if none is running."""
        if self.signals.active.is_set():
            self.signals.cancel.set()
            return True
        return False

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the current render finishes.

        Returns:
            True if no render is running any more
        """
        thread = self.render_thread
        if thread is not None:
            thread.join(timeout)
            return not thread.is_alive()
        return True

    def close(self) -> None:
        """Cancel any running render and block until its thread has exited."""
        with self.lock:
            self._stop_thread()

    def __enter__(self) -> RenderSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def is_rendering(self) -> bool:
        return self.signals.active.is_set()

    @property
    def progress(self) -> float:
        return self.signals.progress.load()

    @property
    def elapsed(self) -> float:
        """Seconds spent on the current (or last) render."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.monotonic()
        return end - self.start_time

    @property
    def estimated_remaining(self) -> Optional[float]:
        """Seconds left at the current rate, once 1% of pixels are done."""
        progress = self.progress
        if not self.is_rendering or progress <= 0.01:
            return None
        elapsed = self.elapsed
        return elapsed / progress - elapsed

    def consume_update(self) -> Optional[Tuple[int, int, bytes]]:
        """Copy the buffer out if it changed since the last call.

        Returns:
            (width, height, pixels) when new pixels are available, else None
        """
        if not self.signals.dirty.is_set():
            return None
        # Clear first so a pixel committed during the copy re-arms the flag
        self.signals.dirty.clear()
        return self.buffer.snapshot()

    def get_status(self) -> Dict[str, Any]:
        """Get current render status."""
        if self.start_time is None:
            status = 'idle'
        elif self.is_rendering:
            status = 'running'
        elif self.error is not None:
            status = 'error'
        elif self.completed:
            status = 'completed'
        else:
            status = 'cancelled'

        return {
            'status': status,
            'progress': self.progress,
            'elapsed': self.elapsed,
            'remaining': self.estimated_remaining,
            'width': self.buffer.width,
            'height': self.buffer.height,
            'error': self.error,
        }
