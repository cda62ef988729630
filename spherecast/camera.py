"""
Camera module: primary ray generation, shading and the render loop.

Supports:
- Perspective projection with configurable vertical field of view
- Arbitrary positioning via look-at
- Depth of field (defocus disk)
- Incremental, cancellable rendering into a shared byte buffer
- Feature toggles for anti-aliasing, shadows, reflections and refractions
"""

from __future__ import annotations
import dataclasses
import logging
import math
import time
from dataclasses import dataclass, field

from .vec3 import Vec3, Point3, Color, degrees_to_radians
from .ray import Ray
from .interval import Interval, HIT_EPSILON
from .shapes import Scene
from .color import color_to_bytes, sky_color
from .signals import PixelBuffer, RenderSignals

logger = logging.getLogger(__name__)

# Minimum time between two "new pixels available" notifications
UPDATE_INTERVAL = 0.1

# Direction of the fixed light used when recursion is disabled
LIGHT_DIRECTION = Vec3(1, 1, 1).normalize()
AMBIENT = 0.3
DIFFUSE = 0.7


@dataclass
class CameraSettings:
    """User-facing camera configuration.

    Changes take effect the next time a render starts.
    """
    aspect_ratio: float = 1.0
    image_width: int = 100
    samples_per_pixel: int = 10
    max_depth: int = 10
    vfov: float = 90.0
    look_from: Point3 = field(default_factory=lambda: Point3(0, 0, 0))
    look_at: Point3 = field(default_factory=lambda: Point3(0, 0, -1))
    vup: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))
    defocus_angle: float = 0.0
    focus_dist: float = 10.0

    enable_antialiasing: bool = True
    enable_shadows: bool = True
    enable_reflections: bool = True
    enable_refractions: bool = True

    def clamped(self) -> CameraSettings:
        """Return a copy with out-of-range values pulled back into range."""
        return dataclasses.replace(
            self,
            aspect_ratio=self.aspect_ratio if self.aspect_ratio > 0 else 1.0,
            image_width=max(1, int(self.image_width)),
            samples_per_pixel=max(1, int(self.samples_per_pixel)),
            max_depth=max(0, int(self.max_depth)),
            defocus_angle=max(0.0, self.defocus_angle),
        )

    @property
    def image_height(self) -> int:
        settings = self.clamped()
        return max(1, int(settings.image_width / settings.aspect_ratio))


class Camera:
    """A perspective camera that renders a scene into a PixelBuffer."""

    def __init__(self, settings: CameraSettings = None):
        """Create a camera.

        Args:
            settings: Camera configuration (uses defaults if None)
        """
        self.settings = settings if settings else CameraSettings()
        self.initialize()

    def initialize(self) -> None:
        """Derive the image size, camera basis and viewport from settings."""
        s = self.settings = self.settings.clamped()

        self.image_width = s.image_width
        self.image_height = max(1, int(s.image_width / s.aspect_ratio))
        self.center = s.look_from

        theta = degrees_to_radians(s.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2 * h * s.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Compute orthonormal camera basis
        self.w = (s.look_from - s.look_at).normalize()  # Points backward from camera
        self.u = s.vup.cross(self.w).normalize()         # Points right
        self.v = self.w.cross(self.u)                    # Points up

        # Viewport edges; v runs down the image so rows go top to bottom
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (
            self.center
            - self.w * s.focus_dist
            - viewport_u / 2
            - viewport_v / 2
        )
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = s.focus_dist * math.tan(degrees_to_radians(s.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    @property
    def sample_count(self) -> int:
        """Samples taken per pixel; one when anti-aliasing is off."""
        return self.settings.samples_per_pixel if self.settings.enable_antialiasing else 1

    def get_ray(self, i: int, j: int) -> Ray:
        """Generate a ray through pixel (i, j).

        With anti-aliasing the sample point is jittered inside the pixel,
        otherwise the ray passes through the pixel center. With a positive
        defocus angle the origin is sampled on the defocus disk.
        """
        offset = Vec3.sample_square() if self.settings.enable_antialiasing else Vec3(0, 0, 0)
        pixel_sample = (
            self.pixel00_loc
            + self.pixel_delta_u * (i + offset.x)
            + self.pixel_delta_v * (j + offset.y)
        )

        ray_origin = self.center if self.settings.defocus_angle <= 0 else self.defocus_disk_sample()
        return Ray(ray_origin, pixel_sample - ray_origin)

    def defocus_disk_sample(self) -> Point3:
        """Random point on the camera defocus disk."""
        p = Vec3.random_in_unit_disk()
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def ray_color(self, ray: Ray, depth: int, scene: Scene) -> Color:
        """Compute the color carried back along a ray.

        Args:
            ray: The ray to trace
            depth: Remaining bounces; zero returns black
            scene: The scene to trace against

        Returns:
            The linear radiance for this ray
        """
        if depth <= 0:
            return Color(0, 0, 0)

        rec = scene.hit(ray, Interval(HIT_EPSILON, math.inf))
        if rec is None:
            return sky_color(ray)

        s = self.settings
        if not s.enable_shadows:
            return Color(0, 0, 0)

        result = scene.material(rec.material).scatter(ray, rec)
        if result is None:
            return Color(0, 0, 0)

        if s.enable_reflections or s.enable_refractions:
            return result.attenuation * self.ray_color(result.scattered_ray, depth - 1, scene)

        # Recursion disabled: fixed ambient plus one directional light, no
        # visibility test. Keeps objects visible without light transport.
        light_intensity = max(0.0, rec.normal.dot(LIGHT_DIRECTION))
        return result.attenuation * (AMBIENT + DIFFUSE * light_intensity)

    def render_pixel(self, i: int, j: int, scene: Scene) -> tuple[int, int, int]:
        """Render one pixel without cancellation checks and return its bytes."""
        count = self.sample_count
        pixel_color = Color(0, 0, 0)
        for _ in range(count):
            pixel_color = pixel_color + self.ray_color(self.get_ray(i, j), self.settings.max_depth, scene)
        return color_to_bytes(pixel_color / count)

    def render(self, scene: Scene, buffer: PixelBuffer, signals: RenderSignals) -> bool:
        """Render the whole image into buffer, reporting through signals.

        The buffer is resized and cleared first. Pixels are committed one at
        a time in scan order. Cancellation is checked before every row,
        pixel and sample; a cancelled pixel is discarded.

        Returns:
            True if every pixel was rendered, False if cancelled
        """
        self.initialize()
        width, height = self.image_width, self.image_height
        buffer.resize(width, height)

        total_pixels = width * height
        completed_pixels = 0
        pixels_since_update = 0
        update_frequency = max(1, total_pixels // 100)
        row_update_stride = max(1, height // 20)
        last_update_time = time.monotonic()
        last_reported_percent = -10
        count = self.sample_count
        max_depth = self.settings.max_depth
        cancel = signals.cancel

        logger.info("Rendering %dx%d with %d samples per pixel", width, height, count)

        for j in range(height):
            if cancel.is_set():
                break
            for i in range(width):
                if cancel.is_set():
                    break

                pixel_color = Color(0, 0, 0)
                for _ in range(count):
                    if cancel.is_set():
                        break
                    pixel_color = pixel_color + self.ray_color(self.get_ray(i, j), max_depth, scene)

                if cancel.is_set():
                    break

                buffer.write_pixel(i, j, color_to_bytes(pixel_color / count))

                completed_pixels += 1
                pixels_since_update += 1
                progress = completed_pixels / total_pixels
                signals.progress.store(progress)

                now = time.monotonic()
                if (now - last_update_time >= UPDATE_INTERVAL
                        or pixels_since_update >= update_frequency
                        or completed_pixels == total_pixels):
                    signals.dirty.set()
                    pixels_since_update = 0
                    last_update_time = now

                    percent = int(progress * 100)
                    if percent >= last_reported_percent + 10:
                        logger.debug("Progress: %d%%", percent)
                        last_reported_percent = percent

            if j % row_update_stride == 0:
                signals.dirty.set()

        if completed_pixels == total_pixels:
            logger.info("Render completed: %d pixels", completed_pixels)
            return True

        logger.info("Render stopped at %d/%d pixels", completed_pixels, total_pixels)
        return False

    def __repr__(self) -> str:
        return f"Camera(center={self.center}, size={self.image_width}x{self.image_height})"
