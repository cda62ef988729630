"""
spherecast - A Python Ray Tracing Renderer

A small path tracer for scenes of spheres with:
- Lambertian, metal and dielectric materials
- Depth of field and anti-aliasing
- Incremental background rendering into a shared RGB byte buffer
- Cancellation and progress reporting for interactive front ends
- PPM and PNG export
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .interval import Interval, HIT_EPSILON, INTENSITY
from .shapes import HitRecord, Hittable, Sphere, Scene
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric
from .color import linear_to_gamma, color_to_bytes, sky_color
from .camera import Camera, CameraSettings
from .signals import PixelBuffer, ProgressSignal, RenderSignals
from .session import RenderSession
from .scenes import default_scene, default_camera_settings
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .export import ExportError, write_ppm, save_png, save_image
