"""
Built-in scenes.
"""

from __future__ import annotations

from .vec3 import Vec3, Point3, Color
from .camera import CameraSettings
from .shapes import Scene
from .materials import Lambertian, Metal, Dielectric


def default_scene() -> Scene:
    """Showcase scene: a glass sphere ringed by diffuse and metal spheres."""
    world = Scene()

    # Ground
    world.add_sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5)))

    # Central glass sphere
    world.add_sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5))

    # Diffuse spheres on the axes
    world.add_sphere(Point3(-5, 1, 0), 1.0, Lambertian(Color(0.7, 0.2, 0.2)))
    world.add_sphere(Point3(5, 1, 0), 1.0, Lambertian(Color(0.2, 0.2, 0.7)))
    world.add_sphere(Point3(0, 1, -5), 1.0, Lambertian(Color(0.2, 0.7, 0.2)))
    world.add_sphere(Point3(0, 1, 5), 1.0, Lambertian(Color(0.7, 0.7, 0.2)))

    # Metals on the diagonals
    world.add_sphere(Point3(-3.5, 1, -3.5), 1.0, Metal(Color(0.8, 0.6, 0.2), 0.0))
    world.add_sphere(Point3(3.5, 1, 3.5), 1.0, Metal(Color(0.8, 0.8, 0.9), 0.1))
    world.add_sphere(Point3(-3.5, 1, 3.5), 1.0, Metal(Color(0.7, 0.4, 0.3), 0.2))
    world.add_sphere(Point3(3.5, 1, -3.5), 1.0, Metal(Color(0.9, 0.9, 0.9), 0.0))

    # Smaller spheres
    world.add_sphere(Point3(-2, 0.5, -2), 0.5, Lambertian(Color(0.6, 0.2, 0.6)))
    world.add_sphere(Point3(2, 0.5, 2), 0.5, Lambertian(Color(0.8, 0.4, 0.1)))
    world.add_sphere(Point3(-2, 0.5, 2), 0.5, Lambertian(Color(0.2, 0.6, 0.6)))
    world.add_sphere(Point3(2, 0.5, -2), 0.5, Lambertian(Color(0.8, 0.4, 0.6)))

    # Elevated spheres
    world.add_sphere(Point3(-1, 2, -1), 0.3, Lambertian(Color(0.9, 0.9, 0.9)))
    world.add_sphere(Point3(1, 2, 1), 0.3, Lambertian(Color(0.1, 0.1, 0.1)))

    # More glass
    world.add_sphere(Point3(-6, 0.7, -2), 0.7, Dielectric(1.3))
    world.add_sphere(Point3(6, 0.7, 2), 0.7, Dielectric(1.8))

    # Distant spheres
    world.add_sphere(Point3(-10, 1.5, -8), 1.5, Metal(Color(0.5, 0.5, 0.7), 0.3))
    world.add_sphere(Point3(8, 1.2, -10), 1.2, Lambertian(Color(0.4, 0.6, 0.4)))

    return world


def default_camera_settings() -> CameraSettings:
    """Camera framing the default scene."""
    return CameraSettings(
        aspect_ratio=16.0 / 9.0,
        image_width=400,
        samples_per_pixel=10,
        max_depth=10,
        vfov=20.0,
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        defocus_angle=0.6,
        focus_dist=10.0
    )
