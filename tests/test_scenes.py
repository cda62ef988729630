"""Tests for the built-in scenes."""

import pytest
import numpy as np

from spherecast.vec3 import Point3
from spherecast.materials import Lambertian, Metal, Dielectric
from spherecast.camera import Camera
from spherecast.scenes import default_scene, default_camera_settings


class TestDefaultScene:
    """Test the showcase scene."""

    def test_object_count(self):
        assert len(default_scene()) == 20

    def test_material_mix(self):
        scene = default_scene()
        kinds = [type(scene.material(obj.material)) for obj in scene]
        assert kinds.count(Dielectric) == 3
        assert kinds.count(Metal) == 5
        assert kinds.count(Lambertian) == 12

    def test_ground(self):
        ground = default_scene().objects[0]
        assert ground.center == Point3(0, -1000, 0)
        assert ground.radius == 1000


class TestDefaultCamera:
    """Test the showcase camera."""

    def test_settings(self):
        settings = default_camera_settings()
        assert settings.image_width == 400
        assert settings.image_height == 225
        assert settings.vfov == 20.0
        assert settings.look_from == Point3(13, 2, 3)
        assert settings.defocus_angle == pytest.approx(0.6)

    def test_renders_a_pixel(self):
        np.random.seed(0)
        settings = default_camera_settings()
        settings.samples_per_pixel = 1
        cam = Camera(settings)
        rgb = cam.render_pixel(200, 112, default_scene())
        assert all(0 <= c <= 255 for c in rgb)
