"""
Scene description parser.

Scenes are JSON or YAML documents with three sections:
- camera: camera placement, image size and feature toggles
- materials: a named materials library
- objects: spheres referring to a library material by name or inline

Example scene file:
```yaml
camera:
  look_from: [13, 2, 3]
  look_at: [0, 0, 0]
  vfov: 20
  image_width: 400
  aspect_ratio: 1.7778
  samples_per_pixel: 10
  max_depth: 10
  defocus_angle: 0.6
  focus_dist: 10
  enable_reflections: true

materials:
  ground:
    type: lambertian
    albedo: [0.5, 0.5, 0.5]

  glass:
    type: dielectric
    ior: 1.5

objects:
  - type: sphere
    center: [0, -1000, 0]
    radius: 1000
    material: ground

  - type: sphere
    center: [0, 1, 0]
    radius: 1
    material: {type: metal, albedo: [0.8, 0.6, 0.2], fuzz: 0.1}
```
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Tuple
import json

import yaml

from .vec3 import Vec3, Color
from .camera import CameraSettings
from .shapes import Sphere, Scene
from .materials import Material, Lambertian, Metal, Dielectric


class SceneParseError(Exception):
    """Error during scene parsing."""


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, int] = {}
        self.scene = Scene()
        self.settings = CameraSettings()

    def parse_file(self, filepath: str) -> Tuple[Scene, CameraSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, CameraSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera settings)
        """
        # Parse materials first (objects reference them)
        if 'materials' in data:
            for name, mat_data in data['materials'].items():
                self.materials[name] = self.scene.add_material(self._parse_material(mat_data))

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'camera' in data:
            self._parse_camera(data['camera'])

        return self.scene, self.settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an x/y/z mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(float(data[0]), float(data[1]), float(data[2]))
        elif isinstance(data, dict):
            return Vec3(
                float(data.get('x', 0)),
                float(data.get('y', 0)),
                float(data.get('z', 0))
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, an r/g/b mapping or a hex string."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(float(data[0]), float(data[1]), float(data[2]))
        elif isinstance(data, dict):
            return Color(
                float(data.get('r', 0)),
                float(data.get('g', 0)),
                float(data.get('b', 0))
            )
        elif isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                r = int(data[1:3], 16) / 255.0
                g = int(data[3:5], 16) / 255.0
                b = int(data[5:7], 16) / 255.0
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_material(self, mat_data: Dict[str, Any]) -> Material:
        mat_type = mat_data.get('type', 'lambertian').lower()

        if mat_type == 'lambertian':
            return Lambertian(self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5])))
        elif mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            return Metal(albedo, float(mat_data.get('fuzz', 0.0)))
        elif mat_type == 'dielectric':
            return Dielectric(float(mat_data.get('ior', 1.5)))
        else:
            raise SceneParseError(f"Unknown material type: {mat_type}")

    def _get_material(self, mat_ref: Any) -> int:
        """Resolve a material by name or inline definition to a handle."""
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self.scene.add_material(self._parse_material(mat_ref))
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in objects_data:
            obj_type = obj_data.get('type', 'sphere').lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")
            if 'material' not in obj_data:
                raise SceneParseError("Sphere is missing a material")

            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            radius = float(obj_data.get('radius', 1.0))
            self.scene.add(Sphere(center, radius, self._get_material(obj_data['material'])))

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section; missing keys keep their defaults."""
        s = self.settings
        s.aspect_ratio = float(camera_data.get('aspect_ratio', s.aspect_ratio))
        s.image_width = int(camera_data.get('image_width', s.image_width))
        s.samples_per_pixel = int(camera_data.get('samples_per_pixel', s.samples_per_pixel))
        s.max_depth = int(camera_data.get('max_depth', s.max_depth))
        s.vfov = float(camera_data.get('vfov', s.vfov))
        s.defocus_angle = float(camera_data.get('defocus_angle', s.defocus_angle))
        s.focus_dist = float(camera_data.get('focus_dist', s.focus_dist))

        for key in ('look_from', 'look_at', 'vup'):
            if key in camera_data:
                setattr(s, key, self._parse_vec3(camera_data[key]))

        for key in ('enable_antialiasing', 'enable_shadows', 'enable_reflections', 'enable_refractions'):
            if key in camera_data:
                setattr(s, key, bool(camera_data[key]))


def load_scene(filepath: str) -> Tuple[Scene, CameraSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera settings)
    """
    return SceneParser().parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, CameraSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera settings)
    """
    return SceneParser().parse_dict(data)
