"""Tests for scene file parsing."""

import json
import pytest

from spherecast.vec3 import Vec3, Point3, Color
from spherecast.shapes import Scene, Sphere
from spherecast.materials import Lambertian, Metal, Dielectric
from spherecast.camera import CameraSettings
from spherecast.scene_parser import SceneParser, SceneParseError, load_scene, parse_scene


SCENE = {
    'camera': {
        'look_from': [13, 2, 3],
        'look_at': [0, 0, 0],
        'vfov': 20,
        'image_width': 320,
        'aspect_ratio': 2.0,
        'samples_per_pixel': 4,
        'max_depth': 6,
        'defocus_angle': 0.6,
        'focus_dist': 10,
        'enable_refractions': False,
    },
    'materials': {
        'ground': {'type': 'lambertian', 'albedo': [0.5, 0.5, 0.5]},
        'glass': {'type': 'dielectric', 'ior': 1.5},
    },
    'objects': [
        {'type': 'sphere', 'center': [0, -1000, 0], 'radius': 1000, 'material': 'ground'},
        {'type': 'sphere', 'center': [0, 1, 0], 'radius': 1, 'material': 'glass'},
        {'type': 'sphere', 'center': [2, 1, 0], 'radius': 1, 'material': 'glass'},
        {'type': 'sphere', 'center': [4, 1, 0], 'radius': 1,
         'material': {'type': 'metal', 'albedo': [0.7, 0.6, 0.5], 'fuzz': 0.1}},
    ],
}


class TestParseDict:
    """Test parsing from dictionaries."""

    def test_objects(self):
        scene, _ = parse_scene(SCENE)
        assert isinstance(scene, Scene)
        assert len(scene) == 4
        assert all(isinstance(obj, Sphere) for obj in scene)
        assert scene.objects[0].center == Point3(0, -1000, 0)
        assert scene.objects[0].radius == 1000

    def test_named_materials_shared(self):
        scene, _ = parse_scene(SCENE)
        glass_a, glass_b = scene.objects[1], scene.objects[2]
        assert glass_a.material == glass_b.material
        assert isinstance(scene.material(glass_a.material), Dielectric)
        # ground, glass and the inline metal
        assert len(scene.materials) == 3

    def test_inline_material(self):
        scene, _ = parse_scene(SCENE)
        metal = scene.material(scene.objects[3].material)
        assert isinstance(metal, Metal)
        assert metal.albedo == Color(0.7, 0.6, 0.5)
        assert metal.fuzz == pytest.approx(0.1)

    def test_camera(self):
        _, settings = parse_scene(SCENE)
        assert isinstance(settings, CameraSettings)
        assert settings.look_from == Point3(13, 2, 3)
        assert settings.vfov == 20.0
        assert settings.image_width == 320
        assert settings.image_height == 160
        assert settings.samples_per_pixel == 4
        assert settings.max_depth == 6
        assert settings.defocus_angle == pytest.approx(0.6)
        assert settings.enable_refractions is False
        assert settings.enable_reflections is True

    def test_missing_camera_uses_defaults(self):
        _, settings = parse_scene({'objects': []})
        assert settings == CameraSettings()

    def test_color_formats(self):
        parser = SceneParser()
        assert parser._parse_color({'r': 1, 'g': 0.5, 'b': 0}) == Color(1, 0.5, 0)
        assert parser._parse_color('#ff0000') == Color(1, 0, 0)

    def test_vec3_mapping(self):
        assert SceneParser()._parse_vec3({'x': 1, 'z': 3}) == Vec3(1, 0, 3)

    def test_default_material_type_is_lambertian(self):
        scene, _ = parse_scene({
            'materials': {'plain': {'albedo': [0.1, 0.2, 0.3]}},
            'objects': [{'center': [0, 0, 0], 'material': 'plain'}],
        })
        assert isinstance(scene.material(scene.objects[0].material), Lambertian)


class TestParseErrors:
    """Test malformed input."""

    def test_unknown_material_reference(self):
        with pytest.raises(SceneParseError, match="Unknown material"):
            parse_scene({'objects': [{'type': 'sphere', 'material': 'nope'}]})

    def test_unknown_material_type(self):
        with pytest.raises(SceneParseError, match="Unknown material type"):
            parse_scene({'materials': {'x': {'type': 'plasma'}}})

    def test_unknown_object_type(self):
        with pytest.raises(SceneParseError, match="Unknown object type"):
            parse_scene({'objects': [{'type': 'torus', 'material': {'type': 'lambertian'}}]})

    def test_missing_material(self):
        with pytest.raises(SceneParseError):
            parse_scene({'objects': [{'type': 'sphere'}]})

    def test_bad_vector(self):
        with pytest.raises(SceneParseError, match="3 components"):
            parse_scene({'camera': {'look_from': [1, 2]}})

    def test_bad_color(self):
        with pytest.raises(SceneParseError):
            parse_scene({'materials': {'x': {'albedo': 'red'}}})


class TestLoadScene:
    """Test loading from files."""

    def test_load_json(self, tmp_path):
        path = tmp_path / 'scene.json'
        path.write_text(json.dumps(SCENE))
        scene, settings = load_scene(str(path))
        assert len(scene) == 4
        assert settings.image_width == 320

    def test_load_yaml(self, tmp_path):
        path = tmp_path / 'scene.yaml'
        path.write_text(
            "camera:\n"
            "  image_width: 64\n"
            "materials:\n"
            "  chrome: {type: metal, albedo: [0.9, 0.9, 0.9]}\n"
            "objects:\n"
            "  - {type: sphere, center: [0, 0, -1], radius: 0.5, material: chrome}\n"
        )
        scene, settings = load_scene(str(path))
        assert len(scene) == 1
        assert settings.image_width == 64

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneParseError, match="not found"):
            load_scene(str(tmp_path / 'missing.yaml'))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'broken.json'
        path.write_text('{"objects": [')
        with pytest.raises(SceneParseError):
            load_scene(str(path))

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text('- 1\n- 2\n')
        with pytest.raises(SceneParseError, match="mapping"):
            load_scene(str(path))
