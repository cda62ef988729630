"""
Geometric shapes and the scene container.

Each shape implements the Hittable protocol with a `hit` method. Materials
are not stored on the shapes themselves: the Scene owns a material table and
shapes refer to entries in it by integer handle, so one material can be
shared by any number of surfaces for the lifetime of the scene.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import math

from .vec3 import Vec3, Point3
from .ray import Ray
from .interval import Interval

if TYPE_CHECKING:
    from .materials import Material


@dataclass
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        point: The intersection point in world space
        normal: The unit surface normal (always points against the ray)
        t: The ray parameter at intersection
        front_face: True if ray hit from outside the object
        material: Handle of the material in the owning scene's table
    """
    point: Point3
    normal: Vec3
    t: float
    front_face: bool = True
    material: int = 0

    def set_face_normal(self, ray: Ray, outward_normal: Vec3) -> None:
        """Set the normal to always point against the ray direction.

        Args:
            ray: The incoming ray
            outward_normal: The geometric unit normal pointing outward
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test
            ray_t: Accepted range of the ray parameter

        Returns:
            HitRecord for the nearest accepted intersection, None otherwise
        """


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: int = 0):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (negative values are clamped to 0)
            material: Handle returned by Scene.add_material
        """
        self.center = center
        self.radius = max(0.0, radius)
        self.material = material

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the quadratic formula.

        The equation (P-C)·(P-C) = r² where P = ray.at(t)
        expands to: t²(d·d) - 2t(d·(C-O)) + (C-O)·(C-O) - r² = 0.
        Roots are tried nearest first; the first inside ray_t wins.
        """
        if self.radius == 0:
            return None

        oc = self.center - ray.origin
        a = ray.direction.length_squared()
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        # Find the nearest root in the acceptable range
        root = (h - sqrtd) / a
        if not ray_t.surrounds(root):
            root = (h + sqrtd) / a
            if not ray_t.surrounds(root):
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius

        hit_record = HitRecord(point=point, normal=outward_normal, t=root, material=self.material)
        hit_record.set_face_normal(ray, outward_normal)

        return hit_record

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius}, material={self.material})"


class Scene(Hittable):
    """An unordered collection of surfaces plus the materials they share.

    Intersection checks every surface; there is no acceleration structure.
    """

    def __init__(self):
        self.objects: list[Hittable] = []
        self.materials: list[Material] = []

    def add_material(self, material: Material) -> int:
        """Register a material and return its handle."""
        self.materials.append(material)
        return len(self.materials) - 1

    def material(self, handle: int) -> Material:
        """Look up a registered material."""
        return self.materials[handle]

    def add(self, obj: Hittable) -> None:
        """Add an object to the scene."""
        self.objects.append(obj)

    def add_sphere(self, center: Point3, radius: float, material: Material) -> Sphere:
        """Register `material` and add a sphere that uses it."""
        sphere = Sphere(center, radius, self.add_material(material))
        self.add(sphere)
        return sphere

    def clear(self) -> None:
        """Remove all objects and materials."""
        self.objects.clear()
        self.materials.clear()

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """Find the closest intersection among all objects."""
        closest_hit: Optional[HitRecord] = None
        closest_t = ray_t.max

        for obj in self.objects:
            hit_record = obj.hit(ray, ray_t.with_max(closest_t))
            if hit_record is not None:
                closest_hit = hit_record
                closest_t = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)
