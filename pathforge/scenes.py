"""
Built-in demo scenes and the cameras that frame them.
"""

from __future__ import annotations
import numpy as np

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, Dielectric
from .sampling import uniform01, uniform_range, random_vec3


def random_scene(rng: np.random.Generator) -> HittableList:
    """Create the large random scene: a grid of small spheres around three big ones."""
    world = HittableList()

    ground_material = Lambertian(Color(0.5, 0.5, 0.5))
    world.add(Sphere(Point3(0, -1000, 0), 1000, ground_material))

    glass = Dielectric(1.5)
    keep_clear = Point3(4, 0.2, 0)

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = uniform01(rng)
            center = Point3(a + 0.9 * uniform01(rng), 0.2, b + 0.9 * uniform01(rng))

            if (center - keep_clear).length() <= 0.9:
                continue

            material: Material
            if choose_mat < 0.8:
                # diffuse
                material = Lambertian(random_vec3(rng) * random_vec3(rng))
            elif choose_mat < 0.95:
                # metal
                material = Metal(random_vec3(rng, 0.5, 1.0), uniform_range(rng, 0.0, 0.5))
            else:
                material = glass
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, glass))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return world


def random_scene_camera(aspect_ratio: float) -> Camera:
    """Camera used with random_scene."""
    return Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )


def three_spheres() -> HittableList:
    """Create a small scene: diffuse, hollow glass and metal spheres on a ground sphere."""
    world = HittableList()

    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    glass = Dielectric(1.5)
    metal = Metal(Color(0.8, 0.6, 0.2), 0.0)

    world.add(Sphere(Point3(0, -100.5, -1), 100, ground))
    world.add(Sphere(Point3(0, 0, -1), 0.5, center))
    # Negative inner radius turns the glass ball into a bubble
    world.add(Sphere(Point3(-1, 0, -1), 0.5, glass))
    world.add(Sphere(Point3(-1, 0, -1), -0.45, glass))
    world.add(Sphere(Point3(1, 0, -1), 0.5, metal))

    return world


def three_spheres_camera(aspect_ratio: float) -> Camera:
    """Camera used with three_spheres, focused on the centre sphere."""
    look_from = Point3(3, 3, 2)
    look_at = Point3(0, 0, -1)
    return Camera(
        look_from=look_from,
        look_at=look_at,
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=2.0,
        focus_dist=(look_from - look_at).length()
    )
