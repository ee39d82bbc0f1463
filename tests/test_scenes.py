"""Tests for the built-in scenes."""

import numpy as np
import pytest

from pathforge.vec3 import Point3
from pathforge.shapes import Sphere
from pathforge.materials import Lambertian, Metal, Dielectric
from pathforge.scenes import random_scene, random_scene_camera, three_spheres, three_spheres_camera


class TestRandomScene:
    """Test the large random scene."""

    def test_fixed_spheres_present(self, rng):
        world = random_scene(rng)
        big = [s for s in world if s.radius == 1.0]
        assert len(big) == 3
        assert {type(s.material) for s in big} == {Lambertian, Metal, Dielectric}

    def test_ground(self, rng):
        ground = random_scene(rng).objects[0]
        assert ground.center == Point3(0, -1000, 0)
        assert ground.radius == 1000

    def test_small_spheres_keep_clear(self, rng):
        world = random_scene(rng)
        small = [s for s in world if s.radius == 0.2]
        assert 0 < len(small) <= 22 * 22
        for s in small:
            assert (s.center - Point3(4, 0.2, 0)).length() > 0.9
            assert s.center.y == 0.2

    def test_glass_is_shared(self, rng):
        world = random_scene(rng)
        glass = [s.material for s in world if isinstance(s.material, Dielectric)]
        assert all(m is glass[0] for m in glass)

    def test_metal_fuzz_range(self, rng):
        for s in random_scene(rng):
            if isinstance(s.material, Metal) and s.radius == 0.2:
                assert 0.0 <= s.material.fuzz < 0.5

    def test_reproducible(self):
        a = random_scene(np.random.default_rng(5))
        b = random_scene(np.random.default_rng(5))
        assert len(a) == len(b)
        assert all(x.center == y.center for x, y in zip(a, b))

    def test_camera(self):
        cam = random_scene_camera(16 / 9)
        assert cam.origin == Point3(13, 2, 3)
        assert cam.lens_radius == 0.05


class TestThreeSpheres:
    """Test the small scene."""

    def test_contents(self):
        world = three_spheres()
        assert len(world) == 5
        assert all(isinstance(s, Sphere) for s in world)

    def test_hollow_glass_shell(self):
        world = three_spheres()
        shell = [s for s in world if s.radius < 0]
        assert len(shell) == 1
        assert isinstance(shell[0].material, Dielectric)

    def test_camera_focuses_on_target(self):
        cam = three_spheres_camera(16 / 9)
        assert cam.lens_radius == 1.0
        # Focus plane passes through the look-at point
        center = cam.lower_left_corner + cam.horizontal / 2 + cam.vertical / 2
        assert center == Point3(0, 0, -1)
