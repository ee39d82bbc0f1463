"""Tests for material system."""

import pytest
import math
import numpy as np

from conftest import ConstantRandom
from pathforge.vec3 import Vec3, Point3, Color
from pathforge.ray import Ray
from pathforge.shapes import HitRecord
from pathforge.materials import Material, Lambertian, Metal, Dielectric


def make_record(point=Point3(0, 0, 0), normal=Vec3(0, 1, 0), front_face=True, material=None):
    return HitRecord(point=point, normal=normal, t=1.0, front_face=front_face, material=material)


class TestLambertian:
    """Test Lambertian diffuse material."""

    def test_scatter_always_succeeds(self, rng):
        mat = Lambertian(Color(0.5, 0.5, 0.5))
        ray_in = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        rec = make_record(Point3(0, 0, -1), Vec3(0, 0, 1))

        for _ in range(100):
            assert mat.scatter(ray_in, rec, rng) is not None

    def test_scattered_in_hemisphere(self, rng):
        mat = Lambertian(Color(0.5, 0.5, 0.5))
        ray_in = Ray(Point3(0, 0, 0), Vec3(0, -1, 0))
        normal = Vec3(0, 1, 0)

        for _ in range(100):
            result = mat.scatter(ray_in, make_record(normal=normal), rng)
            assert result.scattered_ray.direction.dot(normal) >= 0.0

    def test_scattered_from_hit_point(self, rng):
        mat = Lambertian(Color(0.5, 0.5, 0.5))
        point = Point3(1, 2, 3)
        result = mat.scatter(Ray(Point3(), Vec3(1, 2, 3)), make_record(point=point), rng)
        assert result.scattered_ray.origin == point

    def test_attenuation_matches_albedo(self, rng):
        albedo = Color(0.8, 0.2, 0.3)
        result = Lambertian(albedo).scatter(Ray(Point3(), Vec3(0, -1, 0)), make_record(), rng)
        assert result.attenuation == albedo

    def test_degenerate_direction_falls_back_to_normal(self):
        # A zero draw yields the unit vector (0, 0, -1), cancelling the normal exactly
        mat = Lambertian(Color(0.5, 0.5, 0.5))
        normal = Vec3(0, 0, 1)
        result = mat.scatter(Ray(Point3(), Vec3(0, 0, -1)), make_record(normal=normal), ConstantRandom(0.0))
        assert result.scattered_ray.direction == normal


class TestMetal:
    """Test Metal material."""

    def test_perfect_reflection_is_exact(self, rng):
        mat = Metal(Color(1, 1, 1), fuzz=0.0)
        ray_in = Ray(Point3(0, 0, 0), Vec3(1, -1, 0).unit_vector())
        result = mat.scatter(ray_in, make_record(Point3(1, 0, 0), Vec3(0, 1, 0)), rng)

        expected = Vec3(1, 1, 0).unit_vector()
        assert np.array_equal(result.scattered_ray.direction.to_array(), expected.to_array())

    def test_zero_fuzz_is_deterministic(self):
        mat = Metal(Color(1, 1, 1), fuzz=0.0)
        ray_in = Ray(Point3(0, 0, 0), Vec3(1, -1, 0))
        rec = make_record()
        a = mat.scatter(ray_in, rec, np.random.default_rng(1))
        b = mat.scatter(ray_in, rec, np.random.default_rng(2))
        assert np.array_equal(a.scattered_ray.direction.to_array(), b.scattered_ray.direction.to_array())

    def test_fuzz_adds_perturbation(self, rng):
        mat = Metal(Color(1, 1, 1), fuzz=0.5)
        ray_in = Ray(Point3(0, 0, 0), Vec3(0, -1, 0))
        rec = make_record()

        directions = [mat.scatter(ray_in, rec, rng).scattered_ray.direction for _ in range(50)]
        perfect = Vec3(0, 1, 0)
        assert any(d != perfect for d in directions)
        # Perturbation stays within the fuzz ball around the mirror direction
        assert all((d - perfect).length() < 0.5 for d in directions)

    def test_fuzz_clamped(self):
        assert Metal(Color(1, 1, 1), fuzz=3.0).fuzz == 1.0
        assert Metal(Color(1, 1, 1), fuzz=-1.0).fuzz == 0.0

    def test_never_absorbs(self, rng):
        """Fuzzy rays heading into the surface are still returned."""
        mat = Metal(Color(1, 1, 1), fuzz=1.0)
        ray_in = Ray(Point3(0, 0, 0), Vec3(1, -0.05, 0))
        rec = make_record()

        results = [mat.scatter(ray_in, rec, rng) for _ in range(200)]
        assert all(r is not None for r in results)
        assert any(r.scattered_ray.direction.dot(rec.normal) < 0 for r in results)

    def test_attenuation_matches_albedo(self, rng):
        albedo = Color(0.7, 0.6, 0.5)
        result = Metal(albedo).scatter(Ray(Point3(), Vec3(0, -1, 0)), make_record(), rng)
        assert result.attenuation == albedo


class TestDielectric:
    """Test Dielectric (glass) material."""

    def test_always_scatters_white(self, rng):
        mat = Dielectric(1.5)
        ray_in = Ray(Point3(0, 1, 0), Vec3(0.3, -1, 0))
        for front_face in (True, False):
            for _ in range(50):
                result = mat.scatter(ray_in, make_record(front_face=front_face), rng)
                assert result is not None
                assert result.attenuation == Color(1, 1, 1)

    @pytest.mark.parametrize("angle_deg", [0, 15, 30, 45, 60, 75, 85])
    @pytest.mark.parametrize("front_face", [True, False])
    def test_unit_ior_is_noop(self, angle_deg, front_face):
        mat = Dielectric(1.0)
        angle = math.radians(angle_deg)
        incident = Vec3(math.sin(angle), -math.cos(angle), 0)
        rec = make_record(front_face=front_face)

        # A draw above any Schlick value selects refraction
        result = mat.scatter(Ray(Point3(0, 1, 0), incident), rec, ConstantRandom(0.999999))
        assert result.scattered_ray.direction == incident

    def test_unit_ior_has_zero_normal_reflectance(self):
        assert Dielectric.reflectance(1.0, 1.0) == 0.0

    def test_total_internal_reflection(self, rng):
        mat = Dielectric(1.5)
        # Exiting glass at 60 degrees: 1.5 * sin(60) > 1
        angle = math.radians(60)
        incident = Vec3(math.sin(angle), -math.cos(angle), 0)
        rec = make_record(front_face=False)

        for _ in range(20):
            result = mat.scatter(Ray(Point3(0, 1, 0), incident), rec, rng)
            assert result.scattered_ray.direction == incident.reflect(rec.normal)

    def test_schlick_branch_reflects_on_low_draw(self):
        mat = Dielectric(1.5)
        incident = Vec3(0, -1, 0)
        result = mat.scatter(Ray(Point3(0, 1, 0), incident), make_record(), ConstantRandom(0.0))
        assert result.scattered_ray.direction == Vec3(0, 1, 0)

    def test_refraction_bends_ray(self):
        mat = Dielectric(1.5)
        angle = math.radians(45)
        incident = Vec3(math.sin(angle), -math.cos(angle), 0)
        result = mat.scatter(Ray(Point3(0, 1, 0), incident), make_record(), ConstantRandom(0.999999))
        direction = result.scattered_ray.direction
        assert direction.y < 0
        assert abs(direction.x - math.sin(angle) / 1.5) < 1e-12

    def test_reflectance_grows_toward_grazing(self):
        assert Dielectric.reflectance(1.0, 1.5) < Dielectric.reflectance(0.2, 1.5)
        assert abs(Dielectric.reflectance(1.0, 1.5) - 0.04) < 1e-12


class TestMaterialInterface:
    """Test abstract base."""

    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            Material()
