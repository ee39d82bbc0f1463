"""
Materials system.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)

Materials are immutable after construction and may be shared by any
number of shapes. Scattering is one-shot: given the incoming ray and a
hit record, a material either returns an outgoing ray plus attenuation
or None when the ray is absorbed.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import math

import numpy as np

from .vec3 import Color
from .ray import Ray
from .sampling import uniform01, random_in_unit_sphere, random_unit_vector

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            rec: Intersection record (normal faces against ray_in)
            rng: Random generator owned by the calling worker

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """
        pass


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        scatter_direction = rec.normal + random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return ScatterResult(
            scattered_ray=Ray(rec.point, scatter_direction),
            attenuation=self.albedo,
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo!r})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Reflection perturbation radius, clamped to [0, 1]
                (0 = mirror, 1 = very rough)
        """
        self.albedo = albedo
        self.fuzz = max(0.0, min(fuzz, 1.0))

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = ray_in.direction.unit_vector().reflect(rec.normal)

        # A fuzzed ray may point into the surface; it is traced like any other ray
        if self.fuzz > 0:
            reflected = reflected + random_in_unit_sphere(rng) * self.fuzz

        return ScatterResult(
            scattered_ray=Ray(rec.point, reflected),
            attenuation=self.albedo,
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo!r}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction.

    Non-absorbing: attenuation is always white.
    """

    def __init__(self, ior: float = 1.5):
        """Create a dielectric material.

        Args:
            ior: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
        """
        self.ior = ior

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        attenuation = Color(1.0, 1.0, 1.0)

        # Determine refraction ratio based on whether we're entering or exiting
        refraction_ratio = 1.0 / self.ior if rec.front_face else self.ior

        unit_direction = ray_in.direction.unit_vector()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = refraction_ratio * sin_theta > 1.0

        if cannot_refract or self.reflectance(cos_theta, refraction_ratio) > uniform01(rng):
            direction = unit_direction.reflect(rec.normal)
        else:
            direction = unit_direction.refract(rec.normal, refraction_ratio)

        return ScatterResult(
            scattered_ray=Ray(rec.point, direction),
            attenuation=attenuation,
        )

    @staticmethod
    def reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - ref_idx) / (1 + ref_idx)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Dielectric(ior={self.ior})"
