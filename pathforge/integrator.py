"""
Radiance integrator.

Ties intersection and scattering together: a ray is followed through the
scene until it escapes to the sky, is absorbed, or runs out of bounces.
"""

from __future__ import annotations
import numpy as np

from .vec3 import Color
from .ray import Ray
from .shapes import Hittable

# Lower bound on t for secondary hits; avoids shadow acne from a scattered
# ray re-hitting the surface it starts on.
T_MIN = 0.001

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient keyed on the ray's unit y component."""
    unit_direction = ray.direction.unit_vector()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color(ray: Ray, world: Hittable, depth: int, rng: np.random.Generator) -> Color:
    """Compute the linear radiance carried back along ``ray``.

    Args:
        ray: The ray to trace
        world: The scene to trace against
        depth: Remaining bounce budget; at or below zero the result is black
        rng: Random generator owned by the calling worker

    Returns:
        The computed color for this ray
    """
    if depth <= 0:
        return Color(0, 0, 0)

    hit_record = world.hit(ray, T_MIN, float('inf'))

    if hit_record is None:
        return sky_color(ray)

    if hit_record.material is None:
        # No material - return normal as color (for debugging)
        return (hit_record.normal + WHITE) * 0.5

    scatter_result = hit_record.material.scatter(ray, hit_record, rng)
    if scatter_result is None:
        return Color(0, 0, 0)

    return scatter_result.attenuation * ray_color(
        scatter_result.scattered_ray, world, depth - 1, rng
    )
