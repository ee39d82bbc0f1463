"""
Random sampling utilities.

Every function draws from an explicitly passed ``numpy.random.Generator``
so that renders are reproducible under a fixed seed and each worker can
own an independent stream.
"""

from __future__ import annotations
import math
from typing import Optional
import numpy as np

from .vec3 import Vec3


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a random generator (fresh OS entropy when seed is None)."""
    return np.random.default_rng(seed)


def spawn_rngs(seed: Optional[int], count: int) -> list[np.random.Generator]:
    """Create ``count`` statistically independent child generators.

    The i-th generator depends only on ``seed`` and ``i``, not on the
    order in which the generators are consumed.
    """
    children = np.random.SeedSequence(seed).spawn(count)
    return [np.random.default_rng(child) for child in children]


def uniform01(rng: np.random.Generator) -> float:
    """Real in [0, 1)."""
    return float(rng.random())


def uniform_range(rng: np.random.Generator, min_val: float, max_val: float) -> float:
    """Real in [min_val, max_val)."""
    return min_val + (max_val - min_val) * float(rng.random())


def random_vec3(rng: np.random.Generator, min_val: float = 0.0, max_val: float = 1.0) -> Vec3:
    """Vector with each component uniform in [min_val, max_val)."""
    return Vec3.from_array(min_val + (max_val - min_val) * rng.random(3))


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Rejection-sample a point strictly inside the unit disk (z = 0)."""
    while True:
        x, y = 2.0 * rng.random(2) - 1.0
        if x * x + y * y < 1.0:
            return Vec3(x, y, 0.0)


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Rejection-sample a point strictly inside the unit ball."""
    while True:
        p = random_vec3(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Uniform point on the unit sphere surface.

    Sampled analytically: z ~ U(-1, 1), azimuth a ~ U(0, 2pi),
    r = sqrt(1 - z^2), giving (r cos a, r sin a, z).
    """
    a = uniform_range(rng, 0.0, 2.0 * math.pi)
    z = uniform_range(rng, -1.0, 1.0)
    r = math.sqrt(1.0 - z * z)
    return Vec3(r * math.cos(a), r * math.sin(a), z)


def random_in_hemisphere(rng: np.random.Generator, normal: Vec3) -> Vec3:
    """Point in the unit ball, flipped into the hemisphere around normal."""
    in_unit_sphere = random_in_unit_sphere(rng)
    if in_unit_sphere.dot(normal) > 0.0:
        return in_unit_sphere
    return -in_unit_sphere
