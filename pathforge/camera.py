"""
Camera module for generating primary rays.

Supports:
- Perspective projection
- Depth of field (thin-lens defocus blur)
- Configurable field of view
- Arbitrary positioning via look-at
"""

from __future__ import annotations
import math
from typing import Optional
import numpy as np

from .errors import CameraConfigError, DegenerateVectorError
from .vec3 import Vec3, Point3
from .ray import Ray
from .sampling import random_in_unit_disk


class Camera:
    """A camera with perspective projection and depth of field.

    All derived quantities are computed once in the constructor; the
    camera is read-only afterwards and can be shared across workers.
    """

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio
            aperture: Lens diameter for depth of field (0 = pinhole)
            focus_dist: Distance to the plane in perfect focus

        Raises:
            CameraConfigError: if the parameters give a degenerate basis
        """
        if not 0.0 < vfov < 180.0:
            raise CameraConfigError(f"vfov must be in (0, 180) degrees, got {vfov}")
        if aspect_ratio <= 0.0:
            raise CameraConfigError(f"aspect_ratio must be positive, got {aspect_ratio}")
        if focus_dist <= 0.0:
            raise CameraConfigError(f"focus_dist must be positive, got {focus_dist}")
        if aperture < 0.0:
            raise CameraConfigError(f"aperture must be non-negative, got {aperture}")

        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Compute orthonormal camera basis
        try:
            self.w = (look_from - look_at).unit_vector()  # Points backward from camera
        except DegenerateVectorError:
            raise CameraConfigError(f"look_from and look_at coincide at {look_from!r}") from None

        side = vup.cross(self.w)
        if side.length() <= 1e-9 * max(vup.length(), 1.0):
            raise CameraConfigError(f"vup {vup!r} is parallel to the view direction")
        self.u = side.unit_vector()                  # Points right
        self.v = self.w.cross(self.u)                # Points up

        self.origin = look_from
        self.horizontal = self.u * (viewport_width * focus_dist)
        self.vertical = self.v * (viewport_height * focus_dist)
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w * focus_dist
        )

        self.lens_radius = aperture / 2

    def get_ray(self, s: float, t: float, rng: Optional[np.random.Generator] = None) -> Ray:
        """Generate a ray for the given coordinates on the image plane.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = bottom, 1 = top)
            rng: Generator for lens sampling; only needed when aperture > 0

        Returns:
            A ray from the (jittered) lens position through the focus plane
        """
        if self.lens_radius > 0:
            if rng is None:
                raise ValueError("a random generator is required when aperture > 0")
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0, 0, 0)

        direction = (
            self.lower_left_corner
            + self.horizontal * s
            + self.vertical * t
            - self.origin
            - offset
        )

        return Ray(self.origin + offset, direction)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin!r}, looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2!r})"
