"""
Pathforge - A Python Monte Carlo Ray Tracer

A small, brute-force reference renderer with support for:
- Spheres (including negative-radius hollow shells)
- Lambertian, metal and dielectric materials
- Thin-lens depth of field
- Multi-threaded, seed-reproducible tile rendering
- Plain-text PPM and Pillow image output
"""

__version__ = "0.1.0"
__author__ = "Pathforge Team"

from .errors import (
    PathforgeError, ConfigError, CameraConfigError, DegenerateVectorError,
    SceneParseError, RenderCancelled
)
from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .sampling import (
    make_rng, spawn_rngs, uniform01, uniform_range, random_vec3,
    random_in_unit_disk, random_in_unit_sphere, random_unit_vector,
    random_in_hemisphere
)
from .shapes import HitRecord, Hittable, Sphere, HittableList
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric
from .camera import Camera
from .integrator import ray_color, sky_color
from .renderer import Renderer, RenderSettings
from .image_io import quantize, format_color, write_ppm, save_image
from .scenes import random_scene, random_scene_camera, three_spheres, three_spheres_camera
from .scene_parser import SceneParser, load_scene, parse_scene
