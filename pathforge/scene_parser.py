"""
Scene description language parser.

Supports a YAML or JSON scene description format with:
- Camera configuration
- Render settings
- Materials library
- Objects (spheres with materials)

Example scene file:
```yaml
camera:
  look_from: [13, 2, 3]
  look_at: [0, 0, 0]
  vfov: 20
  aperture: 0.1
  focus_dist: 10

render:
  width: 400
  aspect_ratio: 1.7777
  samples: 100
  max_depth: 50
  seed: 7

materials:
  ground:
    type: lambertian
    albedo: [0.5, 0.5, 0.5]

  glass:
    type: dielectric
    ior: 1.5

objects:
  - type: sphere
    center: [0, -1000, 0]
    radius: 1000
    material: ground

  - type: sphere
    center: [0, 1, 0]
    radius: 1
    material: glass
```
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union
import json

import yaml

from .errors import SceneParseError
from .log import get_logger
from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, Dielectric
from .renderer import RenderSettings

logger = get_logger(__name__)

ParsedScene = Tuple[HittableList, Camera, RenderSettings]


def _expect(value: Any, kind: type, what: str) -> Any:
    """Return value if it has the expected type, else raise SceneParseError."""
    if not isinstance(value, kind):
        expected = "list" if kind is list else "mapping"
        raise SceneParseError(f"{what} must be a {expected}, got {type(value).__name__}: {value!r}")
    return value


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: Union[str, Path]) -> ParsedScene:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (ValueError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> ParsedScene:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        _expect(data, dict, "Scene description")

        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(_expect(data['materials'], dict, "'materials'"))

        if 'objects' in data:
            self._parse_objects(_expect(data['objects'], list, "'objects'"))

        # Settings before camera: the camera inherits the image aspect ratio
        if 'render' in data:
            self._parse_settings(_expect(data['render'], dict, "'render'"))
        else:
            self.settings = RenderSettings()

        self._parse_camera(_expect(data.get('camera', {}), dict, "'camera'"))

        logger.info("Parsed scene with %d objects and %d named materials",
                    len(self.objects), len(self.materials))
        return self.objects, self.camera, self.settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
                return Vec3(float(data[0]), float(data[1]), float(data[2]))
            elif isinstance(data, dict):
                return Vec3(
                    float(data.get('x', 0)),
                    float(data.get('y', 0)),
                    float(data.get('z', 0))
                )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}") from e
        raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, dict):
            return self._parse_vec3({
                'x': data.get('r', 0),
                'y': data.get('g', 0),
                'z': data.get('b', 0),
            })
        elif isinstance(data, str):
            # Handle hex colors
            hex_color = data[1:] if data.startswith('#') else ''
            if len(hex_color) == 6:
                try:
                    r = int(hex_color[0:2], 16) / 255.0
                    g = int(hex_color[2:4], 16) / 255.0
                    b = int(hex_color[4:6], 16) / 255.0
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return self._parse_vec3(data)

    def _parse_material(self, mat_data: Dict[str, Any]) -> Material:
        """Build a single material from its definition."""
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        if mat_type == 'lambertian':
            albedo = self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5]))
            return Lambertian(albedo)

        elif mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            fuzz = float(mat_data.get('fuzz', 0.0))
            return Metal(albedo, fuzz)

        elif mat_type == 'dielectric':
            ior = float(mat_data.get('ior', 1.5))
            return Dielectric(ior)

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            _expect(mat_data, dict, f"material '{name}'")
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in objects_data:
            _expect(obj_data, dict, "object entry")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            material = self._get_material(obj_data.get('material'))

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                radius = float(obj_data.get('radius', 1.0))
                if radius == 0:
                    raise SceneParseError("Sphere radius must be non-zero")
                self.objects.add(Sphere(center, radius, material))

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        look_from = self._parse_vec3(camera_data.get('look_from', [0, 0, 5]))
        look_at = self._parse_vec3(camera_data.get('look_at', [0, 0, 0]))
        vup = self._parse_vec3(camera_data.get('vup', [0, 1, 0]))
        vfov = float(camera_data.get('vfov', 60))
        aperture = float(camera_data.get('aperture', 0.0))
        if 'focus_dist' in camera_data:
            focus_dist = float(camera_data['focus_dist'])
        else:
            focus_dist = (look_from - look_at).length() or 1.0

        self.camera = Camera(
            look_from=look_from,
            look_at=look_at,
            vup=vup,
            vfov=vfov,
            aspect_ratio=self.settings.width / self.settings.height,
            aperture=aperture,
            focus_dist=focus_dist
        )

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        seed = settings_data.get('seed')
        self.settings = RenderSettings(
            width=int(settings_data.get('width', 384)),
            height=int(settings_data.get('height', 0)),
            aspect_ratio=float(settings_data.get('aspect_ratio', 16 / 9)),
            samples_per_pixel=int(settings_data.get('samples', 100)),
            max_depth=int(settings_data.get('max_depth', 50)),
            tile_size=int(settings_data.get('tile_size', 16)),
            num_threads=int(settings_data.get('threads', 0)),
            seed=int(seed) if seed is not None else None,
        )


def load_scene(filepath: Union[str, Path]) -> ParsedScene:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> ParsedScene:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
