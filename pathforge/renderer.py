"""
Renderer module - drives the integrator over the image.

Implements:
- Per-pixel sample accumulation (the independently schedulable unit)
- Multi-threaded tile-based rendering
- Reproducible per-tile random streams
- Progress reporting and cooperative cancellation
"""

from __future__ import annotations
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Callable, Tuple
import numpy as np

from .errors import ConfigError, RenderCancelled
from .log import get_logger
from .vec3 import Color
from .camera import Camera
from .shapes import Hittable
from .integrator import ray_color
from .sampling import spawn_rngs

logger = get_logger(__name__)

Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 384
    height: int = 0  # 0 = derive from width / aspect_ratio
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 100
    max_depth: int = 50
    tile_size: int = 16
    num_threads: int = 0  # 0 = auto-detect
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width <= 0:
            raise ConfigError(f"width must be positive, got {self.width}")
        if self.aspect_ratio <= 0:
            raise ConfigError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.height == 0:
            self.height = max(1, int(self.width / self.aspect_ratio))
        if self.height < 0:
            raise ConfigError(f"height must be positive, got {self.height}")
        if self.samples_per_pixel <= 0:
            raise ConfigError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth <= 0:
            raise ConfigError(f"max_depth must be positive, got {self.max_depth}")
        if self.tile_size <= 0:
            raise ConfigError(f"tile_size must be positive, got {self.tile_size}")
        if self.num_threads < 0:
            raise ConfigError(f"num_threads must be >= 0, got {self.num_threads}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


class Renderer:
    """Monte Carlo renderer with multi-threading support.

    The scene and camera are only read during a render, so every tile
    worker shares them without locking. Each tile owns its own random
    generator derived from ``settings.seed``.
    """

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None
        self._cancel_event = threading.Event()

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def cancel(self) -> None:
        """Ask a running render to stop at the next pixel boundary."""
        self._cancel_event.set()

    def sample_pixel(
        self,
        i: int,
        j: int,
        scene: Hittable,
        camera: Camera,
        rng: np.random.Generator,
    ) -> Color:
        """Sum ``samples_per_pixel`` radiance samples for one pixel.

        Args:
            i: Column, 0 at the left edge
            j: Row counted from the bottom edge
            scene: The scene to render
            camera: The camera to render from
            rng: Generator owned by the calling worker

        Returns:
            Unaveraged linear color sum
        """
        width = self.settings.width
        height = self.settings.height
        u_scale = 1.0 / max(width - 1, 1)
        v_scale = 1.0 / max(height - 1, 1)

        pixel_color = Color(0, 0, 0)
        for _ in range(self.settings.samples_per_pixel):
            u = (i + rng.random()) * u_scale
            v = (j + rng.random()) * v_scale
            ray = camera.get_ray(u, v, rng)
            pixel_color = pixel_color + ray_color(ray, scene, self.settings.max_depth, rng)
        return pixel_color

    def render(self, scene: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            Linear image averaged over samples, shape (height, width, 3),
            top row first

        Raises:
            RenderCancelled: if cancel() was called before or during the render
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        rngs = spawn_rngs(self.settings.seed, len(tiles))
        total_tiles = len(tiles)
        completed_tiles = [0]  # Use list for mutable in closure
        progress_lock = threading.Lock()

        logger.info(
            "Rendering %dx%d, %d spp, depth %d, %d tiles on %d threads",
            width, height, samples, self.settings.max_depth,
            total_tiles, self.settings.num_threads,
        )
        start_time = time.perf_counter()

        def render_tile(index: int) -> Tuple[Tile, np.ndarray]:
            """Render a single tile."""
            x0, y0, x1, y1 = tiles[index]
            rng = rngs[index]
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for row in range(y0, y1):
                j = height - 1 - row
                for i in range(x0, x1):
                    if self._cancel_event.is_set():
                        raise RenderCancelled("render cancelled")
                    pixel_sum = self.sample_pixel(i, j, scene, camera, rng)
                    tile_image[row - y0, i - x0] = pixel_sum.to_array() / samples

            # Held while reporting so progress values arrive in order
            with progress_lock:
                completed_tiles[0] += 1
                done = completed_tiles[0]
                logger.debug("Tile %d/%d done: %s", done, total_tiles, tiles[index])
                if self._progress_callback:
                    self._progress_callback(done / total_tiles)

            return tiles[index], tile_image

        try:
            if self.settings.num_threads > 1:
                with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                    results = list(executor.map(render_tile, range(total_tiles)))
            else:
                results = [render_tile(index) for index in range(total_tiles)]
        finally:
            # A cancel() issued before or during this render applies to it only
            self._cancel_event.clear()

        # Combine tiles into final image
        for tile, tile_image in results:
            x0, y0, x1, y1 = tile
            image[y0:y1, x0:x1] = tile_image

        elapsed = time.perf_counter() - start_time
        logger.info("Render finished in %.2fs", elapsed)
        return image

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples, rows counted from the top
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles
