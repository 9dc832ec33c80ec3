"""Initial world layout: height field, baseline ocean and vegetation."""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..config import NoiseConfig, WorldConfig
from ..exceptions import GridNotEmptyError
from ..state import VoxelStore, validate_dimensions
from ..tile_types import Tile
from ..types import Coordinate
from .noise import NoiseField

logger = logging.getLogger(__name__)

# Every column is water up to this depth regardless of terrain height
BASELINE_WATER_DEPTH = 4

# Sea level right after generation: the top plane of the baseline ocean
INITIAL_SEALEVEL = BASELINE_WATER_DEPTH - 1


@dataclass
class GenerationStats:
    """Counts of voxels placed by a generation run."""

    seed: int
    terrain: int = 0
    water: int = 0
    trees: int = 0

    @property
    def total(self) -> int:
        return self.terrain + self.water + self.trees


class TerrainGenerator:
    """Populates an empty voxel store with terrain, water and trees."""

    def __init__(
        self,
        noise: NoiseField | None = None,
        config: NoiseConfig | None = None,
    ):
        self.config = config or NoiseConfig()
        self.noise = noise or NoiseField(self.config.seed)

    def generate(self, store: VoxelStore) -> GenerationStats:
        """Generate the initial layout into store and set its sea level.

        Args:
            store: Empty voxel store to populate.

        Returns:
            GenerationStats with per-kind voxel counts.

        Raises:
            InvalidDimensionsError: If the store dimensions are invalid.
            GridNotEmptyError: If the store already holds voxels.
        """
        width, height, depth = store.dimensions()
        validate_dimensions(width, height, depth)
        if store.voxel_count() > 0:
            raise GridNotEmptyError(
                f"Cannot generate into a store holding {store.voxel_count()} voxels"
            )

        logger.info(
            f"Generating terrain {width}x{height}x{depth} with seed {self.noise.seed}"
        )
        stats = GenerationStats(seed=self.noise.seed)

        # Stage 1: Terrain up to the clamped height field
        bounds = self.height_field(width, height, depth)
        for x in range(width):
            for y in range(height):
                for z in range(int(bounds[y, x])):
                    store.create_voxel(Coordinate(x=x, y=y, z=z), Tile.TERRAIN)
                    stats.terrain += 1

        # Stage 2: Baseline ocean below the initial sea level
        for x in range(width):
            for y in range(height):
                for z in range(BASELINE_WATER_DEPTH):
                    coordinate = Coordinate(x=x, y=y, z=z)
                    if store.lookup(coordinate) is None:
                        store.create_voxel(coordinate, Tile.WATER)
                        stats.water += 1

        # Stage 3: At most one tree per column, on the lowest bare terrain
        grows = self.vegetation_mask(width, height)
        for x in range(width):
            for y in range(height):
                if not grows[y, x]:
                    continue
                if self._plant_tree(store, x, y, depth):
                    stats.trees += 1

        store.current_sealevel = INITIAL_SEALEVEL

        logger.info(
            f"Placed {stats.terrain:,} terrain, {stats.water:,} water, "
            f"{stats.trees:,} trees; sea level {store.current_sealevel}"
        )
        return stats

    def height_field(self, width: int, height: int, depth: int) -> NDArray[np.int64]:
        """Compute the number of terrain voxels in every column.

        The bound grows with y (north is higher ground) and is perturbed by
        height noise scaled with the grid depth, then clamped to [1, depth-1].

        Returns:
            Integer array of shape (height, width).
        """
        xs = 1.0 + np.arange(width, dtype=np.float64) / width
        ys = 1.0 + np.arange(height, dtype=np.float64) / height
        noise = self.noise.height_array(xs, ys)

        rows = np.arange(height, dtype=np.float64)[:, np.newaxis]
        bounds = rows + self.config.height_amplitude * depth * np.abs(noise)
        bounds = np.clip(bounds, 1.0, depth - 1.0)
        return np.floor(bounds).astype(np.int64)

    def vegetation_mask(self, width: int, height: int) -> NDArray[np.bool_]:
        """Compute which columns are allowed to grow a tree.

        Returns:
            Boolean array of shape (height, width).
        """
        xs = 1.0 + 0.5 * np.arange(width, dtype=np.float64) / width
        ys = 1.0 + 2.0 * np.arange(height, dtype=np.float64) / height
        return self.noise.vegetation_array(xs, ys) > self.config.vegetation_threshold

    def _plant_tree(self, store: VoxelStore, x: int, y: int, depth: int) -> bool:
        """Place a tree at the lowest free cell above terrain in column (x, y)."""
        for z in range(BASELINE_WATER_DEPTH, depth):
            coordinate = Coordinate(x=x, y=y, z=z)
            if store.lookup(coordinate) is not None:
                continue
            below = store.voxel_at(coordinate.with_z(z - 1))
            if below is not None and below.tile is Tile.TERRAIN:
                store.create_voxel(coordinate, Tile.TREES)
                return True
        return False


def generate_terrain(
    config: WorldConfig | None = None,
    noise: NoiseField | None = None,
) -> tuple[VoxelStore, GenerationStats]:
    """Create a store of the configured size and generate a world into it.

    Args:
        config: World configuration (defaults used if None).
        noise: Noise field override; built from config.noise if None.

    Returns:
        Tuple of (populated VoxelStore, GenerationStats).
    """
    config = config or WorldConfig()
    store = VoxelStore(
        width=config.grid.width,
        height=config.grid.height,
        depth=config.grid.depth,
    )
    generator = TerrainGenerator(noise=noise, config=config.noise)
    stats = generator.generate(store)
    return store, stats
