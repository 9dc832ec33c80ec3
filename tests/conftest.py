"""Shared test fixtures for voxel world tests."""

from typing import Callable

import numpy as np
import pytest

from voxworld.state import VoxelStore
from voxworld.terrain.noise import NoiseField
from voxworld.tile_types import Tile
from voxworld.types import Coordinate


class FixedNoise(NoiseField):
    """Noise field returning constant samples everywhere."""

    def __init__(self, height: float = 0.0, vegetation: float = -1.0):
        super().__init__(seed=0)
        self.height_value = height
        self.vegetation_value = vegetation

    def height(self, x: float, y: float) -> float:
        return self.height_value

    def vegetation(self, x: float, y: float) -> float:
        return self.vegetation_value

    def height_array(self, xs, ys):
        return np.full((len(ys), len(xs)), self.height_value)

    def vegetation_array(self, xs, ys):
        return np.full((len(ys), len(xs)), self.vegetation_value)


StoreFactory = Callable[..., VoxelStore]


@pytest.fixture
def make_store() -> StoreFactory:
    """Factory building a store from a terrain height map.

    heights[y][x] is the number of terrain voxels in column (x, y). Every
    other cell below z=4 becomes water, trees go at the given coordinates,
    and the sea level starts at 3 as after generation.
    """

    def factory(
        heights: list[list[int]],
        depth: int,
        trees: tuple[tuple[int, int, int], ...] = (),
        sealevel: int | None = 3,
    ) -> VoxelStore:
        height = len(heights)
        width = len(heights[0])
        store = VoxelStore(width=width, height=height, depth=depth)
        for y, row in enumerate(heights):
            for x, top in enumerate(row):
                for z in range(top):
                    store.create_voxel(Coordinate(x=x, y=y, z=z), Tile.TERRAIN)
                for z in range(top, 4):
                    store.create_voxel(Coordinate(x=x, y=y, z=z), Tile.WATER)
        for x, y, z in trees:
            store.create_voxel(Coordinate(x=x, y=y, z=z), Tile.TREES)
        store.current_sealevel = sealevel
        return store

    return factory


@pytest.fixture
def empty_store() -> VoxelStore:
    """4x4x8 store with no voxels."""
    return VoxelStore(width=4, height=4, depth=8)


@pytest.fixture
def walled_store(make_store: StoreFactory) -> VoxelStore:
    """3x3x6 world whose centre column is walled off from every edge.

        y=2:  .  #  .
        y=1:  #  .  #
        y=0:  .  #  .

    Walls are terrain up to the top of the grid; open columns hold one
    terrain voxel with baseline water above it.
    """
    return make_store(
        [
            [1, 6, 1],
            [6, 1, 6],
            [1, 6, 1],
        ],
        depth=6,
    )


@pytest.fixture
def serpentine_store(make_store: StoreFactory) -> VoxelStore:
    """5x5x6 world whose open cells form a channel that winds up, down and up.

        y=4:  .  .  .  #  .
        y=3:  .  #  .  #  .
        y=2:  .  #  .  #  .
        y=1:  .  #  .  .  .
        y=0:  .  #  #  #  #

    Only (0, 0) touches the seed row; reaching (4, 2..4) takes three
    changes of vertical direction.
    """
    o, w = 1, 6
    return make_store(
        [
            [o, w, w, w, w],
            [o, w, o, o, o],
            [o, w, o, w, o],
            [o, w, o, w, o],
            [o, o, o, w, o],
        ],
        depth=6,
    )
