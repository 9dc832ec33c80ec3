"""Voxel world core: terrain generation and a rising sea."""

from .config import (
    FloodConfig,
    FloodStrategy,
    GridConfig,
    NoiseConfig,
    WorldConfig,
    load_config,
)
from .exceptions import (
    CoordinateOccupiedError,
    GridNotEmptyError,
    InvalidDimensionsError,
    OutOfBoundsError,
    SeaLevelNotSetError,
    TerrainImmutableError,
    VoxelNotFoundError,
    VoxelWorldError,
)
from .state import Voxel, VoxelStore
from .tile_types import Tile
from .types import Coordinate

__all__ = [
    # Types
    "Coordinate",
    "Tile",
    # State
    "Voxel",
    "VoxelStore",
    # Config
    "FloodConfig",
    "FloodStrategy",
    "GridConfig",
    "NoiseConfig",
    "WorldConfig",
    "load_config",
    # Exceptions
    "VoxelWorldError",
    "InvalidDimensionsError",
    "CoordinateOccupiedError",
    "OutOfBoundsError",
    "VoxelNotFoundError",
    "TerrainImmutableError",
    "GridNotEmptyError",
    "SeaLevelNotSetError",
]
