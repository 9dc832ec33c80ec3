"""Voxel storage and grid state."""

from typing import Callable, Iterator

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, PrivateAttr

from .exceptions import (
    CoordinateOccupiedError,
    InvalidDimensionsError,
    OutOfBoundsError,
    TerrainImmutableError,
    VoxelNotFoundError,
)
from .tile_types import EMPTY_CODE, Tile
from .types import Coordinate

# Minimum depth: the baseline ocean fills z in [0, 4)
MIN_DEPTH = 4

# Voxel id value marking an empty coordinate in the id array
NO_VOXEL = -1


def validate_dimensions(width: int, height: int, depth: int) -> None:
    """Reject grid dimensions that cannot hold a world.

    Raises:
        InvalidDimensionsError: If any dimension is non-positive or depth
            is below MIN_DEPTH.
    """
    if width <= 0 or height <= 0 or depth <= 0:
        raise InvalidDimensionsError(
            f"Grid dimensions must be positive, got {width}x{height}x{depth}"
        )
    if depth < MIN_DEPTH:
        raise InvalidDimensionsError(
            f"Grid depth must be at least {MIN_DEPTH}, got {depth}"
        )


class Voxel(BaseModel, frozen=True):
    """Immutable snapshot of a single voxel."""

    voxel_id: int
    coordinate: Coordinate
    tile: Tile

    def with_tile(self, tile: Tile) -> "Voxel":
        """Return copy with a different tile kind."""
        return self.model_copy(update={"tile": tile})


class VoxelStore(BaseModel):
    """
    Mutable voxel grid.

    At most one voxel per coordinate. Storage is dense: two arrays of shape
    (depth, height, width) hold the tile code and voxel id of every cell,
    so whole planes can be read without touching individual voxels.
    Voxel objects are built on demand.
    """

    width: int
    height: int
    depth: int
    current_sealevel: int | None = None

    # Tile codes, EMPTY_CODE where unoccupied. Indexed [z, y, x].
    _codes: NDArray[np.uint8] = PrivateAttr()

    # Voxel ids, NO_VOXEL where unoccupied. Indexed [z, y, x].
    _ids: NDArray[np.int64] = PrivateAttr()

    # voxel_id -> (x, y, z); ids are allocated sequentially
    _positions: list[tuple[int, int, int]] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context: object) -> None:
        validate_dimensions(self.width, self.height, self.depth)
        shape = (self.depth, self.height, self.width)
        self._codes = np.full(shape, EMPTY_CODE, dtype=np.uint8)
        self._ids = np.full(shape, NO_VOXEL, dtype=np.int64)

    # --- Grid operations ---

    def dimensions(self) -> tuple[int, int, int]:
        """Return (width, height, depth)."""
        return self.width, self.height, self.depth

    def in_bounds(self, coordinate: Coordinate) -> bool:
        """Check if coordinate is within grid bounds."""
        return (
            coordinate.x < self.width
            and coordinate.y < self.height
            and coordinate.z < self.depth
        )

    def raise_sealevel(self) -> int:
        """Increment the sea level by one and return the new value.

        Raises:
            ValueError: If the sea level was never set.
        """
        if self.current_sealevel is None:
            raise ValueError("Sea level has not been initialised")
        self.current_sealevel += 1
        return self.current_sealevel

    # --- Voxel operations ---

    def create_voxel(self, coordinate: Coordinate, tile: Tile) -> int:
        """Create a voxel at a free coordinate.

        Returns:
            The new voxel id.

        Raises:
            OutOfBoundsError: If coordinate lies outside the grid.
            CoordinateOccupiedError: If a voxel already owns the coordinate.
        """
        self._check_bounds(coordinate)
        x, y, z = coordinate.as_tuple()
        existing = int(self._ids[z, y, x])
        if existing != NO_VOXEL:
            raise CoordinateOccupiedError(
                f"Coordinate {coordinate} already occupied by voxel {existing}"
            )
        voxel_id = len(self._positions)
        self._positions.append((x, y, z))
        self._ids[z, y, x] = voxel_id
        self._codes[z, y, x] = tile.code
        return voxel_id

    def lookup(self, coordinate: Coordinate) -> int | None:
        """Get the id of the voxel at coordinate, or None if empty."""
        if not self.in_bounds(coordinate):
            return None
        voxel_id = int(self._ids[coordinate.z, coordinate.y, coordinate.x])
        return None if voxel_id == NO_VOXEL else voxel_id

    def get_voxel(self, voxel_id: int) -> Voxel:
        """Get voxel by id.

        Raises:
            VoxelNotFoundError: If voxel not found.
        """
        x, y, z = self._position_of(voxel_id)
        return Voxel(
            voxel_id=voxel_id,
            coordinate=Coordinate(x=x, y=y, z=z),
            tile=Tile.from_code(int(self._codes[z, y, x])),
        )

    def voxel_at(self, coordinate: Coordinate) -> Voxel | None:
        """Get the voxel at coordinate, or None."""
        voxel_id = self.lookup(coordinate)
        return self.get_voxel(voxel_id) if voxel_id is not None else None

    def get_tile(self, voxel_id: int) -> Tile:
        """Get the tile kind of a voxel.

        Raises:
            VoxelNotFoundError: If voxel not found.
        """
        x, y, z = self._position_of(voxel_id)
        return Tile.from_code(int(self._codes[z, y, x]))

    def set_tile(self, voxel_id: int, tile: Tile) -> None:
        """Rewrite the tile kind of a voxel in place.

        Raises:
            VoxelNotFoundError: If voxel not found.
            TerrainImmutableError: If the voxel is terrain and tile is not.
        """
        x, y, z = self._position_of(voxel_id)
        current = Tile.from_code(int(self._codes[z, y, x]))
        if current is Tile.TERRAIN and tile is not Tile.TERRAIN:
            raise TerrainImmutableError(
                f"Voxel {voxel_id} at ({x}, {y}, {z}) is terrain"
            )
        self._codes[z, y, x] = tile.code

    def query(
        self, predicate: Callable[[Coordinate], bool] | None = None
    ) -> Iterator[Voxel]:
        """Iterate voxels in creation order, optionally filtered by position."""
        for voxel_id in range(len(self._positions)):
            x, y, z = self._positions[voxel_id]
            coordinate = Coordinate(x=x, y=y, z=z)
            if predicate is not None and not predicate(coordinate):
                continue
            yield Voxel(
                voxel_id=voxel_id,
                coordinate=coordinate,
                tile=Tile.from_code(int(self._codes[z, y, x])),
            )

    def column(self, x: int, y: int) -> list[Voxel]:
        """Return all voxels of column (x, y), bottom to top."""
        voxels = []
        for z in np.flatnonzero(self._ids[:, y, x] != NO_VOXEL):
            voxels.append(self.get_voxel(int(self._ids[z, y, x])))
        return voxels

    # --- Bulk access ---

    def tile_codes(self, z_stop: int | None = None) -> NDArray[np.uint8]:
        """Copy of the tile code array for planes z < z_stop, indexed [z, y, x]."""
        return self._codes[:z_stop].copy()

    def voxel_ids(self, z_stop: int | None = None) -> NDArray[np.int64]:
        """Copy of the voxel id array for planes z < z_stop, indexed [z, y, x]."""
        return self._ids[:z_stop].copy()

    def voxel_count(self) -> int:
        """Return number of voxels in the grid."""
        return len(self._positions)

    def tile_counts(self) -> dict[Tile, int]:
        """Count voxels of each tile kind."""
        return {
            tile: int(np.count_nonzero(self._codes == tile.code)) for tile in Tile
        }

    # --- Internal helpers ---

    def _check_bounds(self, coordinate: Coordinate) -> None:
        if not self.in_bounds(coordinate):
            raise OutOfBoundsError(
                f"Coordinate {coordinate} outside grid "
                f"{self.width}x{self.height}x{self.depth}"
            )

    def _position_of(self, voxel_id: int) -> tuple[int, int, int]:
        if not 0 <= voxel_id < len(self._positions):
            raise VoxelNotFoundError(f"Voxel {voxel_id} not found")
        return self._positions[voxel_id]
