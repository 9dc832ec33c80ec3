"""Voxel tile kinds and their storage codes."""

from enum import Enum


class Tile(str, Enum):
    """Kind of material held by a voxel."""

    TERRAIN = "terrain"
    WATER = "water"
    TREES = "trees"

    @property
    def code(self) -> int:
        """Storage code used in the store's dense arrays."""
        return TILE_CODES[self]

    @property
    def floodable(self) -> bool:
        """Whether a rising sea may turn this voxel into water."""
        return self is not Tile.TERRAIN

    @classmethod
    def from_code(cls, code: int) -> "Tile":
        """Look up a tile by its storage code.

        Raises:
            ValueError: If code is EMPTY_CODE or unknown.
        """
        try:
            return _CODE_TILES[code]
        except KeyError:
            raise ValueError(f"No tile for storage code {code}") from None


# Code 0 marks an unoccupied coordinate
EMPTY_CODE = 0

TILE_CODES: dict[Tile, int] = {
    Tile.TERRAIN: 1,
    Tile.WATER: 2,
    Tile.TREES: 3,
}

_CODE_TILES: dict[int, Tile] = {code: tile for tile, code in TILE_CODES.items()}

TERRAIN_CODE = TILE_CODES[Tile.TERRAIN]
WATER_CODE = TILE_CODES[Tile.WATER]
TREES_CODE = TILE_CODES[Tile.TREES]
