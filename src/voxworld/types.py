"""Core types for the voxel grid."""

from pydantic import BaseModel, NonNegativeInt

# Column neighbour deltas within a single plane
# Coordinate system: +X is East, +Y is North (away from the seed row), +Z is up
PLANE_NEIGHBOR_DELTAS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
)


class Coordinate(BaseModel, frozen=True):
    """Immutable 3D voxel coordinate."""

    x: NonNegativeInt
    y: NonNegativeInt
    z: NonNegativeInt

    def above(self) -> "Coordinate":
        """Return the coordinate directly above this one."""
        return Coordinate(x=self.x, y=self.y, z=self.z + 1)

    def with_z(self, z: int) -> "Coordinate":
        """Return the coordinate in the same column at height z."""
        return Coordinate(x=self.x, y=self.y, z=z)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def __repr__(self) -> str:
        return f"Coordinate(x={self.x}, y={self.y}, z={self.z})"
