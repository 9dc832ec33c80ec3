"""Custom exceptions for the voxel world."""


class VoxelWorldError(Exception):
    """Base exception for voxel world errors."""

    pass


class InvalidDimensionsError(VoxelWorldError):
    """Raised when grid dimensions cannot hold a world."""

    pass


class CoordinateOccupiedError(VoxelWorldError):
    """Raised when creating a voxel at an already occupied coordinate."""

    pass


class OutOfBoundsError(VoxelWorldError):
    """Raised when a coordinate lies outside the grid."""

    pass


class VoxelNotFoundError(VoxelWorldError):
    """Raised when a voxel id is not known to the store."""

    pass


class TerrainImmutableError(VoxelWorldError):
    """Raised when trying to change the kind of a terrain voxel."""

    pass


class GridNotEmptyError(VoxelWorldError):
    """Raised when generating terrain into a populated store."""

    pass


class SeaLevelNotSetError(VoxelWorldError):
    """Raised when flooding a grid whose sea level was never initialised."""

    pass
