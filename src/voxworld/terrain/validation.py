"""Post-generation and post-flood validation."""

import logging

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..state import VoxelStore
from ..tile_types import EMPTY_CODE, TERRAIN_CODE, TREES_CODE, WATER_CODE
from .generator import BASELINE_WATER_DEPTH, INITIAL_SEALEVEL

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of world validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_world(store: VoxelStore) -> ValidationResult:
    """Validate a generated (and possibly flooded) world.

    Args:
        store: Voxel store to check.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()
    codes = store.tile_codes()

    # Check 1: Sea level initialised
    if store.current_sealevel is None:
        result.add_error("Sea level is not set")

    # Check 2: Baseline ocean fully occupied
    _check_baseline(codes, result)

    # Check 3: One tree per column, standing on terrain
    _check_trees(codes, result)

    # Check 4: Latest flood plane connected to the seed row
    if store.current_sealevel is not None:
        _check_flood_plane(codes, store.current_sealevel, result)

    if result.passed:
        logger.info("World validation passed")
    else:
        logger.warning(f"World validation failed with {len(result.errors)} errors")
        for error in result.errors:
            logger.error(f"  - {error}")

    for warning in result.warnings:
        logger.warning(f"  - {warning}")

    return result


def _check_baseline(codes: NDArray[np.uint8], result: ValidationResult) -> None:
    """Check that every cell below the baseline depth is occupied."""
    empty = int(np.count_nonzero(codes[:BASELINE_WATER_DEPTH] == EMPTY_CODE))
    if empty > 0:
        result.add_error(f"Baseline ocean has {empty} empty cells")


def _check_trees(codes: NDArray[np.uint8], result: ValidationResult) -> None:
    """Check the one-tree-per-column rule."""
    trees = codes == TREES_CODE

    per_column = trees.sum(axis=0)
    crowded = int(np.count_nonzero(per_column > 1))
    if crowded > 0:
        result.add_error(f"{crowded} columns hold more than one tree")

    if trees[0].any():
        result.add_error("Trees on the bottom plane")

    floating = int(np.count_nonzero(trees[1:] & (codes[:-1] != TERRAIN_CODE)))
    if floating > 0:
        result.add_error(f"{floating} trees not standing on terrain")


def _check_flood_plane(
    codes: NDArray[np.uint8],
    sealevel: int,
    result: ValidationResult,
) -> None:
    """Check that water on the top flooded plane is reachable from y = 0."""
    depth = codes.shape[0]
    if sealevel <= INITIAL_SEALEVEL or sealevel >= depth:
        return

    plane = codes[sealevel]
    open_cells = plane != TERRAIN_CODE

    # 4-connected components of non-terrain cells
    labels, _ = ndimage.label(open_cells)
    edge_labels = set(np.unique(labels[0])) - {0}
    reachable = np.isin(labels, list(edge_labels))

    water = plane == WATER_CODE
    stranded = int(np.count_nonzero(water & ~reachable))
    if stranded > 0:
        result.add_error(
            f"{stranded} water cells on plane {sealevel} unreachable from y=0"
        )

    dry = int(np.count_nonzero(reachable & ~water))
    if dry > 0:
        result.add_warning(
            f"{dry} reachable cells on plane {sealevel} were left dry"
        )
