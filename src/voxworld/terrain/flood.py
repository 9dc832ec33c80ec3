"""Rising sea: flood fill of the plane just above the current sea level.

Each flood tick targets the flood plane z = sealevel + 1. Columns on the
y = 0 edge seed the flood; connectivity then spreads between 4-adjacent
columns through non-terrain cells of the plane. A reached column whose plane
cell is empty gets its whole sub-column filled below the new waterline.

Marks are collected against a snapshot first and committed afterwards, so
propagation never reads cells that the same tick has already rewritten.
"""

from collections import deque
from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import NDArray

from ..config import FloodStrategy
from ..exceptions import SeaLevelNotSetError
from ..state import NO_VOXEL, VoxelStore
from ..tile_types import EMPTY_CODE, TERRAIN_CODE, Tile
from ..types import PLANE_NEIGHBOR_DELTAS, Coordinate

logger = structlog.get_logger()


@dataclass
class FloodResult:
    """Outcome of a single flood tick."""

    flood_plane: int
    sealevel: int
    converted: int = 0
    created: int = 0

    @property
    def flooded(self) -> int:
        """Voxels that became water this tick."""
        return self.converted + self.created


class FloodPlan:
    """Flood marks for one plane, computed from a snapshot of the grid.

    A mark maps (x, y, z) to the id of the existing voxel to turn into water,
    or to None when a new water voxel must be created there.
    """

    def __init__(
        self,
        codes: NDArray[np.uint8],
        ids: NDArray[np.int64],
        plane: int,
    ):
        """Initialize FloodPlan.

        Args:
            codes: Tile codes of planes 0..plane, indexed [z, y, x].
            ids: Voxel ids of planes 0..plane, indexed [z, y, x].
            plane: The flood plane.
        """
        self.codes = codes
        self.ids = ids
        self.plane = plane
        _, self.height, self.width = codes.shape
        self.marks: dict[tuple[int, int, int], int | None] = {}

    def is_marked(self, x: int, y: int) -> bool:
        """Check if column (x, y) floods at the flood plane."""
        return (x, y, self.plane) in self.marks

    def seed_row(self) -> list[tuple[int, int]]:
        """Mark the y = 0 row and return the columns that flood."""
        seeds = []
        for x in range(self.width):
            if self._mark_cell(x, 0, self.plane):
                seeds.append((x, 0))
        return seeds

    def evaluate_column(self, x: int, y: int) -> bool:
        """Mark column (x, y), reached from a flooded neighbour.

        Returns:
            True if the column floods at the flood plane.
        """
        if self.codes[self.plane, y, x] != EMPTY_CODE:
            return self._mark_cell(x, y, self.plane)

        # Vacant at the plane: everything non-terrain beneath goes under
        for z in range(self.plane + 1):
            self._mark_cell(x, y, z)
        return True

    def has_marked_neighbor(self, x: int, y: int) -> bool:
        """Check if any 4-neighbour of column (x, y) floods."""
        for dx, dy in PLANE_NEIGHBOR_DELTAS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height and self.is_marked(nx, ny):
                return True
        return False

    def propagate_queue(self, seeds: list[tuple[int, int]]) -> None:
        """Breadth-first propagation from the seed columns."""
        visited = {(x, 0) for x in range(self.width)}
        frontier = deque(seeds)

        while frontier:
            x, y = frontier.popleft()
            for dx, dy in PLANE_NEIGHBOR_DELTAS:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < self.width and 0 <= ny < self.height):
                    continue
                if (nx, ny) in visited:
                    continue
                visited.add((nx, ny))
                if self.evaluate_column(nx, ny):
                    frontier.append((nx, ny))

    def propagate_sweep(self) -> None:
        """Fixed boustrophedon propagation.

        Rows 1..H-1 ascending, then H-1..1 descending, each row scanned
        left to right and then right to left. Regions that need to turn back
        more often than that stay dry.
        """
        rows = list(range(1, self.height)) + list(range(self.height - 1, 0, -1))
        for y in rows:
            for x in range(self.width):
                self._sweep_cell(x, y)
            for x in range(self.width - 1, -1, -1):
                self._sweep_cell(x, y)

    def _sweep_cell(self, x: int, y: int) -> None:
        if not self.is_marked(x, y) and self.has_marked_neighbor(x, y):
            self.evaluate_column(x, y)

    def _mark_cell(self, x: int, y: int, z: int) -> bool:
        """Mark a single cell unless it is terrain."""
        if self.codes[z, y, x] == TERRAIN_CODE:
            return False
        voxel_id = int(self.ids[z, y, x])
        self.marks[(x, y, z)] = None if voxel_id == NO_VOXEL else voxel_id
        return True


class SeaFlooder:
    """Raises the sea by one plane per call."""

    def __init__(self, strategy: FloodStrategy = FloodStrategy.QUEUE):
        self.strategy = strategy

    def plan(self, store: VoxelStore) -> FloodPlan:
        """Compute the flood marks for the next plane without touching store.

        Raises:
            SeaLevelNotSetError: If the store has no sea level yet.
            ValueError: If the flood plane lies above the grid.
        """
        sealevel = self._sealevel(store)
        plane = sealevel + 1
        if plane >= store.depth:
            raise ValueError(f"Flood plane {plane} is above grid depth {store.depth}")
        plan = FloodPlan(
            store.tile_codes(z_stop=plane + 1),
            store.voxel_ids(z_stop=plane + 1),
            plane,
        )
        seeds = plan.seed_row()
        if self.strategy == FloodStrategy.QUEUE:
            plan.propagate_queue(seeds)
        else:
            plan.propagate_sweep()
        return plan

    def flood(self, store: VoxelStore) -> FloodResult:
        """Flood the plane above the current sea level and raise the sea.

        Raises:
            SeaLevelNotSetError: If the store has no sea level yet.
        """
        sealevel = self._sealevel(store)
        plane = sealevel + 1
        _, _, depth = store.dimensions()

        if plane >= depth:
            new_level = store.raise_sealevel()
            logger.warning(
                "flood_plane_above_grid",
                flood_plane=plane,
                depth=depth,
                sealevel=new_level,
            )
            return FloodResult(flood_plane=plane, sealevel=new_level)

        plan = self.plan(store)
        result = FloodResult(flood_plane=plane, sealevel=sealevel)

        for (x, y, z), voxel_id in plan.marks.items():
            if voxel_id is None:
                store.create_voxel(Coordinate(x=x, y=y, z=z), Tile.WATER)
                result.created += 1
            elif store.get_tile(voxel_id) is not Tile.WATER:
                store.set_tile(voxel_id, Tile.WATER)
                result.converted += 1

        result.sealevel = store.raise_sealevel()

        logger.info(
            "flood_complete",
            flood_plane=plane,
            sealevel=result.sealevel,
            strategy=self.strategy.value,
            converted=result.converted,
            created=result.created,
        )
        return result

    def _sealevel(self, store: VoxelStore) -> int:
        if store.current_sealevel is None:
            raise SeaLevelNotSetError(
                "Sea level is not set; generate terrain before flooding"
            )
        return store.current_sealevel


def flood(
    store: VoxelStore, strategy: FloodStrategy = FloodStrategy.QUEUE
) -> FloodResult:
    """Run one flood tick on store."""
    return SeaFlooder(strategy).flood(store)


def run_floods(
    store: VoxelStore,
    ticks: int,
    strategy: FloodStrategy = FloodStrategy.QUEUE,
) -> list[FloodResult]:
    """Run several flood ticks in sequence.

    Args:
        store: Generated voxel store.
        ticks: Number of flood ticks.
        strategy: Propagation strategy.

    Returns:
        One FloodResult per tick.
    """
    flooder = SeaFlooder(strategy)
    return [flooder.flood(store) for _ in range(ticks)]
