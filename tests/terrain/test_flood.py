"""Tests for the rising sea flood fill."""

import numpy as np
import pytest

from conftest import FixedNoise
from voxworld.config import FloodStrategy, NoiseConfig
from voxworld.exceptions import SeaLevelNotSetError
from voxworld.state import VoxelStore
from voxworld.terrain.flood import SeaFlooder, flood, run_floods
from voxworld.terrain.generator import TerrainGenerator
from voxworld.tile_types import TERRAIN_CODE, WATER_CODE, Tile
from voxworld.types import Coordinate


def _tile_at(store: VoxelStore, x: int, y: int, z: int) -> Tile | None:
    voxel = store.voxel_at(Coordinate(x=x, y=y, z=z))
    return voxel.tile if voxel is not None else None


class TestSeaLevel:
    """Tests for sea level bookkeeping."""

    def test_flood_before_generation_fails(self, empty_store: VoxelStore) -> None:
        with pytest.raises(SeaLevelNotSetError):
            flood(empty_store)
        assert empty_store.voxel_count() == 0

    def test_sealevel_rises_by_one(self, walled_store: VoxelStore) -> None:
        results = run_floods(walled_store, 2)
        assert [r.flood_plane for r in results] == [4, 5]
        assert [r.sealevel for r in results] == [4, 5]
        assert walled_store.current_sealevel == 5

    def test_plane_above_grid_only_raises_sealevel(self, walled_store: VoxelStore) -> None:
        """Once the flood plane leaves the grid nothing is touched."""
        run_floods(walled_store, 2)
        before = walled_store.tile_codes()
        count = walled_store.voxel_count()

        result = flood(walled_store)

        assert result.flood_plane == 6
        assert result.flooded == 0
        assert walled_store.current_sealevel == 6
        assert walled_store.voxel_count() == count
        np.testing.assert_array_equal(walled_store.tile_codes(), before)

    def test_plan_above_grid_rejected(self, walled_store: VoxelStore) -> None:
        walled_store.current_sealevel = 5
        with pytest.raises(ValueError):
            SeaFlooder().plan(walled_store)


class TestSeedRow:
    """Tests for flooding along the y = 0 edge."""

    def test_single_column_floods(self) -> None:
        """1x1x5 world: the lone column is its own seed row."""
        store = VoxelStore(width=1, height=1, depth=5)
        TerrainGenerator(noise=FixedNoise(height=0.0, vegetation=1.0)).generate(store)

        result = flood(store)

        assert store.current_sealevel == 4
        assert _tile_at(store, 0, 0, 4) is Tile.WATER
        assert result.created == 1
        assert result.converted == 0

    def test_seed_row_creates_only_plane(self, make_store) -> None:
        """Vacant seed columns are filled at the flood plane only."""
        store = make_store([[1]], depth=8, sealevel=4)

        flood(store)

        assert _tile_at(store, 0, 0, 5) is Tile.WATER
        assert _tile_at(store, 0, 0, 4) is None

    def test_seed_row_terrain_blocks(self, make_store) -> None:
        store = make_store([[6, 1]], depth=8)
        result = flood(store)
        assert _tile_at(store, 0, 0, 4) is Tile.TERRAIN
        assert _tile_at(store, 1, 0, 4) is Tile.WATER
        assert result.created == 1

    def test_seed_row_tree_converted(self, make_store) -> None:
        store = make_store([[4]], depth=8, trees=((0, 0, 4),))
        tree_id = store.lookup(Coordinate(x=0, y=0, z=4))

        result = flood(store)

        assert store.get_tile(tree_id) is Tile.WATER
        assert result.converted == 1
        assert result.created == 0


class TestPropagation:
    """Tests for connectivity across the flood plane."""

    def test_flat_world_floods_entirely(self, make_store) -> None:
        store = make_store([[1, 1, 1]] * 4, depth=6)
        result = flood(store)
        plane = store.tile_codes()[4]
        assert np.all(plane == WATER_CODE)
        assert result.created == 12

    def test_propagated_tree_converted(self, make_store) -> None:
        store = make_store([[1], [4]], depth=8, trees=((0, 1, 4),))
        result = flood(store)
        assert _tile_at(store, 0, 1, 4) is Tile.WATER
        assert result.converted == 1
        assert result.created == 1

    def test_vacant_column_filled_below_waterline(self, make_store) -> None:
        """A reached column vacant at the plane is filled down to its terrain."""
        store = make_store([[1], [5], [1]], depth=8)

        # Plane 4: the ridge at y=1 shields the basin at y=2
        flood(store)
        assert _tile_at(store, 0, 2, 4) is None

        # Plane 5: the ridge is submerged and the basin fills up
        result = flood(store)
        assert _tile_at(store, 0, 1, 4) is Tile.TERRAIN
        assert _tile_at(store, 0, 1, 5) is Tile.WATER
        assert _tile_at(store, 0, 2, 4) is Tile.WATER
        assert _tile_at(store, 0, 2, 5) is Tile.WATER
        assert _tile_at(store, 0, 2, 0) is Tile.TERRAIN
        assert result.created == 4
        assert result.converted == 0

    def test_walled_interior_stays_dry(self, walled_store: VoxelStore) -> None:
        run_floods(walled_store, 5)
        for z in (4, 5):
            assert _tile_at(walled_store, 1, 1, z) is None
            assert _tile_at(walled_store, 0, 0, z) is Tile.WATER
            assert _tile_at(walled_store, 2, 0, z) is Tile.WATER
            # Corners behind the walls are not reachable either
            assert _tile_at(walled_store, 0, 2, z) is None
            assert _tile_at(walled_store, 2, 2, z) is None

    def test_terrain_never_altered(self, serpentine_store: VoxelStore) -> None:
        terrain_before = serpentine_store.tile_codes() == TERRAIN_CODE
        run_floods(serpentine_store, 3)
        terrain_after = serpentine_store.tile_codes() == TERRAIN_CODE
        np.testing.assert_array_equal(terrain_before, terrain_after)

    def test_plan_is_side_effect_free(self, serpentine_store: VoxelStore) -> None:
        before = serpentine_store.tile_codes()
        plan = SeaFlooder().plan(serpentine_store)
        assert plan.is_marked(0, 0)
        assert plan.is_marked(4, 4)
        assert not plan.is_marked(1, 0)
        assert serpentine_store.current_sealevel == 3
        np.testing.assert_array_equal(serpentine_store.tile_codes(), before)


class TestStrategies:
    """Tests comparing queue and sweep propagation."""

    def test_queue_reaches_winding_channel(self, serpentine_store: VoxelStore) -> None:
        result = flood(serpentine_store, FloodStrategy.QUEUE)
        assert result.created == 15
        for x, y in [(4, 2), (4, 3), (4, 4)]:
            assert _tile_at(serpentine_store, x, y, 4) is Tile.WATER

    def test_sweep_stops_short_on_winding_channel(
        self, serpentine_store: VoxelStore
    ) -> None:
        result = flood(serpentine_store, FloodStrategy.SWEEP)
        assert result.created == 12
        for x, y in [(4, 2), (4, 3), (4, 4)]:
            assert _tile_at(serpentine_store, x, y, 4) is None
        assert _tile_at(serpentine_store, 4, 1, 4) is Tile.WATER

    def test_strategies_agree_on_simple_shapes(self, make_store) -> None:
        heights = [
            [1, 6, 1, 1],
            [1, 6, 1, 6],
            [1, 1, 1, 6],
            [6, 6, 1, 1],
        ]
        queue_store = make_store(heights, depth=7)
        sweep_store = make_store(heights, depth=7)
        run_floods(queue_store, 3, FloodStrategy.QUEUE)
        run_floods(sweep_store, 3, FloodStrategy.SWEEP)
        np.testing.assert_array_equal(
            queue_store.tile_codes(), sweep_store.tile_codes()
        )


class TestGeneratedWorld:
    """Flooding a noise-generated world."""

    @pytest.fixture
    def store(self) -> VoxelStore:
        store = VoxelStore(width=12, height=12, depth=10)
        TerrainGenerator(config=NoiseConfig(seed=17)).generate(store)
        return store

    def test_terrain_and_trees_rule_hold(self, store: VoxelStore) -> None:
        terrain_before = store.tile_codes() == TERRAIN_CODE
        for _ in range(7):
            flood(store)
            codes = store.tile_codes()
            np.testing.assert_array_equal(codes == TERRAIN_CODE, terrain_before)
        assert store.current_sealevel == 10

    def test_flooded_voxels_are_water(self, store: VoxelStore) -> None:
        plan = SeaFlooder().plan(store)
        flood(store)
        for x, y, z in plan.marks:
            assert _tile_at(store, x, y, z) is Tile.WATER
