"""Terrain generation and sea flooding.

This package builds the initial voxel layout from coherent noise (height
field, baseline ocean, trees) and raises the sea one plane per flood tick.
"""

from .flood import FloodPlan, FloodResult, SeaFlooder, flood, run_floods
from .generator import (
    BASELINE_WATER_DEPTH,
    INITIAL_SEALEVEL,
    GenerationStats,
    TerrainGenerator,
    generate_terrain,
)
from .noise import NoiseField
from .validation import ValidationResult, validate_world

__all__ = [
    "BASELINE_WATER_DEPTH",
    "FloodPlan",
    "FloodResult",
    "GenerationStats",
    "INITIAL_SEALEVEL",
    "NoiseField",
    "SeaFlooder",
    "TerrainGenerator",
    "ValidationResult",
    "flood",
    "generate_terrain",
    "run_floods",
    "validate_world",
]
