"""World configuration models and TOML loading."""

import tomllib
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from .state import MIN_DEPTH


class FloodStrategy(str, Enum):
    """How flood connectivity is propagated across the flood plane."""

    QUEUE = "queue"
    SWEEP = "sweep"


class GridConfig(BaseModel):
    """Grid dimensions in voxels."""

    width: int = Field(default=64, gt=0, description="Grid size along x")
    height: int = Field(default=64, gt=0, description="Grid size along y")
    depth: int = Field(
        default=32, ge=MIN_DEPTH, description="Grid size along z (vertical)"
    )


class NoiseConfig(BaseModel):
    """Noise parameters for terrain and vegetation."""

    seed: int | None = Field(
        default=None, description="Noise seed (None = random per run)"
    )
    height_amplitude: float = Field(
        default=0.5, description="Height noise contribution as a fraction of depth"
    )
    vegetation_threshold: float = Field(
        default=0.0, description="Vegetation noise above this grows a tree"
    )


class FloodConfig(BaseModel):
    """Sea flooding parameters."""

    strategy: FloodStrategy = Field(
        default=FloodStrategy.QUEUE, description="Propagation strategy"
    )
    ticks: int = Field(default=0, ge=0, description="Flood ticks to run after generation")


class WorldConfig(BaseModel):
    """Complete configuration for a voxel world run."""

    grid: GridConfig = Field(default_factory=GridConfig)
    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    flood: FloodConfig = Field(default_factory=FloodConfig)


def load_config(config_path: Path) -> WorldConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed WorldConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If values are out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return WorldConfig.model_validate(data)
