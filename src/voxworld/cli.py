"""Command-line interface: generate a world and raise the sea."""

import argparse
import logging
import sys
import time
from pathlib import Path

import structlog

from .config import FloodStrategy, WorldConfig, load_config
from .exceptions import VoxelWorldError
from .tile_types import Tile


def configure_logging(verbose: bool = False) -> None:
    """Configure stdlib logging and structlog for console output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def build_config(args: argparse.Namespace) -> WorldConfig:
    """Load the config file (if any) and apply command-line overrides."""
    config = load_config(Path(args.config)) if args.config else WorldConfig()

    grid = config.grid.model_dump()
    for name in ("width", "height", "depth"):
        value = getattr(args, name)
        if value is not None:
            grid[name] = value

    noise = config.noise.model_dump()
    if args.seed is not None:
        noise["seed"] = args.seed

    flood = config.flood.model_dump()
    if args.floods is not None:
        flood["ticks"] = args.floods
    if args.strategy is not None:
        flood["strategy"] = args.strategy

    return WorldConfig.model_validate(
        {"grid": grid, "noise": noise, "flood": flood}
    )


def _format_counts(counts: dict[Tile, int]) -> str:
    return ", ".join(f"{tile.value}={count:,}" for tile, count in counts.items())


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a voxel world and flood it with a rising sea"
    )
    parser.add_argument("--config", type=str, help="Path to a TOML config file")
    parser.add_argument("--width", type=int, default=None, help="Grid width")
    parser.add_argument("--height", type=int, default=None, help="Grid height")
    parser.add_argument("--depth", type=int, default=None, help="Grid depth")
    parser.add_argument("--seed", type=int, default=None, help="Noise seed")
    parser.add_argument(
        "--floods", type=int, default=None, help="Flood ticks to run"
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in FloodStrategy],
        default=None,
        help="Flood propagation strategy",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from .terrain.flood import SeaFlooder
    from .terrain.generator import generate_terrain
    from .terrain.validation import validate_world

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        logger.error("config_invalid", error=str(e))
        sys.exit(2)

    grid = config.grid
    print(f"Generating {grid.width}x{grid.height}x{grid.depth} world")

    try:
        start_time = time.time()
        store, stats = generate_terrain(config)
        print(
            f"Generation complete in {time.time() - start_time:.1f}s "
            f"(seed {stats.seed})"
        )
        print(f"  {_format_counts(store.tile_counts())}")

        flooder = SeaFlooder(config.flood.strategy)
        for tick in range(1, config.flood.ticks + 1):
            result = flooder.flood(store)
            print(
                f"Tick {tick}: sea level {result.sealevel}, "
                f"{result.flooded:,} voxels flooded"
            )
    except VoxelWorldError as e:
        logger.error("run_failed", error=str(e))
        sys.exit(1)

    print(f"Final: {_format_counts(store.tile_counts())}")

    validation = validate_world(store)
    if not validation.passed:
        sys.exit(1)


if __name__ == "__main__":
    main()
