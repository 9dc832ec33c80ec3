"""Allow running as ``python -m voxworld``."""

from .cli import main

if __name__ == "__main__":
    main()
