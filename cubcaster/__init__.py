"""Grid-based raycasting engine: .cub scene parsing, rendering, BMP output and a pygame game loop."""

__version__ = "0.1.0"