"""Snake on a grid, drawn as a small 3D scene."""

__version__ = "0.1.0"
