"""
Terrain: TIN value types, grid triangulation, and synthetic heightmaps.
"""
from .tin import Vertex3, Triangle, as_tin_array, grid_tin, triangles, z_range
from .heightmap import HeightMap

__all__ = [
    "Vertex3",
    "Triangle",
    "as_tin_array",
    "grid_tin",
    "triangles",
    "z_range",
    "HeightMap",
]
