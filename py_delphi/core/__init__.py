"""
Core board generation functionality.
"""

from .alea_prng import AleaPRNG
from .baseline_generator import BaselineMapGenerator, BaselineOptions
from .drunken_walk import DrunkenWalkMapGenerator, DrunkenWalkOptions
from .hex_geometry import MAP_RADIUS, get_adjacent, get_corner, hex_distance
from .hex_grid import CellRecord, HexCell, HexGrid
from .map_generator import GeneratorOptions, MapGenerator
from .map_statistics import MapDimensions, MapStatistics, compute_map_statistics
from .placement import is_valid_placement, place_special_terrain
from .terrain import HexColor, Terrain, TerrainTargets

__all__ = ['AleaPRNG', 'BaselineMapGenerator', 'BaselineOptions',
           'DrunkenWalkMapGenerator', 'DrunkenWalkOptions',
           'MAP_RADIUS', 'get_adjacent', 'get_corner', 'hex_distance',
           'CellRecord', 'HexCell', 'HexGrid', 'GeneratorOptions', 'MapGenerator',
           'MapDimensions', 'MapStatistics', 'compute_map_statistics',
           'is_valid_placement', 'place_special_terrain',
           'HexColor', 'Terrain', 'TerrainTargets']
