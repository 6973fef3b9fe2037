"""Test fixtures and utilities for ratsweep testing.

Organized into logical modules:
- segments: Fixed and random segment sets (parse, from_coords, random_segments,
  grid_segments, touching_free_points)
- assertions: Custom assertion functions (assert_points_equal, assert_matches_naive, assert_array_points)
"""

from .segments import parse, from_coords, random_segments, grid_segments, touching_free_points
from .assertions import assert_points_equal, assert_matches_naive, assert_array_points

__all__ = [
    'parse',
    'from_coords',
    'random_segments',
    'grid_segments',
    'touching_free_points',
    'assert_points_equal',
    'assert_matches_naive',
    'assert_array_points',
]
