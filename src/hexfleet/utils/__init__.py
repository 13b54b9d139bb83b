"""Utility functions for the hexfleet rules engine."""

from hexfleet.utils.hex_math import (
    HexCoord,
    hex_distance,
    hex_neighbors,
    hexes_in_range,
    line_between,
)
from hexfleet.utils.rng import (
    RandomSource,
    check_chance,
    generate_seed,
    make_rng,
    random_int,
    uniform_factor,
)

__all__ = [
    "HexCoord",
    "RandomSource",
    "check_chance",
    "generate_seed",
    "hex_distance",
    "hex_neighbors",
    "hexes_in_range",
    "line_between",
    "make_rng",
    "random_int",
    "uniform_factor",
]
