"""Randomised battlefield generation.

Layers are laid down in a fixed order over open water: island clusters,
reef clusters, shallow patches, the two home bases and finally the neutral
forts. Hexes listed in ``reserved`` (fleet anchorages) always stay water.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from hexfleet.domain.enums import Owner, TerrainKind
from hexfleet.domain.models import Battlefield
from hexfleet.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexfleet.utils.hex_math import HexCoord, hex_neighbors, hexes_in_range
from hexfleet.utils.rng import RandomSource, check_chance, random_int

logger = logging.getLogger(__name__)

_BASES = frozenset({TerrainKind.PLAYER_BASE, TerrainKind.ENEMY_BASE})


def generate_battlefield(
    width: int,
    height: int,
    rng: RandomSource,
    rules: RulesConfig = DEFAULT_RULES,
    reserved: Iterable[HexCoord] = (),
) -> Battlefield:
    """Build a fresh battlefield with randomised terrain.

    Args:
        width: Number of columns
        height: Number of rows
        rng: Random source for every terrain roll
        rules: Rule tables supplying counts, densities and defenses
        reserved: Hexes that must remain open water

    Raises:
        ValueError: If the grid is smaller than 4x4
    """
    if width < 4 or height < 4:
        raise ValueError(f"battlefield must be at least 4x4, got {width}x{height}")

    field = Battlefield.filled(width, height)
    keep_clear = frozenset(reserved)
    map_rules = rules.map

    for _ in range(map_rules.island_clusters):
        center = HexCoord(
            col=random_int(rng, 2, max(2, width - 4)),
            row=random_int(rng, 2, max(2, height - 4)),
        )
        _scatter(field, rng, center, 1, map_rules.island_density, TerrainKind.ISLAND, keep_clear)

    for _ in range(map_rules.reef_clusters):
        center = _random_hex(rng, width, height)
        if field.tiles[center].terrain == TerrainKind.WATER:
            _scatter(
                field,
                rng,
                center,
                1,
                map_rules.reef_density,
                TerrainKind.REEF,
                keep_clear,
                water_only=True,
            )

    for _ in range(map_rules.shallow_patches):
        center = _random_hex(rng, width, height)
        if field.tiles[center].terrain == TerrainKind.WATER:
            _scatter(
                field,
                rng,
                center,
                map_rules.shallow_radius,
                map_rules.shallow_density,
                TerrainKind.SHALLOW,
                keep_clear,
                water_only=True,
            )

    _place_base(field, rng, rules, height - 2, TerrainKind.PLAYER_BASE, Owner.PLAYER, keep_clear)
    _place_base(field, rng, rules, 1, TerrainKind.ENEMY_BASE, Owner.OPPONENT, keep_clear)
    _place_forts(field, rng, rules, keep_clear)

    logger.debug("generated %sx%s battlefield", width, height)
    return field


def _random_hex(rng: RandomSource, width: int, height: int) -> HexCoord:
    return HexCoord(col=random_int(rng, 0, width - 1), row=random_int(rng, 0, height - 1))


def _scatter(
    field: Battlefield,
    rng: RandomSource,
    center: HexCoord,
    radius: int,
    density: float,
    terrain: TerrainKind,
    keep_clear: frozenset[HexCoord],
    *,
    water_only: bool = False,
) -> None:
    """Turn hexes around ``center`` into ``terrain``, each with ``density`` chance."""

    for coord in hexes_in_range(center, radius):
        if not check_chance(rng, density)["success"]:
            continue
        tile = field.tiles.get(coord)
        if tile is None or coord in keep_clear:
            continue
        if water_only and tile.terrain != TerrainKind.WATER:
            continue
        tile.terrain = terrain


def _place_base(
    field: Battlefield,
    rng: RandomSource,
    rules: RulesConfig,
    row: int,
    terrain: TerrainKind,
    owner: Owner,
    keep_clear: frozenset[HexCoord],
) -> None:
    """Place a home base on ``row`` and ring it with islands."""

    low, high = field.width // 4, max(field.width // 4, field.width * 3 // 4 - 1)
    for _ in range(rules.map.placement_attempts):
        coord = HexCoord(col=random_int(rng, low, high), row=row)
        if coord not in keep_clear and field.tiles[coord].terrain not in _BASES:
            break
    else:
        logger.warning("no free hex for %s on row %s", terrain.value, row)
        return

    tile = field.tiles[coord]
    tile.terrain = terrain
    tile.owner_id = owner
    tile.defense = rules.map.base_defense
    for neighbor in hex_neighbors(coord):
        ring = field.tiles.get(neighbor)
        if ring is not None and neighbor not in keep_clear and ring.terrain not in _BASES:
            ring.terrain = TerrainKind.ISLAND
            ring.owner_id = Owner.NEUTRAL
            ring.defense = 0


def _place_forts(
    field: Battlefield,
    rng: RandomSource,
    rules: RulesConfig,
    keep_clear: frozenset[HexCoord],
) -> None:
    map_rules = rules.map
    rows = (field.height // 4, max(field.height // 4, field.height * 3 // 4 - 1))
    placed = 0
    for _ in range(map_rules.placement_attempts):
        if placed >= map_rules.fort_count:
            return
        coord = HexCoord(
            col=random_int(rng, 2, max(2, field.width - 4)),
            row=random_int(rng, *rows),
        )
        tile = field.tiles.get(coord)
        if tile is None or coord in keep_clear or tile.terrain != TerrainKind.WATER:
            continue
        tile.terrain = TerrainKind.FORT
        tile.owner_id = Owner.NEUTRAL
        tile.defense = map_rules.fort_defense
        placed += 1

    if placed < map_rules.fort_count:
        logger.warning("placed %s of %s forts", placed, map_rules.fort_count)
