"""Battlefield rules: terrain costs, reachability, ranges and moves.

The battlefield is the sole writer of ``Tile.occupant_id``. Every function
that relocates a ship updates the tile map and ``Ship.position`` together.
"""

from __future__ import annotations

import logging
from heapq import heappop, heappush

from hexfleet.domain.enums import EventKind, Owner, ShipClass, TerrainKind
from hexfleet.domain.errors import IllegalState, InvalidMove
from hexfleet.domain.models import Battlefield, GameSession, Ship, ShipID, Tile
from hexfleet.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexfleet.domain.ship import can_rotate_to
from hexfleet.domain.victory import evaluate_victory
from hexfleet.utils.hex_math import (
    DIRECTION_COUNT,
    HexCoord,
    hex_neighbors,
    hexes_in_range,
    line_between,
)

logger = logging.getLogger(__name__)

UNREACHABLE = 0


def tile_at(field: Battlefield, coord: HexCoord) -> Tile | None:
    return field.tiles.get(coord)


def occupant_id(field: Battlefield, coord: HexCoord) -> ShipID | None:
    tile = field.tiles.get(coord)
    return tile.occupant_id if tile else None


def is_occupied(field: Battlefield, coord: HexCoord) -> bool:
    """True when a ship sits on the tile. Coordinates off the map count as occupied."""

    tile = field.tiles.get(coord)
    if tile is None:
        return True
    return tile.occupant_id is not None


def movement_cost(
    field: Battlefield,
    coord: HexCoord,
    ship: Ship,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Movement points needed to enter ``coord``; ``UNREACHABLE`` (0) for land."""

    tile = field.tiles.get(coord)
    if tile is None or tile.terrain.is_land:
        return UNREACHABLE

    movement = rules.movement
    if tile.terrain == TerrainKind.SHALLOW:
        if ship.ship_class == ShipClass.BATTLESHIP:
            return movement.battleship_shallow_cost
        return movement.shallow_cost
    if tile.terrain == TerrainKind.REEF:
        if ship.ship_class == ShipClass.SUBMARINE:
            return movement.submarine_reef_cost
        return movement.reef_cost
    return movement.water_cost


def can_enter(
    field: Battlefield,
    coord: HexCoord,
    ship: Ship,
    rules: RulesConfig = DEFAULT_RULES,
) -> bool:
    """Terrain legality of entering ``coord``. Occupancy is not checked here."""

    tile = field.tiles.get(coord)
    if tile is None or tile.terrain.is_land:
        return False

    threshold = rules.movement.rough_water_min_points
    if tile.terrain == TerrainKind.REEF:
        if ship.ship_class == ShipClass.SUBMARINE:
            return True
        return ship.movement_points >= threshold
    if tile.terrain == TerrainKind.SHALLOW and ship.ship_class == ShipClass.BATTLESHIP:
        return ship.movement_points >= threshold
    return True


def reachable_set(
    field: Battlefield,
    ship: Ship,
    rules: RulesConfig = DEFAULT_RULES,
) -> set[HexCoord]:
    """Every hex the ship can reach this turn with its remaining movement points.

    Expansion always continues from the node with the most budget left. A hex
    is expanded again only when reached with strictly more budget than before.
    Occupied hexes are neither destinations nor waypoints; the start hex is
    excluded from the result.
    """

    start = ship.position
    # Priority queue: (-remaining_points, col, row)
    pq: list[tuple[int, int, int]] = [(-ship.movement_points, start.col, start.row)]
    best_remaining: dict[HexCoord, int] = {start: ship.movement_points}

    while pq:
        neg_remaining, col, row = heappop(pq)
        remaining = -neg_remaining
        current = HexCoord(col=col, row=row)

        if remaining < best_remaining[current] or remaining <= 0:
            continue

        for neighbor in hex_neighbors(current):
            cost = movement_cost(field, neighbor, ship, rules)
            if cost == UNREACHABLE or cost > remaining or is_occupied(field, neighbor):
                continue

            left = remaining - cost
            if neighbor not in best_remaining or left > best_remaining[neighbor]:
                best_remaining[neighbor] = left
                heappush(pq, (-left, neighbor.col, neighbor.row))

    best_remaining.pop(start)
    return set(best_remaining)


def attack_range(field: Battlefield, ship: Ship) -> set[HexCoord]:
    """On-map hexes within gun range, excluding the ship's own hex."""

    return {
        coord
        for coord in hexes_in_range(ship.position, ship.attack_range)
        if coord in field.tiles and coord != ship.position
    }


def line_of_fire(
    field: Battlefield, origin: HexCoord, target: HexCoord
) -> tuple[HexCoord | None, ShipID | None]:
    """Walk the line from origin to target and return the first occupied hex.

    The origin hex is skipped. Returns ``(None, None)`` when the shot reaches
    the target hex without meeting a ship.
    """

    for coord in line_between(origin, target)[1:]:
        occupant = occupant_id(field, coord)
        if occupant is not None:
            return coord, occupant
    return None, None


def place_ship(field: Battlefield, ship: Ship) -> None:
    """Put a ship on its current position during deployment."""

    tile = field.tiles.get(ship.position)
    if tile is None:
        raise ValueError(f"{ship.name} placed off the map at {ship.position}")
    if tile.occupant_id is not None:
        raise ValueError(f"{ship.name} placed on occupied hex {ship.position}")
    tile.occupant_id = ship.id


def clear_occupant(field: Battlefield, ship: Ship) -> None:
    tile = field.tiles.get(ship.position)
    if tile is not None and tile.occupant_id == ship.id:
        tile.occupant_id = None


def move_ship(
    session: GameSession,
    ship: Ship,
    target: HexCoord,
    direction: int | None = None,
) -> None:
    """Relocate a ship one move, paying the target hex's movement cost.

    ``direction`` is the facing after the move; ``None`` keeps the current
    facing. Raises ``InvalidMove`` without touching any state when the hex
    cannot be entered, is occupied, costs more than the points left, or the
    requested turn exceeds the ship's turn rate.
    """

    if ship.destroyed:
        raise IllegalState(f"{ship.name} has been destroyed")

    field = session.battlefield
    rules = session.rules
    if not can_enter(field, target, ship, rules):
        raise InvalidMove(f"{ship.name} cannot enter {target}")
    if is_occupied(field, target):
        raise InvalidMove(f"{target} is occupied")
    cost = movement_cost(field, target, ship, rules)
    if cost > ship.movement_points:
        raise InvalidMove(
            f"{ship.name} needs {cost} movement points for {target}, has {ship.movement_points}"
        )
    if direction is not None:
        if not 0 <= direction < DIRECTION_COUNT:
            raise InvalidMove(f"direction must be in [0, {DIRECTION_COUNT}), got {direction}")
        if not can_rotate_to(ship, direction):
            raise InvalidMove(f"{ship.name} cannot turn from {ship.direction} to {direction}")

    old_position = ship.position
    clear_occupant(field, ship)
    field.tiles[target].occupant_id = ship.id
    ship.position = target
    if direction is not None:
        ship.direction = direction
    ship.movement_points -= cost

    logger.debug("%s moved %s -> %s (cost %s)", ship.name, old_position, target, cost)
    session.events.emit(
        EventKind.UNIT_MOVED,
        session.turn_number,
        f"{ship.name} moved",
        ship_id=int(ship.id),
        old=(old_position.col, old_position.row),
        new=(target.col, target.row),
        direction=ship.direction,
    )


def resolve_tile_capture(session: GameSession, ship: Ship, coord: HexCoord) -> bool:
    """Bombard a fort or enemy base; returns True when the tile changes hands.

    Only player battleships and cruisers can reduce a tile. Each hit removes
    the ship's attack damage from the tile's defense; at zero or below the
    player takes ownership and an enemy base becomes a player base.
    """

    tile = session.battlefield.tiles.get(coord)
    if (
        tile is None
        or not tile.is_capturable
        or not ship.player_owned
        or ship.ship_class not in session.rules.combat.capturing_classes
    ):
        return False

    tile.defense -= ship.attack_damage
    logger.debug("%s under fire at %s, defense now %s", tile.terrain, coord, tile.defense)
    session.events.emit(
        EventKind.TILE_DAMAGED,
        session.turn_number,
        f"{tile.terrain.value} bombarded by {ship.name}",
        coord=(coord.col, coord.row),
        defense=tile.defense,
    )
    if tile.defense > 0:
        return False

    captured_terrain = tile.terrain
    tile.owner_id = Owner.PLAYER
    if tile.terrain == TerrainKind.ENEMY_BASE:
        tile.terrain = TerrainKind.PLAYER_BASE

    logger.info("%s at %s captured by %s", captured_terrain, coord, ship.name)
    session.events.emit(
        EventKind.TILE_CAPTURED,
        session.turn_number,
        f"{captured_terrain.value} captured",
        coord=(coord.col, coord.row),
        terrain=tile.terrain.value,
        owner=int(tile.owner_id),
    )
    evaluate_victory(session)
    return True
