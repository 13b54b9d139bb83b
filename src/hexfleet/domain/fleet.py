"""Fleet rosters, deployment and ship destruction."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from hexfleet.domain.battlefield import clear_occupant, place_ship
from hexfleet.domain.enums import EventKind, Owner, ShipClass
from hexfleet.domain.errors import IllegalState
from hexfleet.domain.models import GameSession, Ship, ShipID
from hexfleet.domain.ship import create_ship, take_damage
from hexfleet.domain.victory import evaluate_victory
from hexfleet.utils.hex_math import HexCoord

logger = logging.getLogger(__name__)

Placement = tuple[ShipClass, HexCoord]


def roster_for(session: GameSession, player_owned: bool) -> list[Ship]:
    return session.player_fleet if player_owned else session.opponent_fleet


def fleet_of(session: GameSession, owner: Owner) -> list[Ship]:
    if owner == Owner.NEUTRAL:
        raise ValueError("neutral side has no fleet")
    return roster_for(session, owner == Owner.PLAYER)


def find_ship(session: GameSession, ship_id: ShipID | int | None) -> Ship | None:
    """Look a live ship up by id in either roster."""

    if ship_id is None:
        return None
    for ship in (*session.player_fleet, *session.opponent_fleet):
        if ship.id == ship_id:
            return ship
    return None


def live_ships(ships: Iterable[Ship]) -> list[Ship]:
    return [ship for ship in ships if not ship.destroyed]


def deploy_fleet(
    session: GameSession,
    placements: Iterable[Placement],
    *,
    player_owned: bool,
) -> list[Ship]:
    """Create and place one side's ships.

    Every placement is validated before any ship is created, so a bad setup
    leaves the session untouched.

    Raises:
        ValueError: If a placement is off the map, on land, on an occupied
            hex, or repeats another placement's hex
    """

    placements = list(placements)
    check_placements(session, placements)

    field = session.battlefield
    roster = roster_for(session, player_owned)
    deployed: list[Ship] = []
    for ship_class, coord in placements:
        ship = create_ship(
            ShipID(session.next_ship_id),
            ship_class,
            player_owned,
            coord,
            rules=session.rules,
        )
        session.next_ship_id += 1
        place_ship(field, ship)
        roster.append(ship)
        deployed.append(ship)

    logger.debug(
        "deployed %s %s ships", len(deployed), "player" if player_owned else "opponent"
    )
    return deployed


def check_placements(session: GameSession, placements: Iterable[Placement]) -> None:
    """Raise ``ValueError`` unless every placement lands on free, open water."""

    field = session.battlefield
    seen: set[HexCoord] = set()
    for ship_class, coord in placements:
        tile = field.tiles.get(coord)
        if tile is None:
            raise ValueError(f"{ship_class.value} placed off the map at {coord}")
        if tile.terrain.is_land:
            raise ValueError(f"{ship_class.value} placed on {tile.terrain.value} at {coord}")
        if tile.occupant_id is not None or coord in seen:
            raise ValueError(f"{ship_class.value} placed on occupied hex {coord}")
        seen.add(coord)


def deal_damage(session: GameSession, ship: Ship, amount: int) -> bool:
    """Apply damage and destroy the ship when its health runs out.

    Returns True when this damage destroyed the ship.
    """

    if ship.destroyed:
        raise IllegalState(f"{ship.name} has already been destroyed")

    sunk = take_damage(ship, amount)
    logger.debug("%s takes %s damage, health %s", ship.name, amount, ship.health)
    if sunk:
        destroy_ship(session, ship)
    return sunk


def destroy_ship(session: GameSession, ship: Ship) -> None:
    """Remove a ship from play for good and re-check victory."""

    if ship.destroyed:
        raise IllegalState(f"{ship.name} has already been destroyed")

    roster = roster_for(session, ship.player_owned)
    if ship in roster:
        roster.remove(ship)
    clear_occupant(session.battlefield, ship)
    if session.selected_ship_id == ship.id:
        session.selected_ship_id = None
    ship.health = 0
    ship.destroyed = True

    logger.info("%s destroyed at %s", ship.name, ship.position)
    session.events.emit(
        EventKind.UNIT_DESTROYED,
        session.turn_number,
        f"{ship.name} destroyed",
        ship_id=int(ship.id),
        coord=(ship.position.col, ship.position.row),
        owner=int(ship.owner),
    )
    evaluate_victory(session)
