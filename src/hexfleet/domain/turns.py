"""Turn state machine: session start, per-turn resets, wind and phase changes.

The turn cycle for a deployed session:
1. Player turn: turn counter advances, wind shifts, player fleet resets
2. Player issues commands until ending the turn
3. Opponent turn: opponent fleet resets and the scripted policy runs
4. Back to step 1, unless victory was decided along the way
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from hexfleet.domain.effects import tick_effects
from hexfleet.domain.enums import EventKind, Owner, Phase, ShipClass, TerrainKind
from hexfleet.domain.errors import IllegalState
from hexfleet.domain.fleet import check_placements, deploy_fleet, live_ships
from hexfleet.domain.models import GameSession, Ship
from hexfleet.domain.opponent import run_opponent_turn
from hexfleet.domain.victory import evaluate_victory
from hexfleet.utils.hex_math import HexCoord
from hexfleet.utils.rng import check_chance, random_int

if TYPE_CHECKING:
    from hexfleet.schemas.setup import FleetSetup, ShipPlacement

logger = logging.getLogger(__name__)


def start_session(session: GameSession, setup: FleetSetup) -> None:
    """Deploy both fleets and open the first player turn."""

    if session.fleets_deployed:
        raise IllegalState("session already started")

    player = _placements(setup.player)
    opponent = _placements(setup.opponent)
    check_placements(session, player + opponent)
    deploy_fleet(session, player, player_owned=True)
    deploy_fleet(session, opponent, player_owned=False)
    session.home_base_at_start = any(
        tile.terrain == TerrainKind.PLAYER_BASE and tile.owner_id == Owner.PLAYER
        for tile in session.battlefield.tiles.values()
    )
    session.fleets_deployed = True
    logger.info(
        "session started: %s player ships, %s opponent ships",
        len(session.player_fleet),
        len(session.opponent_fleet),
    )
    start_player_turn(session)


def start_player_turn(session: GameSession) -> None:
    if session.game_over:
        raise IllegalState("game is over")

    session.turn_number += 1
    session.phase = Phase.PLAYER_TURN
    update_wind(session)
    reset_fleet(session, session.player_fleet)
    if session.game_over:
        return
    _announce_phase(session)
    evaluate_victory(session)


def end_player_turn(session: GameSession) -> None:
    """Hand over to the opponent, run its turn and open the next player turn."""

    if session.game_over:
        raise IllegalState("game is over")
    if session.phase != Phase.PLAYER_TURN:
        raise IllegalState(f"cannot end the player turn during {session.phase.value}")

    if session.selected_ship_id is not None:
        deselected = session.selected_ship_id
        session.selected_ship_id = None
        session.events.emit(
            EventKind.UNIT_DESELECTED,
            session.turn_number,
            "selection cleared",
            ship_id=int(deselected),
        )

    start_opponent_turn(session)
    if not session.game_over:
        run_opponent_turn(session)
    if not session.game_over:
        start_player_turn(session)


def start_opponent_turn(session: GameSession) -> None:
    session.phase = Phase.OPPONENT_TURN
    reset_fleet(session, session.opponent_fleet)
    if session.game_over:
        return
    _announce_phase(session)


def reset_for_new_turn(session: GameSession, ship: Ship) -> None:
    """Restore movement and attack, then advance the ship's effects."""

    if ship.destroyed:
        raise IllegalState(f"{ship.name} has been destroyed")
    ship.movement_points = ship.max_movement
    ship.can_attack = True
    tick_effects(session, ship)


def reset_fleet(session: GameSession, fleet: list[Ship]) -> None:
    """Reset every live ship; surface ships may catch a favourable wind."""

    turns = session.rules.turns
    for ship in live_ships(list(fleet)):
        reset_for_new_turn(session, ship)
        if ship.destroyed or ship.ship_class == ShipClass.SUBMARINE:
            continue
        if check_chance(session.rng, turns.wind_bonus_chance)["success"]:
            ship.movement_points += turns.wind_bonus_points
            logger.debug("%s gets a wind bonus", ship.name)


def update_wind(session: GameSession) -> None:
    """Drift the wind by at most one compass point and roll a new strength."""

    turns = session.rules.turns
    drift = random_int(session.rng, -1, 1)
    session.wind_direction = (session.wind_direction + drift) % turns.wind_directions
    session.wind_strength = random_int(
        session.rng, turns.wind_strength_min, turns.wind_strength_max
    )
    session.events.emit(
        EventKind.WIND_CHANGED,
        session.turn_number,
        f"wind {session.wind_direction} at strength {session.wind_strength}",
        direction=session.wind_direction,
        strength=session.wind_strength,
    )


def _announce_phase(session: GameSession) -> None:
    session.events.emit(
        EventKind.TURN_CHANGED,
        session.turn_number,
        f"turn {session.turn_number}: {session.phase.value}",
        phase=session.phase.value,
    )


def _placements(placements: Iterable[ShipPlacement]) -> list[tuple[ShipClass, HexCoord]]:
    return [
        (placement.ship_class, HexCoord(col=placement.col, row=placement.row))
        for placement in placements
    ]
