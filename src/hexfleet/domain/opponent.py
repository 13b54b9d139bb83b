"""Scripted opponent policy.

Each live opponent ship, in roster order, closes on the nearest visible
player ship one greedy step at a time and attacks once it is in range. The
policy checks every precondition itself, so it never relies on catching a
rules violation.
"""

from __future__ import annotations

import logging

from hexfleet.domain.battlefield import can_enter, is_occupied, move_ship, movement_cost
from hexfleet.domain.combat import attack
from hexfleet.domain.enums import ShipClass
from hexfleet.domain.models import GameSession, Ship
from hexfleet.utils.hex_math import cube_step_towards, hex_distance

logger = logging.getLogger(__name__)


def select_target(session: GameSession, actor: Ship) -> Ship | None:
    """Nearest live player ship the actor can see; ties go to roster order.

    A stealthed submarine is only visible to a destroyer.
    """

    best: Ship | None = None
    best_distance = 0
    for candidate in session.player_fleet:
        if candidate.destroyed:
            continue
        if (
            candidate.ship_class == ShipClass.SUBMARINE
            and candidate.is_stealth
            and actor.ship_class != ShipClass.DESTROYER
        ):
            continue
        distance = hex_distance(actor.position, candidate.position)
        if best is None or distance < best_distance:
            best, best_distance = candidate, distance
    return best


def run_opponent_turn(session: GameSession) -> None:
    """Let every opponent ship move and attack once."""

    for ship in list(session.opponent_fleet):
        if session.game_over:
            return
        if ship.destroyed:
            continue
        _take_turn(session, ship)


def _take_turn(session: GameSession, ship: Ship) -> None:
    target = select_target(session, ship)
    if target is None:
        logger.debug("%s has no visible target", ship.name)
        return

    field = session.battlefield
    while ship.movement_points > 0:
        step = cube_step_towards(ship.position, target.position)
        if (
            not can_enter(field, step, ship, session.rules)
            or is_occupied(field, step)
            or movement_cost(field, step, ship, session.rules) > ship.movement_points
        ):
            break
        move_ship(session, ship, step)
        if hex_distance(ship.position, target.position) <= ship.attack_range:
            break

    if (
        ship.can_attack
        and not target.destroyed
        and hex_distance(ship.position, target.position) <= ship.attack_range
    ):
        attack(session, ship, target)
