"""Status effect ledger: fire, slow and stealth.

A ship's ``effects`` map holds the remaining duration of each active effect,
keyed by the effect's string value. Fire burns on application and again on
every tick while it stays active.
"""

from __future__ import annotations

import logging

from hexfleet.domain.enums import EventKind, ShipClass, StatusEffect
from hexfleet.domain.errors import IllegalState
from hexfleet.domain.fleet import deal_damage
from hexfleet.domain.models import GameSession, Ship

logger = logging.getLogger(__name__)


def apply_effect(
    session: GameSession,
    ship: Ship,
    effect: StatusEffect | str,
    duration: int,
) -> None:
    """Set an effect on a ship, replacing any running instance of it."""

    effect = StatusEffect(effect)
    if duration < 1:
        raise ValueError(f"effect duration must be positive, got {duration}")
    if ship.destroyed:
        raise IllegalState(f"{ship.name} has been destroyed")

    already_slowed = StatusEffect.SLOW.value in ship.effects
    ship.effects[effect.value] = duration
    logger.debug("%s gains %s for %s turns", ship.name, effect.value, duration)
    session.events.emit(
        EventKind.EFFECT_APPLIED,
        session.turn_number,
        f"{ship.name} is affected by {effect.value}",
        ship_id=int(ship.id),
        effect=effect.value,
        duration=duration,
    )

    if effect == StatusEffect.FIRE:
        deal_damage(session, ship, session.rules.combat.fire_damage)
    elif effect == StatusEffect.SLOW:
        ship.movement_points = max(0, ship.movement_points - 1)
        if not already_slowed:
            ship.max_movement = max(1, ship.max_movement - 1)
    elif effect == StatusEffect.STEALTH:
        ship.is_stealth = True


def tick_effects(session: GameSession, ship: Ship) -> None:
    """Advance every effect by one turn, expiring those that run out."""

    for name in list(ship.effects):
        if ship.destroyed:
            return

        remaining = ship.effects[name] - 1
        if remaining <= 0:
            del ship.effects[name]
            _expire(session, ship, StatusEffect(name))
            continue

        ship.effects[name] = remaining
        if name == StatusEffect.FIRE:
            deal_damage(session, ship, session.rules.combat.fire_damage)


def _expire(session: GameSession, ship: Ship, effect: StatusEffect) -> None:
    if effect == StatusEffect.SLOW:
        ship.max_movement += 1
    elif effect == StatusEffect.STEALTH and ship.ship_class == ShipClass.SUBMARINE:
        ship.is_stealth = False

    logger.debug("%s no longer affected by %s", ship.name, effect.value)
    session.events.emit(
        EventKind.EFFECT_EXPIRED,
        session.turn_number,
        f"{effect.value} on {ship.name} wore off",
        ship_id=int(ship.id),
        effect=effect.value,
    )
