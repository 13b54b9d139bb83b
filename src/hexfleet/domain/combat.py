"""Combat resolution: direct attacks, area fire and special effects."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from hexfleet.domain.battlefield import line_of_fire, resolve_tile_capture
from hexfleet.domain.effects import apply_effect
from hexfleet.domain.enums import EventKind, ShipClass, StatusEffect
from hexfleet.domain.errors import IllegalState, InvalidAttack
from hexfleet.domain.fleet import deal_damage, find_ship
from hexfleet.domain.models import GameSession, Ship, ShipID
from hexfleet.domain.ship import compute_damage
from hexfleet.utils.hex_math import HexCoord, hex_distance
from hexfleet.utils.rng import check_chance

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FireResult:
    """Outcome of firing at a hex."""

    target: HexCoord
    hit_coord: HexCoord | None = None
    hit_ship_id: ShipID | None = None
    damage: int = 0
    captured: bool = False

    @property
    def hit(self) -> bool:
        return self.hit_ship_id is not None


def attack(session: GameSession, attacker: Ship, target: Ship | None) -> int:
    """Resolve a direct attack on an enemy ship and return the damage dealt."""

    if attacker.destroyed:
        raise IllegalState(f"{attacker.name} has been destroyed")
    if not attacker.can_attack:
        raise InvalidAttack(f"{attacker.name} has already attacked this turn")
    if target is None or target.destroyed:
        raise InvalidAttack("no target to attack")
    if target.player_owned == attacker.player_owned:
        raise InvalidAttack(f"{attacker.name} cannot attack friendly {target.name}")
    distance = hex_distance(attacker.position, target.position)
    if distance > attacker.attack_range:
        raise InvalidAttack(
            f"{target.name} is {distance} hexes away, range is {attacker.attack_range}"
        )

    session.events.emit(
        EventKind.UNIT_ATTACKED,
        session.turn_number,
        f"{attacker.name} attacks {target.name}",
        attacker_id=int(attacker.id),
        target_id=int(target.id),
    )
    damage = compute_damage(attacker, target, session.rng, session.rules)
    logger.debug("%s hits %s for %s", attacker.name, target.name, damage)
    deal_damage(session, target, damage)
    if not target.destroyed:
        apply_special_effect(session, attacker, target)
    attacker.can_attack = False
    return damage


def fire_at(session: GameSession, attacker: Ship, coord: HexCoord) -> FireResult:
    """Fire along the line towards ``coord``.

    The first ship on the line, friend or foe, takes the attacker's flat
    attack damage. A shot that reaches a capturable tile unobstructed
    bombards it instead.
    """

    if attacker.destroyed:
        raise IllegalState(f"{attacker.name} has been destroyed")
    if not attacker.can_attack:
        raise InvalidAttack(f"{attacker.name} has already attacked this turn")
    if coord not in session.battlefield:
        raise InvalidAttack(f"{coord} is off the map")
    distance = hex_distance(attacker.position, coord)
    if distance == 0 or distance > attacker.attack_range:
        raise InvalidAttack(
            f"{coord} is {distance} hexes away, range is 1..{attacker.attack_range}"
        )

    hit_coord, hit_ship_id = line_of_fire(session.battlefield, attacker.position, coord)
    attacker.can_attack = False
    session.events.emit(
        EventKind.UNIT_FIRED,
        session.turn_number,
        f"{attacker.name} fires at {coord}",
        attacker_id=int(attacker.id),
        target=(coord.col, coord.row),
        hit=hit_ship_id is not None,
        hit_ship_id=None if hit_ship_id is None else int(hit_ship_id),
    )

    if hit_ship_id is not None:
        victim = find_ship(session, hit_ship_id)
        if victim is not None:
            deal_damage(session, victim, attacker.attack_damage)
        return FireResult(
            target=coord,
            hit_coord=hit_coord,
            hit_ship_id=hit_ship_id,
            damage=attacker.attack_damage,
        )

    captured = resolve_tile_capture(session, attacker, coord)
    return FireResult(target=coord, captured=captured)


def apply_special_effect(session: GameSession, attacker: Ship, target: Ship) -> None:
    """Apply the attacker's class-specific follow-up to a surviving target."""

    if target.destroyed:
        return
    handler = _SPECIAL_EFFECT_HANDLERS.get(attacker.ship_class)
    if handler is not None:
        handler(session, attacker, target)


def _battleship_incendiary(session: GameSession, _attacker: Ship, target: Ship) -> None:
    combat = session.rules.combat
    if check_chance(session.rng, combat.fire_chance)["success"]:
        apply_effect(session, target, StatusEffect.FIRE, combat.fire_duration)


def _cruiser_disabling(session: GameSession, _attacker: Ship, target: Ship) -> None:
    combat = session.rules.combat
    if check_chance(session.rng, combat.slow_chance)["success"]:
        apply_effect(session, target, StatusEffect.SLOW, combat.slow_duration)


def _destroyer_detection(session: GameSession, _attacker: Ship, target: Ship) -> None:
    if target.ship_class != ShipClass.SUBMARINE or not target.is_stealth:
        return
    target.is_stealth = False
    target.effects.pop(StatusEffect.STEALTH.value, None)
    logger.debug("%s detected", target.name)
    session.events.emit(
        EventKind.EFFECT_EXPIRED,
        session.turn_number,
        f"{target.name} detected",
        ship_id=int(target.id),
        effect=StatusEffect.STEALTH.value,
    )


def _submarine_torpedo(session: GameSession, attacker: Ship, target: Ship) -> None:
    deal_damage(
        session, target, attacker.attack_damage // session.rules.combat.submarine_secondary_divisor
    )


SpecialEffectHandler = Callable[[GameSession, Ship, Ship], None]

_SPECIAL_EFFECT_HANDLERS: dict[ShipClass, SpecialEffectHandler] = {
    ShipClass.BATTLESHIP: _battleship_incendiary,
    ShipClass.CRUISER: _cruiser_disabling,
    ShipClass.DESTROYER: _destroyer_detection,
    ShipClass.SUBMARINE: _submarine_torpedo,
}
