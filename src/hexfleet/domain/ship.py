"""Ship construction, facing and damage rules."""

from __future__ import annotations

from hexfleet.domain.enums import ShipClass
from hexfleet.domain.models import Ship, ShipID
from hexfleet.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexfleet.utils.hex_math import DIRECTION_COUNT, HexCoord
from hexfleet.utils.rng import RandomSource, uniform_factor


def create_ship(
    ship_id: ShipID,
    ship_class: ShipClass,
    player_owned: bool,
    position: HexCoord,
    *,
    name: str | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> Ship:
    """Build a ship with the stats bound to its class."""

    stats = rules.fleet.ship_stats[ship_class]
    side = "player" if player_owned else "opponent"
    direction = (
        rules.fleet.player_initial_direction
        if player_owned
        else rules.fleet.opponent_initial_direction
    )
    return Ship(
        id=ship_id,
        name=name or f"{side}-{ship_class.value}-{int(ship_id)}",
        ship_class=ship_class,
        player_owned=player_owned,
        position=position,
        health=stats.max_health,
        max_health=stats.max_health,
        movement_points=stats.max_movement,
        max_movement=stats.max_movement,
        attack_range=stats.attack_range,
        attack_damage=stats.attack_damage,
        direction=direction,
        max_turn_angle=rules.fleet.max_turn_angle,
        is_stealth=stats.stealth_capable,
        stealth_capable=stats.stealth_capable,
    )


def turn_distance(current: int, requested: int) -> int:
    """Number of 60 degree steps between two facings, the short way round."""

    _check_direction(requested)
    delta = (requested - current) % DIRECTION_COUNT
    return min(delta, DIRECTION_COUNT - delta)


def can_rotate_to(ship: Ship, direction: int) -> bool:
    return turn_distance(ship.direction, direction) <= ship.max_turn_angle


def available_directions(ship: Ship) -> list[int]:
    """Facings the ship may turn to with a single rotation."""

    return [d for d in range(DIRECTION_COUNT) if can_rotate_to(ship, d)]


def try_rotate(ship: Ship, direction: int) -> bool:
    """Turn the ship if the change is within its turn rate.

    Returns False, leaving the ship untouched, when the turn is too sharp.
    """

    if not can_rotate_to(ship, direction):
        return False
    ship.direction = direction
    return True


def take_damage(ship: Ship, amount: int) -> bool:
    """Reduce health, flooring at zero. Returns True once health hits zero."""

    if amount < 0:
        raise ValueError(f"damage must be non-negative, got {amount}")
    ship.health = max(0, ship.health - amount)
    return ship.health == 0


def matchup_multiplier(
    attacker: Ship, target: Ship, rules: RulesConfig = DEFAULT_RULES
) -> float:
    return rules.combat.matchup_multipliers.get((attacker.ship_class, target.ship_class), 1.0)


def compute_damage(
    attacker: Ship,
    target: Ship,
    rng: RandomSource,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Damage of a direct attack: base x matchup x uniform variance, rounded.

    This consumes exactly one draw from ``rng``.
    """

    combat = rules.combat
    damage = attacker.attack_damage * matchup_multiplier(attacker, target, rules)
    damage *= uniform_factor(rng, combat.damage_variance_low, combat.damage_variance_high)
    return int(round(damage))


def toggle_stealth(ship: Ship) -> bool:
    """Flip the stealth flag of a stealth-capable ship and return the new value."""

    if not ship.stealth_capable:
        raise ValueError(f"{ship.name} cannot submerge")
    ship.is_stealth = not ship.is_stealth
    return ship.is_stealth


def _check_direction(direction: int) -> None:
    if not 0 <= direction < DIRECTION_COUNT:
        raise ValueError(f"direction must be in [0, {DIRECTION_COUNT}), got {direction}")
