"""Declarative rule configuration for the hexfleet domain."""

from __future__ import annotations

from dataclasses import dataclass, field

from hexfleet.domain.enums import ShipClass


@dataclass(frozen=True, slots=True)
class ShipStats:
    """Class-derived attributes bound to every ship of a class."""

    max_health: int
    max_movement: int
    attack_range: int
    attack_damage: int
    stealth_capable: bool = False


def _default_ship_stats() -> dict[ShipClass, ShipStats]:
    return {
        ShipClass.BATTLESHIP: ShipStats(
            max_health=150, max_movement=2, attack_range=3, attack_damage=40
        ),
        ShipClass.CRUISER: ShipStats(
            max_health=100, max_movement=3, attack_range=2, attack_damage=25
        ),
        ShipClass.DESTROYER: ShipStats(
            max_health=75, max_movement=4, attack_range=1, attack_damage=15
        ),
        ShipClass.SUBMARINE: ShipStats(
            max_health=85,
            max_movement=3,
            attack_range=1,
            attack_damage=30,
            stealth_capable=True,
        ),
    }


@dataclass(frozen=True, slots=True)
class FleetRules:
    """Ship class table and facing defaults."""

    ship_stats: dict[ShipClass, ShipStats] = field(default_factory=_default_ship_stats)
    max_turn_angle: int = 1
    player_initial_direction: int = 0
    opponent_initial_direction: int = 3


@dataclass(frozen=True, slots=True)
class MovementRules:
    """Per-terrain movement costs and entry thresholds."""

    water_cost: int = 1
    shallow_cost: int = 1
    battleship_shallow_cost: int = 2
    reef_cost: int = 2
    submarine_reef_cost: int = 1
    rough_water_min_points: int = 2  # reef for surface ships, shallows for battleships
    rotation_cost: int = 1


def _default_matchups() -> dict[tuple[ShipClass, ShipClass], float]:
    return {
        (ShipClass.DESTROYER, ShipClass.SUBMARINE): 1.5,
        (ShipClass.BATTLESHIP, ShipClass.CRUISER): 1.3,
        (ShipClass.SUBMARINE, ShipClass.BATTLESHIP): 1.4,
    }


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Damage formula, special effects and capture parameters."""

    matchup_multipliers: dict[tuple[ShipClass, ShipClass], float] = field(
        default_factory=_default_matchups
    )
    damage_variance_low: float = 0.9
    damage_variance_high: float = 1.1
    fire_damage: int = 10
    fire_chance: float = 0.3
    fire_duration: int = 2
    slow_chance: float = 0.4
    slow_duration: int = 1
    submarine_secondary_divisor: int = 2
    capturing_classes: frozenset[ShipClass] = frozenset(
        {ShipClass.BATTLESHIP, ShipClass.CRUISER}
    )


@dataclass(frozen=True, slots=True)
class TurnRules:
    """Per-turn resets and wind."""

    wind_bonus_chance: float = 0.3
    wind_bonus_points: int = 1
    wind_directions: int = 8
    wind_strength_min: int = 1
    wind_strength_max: int = 3


@dataclass(frozen=True, slots=True)
class MapRules:
    """Terrain generation parameters."""

    island_clusters: int = 3
    island_density: float = 0.7
    reef_clusters: int = 4
    reef_density: float = 0.5
    shallow_patches: int = 2
    shallow_radius: int = 2
    shallow_density: float = 0.6
    fort_count: int = 2
    fort_defense: int = 50
    base_defense: int = 100
    placement_attempts: int = 50


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    fleet: FleetRules = FleetRules()
    movement: MovementRules = MovementRules()
    combat: CombatRules = CombatRules()
    turns: TurnRules = TurnRules()
    map: MapRules = MapRules()


DEFAULT_RULES = RulesConfig()
