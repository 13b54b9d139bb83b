"""Dataclasses describing every hexfleet game entity.

The rules layer operates on these plain in-memory structures only. Tiles
reference their occupant by ship id rather than by object, so destroying a
ship can never leave a dangling reference on the map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

from hexfleet.domain.enums import Owner, Phase, ShipClass, TerrainKind
from hexfleet.domain.events import EventLog
from hexfleet.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexfleet.utils.hex_math import HexCoord
from hexfleet.utils.rng import RandomSource, make_rng

# --- Strongly typed identifiers -------------------------------------------------

ShipID = NewType("ShipID", int)


# --- Core dataclasses -----------------------------------------------------------


@dataclass(slots=True)
class Tile:
    """Battlefield hex tile."""

    coord: HexCoord
    terrain: TerrainKind = TerrainKind.WATER
    owner_id: int = Owner.NEUTRAL
    defense: int = 0
    occupant_id: ShipID | None = None

    @property
    def is_capturable(self) -> bool:
        return (
            self.terrain == TerrainKind.FORT and self.owner_id != Owner.PLAYER
        ) or self.terrain == TerrainKind.ENEMY_BASE


@dataclass(slots=True)
class Ship:
    """Individual warship on the battlefield."""

    id: ShipID
    name: str
    ship_class: ShipClass
    player_owned: bool
    position: HexCoord
    health: int
    max_health: int
    movement_points: int
    max_movement: int
    attack_range: int
    attack_damage: int
    direction: int = 0
    max_turn_angle: int = 1
    can_attack: bool = True
    is_stealth: bool = False
    stealth_capable: bool = False
    effects: dict[str, int] = field(default_factory=dict)
    destroyed: bool = False

    @property
    def owner(self) -> Owner:
        return Owner.PLAYER if self.player_owned else Owner.OPPONENT


@dataclass(slots=True)
class Battlefield:
    """Rectangular hex grid of tiles keyed by offset coordinate."""

    width: int
    height: int
    tiles: dict[HexCoord, Tile] = field(default_factory=dict)

    @classmethod
    def filled(cls, width: int, height: int, terrain: TerrainKind = TerrainKind.WATER):
        """Create a battlefield with every tile set to one terrain."""

        tiles = {
            HexCoord(col=col, row=row): Tile(coord=HexCoord(col=col, row=row), terrain=terrain)
            for col in range(width)
            for row in range(height)
        }
        return cls(width=width, height=height, tiles=tiles)

    def __contains__(self, coord: object) -> bool:
        return coord in self.tiles


@dataclass(slots=True)
class GameSession:
    """Root aggregate for a single battle."""

    battlefield: Battlefield
    rules: RulesConfig = DEFAULT_RULES
    rng: RandomSource = field(default_factory=make_rng)
    player_fleet: list[Ship] = field(default_factory=list)
    opponent_fleet: list[Ship] = field(default_factory=list)
    phase: Phase = Phase.PLAYER_TURN
    winner: Owner | None = None
    turn_number: int = 0
    wind_direction: int = 0
    wind_strength: int = 1
    selected_ship_id: ShipID | None = None
    fleets_deployed: bool = False
    home_base_at_start: bool = False
    next_ship_id: int = 1
    events: EventLog = field(default_factory=EventLog)

    @property
    def game_over(self) -> bool:
        return self.phase == Phase.GAME_OVER
