"""Enumerations used across the hexfleet domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class TerrainKind(StrEnum):
    """Terrain present on a battlefield tile."""

    WATER = "water"
    SHALLOW = "shallow"
    ISLAND = "island"
    REEF = "reef"
    FORT = "fort"
    PLAYER_BASE = "player_base"
    ENEMY_BASE = "enemy_base"

    @property
    def is_land(self) -> bool:
        return self in LAND_TERRAIN


LAND_TERRAIN = frozenset(
    {TerrainKind.ISLAND, TerrainKind.FORT, TerrainKind.PLAYER_BASE, TerrainKind.ENEMY_BASE}
)


class ShipClass(StrEnum):
    """Ship classes available to both fleets."""

    BATTLESHIP = "battleship"
    CRUISER = "cruiser"
    DESTROYER = "destroyer"
    SUBMARINE = "submarine"


class Owner(IntEnum):
    """Tile ownership and winner identifiers."""

    NEUTRAL = -1
    PLAYER = 0
    OPPONENT = 1


class Phase(StrEnum):
    """States of the turn state machine."""

    PLAYER_TURN = "player_turn"
    OPPONENT_TURN = "opponent_turn"
    GAME_OVER = "game_over"


class StatusEffect(StrEnum):
    """Named entries of a ship's status-effect ledger."""

    FIRE = "fire"
    SLOW = "slow"
    STEALTH = "stealth"


class EventKind(StrEnum):
    """Kinds of events the core appends to the session event queue."""

    UNIT_SELECTED = "unit_selected"
    UNIT_DESELECTED = "unit_deselected"
    UNIT_MOVED = "unit_moved"
    UNIT_ROTATED = "unit_rotated"
    UNIT_ATTACKED = "unit_attacked"
    UNIT_FIRED = "unit_fired"
    UNIT_DESTROYED = "unit_destroyed"
    EFFECT_APPLIED = "effect_applied"
    EFFECT_EXPIRED = "effect_expired"
    TILE_DAMAGED = "tile_damaged"
    TILE_CAPTURED = "tile_captured"
    WIND_CHANGED = "wind_changed"
    TURN_CHANGED = "turn_changed"
    GAME_OVER = "game_over"
