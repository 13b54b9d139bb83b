from pydantic import BaseModel, ConfigDict, Field

from hexfleet.domain.enums import Owner, Phase, ShipClass, TerrainKind
from hexfleet.domain.models import GameSession, Ship, Tile


class TileSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    col: int = Field(..., description="Offset column")
    row: int = Field(..., description="Offset row")
    terrain: TerrainKind = Field(..., description="Terrain of the hex")
    owner_id: int = Field(default=Owner.NEUTRAL, description="-1 neutral, 0 player, 1 opponent")
    defense: int = Field(default=0, description="Remaining defense of a fort or base")
    occupant_id: int | None = Field(None, description="Id of the ship on this hex")


class ShipSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Ship id")
    name: str = Field(..., description="Display name")
    ship_class: ShipClass = Field(..., description="Class of the ship")
    player_owned: bool = Field(..., description="Whether the player commands this ship")
    col: int = Field(..., description="Offset column of the ship's hex")
    row: int = Field(..., description="Offset row of the ship's hex")
    health: int = Field(..., ge=0, description="Current health")
    max_health: int = Field(..., gt=0, description="Maximum health")
    movement_points: int = Field(..., ge=0, description="Movement points left this turn")
    max_movement: int = Field(..., ge=0, description="Movement points restored each turn")
    attack_range: int = Field(..., ge=0, description="Gun range in hexes")
    attack_damage: int = Field(..., ge=0, description="Base damage per attack")
    direction: int = Field(..., ge=0, le=5, description="Facing, 0-5")
    can_attack: bool = Field(..., description="Whether the ship may still attack this turn")
    is_stealth: bool = Field(default=False, description="Whether the ship is submerged")
    effects: dict[str, int] = Field(
        default_factory=dict, description="Active status effects and turns remaining"
    )


class SessionSnapshot(BaseModel):
    """Read-only copy of a session for presentation layers."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Battlefield columns")
    height: int = Field(..., gt=0, description="Battlefield rows")
    phase: Phase = Field(..., description="Current phase of the turn cycle")
    winner: Owner | None = Field(None, description="Winning side once the game is over")
    turn_number: int = Field(default=0, ge=0, description="Current turn, starting at 1")
    wind_direction: int = Field(default=0, ge=0, description="Wind compass point, 0-7")
    wind_strength: int = Field(default=1, ge=0, description="Wind strength, 1-3")
    selected_ship_id: int | None = Field(None, description="Currently selected player ship")
    tiles: list[TileSnapshot] = Field(default_factory=list, description="Every hex, column-major")
    player_fleet: list[ShipSnapshot] = Field(default_factory=list, description="Live player ships")
    opponent_fleet: list[ShipSnapshot] = Field(
        default_factory=list, description="Live opponent ships"
    )


def snapshot_tile(tile: Tile) -> TileSnapshot:
    return TileSnapshot(
        col=tile.coord.col,
        row=tile.coord.row,
        terrain=tile.terrain,
        owner_id=int(tile.owner_id),
        defense=tile.defense,
        occupant_id=None if tile.occupant_id is None else int(tile.occupant_id),
    )


def snapshot_ship(ship: Ship) -> ShipSnapshot:
    return ShipSnapshot(
        id=int(ship.id),
        name=ship.name,
        ship_class=ship.ship_class,
        player_owned=ship.player_owned,
        col=ship.position.col,
        row=ship.position.row,
        health=ship.health,
        max_health=ship.max_health,
        movement_points=ship.movement_points,
        max_movement=ship.max_movement,
        attack_range=ship.attack_range,
        attack_damage=ship.attack_damage,
        direction=ship.direction,
        can_attack=ship.can_attack,
        is_stealth=ship.is_stealth,
        effects=dict(ship.effects),
    )


def snapshot_session(session: GameSession) -> SessionSnapshot:
    """Copy the observable state of a session into pydantic models."""
    field = session.battlefield
    selected = session.selected_ship_id
    return SessionSnapshot(
        width=field.width,
        height=field.height,
        phase=session.phase,
        winner=session.winner,
        turn_number=session.turn_number,
        wind_direction=session.wind_direction,
        wind_strength=session.wind_strength,
        selected_ship_id=None if selected is None else int(selected),
        tiles=[snapshot_tile(tile) for tile in field.tiles.values()],
        player_fleet=[snapshot_ship(ship) for ship in session.player_fleet],
        opponent_fleet=[snapshot_ship(ship) for ship in session.opponent_fleet],
    )
