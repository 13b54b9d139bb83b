from pydantic import BaseModel, Field, model_validator

from hexfleet.domain.enums import ShipClass


class ShipPlacement(BaseModel):
    ship_class: ShipClass = Field(..., description="Class of the ship to deploy")
    col: int = Field(..., ge=0, description="Offset column of the starting hex")
    row: int = Field(..., ge=0, description="Offset row of the starting hex")


class FleetSetup(BaseModel):
    player: list[ShipPlacement] = Field(..., min_length=1, description="Player ships in order")
    opponent: list[ShipPlacement] = Field(
        ..., min_length=1, description="Opponent ships in order"
    )

    @model_validator(mode="after")
    def _check_unique_hexes(self) -> "FleetSetup":
        seen: set[tuple[int, int]] = set()
        for placement in (*self.player, *self.opponent):
            key = (placement.col, placement.row)
            if key in seen:
                raise ValueError(f"two ships placed on hex {key}")
            seen.add(key)
        return self

    def anchorages(self) -> list[tuple[int, int]]:
        """Every starting hex, player ships first."""
        return [(p.col, p.row) for p in (*self.player, *self.opponent)]


def default_fleet_setup(width: int, height: int) -> FleetSetup:
    """Standard four-ship fleets facing each other across the grid.

    The player deploys along the south edge and the opponent along the north
    edge, each with the battleship in the centre, cruiser and destroyer on
    the flanks and the submarine screening.

    Raises:
        ValueError: If the grid is too small for both fleets
    """
    if width < 5 or height < 7:
        raise ValueError(f"default fleets need at least a 5x7 grid, got {width}x{height}")

    mid = width // 2
    return FleetSetup(
        player=[
            ShipPlacement(ship_class=ShipClass.BATTLESHIP, col=mid, row=height - 3),
            ShipPlacement(ship_class=ShipClass.CRUISER, col=mid - 2, row=height - 2),
            ShipPlacement(ship_class=ShipClass.DESTROYER, col=mid + 2, row=height - 2),
            ShipPlacement(ship_class=ShipClass.SUBMARINE, col=mid, row=height - 1),
        ],
        opponent=[
            ShipPlacement(ship_class=ShipClass.BATTLESHIP, col=mid, row=2),
            ShipPlacement(ship_class=ShipClass.CRUISER, col=mid - 2, row=1),
            ShipPlacement(ship_class=ShipClass.DESTROYER, col=mid + 2, row=1),
            ShipPlacement(ship_class=ShipClass.SUBMARINE, col=mid, row=3),
        ],
    )
