"""Tests for the fleet setup and snapshot schemas."""

import pytest
from pydantic import ValidationError

from hexfleet.domain.enums import Owner, Phase, ShipClass
from hexfleet.schemas import (
    FleetSetup,
    SessionSnapshot,
    ShipPlacement,
    default_fleet_setup,
    snapshot_session,
)


def _placement(ship_class: ShipClass, col: int, row: int) -> dict:
    return {"ship_class": ship_class, "col": col, "row": row}


class TestFleetSetup:
    def test_accepts_string_classes(self) -> None:
        setup = FleetSetup(
            player=[{"ship_class": "battleship", "col": 1, "row": 1}],
            opponent=[{"ship_class": "submarine", "col": 2, "row": 2}],
        )
        assert setup.player[0].ship_class == ShipClass.BATTLESHIP
        assert setup.anchorages() == [(1, 1), (2, 2)]

    def test_rejects_shared_hex(self) -> None:
        with pytest.raises(ValidationError, match="two ships"):
            FleetSetup(
                player=[_placement(ShipClass.CRUISER, 3, 3)],
                opponent=[_placement(ShipClass.CRUISER, 3, 3)],
            )

    def test_rejects_empty_fleet(self) -> None:
        with pytest.raises(ValidationError):
            FleetSetup(player=[], opponent=[_placement(ShipClass.CRUISER, 3, 3)])

    def test_rejects_negative_coordinates(self) -> None:
        with pytest.raises(ValidationError):
            ShipPlacement(ship_class=ShipClass.CRUISER, col=-1, row=0)

    def test_rejects_unknown_class(self) -> None:
        with pytest.raises(ValidationError):
            ShipPlacement(ship_class="carrier", col=0, row=0)


class TestDefaultFleetSetup:
    def test_standard_fleets(self) -> None:
        setup = default_fleet_setup(12, 8)
        assert [p.ship_class for p in setup.player] == [
            ShipClass.BATTLESHIP,
            ShipClass.CRUISER,
            ShipClass.DESTROYER,
            ShipClass.SUBMARINE,
        ]
        assert [(p.col, p.row) for p in setup.player] == [(6, 5), (4, 6), (8, 6), (6, 7)]
        assert [(p.col, p.row) for p in setup.opponent] == [(6, 2), (4, 1), (8, 1), (6, 3)]

    @pytest.mark.parametrize(("width", "height"), [(5, 7), (9, 9), (20, 15)])
    def test_fits_on_grid(self, width: int, height: int) -> None:
        setup = default_fleet_setup(width, height)
        for col, row in setup.anchorages():
            assert 0 <= col < width
            assert 0 <= row < height

    @pytest.mark.parametrize(("width", "height"), [(4, 8), (12, 6)])
    def test_rejects_small_grid(self, width: int, height: int) -> None:
        with pytest.raises(ValueError, match="5x7"):
            default_fleet_setup(width, height)


class TestSnapshot:
    def test_copies_observable_state(self, session, add_ship) -> None:
        ours = add_ship(ShipClass.SUBMARINE, 2, 2)
        add_ship(ShipClass.CRUISER, 7, 7, player=False)
        ours.effects["stealth"] = 2
        session.selected_ship_id = ours.id

        snapshot = snapshot_session(session)

        assert isinstance(snapshot, SessionSnapshot)
        assert (snapshot.width, snapshot.height) == (10, 10)
        assert snapshot.phase == Phase.PLAYER_TURN
        assert snapshot.winner is None
        assert snapshot.selected_ship_id == int(ours.id)
        assert len(snapshot.tiles) == 100
        (ship,) = snapshot.player_fleet
        assert (ship.col, ship.row, ship.is_stealth) == (2, 2, True)
        assert ship.effects == {"stealth": 2}
        occupied = {(t.col, t.row): t.occupant_id for t in snapshot.tiles if t.occupant_id}
        assert occupied == {(2, 2): 1, (7, 7): 2}
        assert all(t.owner_id == Owner.NEUTRAL for t in snapshot.tiles)

    def test_snapshot_is_detached(self, session, add_ship) -> None:
        ours = add_ship(ShipClass.CRUISER, 2, 2)
        snapshot = snapshot_session(session)
        ours.effects["slow"] = 1
        assert snapshot.player_fleet[0].effects == {}
        with pytest.raises(ValidationError):
            snapshot.turn_number = 5
