"""Tests for the GameService command and query facade."""

import logging

import pytest

from hexfleet.domain.enums import EventKind, Owner, Phase, ShipClass, TerrainKind
from hexfleet.domain.errors import IllegalState, InvalidAttack, InvalidMove
from hexfleet.services import GameService
from hexfleet.utils.hex_math import HexCoord


def _hex(col: int, row: int) -> HexCoord:
    return HexCoord(col=col, row=row)


@pytest.fixture
def game(session) -> GameService:
    return GameService(session)


@pytest.fixture
def destroyer(add_ship):
    return add_ship(ShipClass.DESTROYER, 2, 2)


@pytest.fixture
def enemy(add_ship):
    return add_ship(ShipClass.CRUISER, 8, 8, player=False)


class TestSelection:
    def test_select_then_toggle_off(self, game, destroyer, enemy) -> None:
        assert game.select_ship(destroyer.id) is destroyer
        assert game.selected_ship is destroyer
        assert game.select_ship(int(destroyer.id)) is None
        assert game.selected_ship is None
        kinds = [event.kind for event in game.drain_events()]
        assert kinds == [EventKind.UNIT_SELECTED, EventKind.UNIT_DESELECTED]

    def test_selecting_another_ship_replaces_selection(self, game, add_ship, destroyer) -> None:
        other = add_ship(ShipClass.CRUISER, 4, 4)
        game.select_ship(destroyer.id)
        game.select_ship(other.id)
        assert game.selected_ship is other
        events = [(event.kind, event.details["ship_id"]) for event in game.drain_events()]
        assert events == [
            (EventKind.UNIT_SELECTED, int(destroyer.id)),
            (EventKind.UNIT_DESELECTED, int(destroyer.id)),
            (EventKind.UNIT_SELECTED, int(other.id)),
        ]

    def test_deselect_without_selection_is_quiet(self, game, destroyer) -> None:
        game.deselect_ship()
        assert game.drain_events() == []

    def test_cannot_select_opponent_ship(self, game, destroyer, enemy) -> None:
        with pytest.raises(IllegalState, match="not a player ship"):
            game.select_ship(enemy.id)

    def test_cannot_select_unknown_ship(self, game, destroyer) -> None:
        with pytest.raises(IllegalState, match="no live ship"):
            game.select_ship(42)


class TestPhaseGuards:
    def test_commands_rejected_during_opponent_turn(self, game, session, destroyer) -> None:
        session.phase = Phase.OPPONENT_TURN
        with pytest.raises(IllegalState, match="player's turn"):
            game.move_ship(destroyer.id, _hex(3, 2))
        with pytest.raises(IllegalState):
            game.rotate_ship(destroyer.id, 1)
        assert destroyer.position == _hex(2, 2)

    def test_commands_rejected_after_game_over(self, game, session, destroyer) -> None:
        session.phase = Phase.GAME_OVER
        with pytest.raises(IllegalState, match="over"):
            game.select_ship(destroyer.id)
        with pytest.raises(IllegalState, match="over"):
            game.end_player_turn()

    def test_rejection_is_logged(self, game, session, destroyer, caplog) -> None:
        session.phase = Phase.GAME_OVER
        with caplog.at_level(logging.WARNING, logger="hexfleet.services.game_service"):
            with pytest.raises(IllegalState):
                game.deselect_ship()
        assert "deselect_ship rejected" in caplog.text


class TestMovement:
    def test_move_faces_along_the_step(self, game, destroyer, enemy) -> None:
        game.move_ship(destroyer.id, _hex(3, 2))
        assert destroyer.position == _hex(3, 2)
        assert destroyer.direction == 0
        assert destroyer.movement_points == 3
        assert game.is_occupied(_hex(3, 2))
        assert not game.is_occupied(_hex(2, 2))

    def test_move_with_explicit_facing(self, game, destroyer, enemy) -> None:
        game.move_ship(destroyer.id, _hex(2, 3), direction=5)
        assert destroyer.direction == 5

    def test_unreachable_target_rejected(self, game, destroyer, enemy) -> None:
        with pytest.raises(InvalidMove, match="not reachable"):
            game.move_ship(destroyer.id, _hex(2, 9))
        assert destroyer.position == _hex(2, 2)
        assert destroyer.movement_points == 4

    def test_sharp_turn_rejected(self, game, destroyer, enemy) -> None:
        with pytest.raises(InvalidMove, match="cannot turn"):
            game.move_ship(destroyer.id, _hex(1, 1))
        with pytest.raises(InvalidMove, match="cannot turn"):
            game.move_ship(destroyer.id, _hex(3, 2), direction=3)
        assert destroyer.position == _hex(2, 2)

    def test_rotate_costs_a_movement_point(self, game, destroyer, enemy) -> None:
        game.rotate_ship(destroyer.id, 1)
        assert destroyer.direction == 1
        assert destroyer.movement_points == 3
        (event,) = game.drain_events()
        assert event.kind == EventKind.UNIT_ROTATED
        assert event.details == {"ship_id": int(destroyer.id), "old": 0, "new": 1}

    def test_rotate_rejections(self, game, destroyer, enemy) -> None:
        with pytest.raises(InvalidMove):
            game.rotate_ship(destroyer.id, 3)
        destroyer.movement_points = 0
        with pytest.raises(InvalidMove, match="no movement points"):
            game.rotate_ship(destroyer.id, 1)
        assert destroyer.direction == 0


class TestStealth:
    def test_toggle_submarine(self, game, add_ship, enemy) -> None:
        submarine = add_ship(ShipClass.SUBMARINE, 4, 4)
        assert game.toggle_stealth(submarine.id) is False
        assert game.toggle_stealth(submarine.id) is True
        kinds = [event.kind for event in game.drain_events()]
        assert kinds == [EventKind.EFFECT_EXPIRED, EventKind.EFFECT_APPLIED]

    def test_surface_ship_cannot_submerge(self, game, destroyer) -> None:
        with pytest.raises(IllegalState, match="cannot submerge"):
            game.toggle_stealth(destroyer.id)


class TestCombat:
    def test_attack_adjacent_enemy(self, game, add_ship, destroyer) -> None:
        target = add_ship(ShipClass.CRUISER, 3, 2, player=False)
        damage = game.attack(destroyer.id, target.id)
        assert damage > 0
        assert target.health == 100 - damage

    def test_attack_unknown_target(self, game, destroyer, enemy) -> None:
        with pytest.raises(InvalidAttack, match="no target"):
            game.attack(destroyer.id, 99)

    def test_fire_at_open_water(self, game, add_ship, enemy) -> None:
        battleship = add_ship(ShipClass.BATTLESHIP, 0, 0)
        result = game.fire_at(battleship.id, _hex(0, 2))
        assert not result.hit
        assert not battleship.can_attack

    def test_fire_captures_enemy_base(self, game, session, add_ship, enemy) -> None:
        base = session.battlefield.tiles[_hex(0, 2)]
        base.terrain = TerrainKind.ENEMY_BASE
        base.owner_id = Owner.OPPONENT
        base.defense = 30
        battleship = add_ship(ShipClass.BATTLESHIP, 0, 0)

        result = game.fire_at(battleship.id, base.coord)

        assert result.captured
        assert base.terrain == TerrainKind.PLAYER_BASE
        assert base.owner_id == Owner.PLAYER


class TestQueries:
    def test_reachable_and_attack_range(self, game, destroyer, enemy) -> None:
        reachable = game.reachable_set(destroyer.id)
        assert _hex(2, 2) not in reachable
        assert _hex(2, 6) in reachable
        assert game.attack_range(destroyer.id) == {
            _hex(3, 2),
            _hex(3, 1),
            _hex(2, 1),
            _hex(1, 1),
            _hex(1, 2),
            _hex(2, 3),
        }

    def test_terrain_queries(self, game, session, destroyer) -> None:
        session.battlefield.tiles[_hex(3, 2)].terrain = TerrainKind.REEF
        assert game.movement_cost(destroyer.id, _hex(3, 2)) == 2
        assert game.can_enter(destroyer.id, _hex(3, 2))
        assert game.tile_at(_hex(3, 2)).terrain == TerrainKind.REEF
        assert game.tile_at(_hex(-1, 0)) is None
        assert game.is_occupied(_hex(-1, 0))
        assert GameService.distance(_hex(0, 0), _hex(0, 3)) == 3

    def test_fleet_and_ship_lookups(self, game, destroyer, enemy) -> None:
        assert game.fleet(Owner.PLAYER) == [destroyer]
        assert game.fleet(Owner.OPPONENT) == [enemy]
        assert game.ship(enemy.id) is enemy
        assert game.ship(77) is None
        assert game.available_directions(destroyer.id) == [0, 1, 5]
        assert game.phase == Phase.PLAYER_TURN
        assert game.winner is None

    def test_queries_on_unknown_ship(self, game) -> None:
        with pytest.raises(IllegalState):
            game.reachable_set(5)

    def test_snapshot(self, game, destroyer, enemy) -> None:
        snapshot = game.snapshot()
        assert [ship.id for ship in snapshot.player_fleet] == [int(destroyer.id)]
        assert [ship.id for ship in snapshot.opponent_fleet] == [int(enemy.id)]


class TestTurnFlow:
    def test_end_player_turn_runs_opponent(self, game, session, destroyer, enemy) -> None:
        game.end_player_turn()
        assert session.turn_number == 1
        assert game.phase == Phase.PLAYER_TURN
        assert enemy.position != _hex(8, 8)
