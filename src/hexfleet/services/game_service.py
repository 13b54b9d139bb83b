"""Command and query facade over a single battle session.

Hosts (a UI, a test harness, a script) talk to the rules engine through
:class:`GameService`. Commands validate the human player's request, then
delegate to the domain rule functions; queries expose read-only views.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from hexfleet.domain import battlefield, combat, turns
from hexfleet.domain import ship as ship_rules
from hexfleet.domain.enums import EventKind, Owner, Phase, StatusEffect
from hexfleet.domain.errors import IllegalState, InvalidMove, RulesViolation
from hexfleet.domain.events import GameEvent
from hexfleet.domain.fleet import find_ship, fleet_of
from hexfleet.domain.models import GameSession, Ship, ShipID, Tile
from hexfleet.schemas.setup import FleetSetup
from hexfleet.schemas.snapshot import SessionSnapshot, snapshot_session
from hexfleet.utils.hex_math import HexCoord, direction_towards, hex_distance

logger = logging.getLogger(__name__)


class GameService:
    """Validates human commands and exposes session queries."""

    def __init__(self, session: GameSession) -> None:
        self._session = session

    @property
    def session(self) -> GameSession:
        return self._session

    # --- Commands ---------------------------------------------------------------

    def start_session(self, setup: FleetSetup) -> None:
        """Deploy both fleets and open turn 1."""

        with self._rejections("start_session"):
            self._require_running()
            turns.start_session(self._session, setup)

    def select_ship(self, ship_id: ShipID | int) -> Ship | None:
        """Select a player ship; selecting the current selection clears it.

        Returns the newly selected ship, or None when the call deselected.
        """

        with self._rejections("select_ship"):
            ship = self._require_player_ship(ship_id)
            if self._session.selected_ship_id == ship.id:
                self.deselect_ship()
                return None

            self.deselect_ship()
            self._session.selected_ship_id = ship.id
            self._session.events.emit(
                EventKind.UNIT_SELECTED,
                self._session.turn_number,
                f"{ship.name} selected",
                ship_id=int(ship.id),
            )
            return ship

    def deselect_ship(self) -> None:
        with self._rejections("deselect_ship"):
            self._require_running()
            selected = self._session.selected_ship_id
            if selected is None:
                return
            self._session.selected_ship_id = None
            self._session.events.emit(
                EventKind.UNIT_DESELECTED,
                self._session.turn_number,
                "selection cleared",
                ship_id=int(selected),
            )

    def move_ship(
        self,
        ship_id: ShipID | int,
        target: HexCoord,
        direction: int | None = None,
    ) -> Ship:
        """Move a player ship to a hex in its reachable set.

        Without an explicit ``direction`` the ship turns to face along the
        line towards the target.
        """

        with self._rejections("move_ship"):
            ship = self._require_player_ship(ship_id)
            if target not in battlefield.reachable_set(
                self._session.battlefield, ship, self._session.rules
            ):
                raise InvalidMove(f"{target} is not reachable by {ship.name}")
            if direction is None:
                direction = direction_towards(ship.position, target)
            battlefield.move_ship(self._session, ship, target, direction)
            return ship

    def rotate_ship(self, ship_id: ShipID | int, direction: int) -> Ship:
        """Turn a player ship in place for one movement point."""

        with self._rejections("rotate_ship"):
            ship = self._require_player_ship(ship_id)
            cost = self._session.rules.movement.rotation_cost
            if not ship_rules.can_rotate_to(ship, direction):
                raise InvalidMove(f"{ship.name} cannot turn from {ship.direction} to {direction}")
            if ship.movement_points < cost:
                raise InvalidMove(f"{ship.name} has no movement points left to turn")

            old_direction = ship.direction
            ship_rules.try_rotate(ship, direction)
            ship.movement_points -= cost
            self._session.events.emit(
                EventKind.UNIT_ROTATED,
                self._session.turn_number,
                f"{ship.name} turned",
                ship_id=int(ship.id),
                old=old_direction,
                new=direction,
            )
            return ship

    def toggle_stealth(self, ship_id: ShipID | int) -> bool:
        """Submerge or surface a stealth-capable player ship."""

        with self._rejections("toggle_stealth"):
            ship = self._require_player_ship(ship_id)
            if not ship.stealth_capable:
                raise IllegalState(f"{ship.name} cannot submerge")

            submerged = ship_rules.toggle_stealth(ship)
            self._session.events.emit(
                EventKind.EFFECT_APPLIED if submerged else EventKind.EFFECT_EXPIRED,
                self._session.turn_number,
                f"{ship.name} {'submerged' if submerged else 'surfaced'}",
                ship_id=int(ship.id),
                effect=StatusEffect.STEALTH.value,
            )
            return submerged

    def attack(self, ship_id: ShipID | int, target_id: ShipID | int) -> int:
        """Direct attack on an enemy ship; returns the damage dealt."""

        with self._rejections("attack"):
            ship = self._require_player_ship(ship_id)
            target = find_ship(self._session, target_id)
            return combat.attack(self._session, ship, target)

    def fire_at(self, ship_id: ShipID | int, target: HexCoord) -> combat.FireResult:
        with self._rejections("fire_at"):
            ship = self._require_player_ship(ship_id)
            return combat.fire_at(self._session, ship, target)

    def end_player_turn(self) -> None:
        """Finish the player's turn; the opponent acts before this returns."""

        with self._rejections("end_player_turn"):
            self._require_running()
            turns.end_player_turn(self._session)

    # --- Queries ----------------------------------------------------------------

    def reachable_set(self, ship_id: ShipID | int) -> set[HexCoord]:
        ship = self._require_ship(ship_id)
        return battlefield.reachable_set(self._session.battlefield, ship, self._session.rules)

    def attack_range(self, ship_id: ShipID | int) -> set[HexCoord]:
        return battlefield.attack_range(self._session.battlefield, self._require_ship(ship_id))

    def movement_cost(self, ship_id: ShipID | int, coord: HexCoord) -> int:
        ship = self._require_ship(ship_id)
        return battlefield.movement_cost(
            self._session.battlefield, coord, ship, self._session.rules
        )

    def can_enter(self, ship_id: ShipID | int, coord: HexCoord) -> bool:
        ship = self._require_ship(ship_id)
        return battlefield.can_enter(self._session.battlefield, coord, ship, self._session.rules)

    def is_occupied(self, coord: HexCoord) -> bool:
        return battlefield.is_occupied(self._session.battlefield, coord)

    @staticmethod
    def distance(a: HexCoord, b: HexCoord) -> int:
        return hex_distance(a, b)

    def tile_at(self, coord: HexCoord) -> Tile | None:
        return battlefield.tile_at(self._session.battlefield, coord)

    def fleet(self, owner: Owner) -> list[Ship]:
        """Live ships of one side, in roster order."""

        return list(fleet_of(self._session, owner))

    def ship(self, ship_id: ShipID | int) -> Ship | None:
        return find_ship(self._session, ship_id)

    @property
    def selected_ship(self) -> Ship | None:
        return find_ship(self._session, self._session.selected_ship_id)

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def winner(self) -> Owner | None:
        return self._session.winner

    def available_directions(self, ship_id: ShipID | int) -> list[int]:
        return ship_rules.available_directions(self._require_ship(ship_id))

    def drain_events(self) -> list[GameEvent]:
        return self._session.events.drain()

    def snapshot(self) -> SessionSnapshot:
        return snapshot_session(self._session)

    # --- Validation -------------------------------------------------------------

    def _require_running(self) -> None:
        if self._session.game_over:
            raise IllegalState("game is over")

    def _require_ship(self, ship_id: ShipID | int) -> Ship:
        ship = find_ship(self._session, ship_id)
        if ship is None:
            raise IllegalState(f"no live ship with id {int(ship_id)}")
        return ship

    def _require_player_ship(self, ship_id: ShipID | int) -> Ship:
        self._require_running()
        if self._session.phase != Phase.PLAYER_TURN:
            raise IllegalState(f"not the player's turn ({self._session.phase.value})")
        ship = self._require_ship(ship_id)
        if not ship.player_owned:
            raise IllegalState(f"{ship.name} is not a player ship")
        return ship

    @contextmanager
    def _rejections(self, command: str) -> Iterator[None]:
        try:
            yield
        except RulesViolation as exc:
            logger.warning("%s rejected: %s", command, exc)
            raise
