"""Game-over evaluation."""

from __future__ import annotations

import logging

from hexfleet.domain.enums import EventKind, Owner, Phase, TerrainKind
from hexfleet.domain.models import GameSession

logger = logging.getLogger(__name__)


def determine_winner(session: GameSession) -> Owner | None:
    """Return the winning side if the battle is decided, without mutating."""

    if not session.opponent_fleet:
        return Owner.PLAYER
    if not session.player_fleet:
        return Owner.OPPONENT

    tiles = session.battlefield.tiles.values()

    if session.home_base_at_start and not any(
        tile.terrain == TerrainKind.PLAYER_BASE and tile.owner_id == Owner.PLAYER
        for tile in tiles
    ):
        return Owner.OPPONENT

    forts = [tile for tile in tiles if tile.terrain == TerrainKind.FORT]
    if forts and all(tile.owner_id == Owner.PLAYER for tile in forts):
        return Owner.PLAYER

    return None


def evaluate_victory(session: GameSession) -> Owner | None:
    """Move the session to game over when a side has won.

    Evaluation is skipped until both fleets have been deployed, so that an
    empty roster during setup is never mistaken for a destroyed fleet.
    """

    if session.game_over or not session.fleets_deployed:
        return session.winner

    winner = determine_winner(session)
    if winner is None:
        return None

    session.phase = Phase.GAME_OVER
    session.winner = winner
    session.selected_ship_id = None
    logger.info("battle decided on turn %s: %s wins", session.turn_number, winner.name)
    session.events.emit(
        EventKind.GAME_OVER,
        session.turn_number,
        f"{winner.name.lower()} wins",
        winner=int(winner),
    )
    return winner
