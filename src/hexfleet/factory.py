"""Session factory for hexfleet.

This module wires a ready-to-play :class:`GameService`: it generates the
battlefield, builds the session with its random source and deploys both
fleets. Use it in host code to get a consistently assembled session.

For testing, build a :class:`GameSession` by hand and inject a scripted
random source instead of using these factories.

Example:
    # Host usage
    from hexfleet.factory import create_game_service
    game = create_game_service()

    # Testing usage
    from hexfleet.domain.models import Battlefield, GameSession
    from hexfleet.services import GameService

    class ScriptedRandom:
        def __init__(self, *values):
            self.values = list(values)

        def random(self):
            return self.values.pop(0)

    game = GameService(GameSession(Battlefield.filled(8, 8), rng=ScriptedRandom(0.5)))
"""

import logging

from hexfleet.config import Settings, get_settings
from hexfleet.domain.models import Battlefield, GameSession
from hexfleet.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexfleet.domain.terrain import generate_battlefield
from hexfleet.schemas.setup import FleetSetup, default_fleet_setup
from hexfleet.services.game_service import GameService
from hexfleet.utils.hex_math import HexCoord
from hexfleet.utils.rng import RandomSource, generate_seed, make_rng

logger = logging.getLogger(__name__)


def session_seeds(settings: Settings) -> tuple[str, str]:
    """Terrain and combat seed strings for a battle.

    Explicit seeds in ``settings`` win. Missing ones derive from
    ``settings.session_id``, or from a fresh random battle number when that
    is unset too, so a logged battle number replays the same battle.
    """
    session_id = settings.session_id
    if session_id is None:
        session_id = make_rng().getrandbits(32)
    terrain_seed = settings.terrain_seed or generate_seed(session_id, 0, "terrain")
    combat_seed = settings.combat_seed or generate_seed(session_id, 0, "combat")
    logger.info(
        "battle %s: terrain seed %r, combat seed %r", session_id, terrain_seed, combat_seed
    )
    return terrain_seed, combat_seed


def create_battlefield(
    settings: Settings,
    setup: FleetSetup,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    rng: RandomSource | None = None,
) -> Battlefield:
    """Generate terrain that leaves every fleet anchorage open.

    Args:
        settings: Grid size and terrain seed
        setup: Fleet placements whose hexes must stay water
        rules: Map generation rules
        rng: Random source overriding the terrain seed

    Returns:
        Freshly generated Battlefield
    """
    reserved = [HexCoord(col=col, row=row) for col, row in setup.anchorages()]
    return generate_battlefield(
        settings.grid_width,
        settings.grid_height,
        rng or make_rng(session_seeds(settings)[0]),
        rules,
        reserved,
    )


def create_session(
    settings: Settings | None = None,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    setup: FleetSetup | None = None,
    terrain_rng: RandomSource | None = None,
    combat_rng: RandomSource | None = None,
) -> tuple[GameSession, FleetSetup]:
    """Create an undeployed session and the setup meant for it.

    Returns:
        The new GameSession and the FleetSetup used to reserve anchorages
    """
    settings = settings or get_settings()
    setup = setup or default_fleet_setup(settings.grid_width, settings.grid_height)
    terrain_seed, combat_seed = session_seeds(settings)
    field = create_battlefield(
        settings, setup, rules=rules, rng=terrain_rng or make_rng(terrain_seed)
    )
    session = GameSession(
        battlefield=field,
        rules=rules,
        rng=combat_rng or make_rng(combat_seed),
    )
    return session, setup


def create_game_service(
    settings: Settings | None = None,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    setup: FleetSetup | None = None,
    terrain_rng: RandomSource | None = None,
    combat_rng: RandomSource | None = None,
) -> GameService:
    """Create a GameService whose session is deployed and on turn 1.

    Args:
        settings: Grid size and seeds; defaults to :func:`get_settings`
        rules: Rule tables for every subsystem
        setup: Fleet placements; defaults to the standard four-ship fleets
        terrain_rng: Random source for terrain, overriding the terrain seed
        combat_rng: Random source for play, overriding the combat seed

    Returns:
        Fully initialized GameService
    """
    session, setup = create_session(
        settings,
        rules=rules,
        setup=setup,
        terrain_rng=terrain_rng,
        combat_rng=combat_rng,
    )
    service = GameService(session)
    service.start_session(setup)
    return service
