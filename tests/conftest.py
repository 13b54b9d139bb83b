"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`hexfleet` package (e.g., `from hexfleet.factory import create_game_service`)
without requiring an editable install in CI. It also provides the scripted
random source and the small open-sea battlefields most rule tests use.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from hexfleet.domain.enums import ShipClass  # noqa: E402
from hexfleet.domain.fleet import deploy_fleet  # noqa: E402
from hexfleet.domain.models import Battlefield, GameSession, Ship  # noqa: E402
from hexfleet.utils.hex_math import HexCoord  # noqa: E402


class ScriptedRandom:
    """Random source that replays queued draws, then a fixed default."""

    def __init__(self, *values: float, default: float = 0.5) -> None:
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default

    def queue(self, *values: float) -> None:
        self.values.extend(values)


@pytest.fixture
def rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def scripted():
    """Factory for additional scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def session(rng: ScriptedRandom) -> GameSession:
    """Deployed-looking session on a 10x10 open sea with no ships yet."""
    return GameSession(battlefield=Battlefield.filled(10, 10), rng=rng, fleets_deployed=True)


@pytest.fixture
def add_ship(session: GameSession):
    """Place a ship on the session battlefield and return it."""

    def _add(ship_class: ShipClass, col: int, row: int, *, player: bool = True) -> Ship:
        (ship,) = deploy_fleet(
            session, [(ship_class, HexCoord(col=col, row=row))], player_owned=player
        )
        return ship

    return _add
