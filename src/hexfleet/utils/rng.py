"""Seedable random number helpers for hexfleet.

All randomness in the rules engine flows through a single injected random
source (anything with a ``random() -> float`` method returning values in
[0, 1)). Sessions build their sources from seed strings so that:
- Reproducibility: Same seed always produces the same battle
- Testability: Tests can inject scripted sources
- Bug reproduction: A reported seed replays the same rolls

Examples:
    >>> rng = make_rng(generate_seed(session_id=1, turn=3, context="combat"))
    >>> result = check_chance(rng, 0.3)
    >>> sorted(result)
    ['probability', 'roll', 'success']
"""

import hashlib
import random
from typing import Any, Protocol


class RandomSource(Protocol):
    """Anything producing uniform floats in [0, 1)."""

    def random(self) -> float: ...


def generate_seed(session_id: int, turn: int, context: str) -> str:
    """Generate a deterministic seed string from session state.

    Format: "session_id:turn:context"

    Args:
        session_id: Identifier of the battle session
        turn: Turn number the seed is used for (0 for setup)
        context: What the randomness is for (e.g., 'terrain', 'combat')

    Returns:
        Seed string in format "session_id:turn:context"

    Examples:
        >>> generate_seed(1, 0, "terrain")
        '1:0:terrain'

    Raises:
        ValueError: If session_id or turn is negative
    """
    if session_id < 0:
        raise ValueError(f"session_id must be non-negative, got {session_id}")
    if turn < 0:
        raise ValueError(f"turn must be non-negative, got {turn}")

    return f"{session_id}:{turn}:{context}"


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random().

    Args:
        seed: Seed string

    Returns:
        64-bit integer derived from SHA-256(seed)
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    # Use first 8 bytes for a 64-bit integer
    return int.from_bytes(digest[:8], "big", signed=False)


def make_rng(seed: str | None = None) -> random.Random:
    """Build a random source, reproducible when a seed string is given."""

    if seed is None:
        return random.Random()
    return random.Random(_seed_to_int(seed))


def check_chance(rng: RandomSource, probability: float) -> dict[str, Any]:
    """Draw once and report whether the event with the given probability fires.

    Args:
        rng: Random source to draw from
        probability: Success probability (0.0 to 1.0)

    Returns:
        Dictionary containing:
            - success: Whether the draw fell below the probability
            - roll: The uniform draw
            - probability: The requested probability

    Raises:
        ValueError: If probability not in [0.0, 1.0]
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be between 0.0 and 1.0, got {probability}")

    roll = rng.random()
    return {
        "success": roll < probability,
        "roll": roll,
        "probability": probability,
    }


def uniform_factor(rng: RandomSource, low: float, high: float) -> float:
    """Draw a uniform value in [low, high].

    Raises:
        ValueError: If low > high
    """
    if low > high:
        raise ValueError(f"low ({low}) cannot be greater than high ({high})")
    return low + (high - low) * rng.random()


def random_int(rng: RandomSource, min_val: int, max_val: int) -> int:
    """Draw an integer between min_val and max_val (inclusive).

    Raises:
        ValueError: If min_val > max_val
    """
    if min_val > max_val:
        raise ValueError(f"min_val ({min_val}) cannot be greater than max_val ({max_val})")

    span = max_val - min_val + 1
    # scripted sources may return exactly 1.0
    return min_val + min(int(rng.random() * span), span - 1)
