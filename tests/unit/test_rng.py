"""Tests for the seedable random source helpers.

Tests cover:
- Determinism (same seed -> same draws)
- Variety (different seeds -> different draws)
- Chance checks, uniform factors and integers
- Edge cases and validation
- Property-based tests
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from hexfleet.utils.rng import (
    check_chance,
    generate_seed,
    make_rng,
    random_int,
    uniform_factor,
)


class _Fixed:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class TestGenerateSeed:
    """Tests for generate_seed function."""

    def test_basic_seed_generation(self):
        """Test basic seed generation with valid inputs."""
        assert generate_seed(1, 42, "combat") == "1:42:combat"

    def test_different_parameters_produce_different_seeds(self):
        """Test that different parameters produce unique seeds."""
        seeds = {
            generate_seed(1, 1, "combat"),
            generate_seed(2, 1, "combat"),
            generate_seed(1, 2, "combat"),
            generate_seed(1, 1, "terrain"),
        }
        assert len(seeds) == 4, "All seeds should be unique"

    def test_negative_session_id_raises_error(self):
        with pytest.raises(ValueError, match="session_id must be non-negative"):
            generate_seed(-1, 1, "combat")

    def test_negative_turn_raises_error(self):
        with pytest.raises(ValueError, match="turn must be non-negative"):
            generate_seed(1, -1, "combat")

    @given(
        session_id=st.integers(min_value=0, max_value=10000),
        turn=st.integers(min_value=0, max_value=10000),
        context=st.text(min_size=1),
    )
    def test_seed_generation_properties(self, session_id, turn, context):
        """Property: seeds always start with the session and turn."""
        seed = generate_seed(session_id, turn, context)
        assert seed.startswith(f"{session_id}:{turn}:")


class TestMakeRng:
    """Tests for make_rng."""

    def test_determinism_same_seed_same_draws(self):
        first = make_rng("1:0:terrain")
        second = make_rng("1:0:terrain")
        assert [first.random() for _ in range(5)] == [second.random() for _ in range(5)]

    def test_different_seeds_different_draws(self):
        first = make_rng("1:0:terrain")
        second = make_rng("1:0:combat")
        assert [first.random() for _ in range(5)] != [second.random() for _ in range(5)]

    def test_unseeded_source_draws_in_unit_interval(self):
        rng = make_rng()
        assert all(0.0 <= rng.random() < 1.0 for _ in range(20))


class TestCheckChance:
    """Tests for check_chance."""

    def test_success_below_probability(self):
        result = check_chance(_Fixed(0.29), 0.3)
        assert result == {"success": True, "roll": 0.29, "probability": 0.3}

    def test_failure_at_probability(self):
        """The roll must be strictly below the probability."""
        assert check_chance(_Fixed(0.3), 0.3)["success"] is False

    def test_zero_probability_never_succeeds(self):
        assert check_chance(_Fixed(0.0), 0.0)["success"] is False

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_invalid_probability_raises_error(self, probability):
        with pytest.raises(ValueError, match="probability"):
            check_chance(_Fixed(0.5), probability)


class TestUniformFactor:
    """Tests for uniform_factor."""

    def test_bounds(self):
        assert uniform_factor(_Fixed(0.0), 0.9, 1.1) == pytest.approx(0.9)
        assert uniform_factor(_Fixed(0.5), 0.9, 1.1) == pytest.approx(1.0)

    def test_low_above_high_raises_error(self):
        with pytest.raises(ValueError, match="cannot be greater"):
            uniform_factor(_Fixed(0.5), 1.1, 0.9)


class TestRandomInt:
    """Tests for random_int."""

    def test_lowest_draw(self):
        assert random_int(_Fixed(0.0), 1, 3) == 1

    def test_highest_draw(self):
        assert random_int(_Fixed(0.999), 1, 3) == 3

    def test_draw_of_one_is_clamped(self):
        assert random_int(_Fixed(1.0), -1, 1) == 1

    def test_min_greater_than_max_raises_error(self):
        with pytest.raises(ValueError, match="cannot be greater"):
            random_int(_Fixed(0.5), 5, 1)

    @given(
        value=st.floats(min_value=0.0, max_value=1.0),
        low=st.integers(min_value=-10, max_value=10),
        span=st.integers(min_value=0, max_value=10),
    )
    def test_random_int_properties(self, value, low, span):
        """Property: result always lies within the inclusive bounds."""
        assert low <= random_int(_Fixed(value), low, low + span) <= low + span
