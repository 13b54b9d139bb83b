"""Rejections raised by hexfleet commands.

Every command validates completely before writing any state, so catching
one of these leaves the session exactly as it was.
"""


class RulesViolation(Exception):
    """Base class for commands rejected by the rules."""


class InvalidMove(RulesViolation):
    """Move rejected by terrain, occupancy, movement points or turn rate."""


class InvalidAttack(RulesViolation):
    """Attack rejected because the ship already fired or the target is invalid."""


class IllegalState(RulesViolation):
    """Command issued in the wrong phase or against a ship that cannot act."""
