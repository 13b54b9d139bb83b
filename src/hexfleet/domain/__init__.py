"""Domain model and rules for hexfleet.

This package hosts every game rule of the naval combat engine. It exposes:

* Dataclasses describing the battlefield, ships and session (see :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions grouped by subsystem: battlefield, combat, effects,
  fleet, opponent, ship, terrain, turns and victory.

The rules operate purely in memory on an explicit :class:`models.GameSession`
and report what happened through the session's event queue.
"""

from . import (
    battlefield,
    combat,
    effects,
    enums,
    errors,
    events,
    fleet,
    models,
    opponent,
    rules_config,
    ship,
    terrain,
    turns,
    victory,
)

__all__ = [
    "battlefield",
    "combat",
    "effects",
    "enums",
    "errors",
    "events",
    "fleet",
    "models",
    "opponent",
    "rules_config",
    "ship",
    "terrain",
    "turns",
    "victory",
]
