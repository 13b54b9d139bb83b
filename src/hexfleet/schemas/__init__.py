from .setup import FleetSetup, ShipPlacement, default_fleet_setup
from .snapshot import SessionSnapshot, ShipSnapshot, TileSnapshot, snapshot_session

__all__ = [
    "FleetSetup",
    "SessionSnapshot",
    "ShipPlacement",
    "ShipSnapshot",
    "TileSnapshot",
    "default_fleet_setup",
    "snapshot_session",
]
