"""API Routes"""

from . import logs, calls, rooms, configs, activity, catalog, debug, health

__all__ = ["logs", "calls", "rooms", "configs", "activity", "catalog", "debug", "health"]
