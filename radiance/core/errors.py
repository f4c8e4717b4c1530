"""Error taxonomy for the Radiance engine.

Fatal errors (configuration, startup) stop the process before the game loop.
``ActionError`` is the only recoverable one: the controller turns it into an
in-world dialog.
"""
from __future__ import annotations
from typing import Iterable, List

__all__ = [
    "RadianceError",
    "ConfigurationError",
    "OutOfBoundsError",
    "StartupError",
    "ActionError",
]


class RadianceError(Exception):
    pass


class ConfigurationError(RadianceError):
    """Definition files are unreadable, malformed or not referentially sound."""

    def __init__(self, issues: Iterable[str] | str):
        if isinstance(issues, str):
            issues = [issues]
        self.issues: List[str] = list(issues)
        super().__init__("; ".join(self.issues) or "invalid configuration")


class OutOfBoundsError(RadianceError, IndexError):
    pass


class StartupError(RadianceError):
    """Terminal environment cannot host the game (too small, no raw mode)."""


class ActionError(RadianceError):
    """Player-facing failure. ``offer_inventory`` picks the dialog option pair."""

    def __init__(self, message: str, offer_inventory: bool = False):
        super().__init__(message)
        self.message = message
        self.offer_inventory = offer_inventory
