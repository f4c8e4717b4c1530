"""Terminal presentation layer for Radiance."""
from .terminal import GOODBYE, Screen, map_key

__all__ = ["Screen", "map_key", "GOODBYE"]
