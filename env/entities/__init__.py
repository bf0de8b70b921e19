"""Entities living on the field: tanks and bases."""

from .base import Entity
from .home_base import HomeBase
from .tank import Tank

__all__ = ["Entity", "HomeBase", "Tank"]
