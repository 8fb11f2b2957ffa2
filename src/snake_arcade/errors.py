"""Exceptions raised by the snake arcade engine."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised at construction time when game settings are unusable.

    In-game events (collisions, candy expiry, reversal attempts) are
    modelled as state transitions and never raise.
    """
