"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class BendingError(Exception):
    pass

class ValidationError(BendingError):
    """Rejected input: wrong turn, finished match, unknown key."""
    pass

class AbilityLockedError(ValidationError):
    def __init__(self, ability: str, remaining: int):
        super().__init__(f"{ability} is on cooldown for {remaining} more turn(s)")
        self.ability = ability
        self.remaining = remaining

class ConfigurationError(BendingError):
    pass

class UnknownTemplate(ConfigurationError):
    def __init__(self, key: str):
        super().__init__(f"Unknown fighter template '{key}'")
        self.key = key
