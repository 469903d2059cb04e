"""
Battle engine package.
Modules:
- models.py (Fighter, enums, Outcome, snapshots)
- mechanics.py (element matchups, evasion)
- effects.py / cooldowns.py (turn counters)
- core.py (action resolution)
- session.py (turn state machine), service.py (entry points)
"""
from .service import BattleService
from .models import Ability, Element, Mode, Side
__all__ = ["BattleService", "Ability", "Element", "Mode", "Side"]
