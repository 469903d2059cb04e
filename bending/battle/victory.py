from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple
from .models import Fighter, Mode, Side


class Verdict(str, Enum):
    CONTINUE = "continue"
    OVER = "over"
    NEXT_ROUND = "next_round"


def evaluate(mode: Mode, side_a: Fighter, side_b: Fighter) -> Tuple[Verdict, Optional[Side]]:
    """Terminal check after any HP change.

    Side A is checked first, so a double knockout goes to side B. In endless
    mode a defeated side B means a new round rather than the end of the match.
    """
    if side_a.is_defeated():
        return Verdict.OVER, Side.B
    if side_b.is_defeated():
        if mode is Mode.ENDLESS:
            return Verdict.NEXT_ROUND, None
        return Verdict.OVER, Side.A
    return Verdict.CONTINUE, None
