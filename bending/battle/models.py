"""Battle data model: enums, fighters, outcomes and snapshots."""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Generic, Optional, TypeVar
from bending.core.errors import BendingError, ValidationError


class _KeyedEnum(str, Enum):
    """String enum parsed case-insensitively from user input."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValidationError(f"Unknown {cls.__name__.lower()} '{value}' (expected one of: {allowed})") from None


class Side(_KeyedEnum):
    A = "a"
    B = "b"

    @property
    def other(self) -> "Side":
        return Side.B if self is Side.A else Side.A


class Element(_KeyedEnum):
    WATER = "water"
    FIRE = "fire"
    EARTH = "earth"
    AIR = "air"
    AVATAR = "avatar"


BASE_ELEMENTS = (Element.WATER, Element.FIRE, Element.EARTH, Element.AIR)


class Ability(_KeyedEnum):
    LIGHT = "light"
    MID = "mid"
    HEAVY = "heavy"
    SPECIAL = "special"


class Mode(_KeyedEnum):
    SINGLE = "single"
    ENDLESS = "endless"
    HEAD_TO_HEAD = "head_to_head"

    @property
    def has_automated_side(self) -> bool:
        return self is not Mode.HEAD_TO_HEAD


class MatchState(str, Enum):
    AWAITING_A = "awaiting_a"
    AWAITING_B = "awaiting_b"
    ROUND_TRANSITION = "round_transition"
    MATCH_OVER = "match_over"

    @classmethod
    def awaiting(cls, side: Side) -> "MatchState":
        return cls.AWAITING_A if side is Side.A else cls.AWAITING_B


@dataclass
class Effects:
    stun: int = 0
    burn: int = 0
    evade: int = 0

    def clear(self):
        self.stun = self.burn = self.evade = 0


@dataclass
class Cooldowns:
    mid: int = 0
    heavy: int = 0
    special: int = 0

    def clear(self):
        self.mid = self.heavy = self.special = 0


@dataclass
class Fighter:
    side: Side
    name: str
    element: Element
    max_hp: int
    template_key: str = ""
    current_hp: int = field(init=False)
    is_avatar: bool = False
    effects: Effects = field(default_factory=Effects)
    cooldowns: Cooldowns = field(default_factory=Cooldowns)

    def __post_init__(self):
        if self.max_hp <= 0:
            raise ValueError(f"max_hp must be positive, got {self.max_hp}")
        self.current_hp = self.max_hp

    def set_hp(self, value: int) -> int:
        """Clamp ``value`` into [0, max_hp]; returns the new HP."""
        self.current_hp = max(0, min(int(value), self.max_hp))
        return self.current_hp

    def is_defeated(self) -> bool:
        return self.current_hp <= 0

    def reset_status(self):
        self.effects.clear()
        self.cooldowns.clear()


@dataclass
class Outcome:
    side: Side
    ability: Ability
    damage_dealt: int = 0
    healed: int = 0
    status_granted: Optional[str] = None
    evaded: bool = False
    effectiveness: float = 1.0
    forfeited: bool = False
    message: str = ""


T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """Typed result of an engine entry point: either a value or a rejection."""
    ok: bool
    value: Optional[T] = None
    error: Optional[BendingError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def rejected(cls, error: BendingError) -> "Result[T]":
        return cls(ok=False, error=error)

    @property
    def reason(self) -> str:
        return str(self.error) if self.error else ""


@dataclass(frozen=True)
class FighterSnapshot:
    side: str
    name: str
    element: str
    is_avatar: bool
    current_hp: int
    max_hp: int
    effects: Dict[str, int]
    cooldowns: Dict[str, int]

    @classmethod
    def of(cls, f: Fighter) -> "FighterSnapshot":
        return cls(side=f.side.value, name=f.name, element=f.element.value, is_avatar=f.is_avatar,
                   current_hp=f.current_hp, max_hp=f.max_hp,
                   effects=asdict(f.effects), cooldowns=asdict(f.cooldowns))


@dataclass(frozen=True)
class MatchSnapshot:
    match_id: int
    mode: str
    state: str
    turn_owner: str
    is_over: bool
    winner: Optional[str]
    round_index: int
    fighters: Dict[str, FighterSnapshot]


__all__ = [
    "Side", "Element", "BASE_ELEMENTS", "Ability", "Mode", "MatchState",
    "Effects", "Cooldowns", "Fighter", "Outcome", "Result",
    "FighterSnapshot", "MatchSnapshot",
]
