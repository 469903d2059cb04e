"""Terminal driver for the battle engine.

Reference presentation adapter: subscribes to engine events, prints the log
lines and renders a rich status panel after each turn. No combat logic lives
here; everything goes through :class:`BattleService`.
"""
from __future__ import annotations
import argparse
import random
import time
from typing import List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED

from bending.battle.events import (ActionRejected, ActionResolved, BattleEvent, EffectTicked,
                                   ElementSwitched, MatchOver, RoundAdvanced)
from bending.battle.factory import TEMPLATES
from bending.battle.models import Ability, Mode, MatchSnapshot
from bending.battle.scheduling import ManualScheduler
from bending.battle.service import BattleService
from bending.core.errors import BendingError
from bending.core.types import element_markup
from bending.system.settings import Settings

console = Console()

_SHORTCUTS = {"1": "light", "2": "mid", "3": "heavy", "4": "special"}
_EFFECT_LABELS = {"stun": "STUNNED", "burn": "BURNED", "evade": "EVASIVE"}


def _hp_bar(cur: int, max_hp: int, width: int = 20) -> str:
    max_hp = max(1, max_hp)
    ratio = max(0, min(cur, max_hp)) / max_hp
    filled = int(round(ratio * width))
    color = "green" if ratio > 0.5 else ("yellow" if ratio > 0.2 else "red")
    return f"[{color}]{'█' * filled}[/{color}]{'░' * (width - filled)}"


def render_snapshot(snap: MatchSnapshot) -> Panel:
    table = Table(box=ROUNDED, expand=True, show_header=True)
    table.add_column("Side")
    table.add_column("Fighter")
    table.add_column("HP")
    table.add_column("Status")
    table.add_column("Cooldowns (mid/heavy/special)")
    for side, f in sorted(snap.fighters.items()):
        marker = "▶ " if (snap.turn_owner == side and not snap.is_over) else "  "
        status = " ".join(_EFFECT_LABELS[k] for k, v in f.effects.items() if v > 0) or "-"
        cds = "/".join(str(f.cooldowns[k]) for k in ("mid", "heavy", "special"))
        table.add_row(f"{marker}{side.upper()}", f"{f.name} {element_markup(f.element)}",
                      f"{_hp_bar(f.current_hp, f.max_hp)} {f.current_hp}/{f.max_hp}", status, cds)
    title = f"{snap.mode.replace('_', ' ').title()}"
    if snap.mode == Mode.ENDLESS.value:
        title += f" · Round {snap.round_index}"
    return Panel(table, title=title, border_style="bright_white")


class ConsoleAdapter:
    """Prints engine events as they arrive."""

    def __init__(self, service: BattleService, out: Console = console):
        self.out = out
        self.lines: List[str] = []
        service.events.subscribe_all(self.on_event)

    def _print(self, text: str):
        self.lines.append(text)
        self.out.print(text)

    def on_event(self, event: BattleEvent):
        if isinstance(event, ActionResolved):
            self._print(event.outcome.message)
        elif isinstance(event, ActionRejected):
            self._print(f"[yellow]{event.reason}[/yellow]")
        elif isinstance(event, EffectTicked) and event.effect == "burn":
            self._print(f"[red]Side {event.side.upper()} took {event.amount} BURN damage![/red]")
        elif isinstance(event, ElementSwitched):
            self._print(f"Avatar switched to {element_markup(event.element, event.element.upper())}!")
        elif isinstance(event, RoundAdvanced):
            self._print(f"[bold]Round {event.round_index}![/bold] {event.opponent} ({event.opponent_max_hp} HP) "
                        f"steps in. You recover {event.healed} HP.")
        elif isinstance(event, MatchOver):
            who = f"Side {event.winner.upper()}" if event.winner else "Nobody"
            self._print(f"[bold]{who} wins the match![/bold]")


def _build_parser() -> argparse.ArgumentParser:
    keys = sorted(TEMPLATES)
    p = argparse.ArgumentParser(prog="bending", description="Turn-based elemental duel.")
    p.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.SINGLE.value)
    p.add_argument("--fighter", choices=keys, default="water", help="side A fighter")
    p.add_argument("--opponent", choices=keys, default=None, help="side B fighter (random if omitted)")
    p.add_argument("--seed", type=int, default=None, help="seed the engine RNG")
    return p


def _prompt(snap: MatchSnapshot) -> str:
    side = snap.turn_owner.upper()
    hint = "light/mid/heavy/special (1-4)"
    if snap.fighters[snap.turn_owner].is_avatar:
        hint += ", switch <element>"
    return console.input(f"[bold]Side {side}[/bold] {hint}, quit > ").strip().lower()


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings.load()
    scheduler = ManualScheduler()
    service = BattleService(settings, scheduler=scheduler, rng=random.Random(args.seed))
    ConsoleAdapter(service, console)
    try:
        snap = service.start_match(args.mode, args.fighter, args.opponent)
    except BendingError as e:
        console.print(f"[red]{e}[/red]")
        return 2
    console.print(render_snapshot(snap))
    while not snap.is_over:
        if service.session.has_pending_automated_turn:
            time.sleep(settings.data.ai_delay_ms / 1000.0)
            scheduler.run_pending()
            snap = service.snapshot()
            console.print(render_snapshot(snap))
            continue
        cmd = _prompt(snap)
        if cmd in {"q", "quit", "exit"}:
            service.abandon()
            return 0
        if cmd.startswith("switch"):
            parts = cmd.split()
            result = service.switch_avatar_element(snap.turn_owner, parts[1] if len(parts) > 1 else "")
            if not result.ok:
                console.print(f"[yellow]{result.reason}[/yellow]")
            snap = service.snapshot()
            continue
        ability = _SHORTCUTS.get(cmd, cmd)
        if ability not in {a.value for a in Ability}:
            console.print(f"[yellow]Unknown command '{cmd}'[/yellow]")
            continue
        service.submit_action(snap.turn_owner, ability)
        snap = service.snapshot()
        console.print(render_snapshot(snap))
    return 0
