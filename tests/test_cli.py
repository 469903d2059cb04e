import io

import pytest
from rich.console import Console
from rich.panel import Panel

from bending import cli


@pytest.fixture
def fake_console(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    out = Console(file=io.StringIO(), width=120, force_terminal=False, color_system=None)
    replies = []
    monkeypatch.setattr(out, "input", lambda prompt="": replies.pop(0))
    monkeypatch.setattr(cli, "console", out)
    return out, replies


def test_render_snapshot_is_a_panel(make_service):
    svc, _ = make_service()
    snap = svc.start_match("endless", "earth", "air")
    panel = cli.render_snapshot(snap)
    assert isinstance(panel, Panel)
    assert "Round 0" in panel.title


def test_console_adapter_collects_lines(make_service):
    svc, _ = make_service()
    out = Console(file=io.StringIO(), width=120)
    adapter = cli.ConsoleAdapter(svc, out)
    svc.start_match("head_to_head", "water", "fire")
    svc.submit_action("a", "heavy")
    svc.submit_action("a", "heavy")
    assert adapter.lines[0] == "Water Master used Heavy Atk for 45! It's super effective!"
    assert "not side A's turn" in adapter.lines[1]


def test_run_head_to_head_until_quit(fake_console):
    out, replies = fake_console
    replies.extend(["heavy", "1", "kick", "switch air", "quit"])
    code = cli.run(["--mode", "head_to_head", "--fighter", "water", "--opponent", "fire", "--seed", "3"])
    assert code == 0
    text = out.file.getvalue()
    assert "Water Master used Heavy Atk for 45!" in text
    assert "Fire Lord used Light Atk for 5!" in text
    assert "Unknown command 'kick'" in text
    assert "cannot switch" in text


def test_run_plays_avatar_switch(fake_console):
    out, replies = fake_console
    replies.extend(["switch earth", "special", "quit"])
    assert cli.run(["--mode", "head_to_head", "--fighter", "avatar", "--opponent", "water"]) == 0
    text = out.file.getvalue()
    assert "Avatar switched to" in text
    assert "used STUN!" in text


def test_run_single_mode_waits_for_automated_turn(fake_console, tmp_path):
    out, replies = fake_console
    (tmp_path / ".bending_settings.json").write_text('{"ai_delay_ms": 0}', encoding="utf-8")
    replies.extend(["heavy", "quit"])
    assert cli.run(["--mode", "single", "--fighter", "water", "--opponent", "fire", "--seed", "7"]) == 0
    assert replies == []
    text = out.file.getvalue()
    assert "Water Master used Heavy Atk for 45!" in text
    assert "Fire Lord used" in text or "Fire Lord unleashed" in text
