from bending.core.logging import Logger


def test_threshold_filters_lower_levels(capsys):
    log = Logger("WARN")
    log.info("MatchStarted", mode="single")
    log.warn("ActionRejected", side="b", reason="not your turn")
    out = capsys.readouterr().out
    assert "MatchStarted" not in out
    assert "[WARN] ActionRejected side=b reason=not your turn" in out


def test_unknown_level_falls_back_to_info(capsys):
    log = Logger("ERROR")
    log.set_level("LOUD")
    log.debug("Hidden")
    log.info("Shown", match=1)
    out = capsys.readouterr().out
    assert "Hidden" not in out
    assert "[INFO] Shown match=1" in out
