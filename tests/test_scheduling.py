import threading
import time

from bending.battle.events import ActionResolved
from bending.battle.scheduling import ManualScheduler, TimerScheduler


def test_manual_scheduler_runs_in_due_order():
    sched = ManualScheduler()
    ran = []
    sched.schedule(lambda: ran.append("late"), 300)
    sched.schedule(lambda: ran.append("early"), 100)
    assert sched.advance(99) == 0
    assert sched.advance(250) == 2
    assert ran == ["early", "late"]
    assert sched.now_ms == 349


def test_manual_scheduler_cancel():
    sched = ManualScheduler()
    ran = []
    call = sched.schedule(lambda: ran.append(1), 10)
    call.cancel()
    assert sched.pending == 0
    assert sched.run_pending() == 0
    assert ran == []


def test_run_pending_follows_chained_calls():
    sched = ManualScheduler()
    ran = []

    def first():
        ran.append("first")
        sched.schedule(lambda: ran.append("second"), 50)

    sched.schedule(first, 10)
    assert sched.run_pending() == 2
    assert ran == ["first", "second"]


def test_timer_scheduler_fires_on_background_thread():
    fired = threading.Event()
    TimerScheduler().schedule(fired.set, 5)
    assert fired.wait(2.0)


def test_timer_scheduler_cancel():
    fired = threading.Event()
    call = TimerScheduler().schedule(fired.set, 200)
    call.cancel()
    assert not fired.wait(0.4)


def test_service_with_real_timers(make_service, scripted_rng):
    svc, _ = make_service(rng=scripted_rng(picks=["light"]), ai_delay_ms=10)
    svc.scheduler = TimerScheduler()
    done = threading.Event()
    svc.events.subscribe(ActionResolved, lambda e: e.side == "b" and done.set())
    svc.start_match("single", "water", "fire")
    svc.submit_action("a", "light")
    assert done.wait(2.0)
    assert svc.snapshot().turn_owner == "a"


def test_handler_reading_state_does_not_block_a_concurrent_submission(make_service, scripted_rng):
    svc, _ = make_service(rng=scripted_rng(picks=["light"]), ai_delay_ms=10)
    svc.scheduler = TimerScheduler()
    entered = threading.Event()
    seen = []

    def on_resolved(event):
        if event.side == "b" and not entered.is_set():
            entered.set()
            time.sleep(0.2)
            seen.append(svc.snapshot().turn_owner)

    svc.events.subscribe(ActionResolved, on_resolved)
    svc.start_match("single", "water", "fire")
    svc.submit_action("a", "light")
    assert entered.wait(2.0)

    results = []
    worker = threading.Thread(target=lambda: results.append(svc.submit_action("a", "light")), daemon=True)
    worker.start()
    worker.join(3.0)
    assert not worker.is_alive()
    assert seen == ["b"]
    # the submission waited for the automated turn to finish, then went through
    assert results[0].ok
    svc.abandon()
