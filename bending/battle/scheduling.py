"""Deferred-callback capability used for the automated opponent's move.

``TimerScheduler`` runs callbacks on ``threading.Timer`` threads; the
``ManualScheduler`` fake clock only runs them when advanced, which keeps tests
and the terminal driver deterministic.
"""
from __future__ import annotations
import heapq
import itertools
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Protocol

Callback = Callable[[], None]


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, callback: Callback, delay_ms: int) -> ScheduledCall: ...


class TimerScheduler:
    def schedule(self, callback: Callback, delay_ms: int) -> ScheduledCall:
        timer = threading.Timer(max(0, delay_ms) / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer


@dataclass(order=True)
class _ManualCall:
    due_ms: int
    seq: int
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    def __init__(self):
        self.now_ms = 0
        self._queue: List[_ManualCall] = []
        self._seq = itertools.count()

    def schedule(self, callback: Callback, delay_ms: int) -> ScheduledCall:
        call = _ManualCall(self.now_ms + max(0, int(delay_ms)), next(self._seq), callback)
        heapq.heappush(self._queue, call)
        return call

    @property
    def pending(self) -> int:
        return sum(1 for c in self._queue if not c.cancelled)

    def advance(self, ms: int) -> int:
        """Move the clock forward, running every call that falls due; returns the count run."""
        target = self.now_ms + max(0, int(ms))
        ran = 0
        while self._queue and self._queue[0].due_ms <= target:
            call = heapq.heappop(self._queue)
            self.now_ms = max(self.now_ms, call.due_ms)
            if call.cancelled:
                continue
            call.callback()
            ran += 1
        self.now_ms = target
        return ran

    def run_pending(self) -> int:
        """Run calls until the queue is empty, including ones scheduled meanwhile."""
        ran = 0
        while self._queue:
            ran += self.advance(max(0, self._queue[0].due_ms - self.now_ms))
        return ran
