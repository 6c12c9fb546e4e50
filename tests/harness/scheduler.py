"""Virtual-clock scheduler for timer-driven tests.

Nothing fires until advance() is called; callbacks scheduled while advancing
fire in the same call when they fall due before the target time.
"""

import heapq
import itertools


class ManualTimer:
    def __init__(self, due: float, seq: int, callback):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: "ManualTimer") -> bool:
        return (self.due, self.seq) < (other.due, other.seq)


class ManualScheduler:
    def __init__(self):
        self.now = 0.0
        self._heap: list[ManualTimer] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback) -> ManualTimer:
        timer = ManualTimer(self.now + delay, next(self._seq), callback)
        heapq.heappush(self._heap, timer)
        return timer

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._heap and self._heap[0].due <= target:
            timer = heapq.heappop(self._heap)
            if timer.cancelled:
                continue
            self.now = timer.due
            timer.callback()
        self.now = target

    def flush(self) -> None:
        """Run callbacks that are already due (zero-delay deliveries)."""
        self.advance(0)

    def pending_count(self) -> int:
        return sum(1 for t in self._heap if not t.cancelled)
