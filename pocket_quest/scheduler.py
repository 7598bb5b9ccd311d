import heapq
from typing import Callable, List, Tuple


class EventQueue:
    """One-shot delayed callbacks measured in loop milliseconds.

    The game loop calls `advance` once per tick with the time that tick covers.
    Every event fires exactly once, in due-time order, on the first advance that
    reaches its due time, however long or short the ticks are.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._order = 0
        self._events: List[Tuple[int, int, Callable[[], None]]] = []

    def __len__(self) -> int:
        return len(self._events)

    def schedule(self, delay_ms: int, action: Callable[[], None]) -> None:
        self._order += 1
        heapq.heappush(self._events, (self.now_ms + max(0, delay_ms), self._order, action))

    def advance(self, elapsed_ms: int) -> int:
        """Move the clock forward and run whatever came due. Returns how many fired."""
        target = self.now_ms + max(0, elapsed_ms)
        fired = 0
        while self._events and self._events[0][0] <= target:
            due, _, action = heapq.heappop(self._events)
            self.now_ms = due
            action()
            fired += 1
        self.now_ms = target
        return fired
