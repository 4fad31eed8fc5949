from __future__ import annotations

from collections import deque
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from threading import Lock

from .bus import Bus


class Loop:
    """Run deferred callbacks in the order they were submitted.

    Deferring never calls the callback inside the current call stack,
    which is what coroutines rely on to unwind deep continuations.
    """

    def __init__(self, *, bus: Bus | None = None):
        self.bus = bus or Bus()
        self.__lock = Lock()
        self.__callbacks = deque[Callable[[], object]]()
        self.__running = False

    @classmethod
    def current(cls) -> Loop:
        """Get the loop activated in this context, or the default loop."""
        return CURRENT_LOOP.get() or DEFAULT_LOOP

    @contextmanager
    def activate(self) -> Iterator[Loop]:
        token = CURRENT_LOOP.set(self)
        try:
            yield self
        finally:
            CURRENT_LOOP.reset(token)

    def defer(self, callback: Callable[[], object], /) -> None:
        with self.__lock:
            self.__callbacks.append(callback)

    def pending(self) -> int:
        with self.__lock:
            return len(self.__callbacks)

    def run(self, *, until: Callable[[], bool] | None = None) -> None:
        """Run callbacks until there are none left or ``until()`` is true.

        An exception from a callback stops the loop and propagates,
        leaving the callbacks after it queued.
        """
        with self.__lock:
            if self.__running:
                raise RuntimeError("The loop is already running.")
            self.__running = True

        try:
            with self.activate():
                while until is None or not until():
                    with self.__lock:
                        if not self.__callbacks:
                            break
                        callback = self.__callbacks.popleft()
                    callback()
        finally:
            self.__running = False


DEFAULT_LOOP = Loop()
CURRENT_LOOP = ContextVar[Loop | None]("CURRENT_LOOP", default=None)
