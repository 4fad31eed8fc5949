from collections.abc import Awaitable
from collections.abc import Generator
from functools import partial
from typing import Any

from .config import config
from .event import CoroutineDeferred
from .event import CoroutineFailed
from .event import CoroutineStarted
from .event import CoroutineSucceeded
from .event import CoroutineSuspended
from .event import Event
from .event import random_id
from .loop import Loop
from .promise import Callback
from .promise import Placeholder
from .promise import Promise


class InvalidYieldError(Exception):
    """A coroutine yielded something other than a promise."""

    def __init__(self, generator: Generator[Any, Any, Any], message: str):
        super().__init__(message)
        self.generator = generator


class Coroutine[T](Promise[T]):
    """A promise driven by a generator that yields promises.

    Each yielded promise suspends the generator until it is done. Its value
    is sent back into the generator, or its exception is thrown into it,
    so asynchronous code reads like synchronous code::

        def fetch_both(first, second):
            a = yield first
            b = yield second
            return a + b

        Coroutine(fetch_both(first, second)).when(callback)

    Native coroutines work too, since promises can be awaited.

    The generator starts running right away and the coroutine settles exactly
    once, and only from inside: it has no public way to be resolved or
    failed. When it fails, the generator is run to completion first, so its
    ``finally`` blocks have run by the time anyone hears of the failure.
    """

    def __init__(
        self,
        procedure: Generator[Promise[Any], Any, T] | Awaitable[T],
        /,
        *,
        loop: Loop | None = None,
        max_depth: int | None = None,
    ):
        self.id = random_id()
        if isinstance(procedure, Generator):
            self.__generator = procedure
        else:
            self.__generator = procedure.__await__()
        self.__loop = loop or Loop.current()
        self.__placeholder = Placeholder[T](loop=self.__loop)
        self.__max_depth = (
            config().max_continuation_depth if max_depth is None else max_depth
        )
        self.__depth = 0
        self.__running = True

        self.__publish(CoroutineStarted(id=self.id))
        self.__continue(None, None)

    def __repr__(self):
        return f"<{type(self).__name__} {self.id!r} {self.__placeholder!r}>"

    def when(self, callback: Callback[T], /) -> None:
        self.__placeholder.when(callback)

    def done(self) -> bool:
        return self.__placeholder.done()

    def __publish(self, event: Event) -> None:
        if self.__loop.bus.subscribed():
            self.__loop.bus.publish(event)

    def __continue(self, exception: BaseException | None, value: Any) -> None:
        """Resume the generator once and act on what it does next.

        This is the callback given to every promise the generator yields.
        """
        if self.__depth > self.__max_depth:
            # Unwind the stack before continuing.
            self.__publish(CoroutineDeferred(id=self.id, depth=self.__depth))
            self.__loop.defer(partial(self.__continue, exception, value))
            return

        try:
            if exception is not None:
                yielded = self.__generator.throw(exception)
            else:
                yielded = self.__generator.send(value)
        except StopIteration as stop:
            self.__running = False
            self.__succeed(stop.value)
        except Exception as error:
            self.__running = False
            self.__dispose(error)
        else:
            self.__suspend(yielded)

    def __suspend(self, yielded: Any) -> None:
        if not isinstance(yielded, Promise):
            self.__dispose(
                InvalidYieldError(
                    self.__generator,
                    f"Unexpected yield ({Promise.__name__} expected, "
                    f"got {type(yielded).__qualname__})",
                )
            )
            return

        self.__publish(CoroutineSuspended(id=self.id, promise=yielded))
        self.__depth += 1
        try:
            yielded.when(self.__continue)
        except Exception as error:
            self.__dispose(error)
        finally:
            self.__depth -= 1

    def __succeed(self, value: T) -> None:
        self.__publish(CoroutineSucceeded(id=self.id, value=value))
        self.__placeholder.resolve(value)

    def __dispose(self, exception: BaseException) -> None:
        """Run the generator to completion, then fail with the last exception.

        An exception raised while the generator finishes replaces the one
        that was thrown in, and chains it as its context.
        """
        while self.__running:
            try:
                self.__generator.throw(exception)
            except StopIteration:
                self.__running = False
            except Exception as error:
                self.__running = False
                exception = error

        self.__publish(CoroutineFailed(id=self.id, exception=exception))
        self.__placeholder.fail(exception)
