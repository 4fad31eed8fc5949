from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Generator
from typing import Any
from typing import Self

from .loop import Loop
from .result import Err
from .result import Ok
from .result import Result

type Callback[T] = Callable[[BaseException | None, T | None], object]


class AlreadyResolved(Exception):
    """The promise has already been resolved or failed."""


class Promise[T](Awaitable[T], ABC):
    """A value that will be known later, either a success or a failure."""

    @abstractmethod
    def when(self, callback: Callback[T], /) -> None:
        """Call back with ``(None, value)`` or ``(exception, None)`` when done.

        If the promise is already done the callback may run right away,
        inside this call.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    def __await__(self) -> Generator[Self, T, T]:
        return (yield self)


def notify[T](
    callback: Callback[T],
    result: Result[T, BaseException],
    *,
    loop: Loop | None = None,
) -> None:
    """Run a callback, deferring anything it raises to the loop."""
    try:
        match result:
            case Ok(value):
                callback(None, value)
            case Err(error):
                callback(error, None)
    except Exception as exception:
        (loop or Loop.current()).defer(reraiser(exception))


def reraiser(exception: BaseException) -> Callable[[], None]:
    def reraise() -> None:
        raise exception

    return reraise


class Placeholder[T](Promise[T]):
    """A promise that is resolved or failed exactly once.

    Errors raised by its callbacks go to the given loop, or else to
    the loop that is current when the callback runs.
    """

    def __init__(self, *, loop: Loop | None = None):
        self.__loop = loop
        self.__result: Result[T, BaseException] | None = None
        self.__callbacks: list[Callback[T]] = []

    def __repr__(self):
        match self.__result:
            case None:
                state = "pending"
            case Ok(value):
                state = f"resolved {value!r}"
            case Err(error):
                state = f"failed {error!r}"
        return f"<{type(self).__name__} {state}>"

    def when(self, callback: Callback[T], /) -> None:
        if self.__result is None:
            self.__callbacks.append(callback)
        else:
            notify(callback, self.__result, loop=self.__loop)

    def done(self) -> bool:
        return self.__result is not None

    def resolve(self, value: T, /) -> None:
        self.__settle(Ok(value))

    def fail(self, exception: BaseException, /) -> None:
        self.__settle(Err(exception))

    def __settle(self, result: Result[T, BaseException]) -> None:
        if self.__result is not None:
            raise AlreadyResolved(f"{self!r} cannot settle again")
        self.__result = result
        callbacks, self.__callbacks = self.__callbacks, []
        for callback in callbacks:
            notify(callback, result, loop=self.__loop)


class Success[T](Promise[T]):
    """A promise that has already succeeded with a value."""

    def __init__(self, value: T, /):
        self.__value = value

    def __repr__(self):
        return f"<{type(self).__name__} {self.__value!r}>"

    def when(self, callback: Callback[T], /) -> None:
        notify(callback, Ok(self.__value))


class Failure(Promise[Any]):
    """A promise that has already failed with an exception."""

    def __init__(self, exception: BaseException, /):
        self.__exception = exception

    def __repr__(self):
        return f"<{type(self).__name__} {self.__exception!r}>"

    def when(self, callback: Callback[Any], /) -> None:
        notify(callback, Err(self.__exception))


class Deferred[T]:
    """The resolving side of a promise.

    Hand out ``promise`` to consumers and keep the deferred to
    resolve or fail it later.
    """

    def __init__(self):
        self.__placeholder = Placeholder[T]()

    @property
    def promise(self) -> Promise[T]:
        return self.__placeholder

    def resolve(self, value: T, /) -> None:
        self.__placeholder.resolve(value)

    def fail(self, exception: BaseException, /) -> None:
        self.__placeholder.fail(exception)
