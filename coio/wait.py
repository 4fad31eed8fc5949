from .loop import Loop
from .promise import Promise
from .result import Err
from .result import Ok
from .result import Result


class Unresolved(Exception):
    """The loop ran out of callbacks before the promise was resolved."""


def wait[T](promise: Promise[T], /, *, loop: Loop | None = None) -> T:
    """Run the loop until the promise is done, then return or raise its result."""
    loop = loop or Loop.current()
    results: list[Result[T, BaseException]] = []

    def done(exception: BaseException | None, value: T | None) -> None:
        results.append(Ok(value) if exception is None else Err(exception))

    promise.when(done)
    loop.run(until=lambda: bool(results))

    match results:
        case [Ok(value)]:
            return value
        case [Err(error)]:
            raise error
        case _:
            raise Unresolved(f"The loop stopped without resolving {promise!r}")
