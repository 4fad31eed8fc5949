# Example coroutines for ``python -m coio run coio.samples.basic:<name>``

from coio import Deferred
from coio import Loop
from coio import Promise
from coio import coroutine


def later[T](value: T) -> Promise[T]:
    """Make a promise that the loop resolves on a later turn."""
    deferred = Deferred[T]()
    Loop.current().defer(lambda: deferred.resolve(value))
    return deferred.promise


@coroutine
def add(a: str, b: str):
    x = yield later(int(a))
    y = yield later(int(b))
    return x + y


async def count(n: str):
    total = 0
    for i in range(int(n)):
        total += await later(i)
    return total


def broken():
    try:
        yield later(None)
        raise ValueError("broken on purpose")
    finally:
        print("cleaned up")
