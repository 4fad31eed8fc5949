from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Generator
from functools import wraps
from typing import Any

from .coroutine import Coroutine
from .promise import Failure
from .promise import Promise
from .promise import Success


def call(fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Promise[Any]:
    """Call a function and make a promise of whatever it returns.

    Generators and awaitables are driven as coroutines, promises are returned
    as they are, and plain values succeed immediately. An exception raised
    by the function fails the promise instead of propagating.
    """
    try:
        result = fn(*args, **kwargs)
    except Exception as exception:
        return Failure(exception)

    match result:
        case Promise():
            return result
        case Generator() | Awaitable():
            return Coroutine(result)
        case _:
            return Success(result)


def coroutine[**A](fn: Callable[A, Any]) -> Callable[A, Promise[Any]]:
    """Decorate a function so that calling it returns a promise."""

    @wraps(fn)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> Promise[Any]:
        return call(fn, *args, **kwargs)

    return wrapper
