import secrets
import string
from dataclasses import dataclass
from dataclasses import field
from datetime import UTC
from datetime import datetime
from typing import Any

B36_ALPHABET = string.ascii_lowercase + string.digits


def random_id(length: int = 10) -> str:
    return "".join(secrets.choice(B36_ALPHABET) for _ in range(length))


@dataclass(eq=False, kw_only=True)
class Event:
    event_id: str = field(default_factory=random_id, repr=False)
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(tz=UTC), repr=False
    )
    id: str


@dataclass(eq=False, kw_only=True)
class CoroutineStarted(Event): ...


@dataclass(eq=False, kw_only=True)
class CoroutineSuspended(Event):
    """The coroutine registered its continuation on a promise."""

    promise: Any = field(repr=False)


@dataclass(eq=False, kw_only=True)
class CoroutineDeferred(Event):
    """The continuation was too deep and went through the loop instead."""

    depth: int


@dataclass(eq=False, kw_only=True)
class CoroutineCompleted(Event): ...


@dataclass(eq=False, kw_only=True)
class CoroutineSucceeded(CoroutineCompleted):
    value: Any = field(repr=False)


@dataclass(eq=False, kw_only=True)
class CoroutineFailed(CoroutineCompleted):
    exception: BaseException
