from dataclasses import dataclass


@dataclass(frozen=True)
class Ok[T]:
    value: T


@dataclass(frozen=True)
class Err[E: BaseException]:
    error: E


type Result[T, E: BaseException] = Ok[T] | Err[E]
