import os
import tomllib
from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import Any
from typing import Self

DEFAULT_MAX_CONTINUATION_DEPTH = 3


def pyproject() -> Path | None:
    """Find the nearest pyproject.toml from the working directory up."""
    for path in [cwd := Path.cwd(), *cwd.parents]:
        candidate = path / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def settings() -> dict[str, Any]:
    """Read the [tool.coio] table, if there is one."""
    if path := pyproject():
        with path.open("rb") as f:
            data = tomllib.load(f)
        return data.get("tool", {}).get("coio", {})
    return {}


def parse_depth(raw: Any, *, source: str) -> int:
    message = (
        f"Max continuation depth must be a non-negative integer, "
        f"got: {raw!r} from {source}"
    )
    if isinstance(raw, bool | float):
        raise ValueError(message)
    try:
        depth = int(raw)
    except (TypeError, ValueError):
        raise ValueError(message) from None
    if depth < 0:
        raise ValueError(message)
    return depth


@dataclass(frozen=True, kw_only=True)
class Config:
    """Settings shared by every coroutine in the process.

    The max continuation depth is how many promises may resolve a coroutine
    synchronously, one inside the other, before the next continuation is
    deferred to the loop.
    """

    max_continuation_depth: int = DEFAULT_MAX_CONTINUATION_DEPTH

    @classmethod
    def load(cls) -> Self:
        """Load from the environment, then pyproject.toml, then defaults."""
        if raw := os.environ.get("COIO_MAX_CONTINUATION_DEPTH"):
            return cls(
                max_continuation_depth=parse_depth(
                    raw, source="COIO_MAX_CONTINUATION_DEPTH"
                )
            )

        table = settings()
        if "max-continuation-depth" in table:
            return cls(
                max_continuation_depth=parse_depth(
                    table["max-continuation-depth"],
                    source="[tool.coio] max-continuation-depth",
                )
            )
        return cls()


@cache
def config() -> Config:
    return Config.load()
