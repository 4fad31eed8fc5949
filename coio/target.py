import importlib
from dataclasses import dataclass
from typing import Any
from typing import Self


@dataclass
class Target:
    """A function to run, named by its module and attribute.

    Examples:

    | target                  | module             | name         |
    +-------------------------+--------------------+--------------+
    | coio.samples.basic:main | coio.samples.basic | main         |
    | app:Jobs.nightly        | app                | Jobs.nightly |
    """

    module: str
    name: str

    @classmethod
    def parse(cls, value: str) -> Self:
        if not value or value.strip() == "":
            raise ValueError("Target cannot be empty")

        if ":" not in value:
            raise ValueError(
                f"Invalid target. Be sure to include both the module and "
                f"the function, like 'module:function'. got: '{value}'"
            )

        module, name = (part.strip() for part in value.split(":", 1))
        if not module:
            raise ValueError(f"No module name found in '{value}'")
        if not name:
            raise ValueError(f"No function name found in '{value}'")

        return cls(module=module, name=name)

    def load(self) -> Any:
        """Import the module and look up the (possibly dotted) name."""
        obj: Any = importlib.import_module(self.module)
        for attribute in self.name.split("."):
            obj = getattr(obj, attribute)
        return obj

    def __str__(self):
        return f"{self.module}:{self.name}"
