from typing import Annotated

from typer import Argument
from typer import Exit
from typer import Option
from typer import Typer

from .call import call
from .config import config as load_config
from .event import Event
from .loop import Loop
from .target import Target
from .wait import wait

app = Typer()


@app.command()
def run(
    target: Annotated[
        Target,
        Argument(
            parser=Target.parse,
            help="The function to run, as 'module:function'. "
            "Examples: 'coio.samples.basic:add', 'app.jobs:nightly'",
            metavar="MODULE:FUNCTION",
        ),
    ],
    args: Annotated[
        list[str] | None,
        Argument(help="String arguments passed to the function."),
    ] = None,
    events: Annotated[
        bool, Option("--events", help="Print the coroutine events of the run.")
    ] = False,
):
    """Run a function as a coroutine and print its result.

    Generator functions and async functions are driven until they finish,
    and plain functions are simply called.
    """
    fn = target.load()
    loop = Loop()
    subscription = loop.bus.subscribe({Event}) if events else None

    try:
        with loop.activate():
            result = wait(call(fn, *(args or [])), loop=loop)
    except Exception as exception:
        print(f"Error: {exception!r}")
        raise Exit(1) from exception
    else:
        print(result)
    finally:
        if subscription is not None:
            loop.bus.unsubscribe(subscription)
            while not subscription.empty():
                print(subscription.get())


@app.command()
def config():
    """Show the effective configuration."""
    settings = load_config()
    print(f"max-continuation-depth = {settings.max_continuation_depth}")


if __name__ == "__main__":
    app()
