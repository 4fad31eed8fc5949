import os
from threading import Thread
from time import sleep

import pytest

from .config import config
from .loop import Loop


def pytest_sessionstart(session):
    """Ensure the test suite always exits."""
    timeout = float(session.config.getini("timeout")) + 5
    Thread(target=lambda: sleep(timeout) or os._exit(1), daemon=True).start()


@pytest.fixture(autouse=True)
def loop():
    """Give each test its own loop, and ensure it is left drained."""
    config.cache_clear()
    loop = Loop()
    with loop.activate():
        yield loop
    config.cache_clear()

    if pending := loop.pending():
        pytest.fail(f"Test left {pending} deferred callback(s) on the loop")
