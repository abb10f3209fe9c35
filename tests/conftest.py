"""Pytest configuration for headless pygame tests."""

from __future__ import annotations

from concurrent.futures import Executor, Future
import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class ImmediateExecutor(Executor):
    """Runs submitted work inline so results are ready for the next poll."""

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class DeferredExecutor(Executor):
    """Holds submitted work until run_all() is called."""

    def __init__(self) -> None:
        self.queued: list[tuple[Future, object, tuple, dict]] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.queued.append((future, fn, args, kwargs))
        return future

    def run_all(self) -> None:
        for future, fn, args, kwargs in self.queued:
            future.set_result(fn(*args, **kwargs))
        self.queued.clear()


@pytest.fixture
def immediate_executor() -> ImmediateExecutor:
    return ImmediateExecutor()


@pytest.fixture
def deferred_executor() -> DeferredExecutor:
    return DeferredExecutor()
