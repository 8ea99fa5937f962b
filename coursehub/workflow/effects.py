"""
Derived fetches with declared dependencies.

A DerivedFetch names the state it depends on through a key function. The
key is None while the fetch's precondition is false. After each state
transition the EffectRunner recomputes every key and starts a fetch only
for effects whose key changed to a non-None value. The key a fetch was
started with doubles as its request tag: when the fetch completes, the
caller checks `is_current(tag)` and drops the result if state moved on.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Any

logger = logging.getLogger(__name__)


class DerivedFetch:
    """A fetch that fires whenever its dependency key changes to a non-None value."""

    def __init__(
        self,
        name: str,
        dependencies: Callable[[], Hashable | None],
        run: Callable[[Any], Awaitable[None]],
        on_change: Callable[[Any], None] | None = None,
    ):
        self.name = name
        self.dependencies = dependencies
        self.run = run
        # Called synchronously with the new key before any fetch starts
        self.on_change = on_change
        self.current_key: Hashable | None = None

    def is_current(self, key: Hashable) -> bool:
        return key is not None and key == self.current_key


class EffectRunner:
    """Recomputes registered effects and tracks their in-flight tasks."""

    def __init__(self):
        self._effects: list[DerivedFetch] = []
        self._tasks: set[asyncio.Task] = set()

    def register(self, effect: DerivedFetch) -> DerivedFetch:
        self._effects.append(effect)
        return effect

    def recompute(self) -> None:
        """
        Start fetches for effects whose dependency key changed.

        Without a running event loop a pending fetch is left uncommitted, so
        the next recompute inside a loop (or wait_idle) starts it.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        for effect in self._effects:
            key = effect.dependencies()
            if key == effect.current_key:
                continue
            if key is not None and loop is None:
                logger.debug("Deferring effect %s until an event loop is running", effect.name)
                continue
            logger.debug("Effect %s dependencies changed: %r -> %r", effect.name, effect.current_key, key)
            effect.current_key = key
            if effect.on_change is not None:
                effect.on_change(key)
            if key is not None:
                self._spawn(loop, effect, key)

    def _spawn(self, loop: asyncio.AbstractEventLoop, effect: DerivedFetch, key: Hashable) -> None:
        task = loop.create_task(effect.run(key), name=f"{effect.name}:{key!r}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        """Wait until no effect task is running, including ones started meanwhile."""
        self.recompute()
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
