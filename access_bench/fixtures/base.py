r"""
Base fixture implementation with the teardown guard.

Subclasses implement _open() and _close(); BaseFixture makes teardown
idempotent so success and failure paths can both call it.

    from access_bench.fixtures.base import BaseFixture

    class MyFixture(BaseFixture):
        async def _open(self) -> None:
            ...
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from access_bench.errors import FixtureError

__all__ = ["BaseFixture", "CompositeFixture", "FixtureRegistry", "NullFixture"]

logger = logging.getLogger("access_bench.fixtures")


class FixtureRegistry:
    """Registry for fixture implementations."""

    _fixtures: dict[str, type[BaseFixture]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register a fixture class."""

        def decorator(fixture_cls: type[BaseFixture]) -> type[BaseFixture]:
            cls._fixtures[name] = fixture_cls
            return fixture_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[BaseFixture] | None:
        """Get fixture class by name."""
        return cls._fixtures.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered fixture names."""
        return list(cls._fixtures.keys())

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> BaseFixture:
        """Create fixture instance by name."""
        fixture_cls = cls.get(name)
        if fixture_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown fixture '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return fixture_cls(**kwargs)


class BaseFixture(ABC):
    """Base class for fixtures.

    prepare() opens resources, reset_between() defaults to a no-op and
    teardown() closes resources at most once.
    """

    _prepared: bool = False
    _closed: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable fixture name."""
        ...

    @property
    def prepared(self) -> bool:
        """Whether prepare() completed."""
        return self._prepared

    @property
    def closed(self) -> bool:
        """Whether teardown() has run."""
        return self._closed

    @abstractmethod
    async def _open(self) -> None:
        """Open resources and seed state."""
        ...

    @abstractmethod
    async def _close(self) -> None:
        """Release resources. Only ever called once."""
        ...

    async def prepare(self) -> None:
        """Prepare external state, raising if setup cannot complete.

        Raises:
            FixtureError: If the fixture was already torn down.
        """
        if self._closed:
            msg = f"Fixture '{self.name}' was torn down and cannot be prepared again"
            raise FixtureError(msg)
        logger.info("Preparing %s", self.name)
        await self._open()
        self._prepared = True

    async def reset_between(self) -> None:
        """Return shared state to baseline. No-op by default."""
        return None

    async def teardown(self) -> None:
        """Close held resources once; later calls are no-ops."""
        if self._closed:
            return
        self._closed = True

        logger.info("Tearing down %s", self.name)
        try:
            await self._close()
        except Exception as e:
            logger.error("Error during teardown of %s: %s", self.name, e)


@FixtureRegistry.register("null")
class NullFixture(BaseFixture):
    """Fixture holding no external state."""

    @property
    def name(self) -> str:
        return "null"

    async def _open(self) -> None:
        pass

    async def _close(self) -> None:
        pass


class CompositeFixture(BaseFixture):
    """Fixture delegating to several child fixtures in order.

    Every child is prepared and reset even if an earlier one fails; the
    failures are then raised together as one FixtureError. Teardown reaches
    every child.
    """

    def __init__(self, *children: BaseFixture) -> None:
        self._children = list(children)

    @property
    def name(self) -> str:
        return " + ".join(child.name for child in self._children)

    @property
    def children(self) -> list[BaseFixture]:
        return list(self._children)

    async def _open(self) -> None:
        failures: list[str] = []
        for child in self._children:
            try:
                await child.prepare()
            except Exception as e:
                logger.error("Preparing %s failed: %s", child.name, e)
                failures.append(f"{child.name}: {e}")
        if failures:
            raise FixtureError("; ".join(failures))

    async def reset_between(self) -> None:
        failures: list[str] = []
        for child in self._children:
            try:
                await child.reset_between()
            except Exception as e:
                logger.error("Resetting %s failed: %s", child.name, e)
                failures.append(f"{child.name}: {e}")
        if failures:
            raise FixtureError("; ".join(failures))

    async def _close(self) -> None:
        for child in self._children:
            await child.teardown()
