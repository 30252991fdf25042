"""Storage interface (port) for the rolling visitor list."""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from globe_server.core.models import VisitorPoint


class VisitorStore(Protocol):
    """Port: keeps the most recent visitor points, newest first.

    Implementations never raise from ``append`` or ``read_all``; failures are
    logged and degrade to a no-op or an empty list.
    """

    @property
    def configured(self) -> bool: ...

    async def append(self, point: VisitorPoint) -> bool: ...

    async def read_all(self) -> list[VisitorPoint]: ...
