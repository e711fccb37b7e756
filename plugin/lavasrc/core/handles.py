"""Two-phase handles for host components that exist only after startup wiring.

A backend receives an empty handle at construction. The plugin fills it once
the host component is available; reading it before then is a fatal error.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from lavasrc.core.errors import UnresolvedDependencyError

T = TypeVar("T")


class HostHandle(Generic[T]):
    """Slot holding a reference to a host-owned component."""

    def __init__(self, owner: str, dependency: str):
        self.owner = owner
        self.dependency = dependency
        self._value: T | None = None

    @property
    def is_resolved(self) -> bool:
        return self._value is not None

    def fill(self, value: T) -> None:
        if value is None:
            raise UnresolvedDependencyError(self.owner, self.dependency)
        self._value = value

    def get(self) -> T:
        if self._value is None:
            raise UnresolvedDependencyError(self.owner, self.dependency)
        return self._value
