"""Cross-backend dependency check.

A backend that needs a host source manager (found by type in the source
registry) is checked once, after every source registration and before any
search or lyrics registration. UNRESOLVED moves to RESOLVED or FAILED; both
are terminal.
"""

from __future__ import annotations

import logging
from enum import Enum

from lavasrc.core.errors import UnresolvedDependencyError
from lavasrc.host import SourceRegistry
from lavasrc.services.registration.factory import BackendInstance

logger = logging.getLogger(__name__)


class DependencyState(str, Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    FAILED = "failed"


class DependencyCheck:
    def __init__(self, instance: BackendInstance):
        if instance.descriptor.requires is None or instance.dependency is None:
            raise ValueError(f"{instance.kind.value} declares no cross-backend dependency")
        self.instance = instance
        self.requirement = instance.descriptor.requires
        self.state = DependencyState.UNRESOLVED

    def resolve(self, registry: SourceRegistry) -> None:
        """Look up the required host component and fill the backend's handle.

        Raises:
            UnresolvedDependencyError: If the host has no such source registered
        """
        if self.state != DependencyState.UNRESOLVED:
            raise RuntimeError(
                f"Dependency of {self.instance.kind.value} already checked ({self.state.value})"
            )

        component = registry.source(self.requirement.source_type)
        if component is None:
            self.state = DependencyState.FAILED
            logger.error(
                f"{self.instance.descriptor.display_name} requires "
                f"{self.requirement.name} to be enabled"
            )
            raise UnresolvedDependencyError(self.instance.kind.value, self.requirement.name)

        self.instance.dependency.fill(component)
        self.state = DependencyState.RESOLVED
        logger.info(
            f"Resolved {self.requirement.name} for {self.instance.descriptor.display_name}"
        )
