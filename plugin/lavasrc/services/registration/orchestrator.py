"""Plugin orchestrator: builds the enabled backends and wires them into the host.

Sequence:
1. Construct every enabled backend, in declaration order
2. Register all source managers
3. Resolve cross-backend dependencies (fatal on failure)
4. Register all search managers
5. Register all lyrics managers

Passes are never interleaved per backend: a search manager may need a handle
that only exists once every source manager is registered. Failures propagate
and registrations already made are not rolled back.
"""

from __future__ import annotations

import logging

from lavasrc.core.config import LavaSrcSettings
from lavasrc.core.handles import HostHandle
from lavasrc.host import Capability, HostRegistries, SourceRegistry
from lavasrc.services.registration.binder import bind
from lavasrc.services.registration.dependencies import DependencyCheck
from lavasrc.services.registration.descriptors import DESCRIPTORS, BackendKind
from lavasrc.services.registration.factory import BackendInstance, build

logger = logging.getLogger(__name__)


class LavaSrcPlugin:
    def __init__(self, settings: LavaSrcSettings):
        logger.info("Loading LavaSrc plugin...")
        self.settings = settings
        # Filled with the host source registry when initialization starts
        self._player: HostHandle[SourceRegistry] = HostHandle("lavasrc", "host source registry")
        self.instances: list[BackendInstance] = []

        for descriptor in DESCRIPTORS:
            instance = build(descriptor.kind, settings, self._player)
            if instance is not None:
                self.instances.append(instance)

        self.dependency_checks = [
            DependencyCheck(instance)
            for instance in self.instances
            if instance.descriptor.requires is not None
        ]
        logger.info(
            f"Enabled backends: {', '.join(i.kind.value for i in self.instances) or 'none'}"
        )

    def get(self, kind: BackendKind) -> BackendInstance | None:
        """Get the constructed instance for a backend kind, if it is enabled."""
        for instance in self.instances:
            if instance.kind == kind:
                return instance
        return None

    def initialize(self, registries: HostRegistries) -> None:
        """Register every enabled backend into the host registries.

        Raises:
            UnresolvedDependencyError: If a required host source manager is missing
        """
        self._player.fill(registries.source)

        for instance in self.instances:
            bind(instance, registries, (Capability.SOURCE,))

        for check in self.dependency_checks:
            check.resolve(registries.source)

        for instance in self.instances:
            bind(instance, registries, (Capability.SEARCH,))

        for instance in self.instances:
            bind(instance, registries, (Capability.LYRICS,))

        logger.info("LavaSrc plugin loaded")


def load_plugin(settings: LavaSrcSettings, registries: HostRegistries) -> LavaSrcPlugin:
    """Construct the plugin and register it into the host in one step."""
    plugin = LavaSrcPlugin(settings)
    plugin.initialize(registries)
    return plugin
