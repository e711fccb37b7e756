"""Capability binder: registers a backend into the host registries it supports."""

from __future__ import annotations

import logging

from lavasrc.host import Capability, HostRegistries
from lavasrc.services.registration.factory import BackendInstance

logger = logging.getLogger(__name__)

_LABELS = {
    Capability.SOURCE: "audio source",
    Capability.SEARCH: "search",
    Capability.LYRICS: "lyrics",
}


def _register(registries: HostRegistries, capability: Capability, manager) -> None:
    if capability == Capability.SOURCE:
        registries.source.register_source_manager(manager)
    elif capability == Capability.SEARCH:
        registries.search.register_search_manager(manager)
    else:
        registries.lyrics.register_lyrics_manager(manager)


def bind(
    instance: BackendInstance,
    registries: HostRegistries,
    capabilities: tuple[Capability, ...] = tuple(Capability),
) -> list[Capability]:
    """Register ``instance`` for each requested capability it provides.

    Returns the capabilities that were actually registered, in order.
    """
    bound = []
    for capability in capabilities:
        manager = instance.provider(capability)
        if manager is None:
            continue
        logger.info(
            f"Registering {instance.descriptor.display_name} {_LABELS[capability]} manager..."
        )
        _register(registries, capability, manager)
        bound.append(capability)
    return bound
