"""Backend status reporting.

Summarises which backends are enabled, configured, and which capabilities
they would register. CRITICAL: never includes credential values.
"""

import logging

from lavasrc.core.config import LavaSrcSettings
from lavasrc.host import Capability
from lavasrc.schemas.backend_status import (
    BackendCapabilities,
    BackendStatus,
    BackendStatusReport,
    CapabilityStatus,
)
from lavasrc.services.registration.descriptors import DESCRIPTORS, BackendDescriptor

logger = logging.getLogger(__name__)


def _capability_status(
    descriptor: BackendDescriptor, capability: Capability, enabled: bool, configured: bool
) -> CapabilityStatus:
    if capability not in descriptor.capabilities:
        return CapabilityStatus.NOT_IMPLEMENTED
    if not enabled:
        return CapabilityStatus.DISABLED
    if not configured:
        return CapabilityStatus.NOT_CONFIGURED
    return CapabilityStatus.YES


def describe_backend(settings: LavaSrcSettings, descriptor: BackendDescriptor) -> BackendStatus:
    enabled = settings.is_enabled(descriptor.section)
    # Disabled sections are reported by toggle only, never inspected
    missing = getattr(settings, descriptor.section).missing_fields() if enabled else []
    configured = enabled and not missing

    capabilities = BackendCapabilities(
        **{
            capability.value: _capability_status(descriptor, capability, enabled, configured)
            for capability in Capability
        }
    )
    return BackendStatus(
        backend=descriptor.kind.value,
        display_name=descriptor.display_name,
        enabled=enabled,
        configured=configured,
        capabilities=capabilities,
        requires=descriptor.requires.name if descriptor.requires else None,
        missing_fields=missing,
    )


def describe_backends(settings: LavaSrcSettings) -> list[BackendStatus]:
    """Return the status of every backend, in declaration order."""
    return [describe_backend(settings, descriptor) for descriptor in DESCRIPTORS]


def build_report(settings: LavaSrcSettings) -> BackendStatusReport:
    return BackendStatusReport(backends=describe_backends(settings))
