from enum import Enum

from pydantic import BaseModel


class CapabilityStatus(str, Enum):
    """Status of a specific capability for a backend."""

    YES = "yes"
    DISABLED = "disabled"
    NOT_CONFIGURED = "not_configured"
    NOT_IMPLEMENTED = "not_implemented"


class BackendCapabilities(BaseModel):
    """Capability matrix for a single backend."""

    source: CapabilityStatus
    search: CapabilityStatus
    lyrics: CapabilityStatus


class BackendStatus(BaseModel):
    """Full status for a single backend."""

    backend: str
    display_name: str
    enabled: bool
    configured: bool
    capabilities: BackendCapabilities
    requires: str | None = None
    missing_fields: list[str] = []


class BackendStatusReport(BaseModel):
    """Status of every backend, in declaration order."""

    backends: list[BackendStatus]
