"""Backend registration package.

Builds the enabled backends from settings and wires them into the host.
"""

from lavasrc.services.registration.orchestrator import LavaSrcPlugin, load_plugin

__all__ = ["LavaSrcPlugin", "load_plugin"]
