"""Fatal plugin initialization errors.

Both errors abort plugin loading. Messages name the backend and the offending
field or dependency but never include configured credential values.
"""


class LavaSrcError(Exception):
    """Base class for errors raised while loading the plugin."""


class ConfigurationError(LavaSrcError):
    """Raised when an enabled backend is missing required configuration."""

    def __init__(self, backend: str, problems: list[str]):
        self.backend = backend
        self.problems = list(problems)
        super().__init__(f"{backend}: {'; '.join(self.problems)}")


class UnresolvedDependencyError(LavaSrcError):
    """Raised when a backend's required host-side component cannot be found."""

    def __init__(self, backend: str, dependency: str):
        self.backend = backend
        self.dependency = dependency
        super().__init__(f"{backend} requires {dependency} to be enabled")
