"""Error hierarchy for layer definition and instance lookups.

Infrastructure raises these; the service layer translates them into
:class:`~layerctl.services.result.ServiceError` codes. Every error keeps
enough context (the offending name, or the wrapped cause) to be shown
to a user without further lookups.
"""

from __future__ import annotations

from pathlib import Path


class LayerctlError(Exception):
    """Base class for all layerctl failures."""

    code = "LAYERCTL_ERROR"


class NotFoundError(LayerctlError):
    """A layer name is absent from the current definition set."""

    code = "NOT_FOUND"

    def __init__(self, name: str) -> None:
        super().__init__(f"Layer '{name}' not found")
        self.name = name


class StorageError(LayerctlError):
    """The backing medium could not be read or written.

    Always raised ``from`` the underlying cause, which stays reachable
    through ``__cause__``.
    """

    code = "STORAGE_ERROR"

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class RegistryError(LayerctlError):
    """The instance registry failed to answer a listing request."""

    code = "REGISTRY_ERROR"
