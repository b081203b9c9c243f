"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult. Infrastructure
exceptions are translated here, never leaked to the CLI.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from layerctl.domain.errors import LayerctlError, NotFoundError, StorageError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: LayerctlError) -> ServiceError:
        """Build an error payload carrying the exception's context."""
        detail: dict[str, Any] = {}
        if isinstance(exc, NotFoundError):
            detail["name"] = exc.name
        elif isinstance(exc, StorageError) and exc.path is not None:
            detail["path"] = str(exc.path)
        if exc.__cause__ is not None:
            detail["cause"] = repr(exc.__cause__)
        return cls(code=exc.code, message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"resolve"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: LayerctlError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
