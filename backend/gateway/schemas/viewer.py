"""Viewer Schemas — validation of the identity headers set by the upstream auth layer.

Invariants:
    - uid must be a positive integer; anything else means "no viewer"
    - scopes parse from a comma list; unknown scope names are dropped
    - A missing scopes header grants read + write (session logins)

Design Decisions:
    - Pydantic model over ad-hoc parsing: header shape errors become one
      ValidationError the provider can log and treat as anonymous
"""

from pydantic import BaseModel, Field, field_validator

from gateway.core.domain_types import Scope


class ViewerHeaders(BaseModel):
    """Parsed X-Gateway-Viewer / X-Gateway-Scopes headers."""
    uid: int = Field(gt=0)
    scopes: frozenset[Scope] = frozenset({Scope.READ, Scope.WRITE})

    @field_validator("scopes", mode="before")
    @classmethod
    def split_scopes(cls, v: object) -> object:
        if v is None:
            return frozenset({Scope.READ, Scope.WRITE})
        if isinstance(v, str):
            known = {s.value for s in Scope}
            return frozenset(
                Scope(part) for part in
                (p.strip().lower() for p in v.split(","))
                if part in known
            )
        return v


class HealthResponse(BaseModel):
    """Liveness probe body."""
    status: str
    service: str
    version: str
