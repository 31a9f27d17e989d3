"""Request Context — explicit value object handed to every endpoint handler.

Invariants:
    - Handlers read request state ONLY from RequestContext (no ambient globals)
    - params merges query string and form body; body wins on conflicts
    - int_param() raises BadRequestError for unparseable values, never ValueError
    - ApiResponse is the only success shape a handler returns

Design Decisions:
    - Frozen dataclasses: a handler cannot mutate the request another layer sees
    - require_viewer()/require_scope() live here so every handler enforces the
      same Forbidden rules with one call
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from gateway.core.domain_types import ResponseFormat, Scope, Viewer
from gateway.core.errors import BadRequestError, ForbiddenError


_TRUE_VALUES = frozenset({"true", "1", "yes", "t"})


@dataclass(frozen=True)
class RequestContext:
    method: str
    command: str
    fmt: ResponseFormat = ResponseFormat.JSON
    params: dict[str, str] = field(default_factory=dict)
    path_args: tuple[str, ...] = ()
    viewer: Viewer | None = None
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def param(self, name: str, default: str | None = None) -> str | None:
        value = self.params.get(name)
        if value is None or value == "":
            return default
        return value

    def int_param(self, name: str, default: int | None = None) -> int | None:
        value = self.param(name)
        if value is None:
            return default
        try:
            return int(value.strip())
        except ValueError:
            raise BadRequestError(f"Invalid value for {name}")

    def bool_param(self, name: str, default: bool = False) -> bool:
        value = self.param(name)
        if value is None:
            return default
        return value.strip().lower() in _TRUE_VALUES

    @property
    def callback(self) -> str | None:
        return self.param("callback")

    def require_viewer(self, scope: Scope = Scope.READ) -> Viewer:
        """The authenticated viewer, or Forbidden when absent or not allowed."""
        viewer = self.viewer
        if viewer is None or not viewer.allow_api:
            raise ForbiddenError()
        if not viewer.has_scope(scope):
            raise ForbiddenError(f"Missing {scope.value} scope")
        return viewer

    def path_id(self, index: int = 0) -> int | None:
        """Numeric id from the path suffix (favorites/create/12.json -> 12)."""
        if len(self.path_args) <= index:
            return None
        try:
            return int(self.path_args[index])
        except ValueError:
            raise BadRequestError("Invalid request.")


@dataclass(frozen=True)
class ApiResponse:
    """Successful handler result: the legacy root element and its payload."""
    root_element: str
    data: dict[str, Any]

    def __bool__(self) -> bool:
        return bool(self.data)
