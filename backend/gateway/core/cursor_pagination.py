"""Cursor Pagination — pure cursor model and page-boundary rules.

Invariants:
    - Wire cursors are signed integers: -1 start, 0 none, k > 0 "after k",
      -k < -1 "before k". Internally a tagged Cursor; integers only at the edges
    - A page never holds more than `count` ids
    - Backward pages are selected closest-to-boundary first (descending) and
      then restored to ascending display order
    - Boundary rules are applied in a fixed order (see compute_boundaries)

Design Decisions:
    - Pure functions + SelectionPlan: the shell (services/contact_pages.py)
      performs the count/select IO around these rules (ADR: impureim sandwich)
    - Any negative cursor (START included) over an empty page answers
      next_cursor == -1; clients walking forward stop on an empty ids list
"""

from dataclasses import dataclass, field
from enum import Enum


DEFAULT_COUNT: int = 20
MAX_COUNT: int = 200

START_SENTINEL: int = -1
NO_PAGE: int = 0


class CursorKind(str, Enum):
    START = "start"
    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class Cursor:
    """Tagged cursor. `boundary` is the local id the page is anchored on."""
    kind: CursorKind
    boundary: int = 0

    @classmethod
    def start(cls) -> "Cursor":
        return cls(CursorKind.START)

    @classmethod
    def none(cls) -> "Cursor":
        return cls(CursorKind.NONE)

    @classmethod
    def forward(cls, after_id: int) -> "Cursor":
        return cls(CursorKind.FORWARD, after_id)

    @classmethod
    def backward(cls, before_id: int) -> "Cursor":
        return cls(CursorKind.BACKWARD, before_id)

    @classmethod
    def from_wire(cls, value: int) -> "Cursor":
        if value == START_SENTINEL:
            return cls.start()
        if value == NO_PAGE:
            return cls.none()
        if value > 0:
            return cls.forward(value)
        return cls.backward(-value)

    def to_wire(self) -> int:
        if self.kind is CursorKind.START:
            return START_SENTINEL
        if self.kind is CursorKind.NONE:
            return NO_PAGE
        if self.kind is CursorKind.FORWARD:
            return self.boundary
        return -self.boundary


def parse_cursor(raw: object) -> Cursor:
    """Parse a request parameter into a Cursor. Raises ValueError when not an integer."""
    if raw is None or raw == "":
        return Cursor.start()
    if isinstance(raw, bool):
        raise ValueError(f"invalid cursor: {raw!r}")
    return Cursor.from_wire(int(str(raw).strip()))


def clamp_count(raw: object, default: int = DEFAULT_COUNT, maximum: int = MAX_COUNT) -> int:
    """Page size from a request parameter, clamped to 1..maximum."""
    if raw is None or raw == "":
        return default
    return max(1, min(int(str(raw).strip()), maximum))


@dataclass(frozen=True)
class SelectionPlan:
    """What the shell must fetch for a cursor."""
    id_above: int | None = None
    id_below: int | None = None
    descending: bool = False
    limit: int = DEFAULT_COUNT
    empty: bool = False


def plan_selection(cursor: Cursor, count: int) -> SelectionPlan:
    """Translate a cursor into bounds, order and limit."""
    if cursor.kind is CursorKind.FORWARD:
        return SelectionPlan(id_above=cursor.boundary, limit=count)
    if cursor.kind is CursorKind.BACKWARD:
        return SelectionPlan(id_below=cursor.boundary, descending=True, limit=count)
    if cursor.kind is CursorKind.NONE:
        return SelectionPlan(limit=count, empty=True)
    return SelectionPlan(limit=count)


def restore_display_order(plan: SelectionPlan, local_ids: list[int]) -> list[int]:
    """Backward selections come back descending; display is always ascending."""
    if plan.descending:
        return list(reversed(local_ids))
    return list(local_ids)


@dataclass(frozen=True)
class PageBoundaries:
    next_cursor: int
    previous_cursor: int


def compute_boundaries(
    cursor: Cursor, local_ids: list[int], total_count: int, count: int,
) -> PageBoundaries:
    """Legacy next/previous cursor rules, applied in order.

    1. rows present: previous = -first, next = last (else both 0)
    2. total_count <= rows or rows < count: next = 0
    3. START or BACKWARD with zero rows: next = -1
    4. START: previous = 0
    5. FORWARD with zero rows: previous = -boundary
    """
    rows = len(local_ids)
    next_cursor = NO_PAGE
    previous_cursor = NO_PAGE

    if rows:
        previous_cursor = -local_ids[0]
        next_cursor = local_ids[-1]

    if total_count <= rows or rows < count:
        next_cursor = NO_PAGE

    if cursor.kind in (CursorKind.START, CursorKind.BACKWARD) and rows == 0:
        next_cursor = START_SENTINEL

    if cursor.kind is CursorKind.START:
        previous_cursor = NO_PAGE

    if cursor.kind is CursorKind.FORWARD and rows == 0:
        previous_cursor = -cursor.boundary

    return PageBoundaries(next_cursor, previous_cursor)


@dataclass
class PageResult:
    """One page of global ids plus legacy cursors."""
    ids: list[int | str] = field(default_factory=list)
    next_cursor: int = NO_PAGE
    previous_cursor: int = NO_PAGE
    total_count: int = 0

    def to_wire(self) -> dict:
        return {
            "ids": list(self.ids),
            "next_cursor": self.next_cursor,
            "next_cursor_str": str(self.next_cursor),
            "previous_cursor": self.previous_cursor,
            "previous_cursor_str": str(self.previous_cursor),
            "total_count": self.total_count,
        }

    @classmethod
    def empty(cls) -> "PageResult":
        return cls()
