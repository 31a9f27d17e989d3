"""Request Context — verifies parameter access, viewer checks and path ids.

Tests:
    - Empty parameters behave as missing
    - int_param / path_id raise BadRequestError, never ValueError
    - require_viewer raises Forbidden for anonymous, blocked or under-scoped viewers
"""

import pytest

from gateway.core.domain_types import Scope, Viewer, ViewerId
from gateway.core.errors import BadRequestError, ForbiddenError
from gateway.core.request_context import ApiResponse, RequestContext


def _ctx(**kwargs) -> RequestContext:
    return RequestContext(method="GET", command="users/show", **kwargs)


def test_empty_param_is_missing():
    ctx = _ctx(params={"q": "", "screen_name": "alice"})
    assert ctx.param("q") is None
    assert ctx.param("q", "x") == "x"
    assert ctx.param("screen_name") == "alice"


def test_int_param():
    ctx = _ctx(params={"count": " 5 ", "page": "two"})
    assert ctx.int_param("count") == 5
    assert ctx.int_param("missing", 7) == 7
    with pytest.raises(BadRequestError):
        ctx.int_param("page")


@pytest.mark.parametrize("raw,expected", [
    ("true", True), ("1", True), ("YES", True), ("t", True),
    ("false", False), ("0", False), ("nope", False),
])
def test_bool_param(raw, expected):
    assert _ctx(params={"flag": raw}).bool_param("flag") is expected


def test_bool_param_default():
    assert _ctx().bool_param("getUserObjects", True) is True


def test_callback_property():
    assert _ctx(params={"callback": "cb"}).callback == "cb"
    assert _ctx().callback is None


def test_require_viewer_anonymous_is_forbidden():
    with pytest.raises(ForbiddenError):
        _ctx().require_viewer()


def test_require_viewer_blocked_is_forbidden():
    viewer = Viewer(uid=ViewerId(1), allow_api=False)
    with pytest.raises(ForbiddenError):
        _ctx(viewer=viewer).require_viewer()


def test_require_viewer_checks_scope():
    viewer = Viewer(uid=ViewerId(1), scopes=frozenset({Scope.READ}))
    ctx = _ctx(viewer=viewer)
    assert ctx.require_viewer(Scope.READ) is viewer
    with pytest.raises(ForbiddenError) as exc:
        ctx.require_viewer(Scope.WRITE)
    assert exc.value.message == "Missing write scope"


def test_path_id():
    assert _ctx(path_args=("12",)).path_id() == 12
    assert _ctx().path_id() is None
    with pytest.raises(BadRequestError):
        _ctx(path_args=("abc",)).path_id()


def test_api_response_truthiness():
    assert ApiResponse("ok", {"ok": "ok"})
    assert not ApiResponse("ok", {})
