"""Request headers that select the calling viewer in route tests."""

from gateway.infrastructure.session_auth import SCOPES_HEADER, VIEWER_HEADER


def as_viewer(uid: int, scopes: str | None = None) -> dict[str, str]:
    """Headers that make a request come from `uid`."""
    headers = {VIEWER_HEADER: str(uid)}
    if scopes is not None:
        headers[SCOPES_HEADER] = scopes
    return headers
