"""Network Lookup — live screen-name fetch behind the matcher's "/user/" rule.

Invariants:
    - Every failure (timeout, transport error, non-2xx, bad JSON, missing
      field) returns None; the matcher then falls through to its next rule
    - One bounded request per call; no retries
    - Awaited on the event loop: a slow remote delays only its own request

Design Decisions:
    - httpx.AsyncClient shared for the process lifetime (built in the
      lifespan, closed on shutdown)
    - Only called for contacts whose stored network tag is empty and whose URL
      reaches the "/user/" rule (network_matcher.lookup_target)
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class StatusNetLookup:
    """Awaitable (host, user) -> screen name, usable as a ScreenNameFetcher."""

    def __init__(
        self, timeout_seconds: float = 3.0, client: httpx.AsyncClient | None = None,
    ):
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def __call__(self, host: str, user: str) -> str | None:
        url = f"http://{host}/api/users/show.json"
        try:
            response = await self._client.get(url, params={"user_id": user})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.info(
                f"Screen name lookup failed for {host}: {e}",
                extra={"network": "stac"},
            )
            return None
        if not isinstance(payload, dict):
            return None
        screen_name = payload.get("screen_name")
        return screen_name if isinstance(screen_name, str) and screen_name else None

    async def aclose(self) -> None:
        await self._client.aclose()
