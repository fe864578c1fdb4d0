"""Shared plumbing for the upstream API clients.

Every failure on the way from a URL to a validated model -- connection
errors, timeouts, non-2xx statuses, undecodable bodies, schema mismatches --
collapses into ``RequestFailed``. Callers never need to tell them apart.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

USER_AGENT = "RoboStats Discord Bot"
DEFAULT_TIMEOUT = 10.0

T = TypeVar("T")


class RequestFailed(Exception):
    """Raised when an upstream API request cannot produce usable data."""


def create_http_client() -> httpx.AsyncClient:
    """Build the connection-pooled client shared by every API wrapper."""
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT, "Accept-Language": "en"},
        follow_redirects=True,
    )


async def get_json(
    http: httpx.AsyncClient,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """GET ``url`` and return the decoded JSON body."""
    try:
        resp = await http.get(url, params=params, headers=headers, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPStatusError as exc:
        logger.warning("upstream_status url=%s status=%s", url, exc.response.status_code)
        raise RequestFailed(f"{url} returned {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        logger.warning("upstream_transport_error url=%s err=%s", url, exc)
        raise RequestFailed(f"{url} failed: {exc}") from exc
    except ValueError as exc:
        logger.warning("upstream_bad_json url=%s", url)
        raise RequestFailed(f"{url} returned invalid JSON") from exc


def parse(type_: type[T], payload: Any, *, source: str) -> T:
    """Validate a decoded payload against a model or generic alias."""
    try:
        return TypeAdapter(type_).validate_python(payload)
    except ValidationError as exc:
        logger.warning("upstream_schema_mismatch source=%s errors=%d", source, exc.error_count())
        raise RequestFailed(f"{source} returned an unexpected payload") from exc
