# GitHub REST client: issues one call on behalf of a caller's token.
# Created: 2026-10-12

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from repogate.errors import TransportError, UpstreamError

logger = logging.getLogger(__name__)

QueryParams = Mapping[str, Any] | Sequence[tuple[str, Any]]


class GitHubClient:
    """Thin pass-through to the GitHub REST API.

    No retries and no payload interpretation: the JSON body of a 2xx answer
    is returned as is, anything else becomes :class:`UpstreamError` carrying
    GitHub's status and body. A call that gets no response at all, or a 2xx
    body that is not JSON, raises :class:`TransportError`.

    Redirects are followed, so renamed or transferred repositories resolve.
    ``timeout`` falls back to httpx's default when None. ``transport`` is
    handed to every ``httpx.AsyncClient`` the client opens, which lets tests
    swap in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        app_name: str = "repogate",
        api_version: str = "2022-11-28",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.app_name = app_name
        self.api_version = api_version
        self.timeout = timeout
        self.transport = transport

    def headers(self, token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "User-Agent": self.app_name,
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.api_version,
        }

    def http_client(self, **kwargs: Any) -> httpx.AsyncClient:
        """Open an ``httpx.AsyncClient`` sharing this client's transport and timeout."""
        if self.timeout is not None:
            kwargs.setdefault("timeout", self.timeout)
        return httpx.AsyncClient(transport=self.transport, **kwargs)

    async def request(
        self,
        token: str,
        method: str,
        path: str,
        body: Any = None,
        params: QueryParams | None = None,
    ) -> Any:
        """Call ``{base_url}{path}`` and return the decoded JSON response.

        Args:
            token: The caller's GitHub access token.
            method: HTTP method, e.g. ``"GET"`` or ``"PUT"``.
            path: Upstream path starting with ``/``, already percent-encoded.
            body: JSON payload, sent verbatim. Omitted when None.
            params: Query parameters; a list of pairs keeps repeated keys.

        Returns:
            The parsed JSON body, or None when GitHub sent an empty body.
        """
        url = f"{self.base_url}{path}"
        kwargs: dict[str, Any] = {"headers": self.headers(token)}
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body

        try:
            async with self.http_client(follow_redirects=True) as client:
                resp = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("GitHub %s %s failed: %s", method, path, e)
            raise TransportError(str(e) or e.__class__.__name__) from e

        if resp.is_success:
            if not resp.content:
                return None
            try:
                return resp.json()
            except ValueError as e:
                logger.warning("GitHub %s %s returned a non-JSON body", method, path)
                raise TransportError("GitHub returned a response that is not JSON") from e

        self._log_failure(method, path, resp)
        raise UpstreamError(resp.status_code, _error_body(resp))

    def _log_failure(self, method: str, path: str, resp: httpx.Response) -> None:
        if resp.status_code in (403, 429) and resp.headers.get("x-ratelimit-remaining") == "0":
            logger.warning(
                "GitHub rate limit exhausted on %s %s (resets at %s)",
                method,
                path,
                resp.headers.get("x-ratelimit-reset", "unknown"),
            )
        else:
            logger.info("GitHub %s %s -> %d", method, path, resp.status_code)


def _error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text
