"""
HTTP Client for the FSQL translation API.

Sends one command per request and classifies the outcome. The response body
is returned undecoded; turning it into a typed value is the decoder's job.

Every request carries:
- User-Agent with the configured client identifier
- The protocol version header (x-queryai-fuql: v2)
- Content-Type: application/json
- Exactly one authentication header, chosen by fsqlctl.api.auth

There is no retry. A failed dispatch raises and the caller decides what to do.
"""

import asyncio
import json
from typing import Any

import httpx

from fsqlctl.api.auth import auth_headers, classify_token
from fsqlctl.core.config import get_app_config
from fsqlctl.core.exceptions import (
    UNREADABLE_BODY,
    HttpStatusError,
    TransportError,
    TransportFailure,
)
from fsqlctl.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class FsqlClient:
    """
    HTTP client for FSQL command dispatch.

    Features:
    - Fixed client, protocol and content-type headers
    - Auth header selected from the token shape
    - Separate connect and total timeouts
    - Structured logging of requests/responses

    Usage:
        async with FsqlClient(url, token) as client:
            body = await client.dispatch("EXPLAIN VERSION")
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        connect_timeout: float | None = None,
        total_timeout: float | None = None,
        verbose: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Full URL of the translation endpoint
            token: Bearer token or API key, with or without "Bearer "
            connect_timeout: Seconds allowed to establish the connection. If None, reads application.yaml.
            total_timeout: Seconds allowed for the whole exchange. If None, reads application.yaml.
            verbose: Emit diagnostic hints for failed requests
            transport: Optional httpx transport, used by tests
        """
        app = get_app_config().application

        self.base_url = base_url
        self.verbose = verbose
        self.connect_timeout = connect_timeout if connect_timeout is not None else app.timeouts.connect
        self.total_timeout = total_timeout if total_timeout is not None else app.timeouts.total
        self.token_kind = classify_token(token)
        self._auth_headers = auth_headers(token, app.api.api_key_header)
        self._headers = {
            "User-Agent": app.api.user_agent,
            app.api.protocol_header: app.api.protocol_version,
            "Content-Type": "application/json",
        }
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FsqlClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.total_timeout, connect=self.connect_timeout),
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def dispatch(self, command: str) -> str:
        """
        Send one command to the API.

        Args:
            command: Trimmed command text, forwarded as {"q": command}

        Returns:
            Raw response body of a 2xx response

        Raises:
            TransportError: The exchange could not be completed
            HttpStatusError: The server answered with a non-2xx status
        """
        payload = {"q": command}
        client = await self._get_client()

        log_with_source(
            logger,
            "api",
            "debug",
            "Dispatching command",
            url=self.base_url,
            token_kind=self.token_kind.value,
            payload=json.dumps(payload, indent=2),
        )

        try:
            request = client.build_request(
                "POST", self.base_url, json=payload, headers=self._auth_headers,
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, UnicodeEncodeError) as e:
            raise self._transport_error(TransportFailure.BUILD, e) from e

        try:
            response, body = await asyncio.wait_for(
                self._exchange(client, request), timeout=self.total_timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise self._transport_error(TransportFailure.TIMEOUT, e) from e
        except httpx.ConnectError as e:
            raise self._transport_error(TransportFailure.CONNECT, e) from e
        except (httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
            raise self._transport_error(TransportFailure.BUILD, e) from e
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise self._transport_error(TransportFailure.OTHER, e) from e

        log_with_source(
            logger,
            "api",
            "debug",
            "Response received",
            status_code=response.status_code,
            reason=response.reason_phrase,
            headers=dict(response.headers),
        )

        if not response.is_success:
            self._log_failed_status(response.status_code, body)
            raise HttpStatusError(
                response.status_code,
                body if body is not None else UNREADABLE_BODY,
                reason=response.reason_phrase,
            )

        log_with_source(logger, "api", "debug", "Response body", body=body)
        return body or ""

    async def _exchange(
        self, client: httpx.AsyncClient, request: httpx.Request,
    ) -> tuple[httpx.Response, str | None]:
        """Send the request and read the body. Body is None if an error body could not be read."""
        response = await client.send(request, stream=True)
        try:
            try:
                await response.aread()
                body: str | None = response.text
            except (httpx.HTTPError, httpx.StreamError) as e:
                if response.is_success:
                    raise
                log_with_source(
                    logger, "api", "debug", "Could not read error response body", error=str(e),
                )
                body = None
        finally:
            await response.aclose()
        return response, body

    def _transport_error(self, failure: TransportFailure, error: BaseException) -> TransportError:
        detail = str(error) or type(error).__name__
        log_with_source(
            logger,
            "api",
            "debug",
            "API request failed",
            url=self.base_url,
            failure=failure.value,
            error_type=type(error).__name__,
            error=detail,
        )
        return TransportError(failure, detail)

    def _log_failed_status(self, status_code: int, body: str | None) -> None:
        if not self.verbose:
            return

        if status_code == 401:
            log_with_source(
                logger, "api", "warning",
                "HTTP 401 Unauthorized - verify your token is correct and not expired",
            )
        elif status_code == 403:
            log_with_source(
                logger, "api", "warning",
                "HTTP 403 Forbidden - token is valid but may lack access to this endpoint",
            )

        lowered = (body or "").lower()
        if "unauthorized" in lowered:
            log_with_source(logger, "api", "warning", "Server says 'unauthorized' - likely a token issue")
        elif "invalid" in lowered and "token" in lowered:
            log_with_source(logger, "api", "warning", "Server says invalid token - check token format/expiration")
