"""HTTP implementation of SessionClient."""

import asyncio
from uuid import UUID

import httpx
import structlog

from loanflow.core.config import settings
from loanflow.core.metrics import (
    record_session_fetch_failure,
    track_session_fetch_latency,
)
from loanflow.domain.exceptions import (
    AuthenticationError,
    SessionProviderException,
    SessionProviderTimeoutException,
)
from loanflow.domain.interfaces import SessionClient

logger = structlog.get_logger(__name__)


class HttpSessionClient(SessionClient):
    """
    HTTP client for the external session provider.

    Looks up the session behind a bearer token with retry logic for
    timeouts and transport errors. A rejected token is final and is
    never retried.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.session_api_url).rstrip("/")
        self._timeout = timeout or settings.session_api_timeout
        self._max_retries = max_retries or settings.session_api_max_retries
        self._transport = transport

    async def resolve(self, token: str) -> UUID:
        """
        Resolve a bearer token to a user id.

        Implements retry logic with exponential backoff.
        """
        url = f"{self._base_url}/sessions/current"
        headers = {"Authorization": f"Bearer {token}"}

        last_exception: SessionProviderException | None = None

        for attempt in range(self._max_retries):
            try:
                with track_session_fetch_latency():
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.get(url, headers=headers)

                if response.status_code in (401, 403, 404):
                    record_session_fetch_failure("rejected")
                    raise AuthenticationError("Invalid or expired session")

                if response.status_code >= 400:
                    record_session_fetch_failure("error")
                    raise SessionProviderException(
                        message=f"Session provider error: {response.status_code}",
                        status_code=response.status_code,
                    )

                return self._parse_user_id(response)

            except httpx.TimeoutException:
                record_session_fetch_failure("timeout")
                last_exception = SessionProviderTimeoutException()
                logger.warning(
                    "session_provider_timeout",
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.TransportError as e:
                record_session_fetch_failure("error")
                last_exception = SessionProviderException(
                    message=f"Session provider unreachable: {e}",
                )
                logger.error(
                    "session_provider_error",
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or SessionProviderException("Failed to resolve session")

    def _parse_user_id(self, response: httpx.Response) -> UUID:
        try:
            data = response.json()
            return UUID(str(data["user_id"]))
        except (ValueError, KeyError, TypeError):
            record_session_fetch_failure("error")
            raise SessionProviderException(
                message="Session provider returned a malformed session",
                status_code=response.status_code,
            )
