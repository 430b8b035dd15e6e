"""
Data Provider Client

Async HTTP client for the five warehouse table endpoints.

Transient failures (transport errors, 429 and 5xx) are retried with
exponential backoff; anything else that is not a 200 with a JSON array
body raises ProviderError.
"""

from typing import Any, Dict, List, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cinedash.config import get_settings
from cinedash.exceptions import ProviderError

logger = structlog.get_logger(__name__)


class RetryableStatus(Exception):
    """A response whose status code is worth another attempt"""

    def __init__(self, response: httpx.Response):
        self.response = response
        super().__init__(f"HTTP {response.status_code}")


TABLE_ENDPOINTS: Dict[str, str] = {
    "customers": "/api/customers",
    "movies": "/api/movies",
    "theaters": "/api/theaters",
    "dates": "/api/dates",
    "facts": "/api/facts",
}


class DataProviderClient:
    """
    Client for the warehouse table endpoints.

    Example:
        async with DataProviderClient("http://localhost:8000") as client:
            facts = await client.fetch_table("facts")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        config = get_settings().provider
        self.base_url = base_url or config.base_url
        self.retries = config.retries if retries is None else retries
        self.backoff_factor = config.backoff_factor if backoff_factor is None else backoff_factor
        self.retry_statuses = frozenset(config.retry_statuses)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=config.timeout if timeout is None else timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "DataProviderClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _retrying(self, table: str) -> AsyncRetrying:
        def log_retry(retry_state: RetryCallState) -> None:
            logger.warning(
                "Provider request failed, retrying",
                table=table,
                attempt=retry_state.attempt_number,
                error=str(retry_state.outcome.exception()),
            )

        # Waits backoff_factor * 2**n seconds before retry n + 1
        return AsyncRetrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=wait_exponential(multiplier=self.backoff_factor, min=0),
            retry=retry_if_exception_type((httpx.TransportError, RetryableStatus)),
            before_sleep=log_retry,
            reraise=True,
        )

    async def _get(self, table: str, path: str) -> httpx.Response:
        """GET with retries; the last retryable response is returned as-is."""
        try:
            async for attempt in self._retrying(table):
                with attempt:
                    response = await self._client.get(path)
                    if response.status_code in self.retry_statuses:
                        raise RetryableStatus(response)
        except RetryableStatus as e:
            return e.response
        except httpx.TransportError as e:
            raise ProviderError(table, f"request failed: {e}") from e
        except httpx.RequestError as e:
            # Undecodable bodies, redirect loops
            raise ProviderError(table, f"invalid response: {e}") from e
        return response

    async def fetch_table(self, table: str) -> List[Dict[str, Any]]:
        """
        Fetch every row of one table.

        Args:
            table: One of customers, movies, theaters, dates, facts

        Returns:
            Rows as dictionaries, verbatim

        Raises:
            ProviderError: Non-200 status, malformed body, or exhausted retries
        """
        try:
            path = TABLE_ENDPOINTS[table]
        except KeyError:
            raise ProviderError(table, f"unknown table, expected one of {sorted(TABLE_ENDPOINTS)}") from None

        response = await self._get(table, path)
        if response.status_code != 200:
            raise ProviderError(
                table,
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError(table, "response body is not JSON", status_code=200) from e

        if not isinstance(body, list) or not all(isinstance(row, dict) for row in body):
            raise ProviderError(table, "expected a JSON array of records", status_code=200)

        logger.debug("Table fetched", table=table, rows=len(body))
        return body
