"""Sui GraphQL indexer provider.

Pages through every live ``0x2::coin::Coin<T>`` object and looks up coin
metadata. Responses are returned as decoded JSON; extracting balances is
left to the aggregator.
"""

import logging
import time
from typing import Any

import httpx

from ..core.config import SnapshotConfig
from ..core.exceptions import DataSourceError, RateLimitError
from ..core.types import Cursor, DataSource
from .base import BaseProvider, PageFetcher

logger = logging.getLogger(__name__)


OBJECTS_QUERY = """
query Snapshot($type: String!, $first: Int!, $after: String) {
  objects(first: $first, after: $after, filter: { type: $type }) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      owner {
        __typename
        ... on AddressOwner {
          address {
            address
          }
        }
        ... on ConsensusAddressOwner {
          address {
            address
          }
        }
        ... on ObjectOwner {
          address {
            address
          }
        }
      }
      asMoveObject {
        contents {
          json
        }
      }
    }
  }
}
"""

COIN_METADATA_QUERY = """
query CoinMetadata($coinType: String!) {
  coinMetadata(coinType: $coinType) {
    decimals
  }
}
"""


def coin_object_type(coin_type: str) -> str:
    """Wrap a coin type (``PACKAGE::MODULE::TOKEN``) in the Coin object type."""
    return f"0x2::coin::Coin<{coin_type}>"


class SuiGraphQLProvider(BaseProvider):
    """Fetches coin objects and coin metadata from a Sui GraphQL endpoint."""

    SOURCE = DataSource.SUI_GRAPHQL

    def __init__(
        self,
        endpoint: str,
        page_size: int = 50,
        timeout_seconds: float = 30.0,
        rate_limit_calls: int = 600,
        rate_limit_period: int = 60,
        client: httpx.Client | None = None,
    ):
        """
        Initialize the GraphQL provider.

        Args:
            endpoint: GraphQL endpoint URL
            page_size: Objects requested per page
            timeout_seconds: Per-request timeout
            rate_limit_calls: Rate limit per period
            rate_limit_period: Period in seconds
            client: Optional preconfigured httpx client (tests inject a mock transport)
        """
        super().__init__(
            rate_limit_calls=rate_limit_calls,
            rate_limit_period=rate_limit_period,
        )
        self.endpoint = endpoint
        self.page_size = page_size
        self._client = client or httpx.Client(
            timeout=timeout_seconds,
            headers={"content-type": "application/json"},
        )

    @classmethod
    def from_config(cls, config: SnapshotConfig) -> "SuiGraphQLProvider":
        return cls(
            endpoint=config.endpoint,
            page_size=config.page_size,
            timeout_seconds=config.timeout_seconds,
            rate_limit_calls=config.rate_limit_calls,
            rate_limit_period=config.rate_limit_period,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SuiGraphQLProvider":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _post(self, action: str, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Make a rate-limited GraphQL request."""
        self._wait_for_rate_limit()
        start_time = time.monotonic()
        duration_ms: int | None = None

        try:
            response = self._client.post(
                self.endpoint,
                json={"query": query, "variables": variables},
            )
            duration_ms = int((time.monotonic() - start_time) * 1000)

            if response.status_code == 429:
                self._record_audit(
                    action=action,
                    endpoint=self.endpoint,
                    success=False,
                    error_message="Rate limit exceeded",
                    duration_ms=duration_ms,
                )
                raise RateLimitError(source=self.SOURCE.value, endpoint=self.endpoint)

            response.raise_for_status()
            payload = response.json()

        except httpx.HTTPStatusError as e:
            self._record_audit(
                action=action,
                endpoint=self.endpoint,
                success=False,
                error_message=f"HTTP {e.response.status_code}",
            )
            raise DataSourceError(
                source=self.SOURCE.value,
                message=f"HTTP {e.response.status_code}",
                endpoint=self.endpoint,
                status_code=e.response.status_code,
            )
        except httpx.RequestError as e:
            self._record_audit(
                action=action,
                endpoint=self.endpoint,
                success=False,
                error_message=str(e),
            )
            raise DataSourceError(
                source=self.SOURCE.value,
                message=str(e),
                endpoint=self.endpoint,
            )
        except ValueError:
            self._record_audit(
                action=action,
                endpoint=self.endpoint,
                success=False,
                error_message="Response body is not valid JSON",
                duration_ms=duration_ms,
            )
            raise DataSourceError(
                source=self.SOURCE.value,
                message="Response body is not valid JSON",
                endpoint=self.endpoint,
            )

        if not isinstance(payload, dict):
            self._record_audit(
                action=action,
                endpoint=self.endpoint,
                success=False,
                error_message="Response body is not a JSON object",
                duration_ms=duration_ms,
            )
            raise DataSourceError(
                source=self.SOURCE.value,
                message="Response body is not a JSON object",
                endpoint=self.endpoint,
            )

        errors = payload.get("errors")
        if errors and not payload.get("data"):
            messages = "; ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors
            )
            self._record_audit(
                action=action,
                endpoint=self.endpoint,
                success=False,
                error_message=messages,
                duration_ms=duration_ms,
            )
            raise DataSourceError(
                source=self.SOURCE.value,
                message=f"GraphQL error: {messages}",
                endpoint=self.endpoint,
            )

        self._record_audit(
            action=action,
            endpoint=self.endpoint,
            success=True,
            duration_ms=duration_ms,
        )
        return payload

    def fetch_objects_page(self, coin_type: str, cursor: Cursor = None) -> dict[str, Any]:
        """
        Fetch one page of Coin<T> objects.

        Args:
            coin_type: Coin type (``PACKAGE::MODULE::TOKEN``)
            cursor: End cursor of the previous page, None for the first page

        Returns:
            Decoded GraphQL response
        """
        logger.debug(f"Fetching objects page after cursor {cursor!r}")
        return self._post(
            "fetch_page",
            OBJECTS_QUERY,
            {"type": coin_object_type(coin_type), "first": self.page_size, "after": cursor},
        )

    def page_fetcher(self, coin_type: str) -> PageFetcher:
        """Bind ``coin_type`` and return a cursor -> page callable."""

        def fetch(cursor: Cursor) -> dict[str, Any]:
            return self.fetch_objects_page(coin_type, cursor)

        return fetch

    def fetch_decimals(self, coin_type: str) -> int:
        """
        Look up a coin's decimals.

        Missing metadata or a non-integer value resolves to 0.
        """
        payload = self._post("fetch_metadata", COIN_METADATA_QUERY, {"coinType": coin_type})

        metadata = (payload.get("data") or {}).get("coinMetadata") or {}
        decimals = metadata.get("decimals") if isinstance(metadata, dict) else None

        if isinstance(decimals, int) and not isinstance(decimals, bool) and decimals >= 0:
            return decimals

        logger.warning(f"No usable decimals for {coin_type} ({decimals!r}), using 0")
        return 0
