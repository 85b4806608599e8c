"""
Async client for the Drips subgraph.

The subgraph indexes DripsHub events and is used to reconstruct history that
the contracts do not expose, such as every token a user has ever dripped.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ._exceptions import SubgraphError
from .types import DripsSetEvent

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500
DEFAULT_TIMEOUT = 30.0

GET_DRIPS_SET_EVENTS_BY_USER_ID_QUERY = """
query getDripsSetEventsByUserId($userId: String!, $first: Int!, $lastId: ID!) {
  dripsSetEvents(
    where: {userId: $userId, id_gt: $lastId}
    first: $first
    orderBy: id
    orderDirection: asc
  ) {
    id
    userId
    assetId
    receiversHash
    dripsReceiverSeenEvents {
      id
      receiverUserId
      config
    }
    blockTimestamp
  }
}
"""


class DripsSubgraphClient:
    """
    Minimal GraphQL client for the Drips subgraph.

    Example:
        >>> async with DripsSubgraphClient(metadata.subgraph_url) as subgraph:
        ...     events = await subgraph.get_drips_set_events_by_user_id(user_id)
    """

    def __init__(
        self,
        url: str,
        *,
        client: httpx.AsyncClient | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """
        Args:
            url: Subgraph GraphQL endpoint
            client: httpx client to use. When not provided, one is created and
                closed by `close`; a passed-in client is left open.
            page_size: Rows requested per query
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be greater than 0, got {page_size}")
        self.url = url
        self.page_size = page_size
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "DripsSubgraphClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """
        Run a GraphQL query and return its `data` object.

        Raises:
            SubgraphError: On HTTP errors, invalid JSON or GraphQL errors
        """
        try:
            response = await self._client.post(self.url, json={"query": query, "variables": variables})
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise SubgraphError(f"Subgraph request failed: {e}") from e
        except ValueError as e:
            raise SubgraphError(f"Subgraph returned invalid JSON: {e}") from e

        if body.get("errors"):
            messages = "; ".join(str(err.get("message", err)) for err in body["errors"])
            raise SubgraphError(f"Subgraph query failed: {messages}")

        data = body.get("data")
        if data is None:
            raise SubgraphError("Subgraph response has no data")
        return data

    async def get_drips_set_events_by_user_id(self, user_id: int) -> list[DripsSetEvent]:
        """
        Get every DripsSet event of a user, oldest first.

        Pages are fetched with an `id_gt` cursor (the hosted service caps
        `skip` at 5000).

        Args:
            user_id: The user ID

        Returns:
            Events sorted by block timestamp; events of the same block keep ID order
        """
        events: list[DripsSetEvent] = []
        last_id = ""

        while True:
            data = await self.query(
                GET_DRIPS_SET_EVENTS_BY_USER_ID_QUERY,
                {"userId": str(user_id), "first": self.page_size, "lastId": last_id},
            )
            rows = data.get("dripsSetEvents") or []
            logger.debug("Fetched %d DripsSet events for user %s (after %r)", len(rows), user_id, last_id)

            try:
                events.extend(DripsSetEvent.model_validate(row) for row in rows)
            except ValidationError as e:
                raise SubgraphError(f"Unexpected DripsSet event shape: {e}") from e

            if len(rows) < self.page_size:
                events.sort(key=lambda event: event.block_timestamp)
                return events
            last_id = events[-1].id
