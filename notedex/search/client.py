"""
Meilisearch client.

Submits Storage-shaped documents to an index and runs queries against it.
The client owns an ``aiohttp.ClientSession`` unless one is passed in; use it
as an async context manager.
"""

import json
from typing import Any, Dict, List, Optional, Sequence

import aiohttp
from pydantic import ValidationError

from notedex.config import MeilisearchConfig
from notedex.document import Document, encode_payload
from notedex.exceptions import (
    DateParseError,
    ParseError,
    SearchClientError,
    TagFormatError,
)
from notedex.search.query import SearchQuery
from notedex.utils import get_logger

logger = get_logger(__name__)


class MeiliClient:
    """Thin async wrapper over the Meilisearch documents and search endpoints."""

    def __init__(
        self,
        config: MeilisearchConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Search index connection settings.
            session: Session to use. When omitted the client opens and closes
                its own.
        """
        self.config = config
        self._session = session
        self._owns_session = session is None

    @property
    def documents_url(self) -> str:
        return f"{self.config.url}/indexes/{self.config.index}/documents"

    @property
    def search_url(self) -> str:
        return f"{self.config.url}/indexes/{self.config.index}/search"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def __aenter__(self) -> "MeiliClient":
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout)
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the session if this client opened it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def _post(self, url: str, body: str) -> Any:
        if self._session is None:
            raise SearchClientError("Client session is not open")

        logger.debug(f"POST {url}")
        try:
            async with self._session.post(
                url, data=body.encode("utf-8"), headers=self._headers()
            ) as response:
                text = await response.text()
                if response.status >= 400:
                    raise SearchClientError(
                        f"Request to {url} failed", status=response.status, response=text
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise SearchClientError(
                        f"Invalid JSON from {url}: {e}", status=response.status, response=text
                    ) from e
        except aiohttp.ClientError as e:
            raise SearchClientError(f"Request to {url} failed: {e}") from e

    async def add_documents(self, documents: Sequence[Document]) -> Dict[str, Any]:
        """
        Add or replace documents in the index.

        Args:
            documents: Documents to submit, serialized in Storage mode.

        Returns:
            The enqueued task summary returned by the index.

        Raises:
            SerializationError: If the payload cannot be encoded.
            SearchClientError: If the request fails.
        """
        return await self._post(self.documents_url, encode_payload(documents))

    async def search(self, query: SearchQuery) -> List[Document]:
        """
        Run a query and rebuild the hits as Documents.

        Raises:
            SearchClientError: If the request fails or a hit is not a valid Document.
        """
        data = await self._post(self.search_url, json.dumps(query.to_request()))
        hits = data.get("hits", []) if isinstance(data, dict) else []
        try:
            return [Document.from_search_hit(hit) for hit in hits]
        except (ValidationError, ParseError, DateParseError, TagFormatError) as e:
            raise SearchClientError(f"Could not deserialize search hits: {e}") from e
