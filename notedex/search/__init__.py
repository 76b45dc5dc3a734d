"""
Search index access: the Meilisearch client, queries and query sessions.
"""

from notedex.search.client import MeiliClient
from notedex.search.query import SearchQuery, translate_filter
from notedex.search.session import QuerySession

__all__ = [
    "MeiliClient",
    "QuerySession",
    "SearchQuery",
    "translate_filter",
]
