"""
Search notes command handler.
"""

import sys
from typing import Optional, TextIO

from notedex.config import load_config_or_default
from notedex.search import MeiliClient, QuerySession
from notedex.utils import get_logger

logger = get_logger(__name__)


async def search_notes_command(
    config_path: Optional[str],
    query: str,
    filter_text: str = "",
    limit: int = 20,
    preview: bool = False,
    out: Optional[TextIO] = None,
) -> QuerySession:
    """
    Query the search index and print the matches.

    Each match is printed as ``<id>  <title>``. With ``preview`` the first
    match's body follows, separated by a blank line.

    Args:
        config_path: Path to the notedex configuration file.
        query: Query text.
        filter_text: Tag filter, e.g. ``"vim | !bash"``.
        limit: Maximum number of matches.
        preview: Print the first match's body.
        out: Stream to print to. Defaults to stdout.

    Returns:
        The session holding the matches.

    Raises:
        ConfigurationError: If the configuration is invalid.
        SearchClientError: If the query fails.
    """
    out = out or sys.stdout
    config = load_config_or_default(config_path)

    session = QuerySession(query_input=query, filter_input=filter_text, limit=limit)
    search_query = session.build_query()
    logger.debug(f"Search request: {session.debug}")

    async with MeiliClient(config.meilisearch) as client:
        session.update_matches(await client.search(search_query))

    logger.info(f"{len(session.matches)} matches for {query!r}")
    for document in session.matches:
        print(f"{document.id}  {document.title}", file=out)

    if preview and session.matches:
        session.next()
        print("", file=out)
        print(session.selected_contents(), file=out)

    return session
