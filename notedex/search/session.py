"""
Interactive query state.

QuerySession holds what a front end needs between keystrokes: the query and
filter inputs, the current matches, which match is selected, and the last
error. It does no rendering and no I/O of its own.
"""

import json
from dataclasses import dataclass, field
from typing import List, Optional

from notedex.document import Document, SerializationMode
from notedex.search.query import SearchQuery


@dataclass
class QuerySession:
    """Query inputs, matches and selection for one search session."""

    query_input: str = ""
    filter_input: str = ""
    limit: int = 20
    matches: List[Document] = field(default_factory=list)
    selected: Optional[int] = None
    error: str = ""
    # Last request body sent, for display in a debug pane
    debug: str = ""

    def build_query(self) -> SearchQuery:
        """Build the search request for the current inputs and remember it in ``debug``."""
        query = SearchQuery(q=self.query_input, limit=self.limit).process_filter(
            self.filter_input
        )
        self.debug = json.dumps(query.to_request())
        return query

    def update_matches(self, documents: List[Document]) -> None:
        """Replace the matches, previewed in Human mode, and clear the selection."""
        self.matches = [doc.with_mode(SerializationMode.HUMAN) for doc in documents]
        self.selected = None
        self.error = ""

    def next(self) -> None:
        """Select the next match, wrapping to the first."""
        if not self.matches:
            return
        if self.selected is None or self.selected >= len(self.matches) - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous(self) -> None:
        """Select the previous match, wrapping to the last."""
        if not self.matches:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0:
            self.selected = len(self.matches) - 1
        else:
            self.selected -= 1

    def selected_document(self) -> Optional[Document]:
        if self.selected is None or not self.matches:
            return None
        return self.matches[self.selected]

    def selected_ids(self) -> List[str]:
        document = self.selected_document()
        return [document.id] if document else []

    def selected_contents(self) -> str:
        """The selected match rendered for preview, or an empty string."""
        document = self.selected_document()
        return str(document) if document else ""
