"""
Search query model and filter translation.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

# Attribute user filter terms are matched against
FILTER_ATTRIBUTE = "tags"


def _quote(term: str) -> str:
    return json.dumps(term, ensure_ascii=False)


def translate_filter(text: str, attribute: str = FILTER_ATTRIBUTE) -> Optional[str]:
    """
    Translate user filter text into a Meilisearch filter expression.

    ``|`` separates alternatives, whitespace-separated terms within an
    alternative must all match, and a leading ``!`` negates a term::

        "vim | !bash"      ->  tags = "vim" OR NOT tags = "bash"
        "rust cli | go"    ->  (tags = "rust" AND tags = "cli") OR tags = "go"

    Args:
        text: Filter text as typed by the user.
        attribute: Document attribute each term is matched against.

    Returns:
        The filter expression, or None when the text holds no terms.
    """
    groups: List[str] = []
    for alternative in text.split("|"):
        clauses = []
        for term in alternative.split():
            negated = term.startswith("!")
            term = term.lstrip("!")
            if not term:
                continue
            clause = f"{attribute} = {_quote(term)}"
            clauses.append(f"NOT {clause}" if negated else clause)
        if not clauses:
            continue
        if len(clauses) == 1:
            groups.append(clauses[0])
        else:
            groups.append("(" + " AND ".join(clauses) + ")")

    if not groups:
        return None
    if len(groups) == 1 and groups[0].startswith("("):
        return groups[0][1:-1]
    return " OR ".join(groups)


class SearchQuery(BaseModel):
    """Request body for the index's search endpoint."""

    q: Optional[str] = None
    filter: Optional[str] = None
    limit: int = Field(default=20, ge=1)
    offset: int = Field(default=0, ge=0)

    def process_filter(self, text: str) -> "SearchQuery":
        """Return a copy whose filter is translated from user filter text."""
        return self.model_copy(update={"filter": translate_filter(text)})

    def to_request(self) -> Dict[str, Any]:
        """Request body, without unset optional keys."""
        return self.model_dump(exclude_none=True)
