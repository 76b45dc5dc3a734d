"""
Mode-dependent serialization of Documents.

Each SerializationMode has one pure projection mapping a Document to its
output shape. Field order follows the table below; the optional fields
(subtitle, background_img, links, slug) are additionally skipped when empty.

    field           storage     disk        human
    title           yes         yes         -
    subtitle        optional    optional    -
    date            epoch       formatted   -
    tags            yes         yes         -
    filename        yes         -           -
    authors         yes         yes         -
    id, parentid    yes         yes         -
    weight, writes  yes         yes         -
    background_img  optional    optional    -
    links           optional    optional    -
    slug            optional    optional    -
    body            yes         -           body only
"""

import json
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import yaml

from notedex.document.frontmatter import dump_frontmatter
from notedex.document.models import Document, SerializationMode
from notedex.document.normalizers import format_date
from notedex.exceptions import SerializationError

Projection = Union[Dict[str, Any], str]


def _head(doc: Document) -> Dict[str, Any]:
    fields: Dict[str, Any] = {"title": doc.title}
    if doc.subtitle:
        fields["subtitle"] = doc.subtitle
    return fields


def _lineage(doc: Document) -> Dict[str, Any]:
    return {
        "authors": list(doc.authors),
        "id": doc.id,
        "parentid": doc.parentid,
        "weight": doc.weight,
        "writes": doc.writes,
    }


def _extras(doc: Document) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    if doc.background_img:
        fields["background_img"] = doc.background_img
    if doc.links:
        fields["links"] = list(doc.links)
    if doc.slug:
        fields["slug"] = doc.slug
    return fields


def project_storage(doc: Document) -> Dict[str, Any]:
    """Search index payload: every field, the epoch date, filename and body."""
    fields = _head(doc)
    fields["date"] = doc.date
    fields["tags"] = list(doc.tags)
    fields["filename"] = doc.filename
    fields.update(_lineage(doc))
    fields.update(_extras(doc))
    fields["body"] = doc.body
    return fields


def project_disk(doc: Document) -> Dict[str, Any]:
    """Note file metadata: the formatted date, no filename and no body."""
    fields = _head(doc)
    fields["date"] = format_date(doc.date)
    fields["tags"] = list(doc.tags)
    fields.update(_lineage(doc))
    fields.update(_extras(doc))
    return fields


def project_human(doc: Document) -> str:
    """Preview: the body, nothing else."""
    return doc.body


PROJECTIONS: Dict[SerializationMode, Callable[[Document], Projection]] = {
    SerializationMode.STORAGE: project_storage,
    SerializationMode.DISK: project_disk,
    SerializationMode.HUMAN: project_human,
}


def project(doc: Document, mode: Union[SerializationMode, str]) -> Projection:
    """Project ``doc`` for ``mode``."""
    return PROJECTIONS[SerializationMode(mode)](doc)


def _dump_block(fields: Dict[str, Any], content: str = "") -> str:
    try:
        return dump_frontmatter(fields, content)
    except yaml.YAMLError as e:
        raise SerializationError(f"Failed to encode metadata block: {e}") from e


def render(doc: Document, mode: Optional[Union[SerializationMode, str]] = None) -> str:
    """
    Render ``doc`` as text.

    Storage renders the metadata block, the delimiter line and the raw body;
    Disk renders the metadata block alone; Human renders the body alone.

    Args:
        doc: Document to render.
        mode: Mode to render in. Defaults to the document's own mode.

    Returns:
        The rendered text.

    Raises:
        SerializationError: If the metadata block cannot be encoded.
    """
    mode = SerializationMode(mode) if mode is not None else doc.serialization_mode
    if mode is SerializationMode.HUMAN:
        return project_human(doc)

    fields = PROJECTIONS[mode](doc)
    if mode is SerializationMode.STORAGE:
        return _dump_block(fields, doc.body)
    return _dump_block(fields)


def to_payload(docs: Iterable[Document]) -> List[Dict[str, Any]]:
    """Storage projections for submission to the search index."""
    return [project_storage(doc) for doc in docs]


def encode_payload(docs: Iterable[Document]) -> str:
    """
    Encode documents as the JSON request body for the search index.

    Raises:
        SerializationError: If the payload cannot be encoded as JSON.
    """
    try:
        return json.dumps(to_payload(docs), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode search index payload: {e}") from e
