"""
Postboard Backend — Route Dependencies
========================================

What:  FastAPI dependencies handing services and decoded bodies to handlers.
How:   Services live on `app.state` (set by create_app or the lifespan), so
       handlers receive them through Depends() instead of module globals.

Body decoding:
    application/json                   → must be a JSON object; empty body → {}
    application/x-www-form-urlencoded  → bracket syntax expanded (see below)
    anything else                      → {}

Form field names follow the bracket convention of browser and jQuery forms:
    title=T                  → {"title": "T"}
    tag=x&tag=y              → {"tag": ["x", "y"]}
    meta[views]=3            → {"meta": {"views": "3"}}
    tags[]=a&tags[]=b        → {"tags": ["a", "b"]}
    a[b][]=1                 → {"a": {"b": ["1"]}}
Names that are not well-formed bracket paths (or put `[]` anywhere but last)
are kept as flat keys. A nested path landing on an existing scalar replaces it.
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Tuple

from fastapi import Request

from postboard.exceptions import ValidationError
from postboard.services.post_service import PostService
from postboard.services.quote_service import QuoteService

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_BRACKET_NAME = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")
_BRACKET_SEGMENT = re.compile(r"\[([^\[\]]*)\]")


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_quote_service(request: Request) -> QuoteService:
    return request.app.state.quote_service


def _field_path(name: str) -> List[str]:
    """Split `a[b][]` into ["a", "b", ""]; anything else is a single segment."""
    match = _BRACKET_NAME.match(name)
    if match is None:
        return [name]
    segments = _BRACKET_SEGMENT.findall(match.group(2))
    if "" in segments[:-1]:
        return [name]
    return [match.group(1)] + segments


def _append_value(target: Dict[str, Any], key: str, value: Any) -> None:
    if key not in target:
        target[key] = value
    elif isinstance(target[key], list):
        target[key].append(value)
    else:
        target[key] = [target[key], value]


def _assign(target: Dict[str, Any], path: List[str], value: Any) -> None:
    head, rest = path[0], path[1:]

    if not rest:
        _append_value(target, head, value)
        return

    if rest == [""]:
        current = target.get(head)
        if isinstance(current, list):
            current.append(value)
        elif head in target:
            target[head] = [current, value]
        else:
            target[head] = [value]
        return

    child = target.get(head)
    if not isinstance(child, dict):
        child = {}
        target[head] = child
    _assign(child, rest, value)


def expand_form_fields(items: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """Build a nested document from (name, value) pairs in body order."""
    document: Dict[str, Any] = {}
    for name, value in items:
        _assign(document, _field_path(name), value)
    return document


def _is_json(content_type: str) -> bool:
    return content_type == "application/json" or content_type.endswith("+json")


async def read_document_body(request: Request) -> Dict[str, Any]:
    """
    Decode the request body into a document.

    Raises:
        ValidationError: JSON that does not parse, or parses to a non-object (→ 400)
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == FORM_CONTENT_TYPE:
        form = await request.form()
        return expand_form_fields(form.multi_items())

    if not _is_json(content_type):
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw)
    except ValueError as e:
        logger.warning("Rejected unparseable JSON body: %s", e)
        raise ValidationError(context={"reason": "invalid_json"}) from e

    if not isinstance(payload, dict):
        raise ValidationError(context={"reason": "not_an_object", "type": type(payload).__name__})
    return payload
