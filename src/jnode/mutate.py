"""Apply node edits to document text.

Each call parses its own copy of the document, mutates it and serializes the
whole tree again; nothing is cached between calls.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from jnode._cast import cast_value, load_json
from jnode._path import resolve_parent, resolve_target
from jnode._project import DEFAULT_INDENT
from jnode._types import JsonType, Path
from jnode.errors import InvalidDocumentError, NotAnObjectError

logger = logging.getLogger(__name__)


def serialize(value: object) -> str:
    return json.dumps(
        value, indent=DEFAULT_INDENT, ensure_ascii=False, allow_nan=False
    )


def parse_document(document_text: str) -> object:
    try:
        return load_json(document_text)
    except (ValueError, TypeError) as exc:
        raise InvalidDocumentError() from exc


def apply_primitive_edit(document_text: str, path: Path, new_value: object) -> str:
    """Overwrite the value at *path*; the root path replaces the document."""
    root = parse_document(document_text)
    path = tuple(path)
    if not path:
        logger.debug("replacing whole document with %r", new_value)
        return serialize(new_value)
    resolve_parent(root, path).assign(new_value)
    return serialize(root)


def apply_object_edit(
    document_text: str,
    path: Path,
    edits: Mapping[str, str],
    row_types: Mapping[str, JsonType],
) -> str:
    """Cast and write each edited property of the object at *path*.

    *row_types* holds the declared type of every row of the node as it was when
    the edit started. Keys without a scalar row are skipped.
    """
    root = parse_document(document_text)
    path = tuple(path)
    target = resolve_target(root, path)
    if not isinstance(target, dict):
        raise NotAnObjectError(path)

    for key, raw in edits.items():
        declared = row_types.get(key)
        if declared is None or declared.is_container:
            logger.debug("skipping property %r: no scalar row", key)
            continue
        target[key] = cast_value(raw, declared, key=key)
    return serialize(root)
