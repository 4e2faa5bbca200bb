"""Serialize collection documents to JSON text."""

import json
import logging
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any

from ..utils import to_camel_case
from .collection import Collection, CollectionNode, Item, ItemGroup

logger = logging.getLogger(__name__)


def serialize_collection(collection: Collection) -> str:
    """Render a collection as indented JSON.

    Field names are lower camel case unless a field declares its own JSON
    name, fields keep their declaration order and None fields are omitted.

    Args:
        collection: Assembled collection

    Returns:
        JSON text without a trailing newline
    """
    document = {
        "info": _to_json_object(collection.info),
        "item": [_node_to_json(node) for node in collection.item],
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_collection(collection: Collection, path: Path) -> Path:
    """Write a collection to ``path``, replacing any previous contents.

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_collection(collection), encoding="utf-8")
    logger.info("Wrote collection to %s", path)
    return path


def _node_to_json(node: CollectionNode) -> dict[str, Any]:
    if isinstance(node, ItemGroup):
        return {"name": node.name, "item": [_node_to_json(child) for child in node.item]}
    if isinstance(node, Item):
        return _to_json_object(node)
    raise TypeError(f"Unsupported collection node: {type(node).__name__}")


def _to_json_object(obj: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        key = f.metadata.get("json_name", to_camel_case(f.name))
        result[key] = _to_json_object(value) if is_dataclass(value) else value
    return result
