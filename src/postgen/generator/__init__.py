"""Postman collection generation."""

from .collection import (
    COLLECTION_NAME,
    SCHEMA_URL,
    Collection,
    CollectionInfo,
    CollectionNode,
    Item,
    ItemGroup,
    Request,
    RequestBody,
    assemble_collection,
    build_url,
)
from .collection_generator import CollectionGenerator
from .serializer import serialize_collection, write_collection

__all__ = [
    "COLLECTION_NAME",
    "SCHEMA_URL",
    "Collection",
    "CollectionGenerator",
    "CollectionInfo",
    "CollectionNode",
    "Item",
    "ItemGroup",
    "Request",
    "RequestBody",
    "assemble_collection",
    "build_url",
    "serialize_collection",
    "write_collection",
]
