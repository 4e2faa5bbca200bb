"""Generate Postman collections from controller classes in Python sources."""

from .config import Settings
from .discovery import scan_application, scan_sources
from .errors import InvalidControllerName, PostgenError, SchemaFetchError, UnknownHttpVerbMarker
from .generator import CollectionGenerator, assemble_collection, serialize_collection
from .model import (
    ApplicationDescriptor,
    ControllerDescriptor,
    ControllerMethodDescriptor,
    ScanResult,
    WellKnownTypes,
)

__version__ = "0.1.0"

__all__ = [
    "ApplicationDescriptor",
    "CollectionGenerator",
    "ControllerDescriptor",
    "ControllerMethodDescriptor",
    "InvalidControllerName",
    "PostgenError",
    "ScanResult",
    "SchemaFetchError",
    "Settings",
    "UnknownHttpVerbMarker",
    "WellKnownTypes",
    "assemble_collection",
    "scan_application",
    "scan_sources",
    "serialize_collection",
]
