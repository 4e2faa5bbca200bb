"""Postman v2.1 collection model and its assembly from descriptors."""

import json
import random
import uuid
from dataclasses import dataclass, field
from typing import Union

from ..model import ApplicationDescriptor, ControllerDescriptor, ControllerMethodDescriptor

COLLECTION_NAME = "Application Controllers"
SCHEMA_URL = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
DEFAULT_BASE_URL = "http://example.com"
MAX_EXPORTER_ID = 2**31 - 1


def json_name(name: str) -> dict[str, str]:
    """Field metadata overriding the serialized name of a field."""
    return {"json_name": name}


@dataclass
class CollectionInfo:
    postman_id: str = field(metadata=json_name("_postman_id"))
    name: str = COLLECTION_NAME
    schema: str = SCHEMA_URL
    exporter_id: int = field(default=0, metadata=json_name("_exporter_id"))


@dataclass
class RawBodyOptions:
    language: str = "json"


@dataclass
class RequestBodyOptions:
    raw: RawBodyOptions = field(default_factory=RawBodyOptions)


@dataclass(kw_only=True)
class RequestBody:
    mode: str = "raw"
    raw: str
    options: RequestBodyOptions = field(default_factory=RequestBodyOptions)


@dataclass
class Request:
    url: str
    method: str | None = None
    body: RequestBody | None = None


@dataclass(kw_only=True)
class Item:
    """A single request."""

    id: str | None = None
    name: str
    request: Request


@dataclass
class ItemGroup:
    """A folder of items or nested groups."""

    name: str
    item: list["CollectionNode"] = field(default_factory=list)


CollectionNode = Union[Item, ItemGroup]


@dataclass
class Collection:
    info: CollectionInfo
    item: list[CollectionNode] = field(default_factory=list)


def build_url(base_url: str, route_prefix: str | None, route: str | None) -> str:
    """Build a request URL from a controller prefix and a method route.

    Absent or empty components are left out rather than rendered, so an empty
    method route (`@HttpGet("")`) gives the prefix URL without a trailing
    slash.

    Args:
        base_url: Origin, e.g. "http://example.com"
        route_prefix: Controller route prefix
        route: Method route

    Returns:
        The URL, e.g. "http://example.com/api/Users/{id}"
    """
    segments = [part for part in (route_prefix, route) if part]
    return f"{base_url.rstrip('/')}/{'/'.join(segments)}"


def build_item(
    controller: ControllerDescriptor, method: ControllerMethodDescriptor, base_url: str
) -> Item:
    request = Request(
        url=build_url(base_url, controller.route_prefix, method.route),
        method=method.http_method,
    )
    if method.body is not None:
        request.body = RequestBody(raw=json.dumps(method.body))
    return Item(name=method.name, request=request)


def assemble_collection(
    application: ApplicationDescriptor,
    base_url: str = DEFAULT_BASE_URL,
    rng: random.Random | None = None,
    postman_id: str | None = None,
) -> Collection:
    """Assemble the collection document for an application.

    Args:
        application: Discovered controllers and methods
        base_url: Origin used for every request URL
        rng: Random source for the exporter id
        postman_id: Collection id (a fresh UUID4 by default)

    Returns:
        One group per controller, one item per method
    """
    rng = rng or random.Random()
    collection = Collection(
        info=CollectionInfo(
            postman_id=postman_id or str(uuid.uuid4()),
            exporter_id=rng.randrange(MAX_EXPORTER_ID),
        )
    )

    for controller, methods in application.controllers:
        group = ItemGroup(name=controller.name)
        for method in methods:
            group.item.append(build_item(controller, method, base_url))
        collection.item.append(group)

    return collection
