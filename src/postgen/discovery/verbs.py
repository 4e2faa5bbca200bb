"""Mapping from HTTP method marker classes to HTTP verbs."""

from collections.abc import Mapping

from ..errors import UnknownHttpVerbMarker
from ..parser import SymbolTable

HTTP_VERBS: dict[str, str] = {
    "HttpGet": "GET",
    "HttpGetAttribute": "GET",
    "HttpPost": "POST",
    "HttpPostAttribute": "POST",
    "HttpPut": "PUT",
    "HttpPutAttribute": "PUT",
    "HttpPatch": "PATCH",
    "HttpPatchAttribute": "PATCH",
    "HttpDelete": "DELETE",
    "HttpDeleteAttribute": "DELETE",
    "HttpHead": "HEAD",
    "HttpHeadAttribute": "HEAD",
    "HttpOptions": "OPTIONS",
    "HttpOptionsAttribute": "OPTIONS",
}


def verb_for_marker(
    table: SymbolTable, marker_type: str, verbs: Mapping[str, str] | None = None
) -> str:
    """Look up the HTTP verb of an HTTP method marker.

    The marker class is checked first, then each class it derives from, so a
    project-specific ``HttpGetAll(HttpGet)`` maps to GET. Entries match
    either the qualified name or the bare class name.

    Args:
        table: Symbol table holding the marker declarations
        marker_type: Qualified name of the marker class
        verbs: Verb table (defaults to HTTP_VERBS)

    Returns:
        Upper-case HTTP verb

    Raises:
        UnknownHttpVerbMarker: If neither the marker nor its bases are known
    """
    verbs = HTTP_VERBS if verbs is None else verbs
    resolved = table.resolve(marker_type)
    for name in (resolved, *table.ancestors(resolved)):
        for key in (name, name.rpartition(".")[2]):
            if key in verbs:
                return verbs[key].upper()
    raise UnknownHttpVerbMarker(resolved)
