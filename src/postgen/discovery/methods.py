"""Select the routable methods of a controller."""

from collections.abc import Iterator

from ..model import WellKnownTypes
from ..parser import MarkerUsage, MethodSymbol, SymbolTable, TypeSymbol


def find_marker(table: SymbolTable, markers: list[MarkerUsage], base: str) -> MarkerUsage | None:
    """Return the first marker that is ``base`` or derives from it."""
    return next((m for m in markers if table.is_marker_of(base, m.type_name)), None)


def is_route_method(table: SymbolTable, method: MethodSymbol, well_known: WellKnownTypes) -> bool:
    """Check whether a method is public and carries a route or HTTP method marker."""
    if not method.is_public:
        return False
    return (
        find_marker(table, method.markers, well_known.route_marker) is not None
        or find_marker(table, method.markers, well_known.http_method_marker) is not None
    )


def filter_route_methods(
    table: SymbolTable, controller: TypeSymbol, well_known: WellKnownTypes
) -> Iterator[MethodSymbol]:
    """Yield the routable methods declared in a controller body, in order."""
    for method in controller.methods:
        if is_route_method(table, method, well_known):
            yield method
