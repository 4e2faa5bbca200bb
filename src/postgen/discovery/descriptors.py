"""Build descriptors from controller and method declarations."""

from collections.abc import Mapping

from ..diagnostics import DiagnosticLog
from ..errors import InvalidControllerName, UnknownHttpVerbMarker
from ..model import ControllerDescriptor, ControllerMethodDescriptor, WellKnownTypes
from ..parser import MethodSymbol, SymbolTable, TypeSymbol
from ..utils import strip_controller_token
from .methods import find_marker
from .verbs import verb_for_marker

CONTROLLER_PLACEHOLDER = "[controller]"


def controller_name(identifier: str) -> str:
    """Derive a controller name from its class identifier.

    Args:
        identifier: Class identifier, e.g. "UsersController"

    Returns:
        The identifier without its first "Controller" (case-insensitive)

    Raises:
        InvalidControllerName: If the token is missing or nothing else remains
    """
    name = strip_controller_token(identifier)
    if not name:
        raise InvalidControllerName(identifier)
    return name


def build_controller_descriptor(
    table: SymbolTable, controller: TypeSymbol, well_known: WellKnownTypes
) -> ControllerDescriptor:
    """Describe a controller: its name and route prefix.

    Raises:
        InvalidControllerName: If the class name lacks the Controller token
    """
    name = controller_name(controller.name)

    route = find_marker(table, controller.markers, well_known.route_marker)
    if route is not None:
        prefix = table.first_argument(route)
        if isinstance(prefix, str):
            return ControllerDescriptor(name, prefix.replace(CONTROLLER_PLACEHOLDER, name))

    return ControllerDescriptor(name, None)


def build_method_descriptor(
    table: SymbolTable,
    method: MethodSymbol,
    well_known: WellKnownTypes,
    default_verb: str | None = None,
    verbs: Mapping[str, str] | None = None,
    diagnostics: DiagnosticLog | None = None,
) -> ControllerMethodDescriptor:
    """Describe a routable method: its verb and route.

    The HTTP method marker supplies the verb and the initial route. A route
    marker on the same method only replaces a route that is already set, so
    a method with a route marker and no HTTP method marker keeps no route.
    Passing ``default_verb`` changes that: such methods take that verb and
    the route marker's template.

    Args:
        table: Symbol table holding the marker declarations
        method: Method carrying the markers
        well_known: Well-known marker types
        default_verb: Verb for methods that only carry a route marker
        verbs: Verb table override
        diagnostics: Log receiving unknown verb markers

    Returns:
        The method descriptor

    Raises:
        UnknownHttpVerbMarker: If the HTTP method marker maps to no verb and
            no diagnostics log was given
    """
    descriptor = ControllerMethodDescriptor(name=method.name)
    http_marker = find_marker(table, method.markers, well_known.http_method_marker)
    route_marker = find_marker(table, method.markers, well_known.route_marker)

    if http_marker is None:
        if route_marker is not None and default_verb:
            template = table.first_argument(route_marker)
            descriptor.route = template if isinstance(template, str) else None
            descriptor.http_method = default_verb.upper()
        return descriptor

    template = table.first_argument(http_marker)
    if isinstance(template, str):
        descriptor.route = template

    if route_marker is not None and descriptor.route is not None:
        template = table.first_argument(route_marker)
        if isinstance(template, str):
            descriptor.route = template

    try:
        descriptor.http_method = verb_for_marker(table, http_marker.type_name, verbs)
    except UnknownHttpVerbMarker as e:
        if diagnostics is None:
            raise
        diagnostics.record(f"Unknown HTTP method marker {e.marker} on {method.name}")

    return descriptor
