"""Discover controllers and their routable methods."""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from ..config import Settings
from ..diagnostics import DiagnosticLog
from ..errors import InvalidControllerName
from ..model import ApplicationDescriptor, ScanResult, WellKnownTypes
from ..parser import SourceParser, SymbolTable
from .controllers import discover_controllers
from .descriptors import build_controller_descriptor, build_method_descriptor, controller_name
from .methods import filter_route_methods, find_marker, is_route_method
from .verbs import HTTP_VERBS, verb_for_marker

logger = logging.getLogger(__name__)


def scan_application(
    table: SymbolTable,
    well_known: WellKnownTypes,
    diagnostics: DiagnosticLog | None = None,
    default_verb: str | None = None,
    verbs: Mapping[str, str] | None = None,
) -> ApplicationDescriptor | None:
    """Describe every controller and routable method in a symbol table.

    Args:
        table: Symbol table of the scanned sources
        well_known: Controller base and marker types
        diagnostics: Log receiving one line per discovery event
        default_verb: Verb for methods that only carry a route marker
        verbs: Verb table override

    Returns:
        The application descriptor, or None when any well-known type is not
        declared in the scanned sources
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    missing = [name for name in well_known.names() if name not in table]
    if missing:
        logger.info("Well-known types not found, nothing to generate: %s", ", ".join(missing))
        diagnostics.record(f"Well-known types not found: {', '.join(missing)}")
        return None

    application = ApplicationDescriptor()
    for controller in discover_controllers(table, well_known.controller_base):
        diagnostics.record(f"Found controller {controller.qualname}")
        try:
            descriptor = build_controller_descriptor(table, controller, well_known)
        except InvalidControllerName as e:
            logger.warning("Skipping controller %s: %s", controller.qualname, e)
            diagnostics.record(f"Skipped controller {controller.qualname}: {e}")
            continue

        methods = []
        for method in filter_route_methods(table, controller, well_known):
            diagnostics.record(f"Found method {controller.qualname}.{method.name}")
            methods.append(
                build_method_descriptor(
                    table,
                    method,
                    well_known,
                    default_verb=default_verb,
                    verbs=verbs,
                    diagnostics=diagnostics,
                )
            )

        application.add(descriptor, methods)

    logger.info(
        "Discovered %d controllers with %d endpoints",
        len(application.controllers),
        application.endpoint_count,
    )
    return application


def scan_sources(paths: Iterable[Path], settings: Settings | None = None) -> ScanResult:
    """Parse source roots and describe their controllers.

    Args:
        paths: Source roots (directories or .py files)
        settings: Well-known types and options (read from the environment when omitted)

    Returns:
        Scan result with the application descriptor and the diagnostics
    """
    settings = settings or Settings.from_env()
    diagnostics = DiagnosticLog()

    table = SourceParser().parse_paths(paths)
    for skipped in table.skipped_files:
        diagnostics.record(f"Skipped unparsable file {skipped}")

    application = scan_application(
        table,
        settings.well_known(),
        diagnostics=diagnostics,
        default_verb=settings.default_verb,
    )
    return ScanResult(application=application, diagnostics=diagnostics)


__all__ = [
    "HTTP_VERBS",
    "build_controller_descriptor",
    "build_method_descriptor",
    "controller_name",
    "discover_controllers",
    "filter_route_methods",
    "find_marker",
    "is_route_method",
    "scan_application",
    "scan_sources",
    "verb_for_marker",
]
