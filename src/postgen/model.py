"""Descriptors produced by controller discovery."""

from dataclasses import dataclass, field
from typing import Any

from .diagnostics import DiagnosticLog


@dataclass(frozen=True)
class WellKnownTypes:
    """Qualified names of the types that drive discovery."""

    controller_base: str  # e.g., "mvc.ControllerBase"
    route_marker: str  # e.g., "mvc.Route"
    http_method_marker: str  # e.g., "mvc.routing.HttpMethod"

    def names(self) -> tuple[str, str, str]:
        return (self.controller_base, self.route_marker, self.http_method_marker)


@dataclass(frozen=True)
class ControllerDescriptor:
    """A discovered controller."""

    name: str  # Class name without 'Controller'
    route_prefix: str | None = None  # Route marker argument, [controller] substituted


@dataclass
class ControllerMethodDescriptor:
    """A routable method of a controller."""

    name: str
    http_method: str | None = None  # e.g., "GET"
    route: str | None = None  # e.g., "{id}"
    body: Any = None  # JSON-compatible request body, supplied by the caller


@dataclass
class ApplicationDescriptor:
    """Every controller with its routable methods, in discovery order."""

    controllers: list[tuple[ControllerDescriptor, list[ControllerMethodDescriptor]]] = field(
        default_factory=list
    )

    def add(
        self, controller: ControllerDescriptor, methods: list[ControllerMethodDescriptor]
    ) -> None:
        self.controllers.append((controller, methods))

    @property
    def endpoint_count(self) -> int:
        return sum(len(methods) for _, methods in self.controllers)


@dataclass
class ScanResult:
    """Outcome of scanning a source set.

    ``application`` is None when the well-known types could not be resolved,
    in which case no collection should be written.
    """

    application: ApplicationDescriptor | None
    diagnostics: DiagnosticLog
