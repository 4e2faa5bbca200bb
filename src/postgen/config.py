"""Runtime settings for collection generation."""

import os
from dataclasses import dataclass
from pathlib import Path

from .model import WellKnownTypes

DEFAULT_CONTROLLER_BASE = "mvc.ControllerBase"
DEFAULT_ROUTE_MARKER = "mvc.Route"
DEFAULT_HTTP_METHOD_MARKER = "mvc.routing.HttpMethod"
DEFAULT_BASE_URL = "http://example.com"
DEFAULT_OUTPUT = Path("postman.collection.g.nocommit.json")
DEFAULT_LOG_FILE = Path("logs.g.nocommit.txt")


@dataclass
class Settings:
    """Settings shared by the CLI and the library entry points."""

    controller_base: str = DEFAULT_CONTROLLER_BASE
    route_marker: str = DEFAULT_ROUTE_MARKER
    http_method_marker: str = DEFAULT_HTTP_METHOD_MARKER
    base_url: str = DEFAULT_BASE_URL
    output: Path = DEFAULT_OUTPUT
    log_file: Path = DEFAULT_LOG_FILE
    # Verb given to methods carrying only a route marker; None keeps them verb-less
    default_verb: str | None = None

    def well_known(self) -> WellKnownTypes:
        return WellKnownTypes(
            controller_base=self.controller_base,
            route_marker=self.route_marker,
            http_method_marker=self.http_method_marker,
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from POSTGEN_* environment variables.

        Returns:
            Settings with defaults for every unset variable
        """
        default_verb = os.getenv("POSTGEN_DEFAULT_VERB")
        return cls(
            controller_base=os.getenv("POSTGEN_CONTROLLER_BASE", DEFAULT_CONTROLLER_BASE),
            route_marker=os.getenv("POSTGEN_ROUTE_MARKER", DEFAULT_ROUTE_MARKER),
            http_method_marker=os.getenv("POSTGEN_HTTP_METHOD_MARKER", DEFAULT_HTTP_METHOD_MARKER),
            base_url=os.getenv("POSTGEN_BASE_URL", DEFAULT_BASE_URL),
            output=Path(os.getenv("POSTGEN_OUTPUT", str(DEFAULT_OUTPUT))),
            log_file=Path(os.getenv("POSTGEN_LOG_FILE", str(DEFAULT_LOG_FILE))),
            default_verb=default_verb.upper() if default_verb else None,
        )
