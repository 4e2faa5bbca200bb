"""Shared fixtures: a tiny web framework and an application using it."""

import textwrap
from pathlib import Path

import pytest

from postgen.model import WellKnownTypes
from postgen.parser import SourceParser, SymbolTable

MVC_FILES = {
    "mvc/__init__.py": """
        from .core import ControllerBase, Route
        from .routing import HttpDelete, HttpGet, HttpMethod, HttpPost, HttpPut
        """,
    "mvc/core.py": """
        class ControllerBase:
            pass


        class Route:
            def __init__(self, template):
                self.template = template

            def __call__(self, target):
                return target
        """,
    "mvc/routing.py": """
        class HttpMethod:
            def __init__(self, template=None):
                self.template = template

            def __call__(self, target):
                return target


        class HttpGet(HttpMethod):
            pass


        class HttpPost(HttpMethod):
            pass


        class HttpPut(HttpMethod):
            pass


        class HttpDelete(HttpMethod):
            pass
        """,
}

APP_FILES = {
    "app/controllers.py": """
        from mvc import ControllerBase, Route
        from mvc.routing import HttpDelete, HttpGet, HttpPost


        @Route("api/[controller]")
        class UsersController(ControllerBase):
            @HttpGet("{id}")
            def GetById(self, id):
                ...

            @HttpPost()
            def Create(self, user):
                ...

            @Route("legacy")
            def Legacy(self):
                ...

            def helper(self):
                ...

            @HttpGet("secret")
            def _hidden(self):
                ...


        class OrdersController(ControllerBase):
            @HttpDelete(template="{id}")
            def Remove(self, id):
                ...


        class NotAController:
            @HttpGet("x")
            def Get(self):
                ...
        """,
}


def write_sources(root: Path, files: dict[str, str]) -> Path:
    """Write dedented source files under ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return root


@pytest.fixture
def well_known() -> WellKnownTypes:
    return WellKnownTypes(
        controller_base="mvc.ControllerBase",
        route_marker="mvc.Route",
        http_method_marker="mvc.routing.HttpMethod",
    )


@pytest.fixture
def sample_root(tmp_path: Path) -> Path:
    """Source root holding the framework and the sample application."""
    return write_sources(tmp_path / "src", {**MVC_FILES, **APP_FILES})


@pytest.fixture
def sample_table(sample_root: Path) -> SymbolTable:
    return SourceParser().parse_directory(sample_root)


@pytest.fixture
def make_table(tmp_path: Path):
    """Build a symbol table from the framework plus extra application files."""

    def _make(files: dict[str, str]) -> SymbolTable:
        root = write_sources(tmp_path / "extra", {**MVC_FILES, **files})
        return SourceParser().parse_directory(root)

    return _make
