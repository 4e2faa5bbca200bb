"""Symbol table of the classes declared in a scanned source set."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Bound on alias hops when resolving re-exported names
MAX_ALIAS_HOPS = 32


class _NotALiteral:
    """Placeholder for a decorator argument that is not a literal value."""

    def __repr__(self) -> str:
        return "NOT_A_LITERAL"


NOT_A_LITERAL: Any = _NotALiteral()

# Stands in for a base class expression that names no type, e.g. `mixin()`
UNRESOLVED_BASE = "<unresolved>"


def qualify(prefix: str, name: str) -> str:
    """Join a dotted prefix and a name, tolerating an empty prefix."""
    return f"{prefix}.{name}" if prefix else name


@dataclass
class MarkerUsage:
    """A decorator applied to a class or method."""

    type_name: str  # Resolved qualified name of the decorator, e.g. "mvc.routing.HttpGet"
    arguments: tuple[Any, ...] = ()  # Positional literal arguments
    keywords: dict[str, Any] = field(default_factory=dict)
    lineno: int = 0


@dataclass
class MethodSymbol:
    """A function declared directly in a class body."""

    name: str
    markers: list[MarkerUsage] = field(default_factory=list)
    lineno: int = 0
    is_async: bool = False

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")


@dataclass
class TypeSymbol:
    """A class declaration."""

    qualname: str  # e.g., "app.controllers.UsersController"
    name: str  # e.g., "UsersController"
    module: str  # e.g., "app.controllers"
    bases: list[str] = field(default_factory=list)  # Resolved names or UNRESOLVED_BASE, in order
    markers: list[MarkerUsage] = field(default_factory=list)
    methods: list[MethodSymbol] = field(default_factory=list)
    init_params: list[str] | None = None  # None when the class declares no __init__
    path: Path | None = None
    lineno: int = 0

    @property
    def base(self) -> str | None:
        """The declared base followed by the single-inheritance chain."""
        if not self.bases or self.bases[0] == UNRESOLVED_BASE:
            return None
        return self.bases[0]


class SymbolTable:
    """Ordered collection of class declarations with alias-aware lookup.

    Types are kept in the order they were added, which is the order the
    parser encountered them. Aliases map names bound by imports
    (``mvc.HttpGet`` re-exported from ``mvc.routing``) to the name they refer
    to, so that lookups land on the declaring module.
    """

    def __init__(self) -> None:
        self._types: dict[str, TypeSymbol] = {}
        self._aliases: dict[str, str] = {}
        self._star_imports: dict[str, list[str]] = {}
        self.skipped_files: list[Path] = []

    def add(self, symbol: TypeSymbol) -> None:
        if symbol.qualname in self._types:
            logger.warning("Duplicate declaration of %s ignored (%s)", symbol.qualname, symbol.path)
            return
        self._types[symbol.qualname] = symbol

    def add_alias(self, name: str, target: str) -> None:
        if name != target:
            self._aliases.setdefault(name, target)

    def add_star_import(self, module: str, source: str) -> None:
        """Record `from source import *` inside `module`."""
        sources = self._star_imports.setdefault(module, [])
        if source != module and source not in sources:
            sources.append(source)

    def resolve(self, name: str) -> str:
        """Follow import aliases until ``name`` reaches a declared type.

        Args:
            name: Dotted name as written or as bound by an import

        Returns:
            The qualified name of the declaration, or the last name reached
            when the chain leaves the table
        """
        seen: set[str] = set()
        for _ in range(MAX_ALIAS_HOPS):
            if name in self._types or name in seen:
                return name
            seen.add(name)
            if name in self._aliases:
                name = self._aliases[name]
                continue
            parts = name.split(".")
            for i in range(len(parts) - 1, 0, -1):
                prefix = ".".join(parts[:i])
                if prefix in self._aliases:
                    name = qualify(self._aliases[prefix], ".".join(parts[i:]))
                    break
            else:
                fallback = self._through_star_imports(name)
                if fallback is None:
                    return name
                name = fallback
        return name

    def _through_star_imports(self, name: str, depth: int = 0) -> str | None:
        """Find the declaration a star import binds to `module.Name`, if any."""
        module, _, attr = name.rpartition(".")
        if not module or depth >= MAX_ALIAS_HOPS:
            return None
        for source in self._star_imports.get(module, ()):
            candidate = qualify(source, attr)
            if candidate in self._types or candidate in self._aliases:
                return candidate
            nested = self._through_star_imports(candidate, depth + 1)
            if nested is not None:
                return nested
        return None

    def get(self, name: str) -> TypeSymbol | None:
        return self._types.get(self.resolve(name))

    def types(self) -> Iterator[TypeSymbol]:
        return iter(list(self._types.values()))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self._types)

    def ancestors(self, candidate: "str | TypeSymbol") -> Iterator[str]:
        """Walk the declared-base chain of ``candidate`` upward.

        Only the first base of each class is followed. The walk stops when a
        base is not declared in the table or when a name repeats, since
        source code can spell an inheritance cycle.

        Args:
            candidate: Type symbol or name to start from (not yielded)

        Yields:
            Qualified names of each base in the chain
        """
        current = candidate if isinstance(candidate, TypeSymbol) else self.get(candidate)
        if current is None:
            return
        seen = {current.qualname}
        while current is not None and current.base is not None:
            base = self.resolve(current.base)
            if base in seen:
                logger.warning("Inheritance cycle through %s", base)
                return
            seen.add(base)
            yield base
            current = self._types.get(base)

    def inherits_from(self, base: str, candidate: "str | TypeSymbol") -> bool:
        """Check whether ``candidate`` transitively derives from ``base``.

        A type does not inherit from itself.
        """
        target = self.resolve(base)
        return any(ancestor == target for ancestor in self.ancestors(candidate))

    def is_marker_of(self, base: str, candidate: str) -> bool:
        """Check whether ``candidate`` is ``base`` or one of its specializations."""
        return self.resolve(candidate) == self.resolve(base) or self.inherits_from(base, candidate)

    def init_params_of(self, name: str) -> list[str]:
        """Return the constructor parameter names a type declares or inherits."""
        symbol = self.get(name)
        if symbol is None:
            return []
        if symbol.init_params is not None:
            return symbol.init_params
        for ancestor in self.ancestors(symbol):
            declared = self._types.get(ancestor)
            if declared is not None and declared.init_params is not None:
                return declared.init_params
        return []

    def first_argument(self, marker: MarkerUsage) -> Any:
        """Return the first constructor argument of a marker.

        The first positional argument wins. Otherwise the keyword naming the
        first ``__init__`` parameter of the marker class is used.

        Args:
            marker: Decorator usage

        Returns:
            The argument value, or None when the marker has none
        """
        if marker.arguments:
            return marker.arguments[0]
        if not marker.keywords:
            return None
        params = self.init_params_of(marker.type_name)
        if params:
            return marker.keywords.get(params[0])
        return None
