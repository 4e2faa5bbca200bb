"""Parser for extracting class declarations from Python sources."""

from .source_parser import SourceParser
from .symbols import (
    NOT_A_LITERAL,
    UNRESOLVED_BASE,
    MarkerUsage,
    MethodSymbol,
    SymbolTable,
    TypeSymbol,
)

__all__ = [
    "NOT_A_LITERAL",
    "UNRESOLVED_BASE",
    "MarkerUsage",
    "MethodSymbol",
    "SourceParser",
    "SymbolTable",
    "TypeSymbol",
]
