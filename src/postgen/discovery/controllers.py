"""Find controller classes in a symbol table."""

from collections.abc import Iterator

from ..parser import SymbolTable, TypeSymbol


def discover_controllers(table: SymbolTable, controller_base: str) -> Iterator[TypeSymbol]:
    """Yield every declared class deriving from ``controller_base``.

    Classes are yielded in declaration order. Inheritance alone qualifies a
    class; the base class itself is not a controller.

    Args:
        table: Symbol table of the scanned sources
        controller_base: Qualified name of the controller base class

    Yields:
        Controller type symbols
    """
    for symbol in table.types():
        if table.inherits_from(controller_base, symbol):
            yield symbol
