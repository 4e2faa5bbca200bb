"""Tests for inheritance resolution in the symbol table."""

from postgen.parser import UNRESOLVED_BASE, SymbolTable, TypeSymbol


def _table(*symbols: TypeSymbol) -> SymbolTable:
    table = SymbolTable()
    for symbol in symbols:
        table.add(symbol)
    return table


def _type(qualname: str, *bases: str) -> TypeSymbol:
    module, _, name = qualname.rpartition(".")
    return TypeSymbol(qualname=qualname, name=name, module=module, bases=list(bases))


def test_inherits_from_walks_chain() -> None:
    """Test transitive inheritance along the declared-base chain."""
    table = _table(_type("m.A"), _type("m.B", "m.A"), _type("m.C", "m.B"))

    assert table.inherits_from("m.A", "m.C")
    assert table.inherits_from("m.B", "m.C")
    assert not table.inherits_from("m.C", "m.A")


def test_type_does_not_inherit_from_itself() -> None:
    table = _table(_type("m.A"))
    assert not table.inherits_from("m.A", "m.A")
    assert table.is_marker_of("m.A", "m.A")


def test_only_first_base_is_followed() -> None:
    """Test the chain follows the first declared base only."""
    table = _table(_type("m.Mixin"), _type("m.Base"), _type("m.C", "m.Mixin", "m.Base"))

    assert table.inherits_from("m.Mixin", "m.C")
    assert not table.inherits_from("m.Base", "m.C")


def test_unresolved_first_base_stops_the_chain() -> None:
    """Test a placeholder first base keeps later bases out of the chain."""
    table = _table(_type("m.Base"), _type("m.C", UNRESOLVED_BASE, "m.Base"))

    assert table.get("m.C").base is None
    assert list(table.ancestors("m.C")) == []
    assert not table.inherits_from("m.Base", "m.C")


def test_chain_leaving_the_table() -> None:
    """Test an external base ends the walk after being reported."""
    table = _table(_type("m.A", "ext.Base"), _type("m.B", "m.A"))

    assert list(table.ancestors("m.B")) == ["m.A", "ext.Base"]
    assert table.inherits_from("ext.Base", "m.B")
    assert not table.inherits_from("ext.Other", "m.B")


def test_cycle_terminates() -> None:
    """Test a textual inheritance cycle does not loop forever."""
    table = _table(_type("m.A", "m.B"), _type("m.B", "m.A"))

    assert list(table.ancestors("m.A")) == ["m.B"]
    assert not table.inherits_from("m.C", "m.A")


def test_unknown_candidate() -> None:
    table = _table(_type("m.A"))
    assert not table.inherits_from("m.A", "staticmethod")
    assert not table.is_marker_of("m.A", "staticmethod")


def test_aliases_are_followed() -> None:
    """Test lookups follow alias chains and module prefixes."""
    table = _table(_type("pkg.impl.Thing"))
    table.add_alias("pkg.Thing", "pkg.impl.Thing")
    table.add_alias("app.views.Thing", "pkg.Thing")
    table.add_alias("app.views.impl", "pkg.impl")

    assert table.resolve("app.views.Thing") == "pkg.impl.Thing"
    assert table.resolve("app.views.impl.Thing") == "pkg.impl.Thing"
    assert table.get("pkg.Thing") is not None


def test_alias_cycle_terminates() -> None:
    table = SymbolTable()
    table.add_alias("a.X", "b.X")
    table.add_alias("b.X", "a.X")

    assert table.resolve("a.X") in {"a.X", "b.X"}
    assert table.get("a.X") is None


def test_duplicate_declaration_keeps_first() -> None:
    table = SymbolTable()
    first = _type("m.A")
    table.add(first)
    table.add(_type("m.A", "m.Other"))

    assert table.get("m.A") is first
    assert len(table) == 1
