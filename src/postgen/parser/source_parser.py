"""Parse Python source files into a symbol table of class declarations."""

import ast
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from ..utils import module_name_for
from .symbols import (
    NOT_A_LITERAL,
    UNRESOLVED_BASE,
    MarkerUsage,
    MethodSymbol,
    SymbolTable,
    TypeSymbol,
    qualify,
)

logger = logging.getLogger(__name__)

IGNORED_DIRS = frozenset({".git", ".venv", "venv", "__pycache__", "node_modules", ".tox"})


def _top_level(body: list[ast.stmt]) -> Iterator[ast.stmt]:
    """Yield module statements, descending into `if` and `try` blocks."""
    for node in body:
        if isinstance(node, ast.If):
            yield from _top_level(node.body)
            yield from _top_level(node.orelse)
        elif isinstance(node, ast.Try):
            yield from _top_level(node.body)
            for handler in node.handlers:
                yield from _top_level(handler.body)
            yield from _top_level(node.orelse)
            yield from _top_level(node.finalbody)
        else:
            yield node


class _ModuleScope:
    """Names bound at the top level of one module."""

    def __init__(self, module: str, is_package: bool, tree: ast.Module) -> None:
        self.module = module
        self.package = module if is_package else module.rpartition(".")[0]
        self.imports: dict[str, str] = {}
        self.classes: set[str] = set()
        self.constants: dict[str, Any] = {}
        self.star_sources: list[str] = []

        for node in _top_level(tree.body):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.asname:
                        self.imports[alias.asname] = alias.name
                    else:
                        head = alias.name.split(".")[0]
                        self.imports[head] = head
            elif isinstance(node, ast.ImportFrom):
                source = self._absolute(node.module, node.level)
                for alias in node.names:
                    if alias.name == "*":
                        self.star_sources.append(source)
                    else:
                        self.imports[alias.asname or alias.name] = qualify(source, alias.name)
            elif isinstance(node, ast.ClassDef):
                self.classes.add(node.name)
            elif isinstance(node, ast.Assign) and len(node.targets) == 1:
                self._remember_constant(node.targets[0], node.value)
            elif isinstance(node, ast.AnnAssign) and node.value is not None:
                self._remember_constant(node.target, node.value)

    def _remember_constant(self, target: ast.expr, value: ast.expr) -> None:
        if not isinstance(target, ast.Name):
            return
        try:
            self.constants[target.id] = ast.literal_eval(value)
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
            pass

    def _absolute(self, module: str | None, level: int) -> str:
        if level == 0:
            return module or ""
        parts = self.package.split(".") if self.package else []
        if level > 1:
            parts = parts[: max(len(parts) - (level - 1), 0)]
        return qualify(".".join(parts), module) if module else ".".join(parts)

    def resolve(self, node: ast.expr) -> str | None:
        """Resolve a name expression to a qualified name."""
        if isinstance(node, ast.Name):
            if node.id in self.classes:
                return qualify(self.module, node.id)
            if node.id in self.imports:
                return self.imports[node.id]
            if self.star_sources:
                # Looked up through the star imports once the whole table is known
                return qualify(self.module, node.id)
            return node.id
        if isinstance(node, ast.Attribute):
            head = self.resolve(node.value)
            return f"{head}.{node.attr}" if head else None
        if isinstance(node, ast.Subscript):
            # Generic[T] and friends
            return self.resolve(node.value)
        return None

    def literal(self, node: ast.expr) -> Any:
        """Evaluate a literal argument, falling back to module constants."""
        try:
            return ast.literal_eval(node)
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
            if isinstance(node, ast.Name) and node.id in self.constants:
                return self.constants[node.id]
            return NOT_A_LITERAL


class SourceParser:
    """Parser for extracting class declarations from Python source files.

    This parser uses the ast module to extract:
    - Class declarations and their resolved base classes
    - Class and method decorators with their literal arguments
    - __init__ parameter names, which give decorator keywords a position
    - Import aliases, so re-exported names resolve to their declaration

    Nothing is imported or executed.
    """

    def __init__(self, table: SymbolTable | None = None) -> None:
        """Initialize the parser.

        Args:
            table: Symbol table to fill (a new one by default)
        """
        self.table = table if table is not None else SymbolTable()

    def parse_file(self, file_path: Path, module: str) -> SymbolTable:
        """Parse one Python file into the symbol table.

        Args:
            file_path: Path to the Python file
            module: Dotted module name the file is imported as

        Returns:
            The symbol table
        """
        try:
            tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
        except (SyntaxError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Skipping %s: %s", file_path, e)
            self.table.skipped_files.append(file_path)
            return self.table

        scope = _ModuleScope(module, file_path.name == "__init__.py", tree)
        for local_name, target in scope.imports.items():
            self.table.add_alias(qualify(module, local_name), target)
        for source in scope.star_sources:
            self.table.add_star_import(module, source)

        self._collect_classes(tree.body, scope, file_path, module)
        return self.table

    def parse_directory(self, directory: Path) -> SymbolTable:
        """Parse all Python files under a source root recursively.

        A root that is itself a package contributes its own name to module
        names, so both ``src/`` and ``src/app/`` can be passed.

        Args:
            directory: Source root (a single .py file is accepted too)

        Returns:
            The symbol table
        """
        if not directory.exists():
            logger.warning("Source root %s does not exist", directory)
            return self.table

        if directory.is_file():
            return self.parse_file(directory, directory.stem)

        prefix: tuple[str, ...] = ()
        if (directory / "__init__.py").exists():
            prefix = (directory.resolve().name,)

        for py_file in sorted(directory.rglob("*.py")):
            relative = py_file.relative_to(directory)
            if any(part in IGNORED_DIRS for part in relative.parts[:-1]):
                continue
            self.parse_file(py_file, module_name_for(prefix + relative.parts))

        return self.table

    def parse_paths(self, paths: Iterable[Path]) -> SymbolTable:
        """Parse several source roots into one symbol table."""
        for path in paths:
            self.parse_directory(path)
        return self.table

    def _collect_classes(
        self, body: list[ast.stmt], scope: _ModuleScope, file_path: Path, prefix: str
    ) -> None:
        for node in body:
            if isinstance(node, ast.ClassDef):
                symbol = self._type_symbol(node, scope, file_path, prefix)
                self.table.add(symbol)
                self._collect_classes(node.body, scope, file_path, symbol.qualname)

    def _type_symbol(
        self, node: ast.ClassDef, scope: _ModuleScope, file_path: Path, prefix: str
    ) -> TypeSymbol:
        symbol = TypeSymbol(
            qualname=qualify(prefix, node.name),
            name=node.name,
            module=scope.module,
            bases=[scope.resolve(base) or UNRESOLVED_BASE for base in node.bases],
            markers=self._markers(node.decorator_list, scope),
            path=file_path,
            lineno=node.lineno,
        )

        for item in node.body:
            if not isinstance(item, (ast.FunctionDef, ast.AsyncFunctionDef)):
                continue
            symbol.methods.append(
                MethodSymbol(
                    name=item.name,
                    markers=self._markers(item.decorator_list, scope),
                    lineno=item.lineno,
                    is_async=isinstance(item, ast.AsyncFunctionDef),
                )
            )
            if item.name == "__init__":
                positional = item.args.posonlyargs + item.args.args
                symbol.init_params = [arg.arg for arg in positional[1:]]

        return symbol

    def _markers(self, decorators: list[ast.expr], scope: _ModuleScope) -> list[MarkerUsage]:
        markers: list[MarkerUsage] = []
        for decorator in decorators:
            if isinstance(decorator, ast.Call):
                type_name = scope.resolve(decorator.func)
                if type_name is None:
                    continue
                markers.append(
                    MarkerUsage(
                        type_name=type_name,
                        arguments=tuple(scope.literal(arg) for arg in decorator.args),
                        keywords={
                            kw.arg: scope.literal(kw.value) for kw in decorator.keywords if kw.arg
                        },
                        lineno=decorator.lineno,
                    )
                )
            else:
                type_name = scope.resolve(decorator)
                if type_name is not None:
                    markers.append(MarkerUsage(type_name=type_name, lineno=decorator.lineno))
        return markers
