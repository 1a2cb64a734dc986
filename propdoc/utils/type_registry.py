import logging
from dataclasses import replace
from typing import Dict, FrozenSet, Iterator, Optional

from propdoc.base.nodes import (
    ArrowFunction,
    Block,
    CompoundStatement,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    FunctionDeclaration,
    FunctionExpression,
    IfStatement,
    InterfaceDeclaration,
    IntersectionType,
    Program,
    TypeAliasDeclaration,
    TypeReference,
    UnionType,
    VariableDeclaration,
)

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Name -> definition index of the type aliases and interfaces of one file."""

    def __init__(self):
        self._types: Dict[str, object] = {}

    @classmethod
    def build(cls, program: Program) -> "TypeRegistry":
        registry = cls()
        for declaration in _type_declarations(program.statements):
            if isinstance(declaration, TypeAliasDeclaration):
                registry._register(declaration.name, declaration.type_annotation)
            else:
                registry._register(declaration.name, declaration)
        logger.debug("Registered %d type declarations", len(registry))
        return registry

    def _register(self, name: str, node) -> None:
        if name:
            self._types[name] = node

    def lookup(self, name: str):
        return self._types.get(name)

    def resolve(self, node, visited: FrozenSet[str] = frozenset()):
        return resolve_type(node, self, visited)

    def names(self):
        return list(self._types)

    def __contains__(self, name) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)


def _type_declarations(statements) -> Iterator:
    for stmt in statements:
        if isinstance(stmt, (TypeAliasDeclaration, InterfaceDeclaration)):
            yield stmt
        elif isinstance(stmt, ExportNamedDeclaration) and stmt.declaration is not None:
            yield from _type_declarations((stmt.declaration,))
        elif isinstance(stmt, ExportDefaultDeclaration):
            if isinstance(stmt.declaration, FunctionDeclaration):
                yield from _type_declarations((stmt.declaration,))
        elif isinstance(stmt, FunctionDeclaration) and stmt.body is not None:
            yield from _type_declarations(stmt.body.statements)
        elif isinstance(stmt, VariableDeclaration):
            for declarator in stmt.declarators:
                body = getattr(declarator.init, "body", None)
                if isinstance(declarator.init, (ArrowFunction, FunctionExpression)) and isinstance(body, Block):
                    yield from _type_declarations(body.statements)
        elif isinstance(stmt, Block):
            yield from _type_declarations(stmt.statements)
        elif isinstance(stmt, CompoundStatement):
            yield from _type_declarations(stmt.statements)
        elif isinstance(stmt, IfStatement):
            yield from _type_declarations(tuple(s for s in (stmt.consequent, stmt.alternate) if s is not None))


def resolve_type(node, registry: TypeRegistry, visited: FrozenSet[str] = frozenset()) -> Optional[object]:
    """
    Follow type references through the registry.

    Unregistered references come back unchanged (same object) so callers can
    treat them as opaque; a reference already on the current chain resolves to
    None. Union and intersection members each get their own copy of the chain.
    """
    if node is None:
        return None

    if isinstance(node, TypeReference):
        if node.name in visited:
            logger.debug("Cyclic type reference %s", node.name)
            return None
        target = registry.lookup(node.name)
        if target is None:
            return node
        return resolve_type(target, registry, visited | {node.name})

    if isinstance(node, (UnionType, IntersectionType)):
        return replace(node, members=tuple(resolve_type(m, registry, visited) for m in node.members))

    if isinstance(node, InterfaceDeclaration):
        return node.body

    return node
