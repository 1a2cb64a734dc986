"""Predicates used to tell React components apart from ordinary functions."""
import re

from propdoc.base.nodes import (
    ArrowFunction,
    BinaryExpression,
    Block,
    CompoundStatement,
    ConditionalExpression,
    FunctionDeclaration,
    FunctionExpression,
    IfStatement,
    JSXElement,
    ParenthesizedExpression,
    ReturnStatement,
)

_COMPONENT_NAME_RE = re.compile(r"^[A-Z]")
_LOGICAL_OPERATORS = ("&&", "||", "??")


def is_component_name(name) -> bool:
    return bool(name) and bool(_COMPONENT_NAME_RE.match(name))


def is_function_like(node) -> bool:
    return isinstance(node, (ArrowFunction, FunctionExpression))


def is_jsx(node) -> bool:
    return isinstance(node, JSXElement)


def has_jsx_in_expression(node) -> bool:
    if node is None:
        return False
    if is_jsx(node):
        return True
    if isinstance(node, ConditionalExpression):
        return has_jsx_in_expression(node.consequent) or has_jsx_in_expression(node.alternate)
    if isinstance(node, BinaryExpression) and node.operator in _LOGICAL_OPERATORS:
        return has_jsx_in_expression(node.left) or has_jsx_in_expression(node.right)
    if isinstance(node, ParenthesizedExpression):
        return has_jsx_in_expression(node.expression)
    return False


def iter_returns(statements):
    """Yield return statements reachable without entering a nested function."""
    for stmt in statements:
        if stmt is None:
            continue
        if isinstance(stmt, ReturnStatement):
            yield stmt
        elif isinstance(stmt, Block):
            yield from iter_returns(stmt.statements)
        elif isinstance(stmt, CompoundStatement):
            yield from iter_returns(stmt.statements)
        elif isinstance(stmt, IfStatement):
            yield from iter_returns((stmt.consequent, stmt.alternate))


def has_jsx_return(node) -> bool:
    if isinstance(node, ArrowFunction) and not isinstance(node.body, Block):
        return has_jsx_in_expression(node.body)
    if isinstance(node, (ArrowFunction, FunctionExpression, FunctionDeclaration)) and isinstance(node.body, Block):
        return any(has_jsx_in_expression(r.argument) for r in iter_returns(node.body.statements))
    return False


def is_react_component(name, node) -> bool:
    return is_component_name(name) and has_jsx_return(node)
