"""
Typed syntax nodes consumed by the component metadata engine.

Only the node kinds the engine reads are modelled. Anything else is lowered
to one of the ``Unsupported*`` / ``Other*`` variants so that the serializers
and the detector fall back to their fixed outputs instead of guessing.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


PRIMITIVE_KEYWORDS = (
    "string", "number", "boolean", "void", "undefined", "null",
    "any", "unknown", "never", "bigint", "symbol", "object",
)


# ---------------------------
# Values / expressions
# ---------------------------

@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class NumberLiteral:
    raw: str


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class NullLiteral:
    pass


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class TemplateLiteral:
    # raw is the text between the backticks; None when the template interpolates
    raw: Optional[str] = ""
    has_expressions: bool = False


@dataclass(frozen=True)
class RegExpLiteral:
    pattern: str
    flags: str = ""


@dataclass(frozen=True)
class ArrayExpression:
    elements: Tuple[Optional["ValueNode"], ...] = ()


@dataclass(frozen=True)
class ObjectProperty:
    key: Optional[str]
    value: Optional["ValueNode"]


@dataclass(frozen=True)
class OtherMember:
    kind: str


@dataclass(frozen=True)
class ObjectExpression:
    properties: Tuple[Union[ObjectProperty, OtherMember], ...] = ()


@dataclass(frozen=True)
class BinaryExpression:
    operator: str
    left: Optional["ValueNode"]
    right: Optional["ValueNode"]


@dataclass(frozen=True)
class UnaryExpression:
    operator: str
    argument: Optional["ValueNode"]


@dataclass(frozen=True)
class ConditionalExpression:
    test: Optional["ValueNode"]
    consequent: Optional["ValueNode"]
    alternate: Optional["ValueNode"]


@dataclass(frozen=True)
class MemberExpression:
    object: Optional["ValueNode"]
    property: Union[str, "ValueNode", None]
    computed: bool = False
    optional: bool = False


@dataclass(frozen=True)
class CallExpression:
    callee: Optional["ValueNode"]
    arguments: Tuple["ValueNode", ...] = ()
    optional: bool = False


@dataclass(frozen=True)
class NewExpression:
    callee: Optional["ValueNode"]
    arguments: Tuple["ValueNode", ...] = ()


@dataclass(frozen=True)
class SpreadElement:
    argument: Optional["ValueNode"]


@dataclass(frozen=True)
class ParenthesizedExpression:
    expression: Optional["ValueNode"]


@dataclass(frozen=True)
class JSXElement:
    fragment: bool = False


@dataclass(frozen=True)
class UnsupportedExpression:
    kind: str


# ---------------------------
# Type annotations
# ---------------------------

@dataclass(frozen=True)
class KeywordType:
    keyword: str


@dataclass(frozen=True)
class ArrayType:
    element: Optional["TypeNode"]


@dataclass(frozen=True)
class UnionType:
    members: Tuple[Optional["TypeNode"], ...] = ()


@dataclass(frozen=True)
class IntersectionType:
    members: Tuple[Optional["TypeNode"], ...] = ()


@dataclass(frozen=True)
class TupleType:
    elements: Tuple["TypeNode", ...] = ()


@dataclass(frozen=True)
class LiteralType:
    literal: "ValueNode"


@dataclass(frozen=True)
class TypeReference:
    name: str
    type_arguments: Tuple["TypeNode", ...] = ()


@dataclass(frozen=True)
class PropertySignature:
    name: Optional[str]
    type_annotation: Optional["TypeNode"] = None
    optional: bool = False
    doc: Optional[str] = None


@dataclass(frozen=True)
class OtherSignature:
    kind: str


@dataclass(frozen=True)
class TypeLiteral:
    members: Tuple[Union[PropertySignature, OtherSignature], ...] = ()


@dataclass(frozen=True)
class InterfaceBody:
    members: Tuple[Union[PropertySignature, OtherSignature], ...] = ()


@dataclass(frozen=True)
class FunctionType:
    params: Tuple["IdentifierParam", ...] = ()
    return_type: Optional["TypeNode"] = None


@dataclass(frozen=True)
class ParenthesizedType:
    type_annotation: Optional["TypeNode"]


@dataclass(frozen=True)
class TypeQuery:
    name: Optional[str]


@dataclass(frozen=True)
class IndexedAccessType:
    object_type: Optional["TypeNode"]
    index_type: Optional["TypeNode"]


@dataclass(frozen=True)
class ConditionalType:
    check_type: Optional["TypeNode"]
    extends_type: Optional["TypeNode"]
    true_type: Optional["TypeNode"]
    false_type: Optional["TypeNode"]


@dataclass(frozen=True)
class MappedType:
    type_parameter: Optional[str]
    type_annotation: Optional["TypeNode"] = None


@dataclass(frozen=True)
class RestType:
    type_annotation: Optional["TypeNode"]


@dataclass(frozen=True)
class OptionalType:
    type_annotation: Optional["TypeNode"]


@dataclass(frozen=True)
class UnsupportedType:
    kind: str


# ---------------------------
# Parameters
# ---------------------------

@dataclass(frozen=True)
class IdentifierParam:
    name: str
    type_annotation: Optional["TypeNode"] = None
    optional: bool = False
    default: Optional["ValueNode"] = None


@dataclass(frozen=True)
class PatternProperty:
    key: str
    default: Optional["ValueNode"] = None
    type_annotation: Optional["TypeNode"] = None
    optional: bool = False


@dataclass(frozen=True)
class ObjectPattern:
    properties: Tuple[PatternProperty, ...] = ()
    type_annotation: Optional["TypeNode"] = None
    has_rest: bool = False


@dataclass(frozen=True)
class UnsupportedParam:
    kind: str
    type_annotation: Optional["TypeNode"] = None


# ---------------------------
# Functions and statements
# ---------------------------

@dataclass(frozen=True)
class Block:
    statements: Tuple["Statement", ...] = ()


@dataclass(frozen=True)
class ArrowFunction:
    params: Tuple["Param", ...] = ()
    body: Union[Block, "ValueNode", None] = None


@dataclass(frozen=True)
class FunctionExpression:
    name: Optional[str] = None
    params: Tuple["Param", ...] = ()
    body: Optional[Block] = None


@dataclass(frozen=True)
class FunctionDeclaration:
    name: str
    params: Tuple["Param", ...] = ()
    body: Optional[Block] = None
    doc: Optional[str] = None


@dataclass(frozen=True)
class VariableDeclarator:
    name: Optional[str]
    init: Optional["ValueNode"] = None


@dataclass(frozen=True)
class VariableDeclaration:
    declarators: Tuple[VariableDeclarator, ...] = ()
    doc: Optional[str] = None


@dataclass(frozen=True)
class ExportNamedDeclaration:
    declaration: Optional["Statement"]
    doc: Optional[str] = None


@dataclass(frozen=True)
class ExportDefaultDeclaration:
    # a FunctionDeclaration, or any lowered expression (Identifier, ArrowFunction, ...)
    declaration: Union[FunctionDeclaration, "ValueNode", None]
    doc: Optional[str] = None


@dataclass(frozen=True)
class TypeAliasDeclaration:
    name: str
    type_annotation: Optional["TypeNode"] = None


@dataclass(frozen=True)
class InterfaceDeclaration:
    name: str
    body: InterfaceBody = field(default_factory=InterfaceBody)


@dataclass(frozen=True)
class ReturnStatement:
    argument: Optional["ValueNode"] = None


@dataclass(frozen=True)
class IfStatement:
    consequent: Optional["Statement"] = None
    alternate: Optional["Statement"] = None


@dataclass(frozen=True)
class CompoundStatement:
    """try/switch/loop/namespace bodies flattened to their nested statements."""
    kind: str
    statements: Tuple["Statement", ...] = ()


@dataclass(frozen=True)
class OtherStatement:
    kind: str


@dataclass(frozen=True)
class Program:
    statements: Tuple["Statement", ...] = ()


ValueNode = Union[
    StringLiteral, NumberLiteral, BooleanLiteral, NullLiteral, Identifier,
    TemplateLiteral, RegExpLiteral, ArrayExpression, ObjectExpression,
    BinaryExpression, UnaryExpression, ConditionalExpression, MemberExpression,
    CallExpression, NewExpression, SpreadElement, ParenthesizedExpression,
    JSXElement, ArrowFunction, FunctionExpression, UnsupportedExpression,
]

TypeNode = Union[
    KeywordType, ArrayType, UnionType, IntersectionType, TupleType, LiteralType,
    TypeReference, TypeLiteral, InterfaceBody, InterfaceDeclaration, FunctionType,
    ParenthesizedType, TypeQuery, IndexedAccessType, ConditionalType, MappedType,
    RestType, OptionalType, UnsupportedType,
]

Param = Union[IdentifierParam, ObjectPattern, UnsupportedParam]

Statement = Union[
    FunctionDeclaration, VariableDeclaration, ExportNamedDeclaration,
    ExportDefaultDeclaration, TypeAliasDeclaration, InterfaceDeclaration,
    Block, ReturnStatement, IfStatement, CompoundStatement, OtherStatement,
]
