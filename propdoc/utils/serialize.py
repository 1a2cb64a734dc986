"""
Type and value serialization.

``serialize_type`` turns a type-annotation node into the canonical string used
as a prop's ``type``; ``serialize_value`` turns a literal or expression into
the display string used for defaults and examples. Both are total: unknown
shapes degrade to fixed placeholders and nothing is ever evaluated.
"""
from propdoc.base.nodes import (
    ArrayExpression,
    ArrayType,
    ArrowFunction,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    ConditionalType,
    FunctionExpression,
    FunctionType,
    Identifier,
    IndexedAccessType,
    InterfaceBody,
    IntersectionType,
    JSXElement,
    KeywordType,
    LiteralType,
    MappedType,
    MemberExpression,
    NewExpression,
    NullLiteral,
    NumberLiteral,
    ObjectExpression,
    ObjectProperty,
    OptionalType,
    ParenthesizedExpression,
    ParenthesizedType,
    PropertySignature,
    RegExpLiteral,
    RestType,
    SpreadElement,
    StringLiteral,
    TemplateLiteral,
    TupleType,
    TypeLiteral,
    TypeQuery,
    TypeReference,
    UnaryExpression,
    UnionType,
)

ANY = "any"
UNKNOWN = "unknown"
TEMPLATE_PLACEHOLDER = "`${...}`"

# unary operators spelled as words need a separating space
_WORD_OPERATORS = {"typeof", "void", "delete", "await"}


def serialize_type(node) -> str:
    if node is None:
        return ANY
    if isinstance(node, KeywordType):
        return node.keyword
    if isinstance(node, ArrayType):
        return f"{serialize_type(node.element)}[]"
    if isinstance(node, UnionType):
        if not node.members:
            return UNKNOWN
        return " | ".join(serialize_type(m) for m in node.members)
    if isinstance(node, IntersectionType):
        if not node.members:
            return UNKNOWN
        return " & ".join(serialize_type(m) for m in node.members)
    if isinstance(node, TupleType):
        return "[" + ", ".join(serialize_type(e) for e in node.elements) + "]"
    if isinstance(node, LiteralType):
        return serialize_value(node.literal)
    if isinstance(node, TypeReference):
        return _serialize_type_reference(node)
    if isinstance(node, (TypeLiteral, InterfaceBody)):
        return _serialize_members(node.members)
    if isinstance(node, FunctionType):
        return _serialize_function_type(node)
    if isinstance(node, ParenthesizedType):
        return f"({serialize_type(node.type_annotation)})"
    if isinstance(node, TypeQuery):
        return f"typeof {node.name or UNKNOWN}"
    if isinstance(node, IndexedAccessType):
        return f"{serialize_type(node.object_type)}[{serialize_type(node.index_type)}]"
    if isinstance(node, ConditionalType):
        return (
            f"{serialize_type(node.check_type)} extends {serialize_type(node.extends_type)}"
            f" ? {serialize_type(node.true_type)} : {serialize_type(node.false_type)}"
        )
    if isinstance(node, MappedType):
        return f"{{ [{node.type_parameter or 'K'}]: {serialize_type(node.type_annotation)} }}"
    if isinstance(node, RestType):
        return f"...{serialize_type(node.type_annotation)}"
    if isinstance(node, OptionalType):
        return f"{serialize_type(node.type_annotation)}?"
    return UNKNOWN


def _serialize_type_reference(node: TypeReference) -> str:
    name = node.name or UNKNOWN
    if node.type_arguments:
        args = ", ".join(serialize_type(arg) for arg in node.type_arguments)
        return f"{name}<{args}>"
    return name


def _serialize_members(members) -> str:
    parts = []
    for member in members:
        if not isinstance(member, PropertySignature):
            continue
        optional = "?" if member.optional else ""
        parts.append(f"{member.name or UNKNOWN}{optional}: {serialize_type(member.type_annotation)}")
    if not parts:
        return "{}"
    return "{ " + "; ".join(parts) + " }"


def _serialize_function_type(node: FunctionType) -> str:
    params = []
    for param in node.params:
        optional = "?" if param.optional else ""
        params.append(f"{param.name or 'arg'}{optional}: {serialize_type(param.type_annotation)}")
    return_type = serialize_type(node.return_type) if node.return_type is not None else "void"
    return f"({', '.join(params)}) => {return_type}"


def serialize_value(node) -> str:
    if node is None:
        return ""
    if isinstance(node, StringLiteral):
        return node.value
    if isinstance(node, NumberLiteral):
        return node.raw
    if isinstance(node, BooleanLiteral):
        return "true" if node.value else "false"
    if isinstance(node, NullLiteral):
        return "null"
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, TemplateLiteral):
        if node.has_expressions:
            return TEMPLATE_PLACEHOLDER
        return f"`{node.raw or ''}`"
    if isinstance(node, ArrayExpression):
        elements = [serialize_value(e) for e in node.elements if e is not None]
        return "[" + ", ".join(e for e in elements if e) + "]"
    if isinstance(node, ObjectExpression):
        return _serialize_object(node)
    if isinstance(node, ArrowFunction):
        return "() => {}"
    if isinstance(node, FunctionExpression):
        return "function() {}"
    if isinstance(node, BinaryExpression):
        return f"{serialize_value(node.left)} {node.operator} {serialize_value(node.right)}"
    if isinstance(node, UnaryExpression):
        sep = " " if node.operator in _WORD_OPERATORS else ""
        return f"{node.operator}{sep}{serialize_value(node.argument)}"
    if isinstance(node, ConditionalExpression):
        return (
            f"{serialize_value(node.test)} ? {serialize_value(node.consequent)}"
            f" : {serialize_value(node.alternate)}"
        )
    if isinstance(node, MemberExpression):
        return _serialize_member(node)
    if isinstance(node, CallExpression):
        args = ", ".join(serialize_value(a) for a in node.arguments)
        return f"{serialize_value(node.callee)}{'?.' if node.optional else ''}({args})"
    if isinstance(node, NewExpression):
        args = ", ".join(serialize_value(a) for a in node.arguments)
        return f"new {serialize_value(node.callee)}({args})"
    if isinstance(node, SpreadElement):
        return f"...{serialize_value(node.argument)}"
    if isinstance(node, ParenthesizedExpression):
        return f"({serialize_value(node.expression)})"
    if isinstance(node, JSXElement):
        return "<>" if node.fragment else "<jsx>"
    if isinstance(node, RegExpLiteral):
        return f"/{node.pattern}/{node.flags}"
    return ""


def _serialize_object(node: ObjectExpression) -> str:
    parts = []
    for prop in node.properties:
        if not isinstance(prop, ObjectProperty):
            continue
        value = serialize_value(prop.value)
        if prop.key and value:
            parts.append(f"{prop.key}: {value}")
    if not parts:
        return "{}"
    return "{ " + ", ".join(parts) + " }"


def _serialize_member(node: MemberExpression) -> str:
    obj = serialize_value(node.object)
    if node.computed:
        prop = node.property if isinstance(node.property, str) else serialize_value(node.property)
        return f"{obj}{'?.' if node.optional else ''}[{prop}]"
    prop = node.property if isinstance(node.property, str) else serialize_value(node.property)
    return f"{obj}{'?.' if node.optional else '.'}{prop or ''}"
