"""
Lowering of tree-sitter TSX/TypeScript trees into ``propdoc.base.nodes``.

Only the shapes the metadata engine reads are lowered; every other node
becomes an ``Unsupported*``/``Other*`` variant carrying its tree-sitter type.
Documentation comments are attached while lowering: the ``/** */`` comment
directly preceding a declaration (or its ``export`` wrapper) and each
object-type member.
"""
import tree_sitter_typescript
from tree_sitter import Language, Parser

from propdoc.base.nodes import (
    PRIMITIVE_KEYWORDS,
    ArrayExpression,
    ArrayType,
    ArrowFunction,
    BinaryExpression,
    Block,
    BooleanLiteral,
    CallExpression,
    CompoundStatement,
    ConditionalExpression,
    ConditionalType,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    FunctionDeclaration,
    FunctionExpression,
    FunctionType,
    Identifier,
    IdentifierParam,
    IfStatement,
    IndexedAccessType,
    InterfaceBody,
    InterfaceDeclaration,
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
    ObjectPattern,
    ObjectProperty,
    OptionalType,
    OtherMember,
    OtherSignature,
    OtherStatement,
    ParenthesizedExpression,
    ParenthesizedType,
    PatternProperty,
    Program,
    PropertySignature,
    RegExpLiteral,
    RestType,
    ReturnStatement,
    SpreadElement,
    StringLiteral,
    TemplateLiteral,
    TupleType,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeQuery,
    TypeReference,
    UnaryExpression,
    UnionType,
    UnsupportedExpression,
    UnsupportedParam,
    UnsupportedType,
    VariableDeclaration,
    VariableDeclarator,
)

TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())
TYPESCRIPT_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

FUNCTION_EXPRESSION_TYPES = ("function_expression", "function")
JSX_ELEMENT_TYPES = ("jsx_element", "jsx_self_closing_element", "jsx_fragment")
ANNOTATION_TYPES = (
    "type_annotation", "omitting_type_annotation",
    "adding_type_annotation", "opting_type_annotation",
)
COMPOUND_STATEMENT_TYPES = (
    "try_statement", "switch_statement", "for_statement", "for_in_statement",
    "while_statement", "do_statement", "labeled_statement", "internal_module",
    "module", "ambient_declaration", "with_statement",
)
NESTED_CONTAINER_TYPES = (
    "statement_block", "catch_clause", "finally_clause", "else_clause",
    "switch_body", "switch_case", "switch_default",
)


def create_parser(tsx: bool = True) -> Parser:
    return Parser(TSX_LANGUAGE if tsx else TYPESCRIPT_LANGUAGE)


def get_text(node) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def named_children(node):
    if node is None:
        return []
    return [c for c in node.named_children if c.type != "comment"]


def first_named(node):
    children = named_children(node)
    return children[0] if children else None


def child_field(node, field_name, *types):
    """``child_by_field_name`` with a fallback to the first named child of ``types``."""
    if node is None:
        return None
    child = node.child_by_field_name(field_name)
    if child is not None:
        return child
    for c in node.named_children:
        if c.type in types:
            return c
    return None


def has_token(node, token: str) -> bool:
    return any(c.type == token for c in node.children)


def doc_comment(node):
    """Closest ``/** */`` comment among the comments directly preceding ``node``."""
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        text = get_text(sibling).strip()
        if text.startswith("/**"):
            return text
        sibling = sibling.prev_sibling
    return None


def first_error(node):
    """First ERROR or MISSING node in document order, or None."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = first_error(child)
        if found is not None:
            return found
    return None


# ---------------------------
# Statements
# ---------------------------

def lower_program(root) -> Program:
    return Program(statements=lower_statements(named_children(root)))


def lower_statements(nodes):
    statements = []
    for node in nodes:
        lowered = lower_statement(node)
        if lowered is not None:
            statements.append(lowered)
    return tuple(statements)


def lower_statement(node, doc=None):
    t = node.type
    if t == "function_declaration":
        return _lower_function_declaration(node, doc)
    if t in ("lexical_declaration", "variable_declaration"):
        declarators = tuple(
            _lower_declarator(c) for c in node.named_children if c.type == "variable_declarator"
        )
        return VariableDeclaration(declarators=declarators, doc=doc or doc_comment(node))
    if t == "export_statement":
        return _lower_export(node)
    if t == "type_alias_declaration":
        name = child_field(node, "name", "type_identifier")
        value = node.child_by_field_name("value")
        if value is None:
            children = named_children(node)
            value = children[-1] if len(children) > 1 else None
        return TypeAliasDeclaration(name=get_text(name), type_annotation=lower_type(value))
    if t == "interface_declaration":
        name = child_field(node, "name", "type_identifier")
        body = child_field(node, "body", "object_type", "interface_body")
        members = lower_members(body) if body is not None else ()
        return InterfaceDeclaration(name=get_text(name), body=InterfaceBody(members=members))
    if t == "statement_block":
        return Block(statements=lower_statements(named_children(node)))
    if t == "return_statement":
        argument = first_named(node)
        return ReturnStatement(argument=lower_value(argument) if argument is not None else None)
    if t == "if_statement":
        consequence = child_field(node, "consequence", "statement_block")
        alternative = child_field(node, "alternative", "else_clause")
        if alternative is not None and alternative.type == "else_clause":
            alternative = first_named(alternative)
        return IfStatement(
            consequent=lower_statement(consequence) if consequence is not None else None,
            alternate=lower_statement(alternative) if alternative is not None else None,
        )
    if t == "expression_statement":
        inner = first_named(node)
        if inner is not None and inner.type in ("internal_module", "module"):
            return lower_statement(inner)
        return OtherStatement(kind=t)
    if t in COMPOUND_STATEMENT_TYPES:
        return CompoundStatement(kind=t, statements=_nested_statements(node))
    return OtherStatement(kind=t)


def _nested_statements(node):
    statements = []
    for child in named_children(node):
        if child.type in NESTED_CONTAINER_TYPES:
            statements.extend(_nested_statements(child))
        elif child.type.endswith(("_statement", "_declaration")) or child.type in COMPOUND_STATEMENT_TYPES:
            statements.append(lower_statement(child))
    return tuple(statements)


def _lower_function_declaration(node, doc=None):
    name = child_field(node, "name", "identifier")
    params = lower_params(child_field(node, "parameters", "formal_parameters"))
    body = child_field(node, "body", "statement_block")
    return FunctionDeclaration(
        name=get_text(name),
        params=params,
        body=lower_statement(body) if body is not None else None,
        doc=doc or doc_comment(node),
    )


def _lower_declarator(node):
    name = node.child_by_field_name("name")
    value = node.child_by_field_name("value")
    return VariableDeclarator(
        name=get_text(name) if name is not None and name.type == "identifier" else None,
        init=lower_value(value) if value is not None else None,
    )


def _lower_export(node):
    doc = doc_comment(node)
    declaration = node.child_by_field_name("declaration")
    if has_token(node, "default"):
        if declaration is not None:
            if declaration.type == "function_declaration" and declaration.child_by_field_name("name") is None:
                return ExportDefaultDeclaration(declaration=lower_value(declaration), doc=doc)
            return ExportDefaultDeclaration(declaration=lower_statement(declaration, doc), doc=doc)
        value = node.child_by_field_name("value")
        if value is None:
            value = next((c for c in named_children(node) if c.type != "decorator"), None)
        return ExportDefaultDeclaration(declaration=lower_value(value) if value is not None else None, doc=doc)
    if declaration is not None:
        return ExportNamedDeclaration(declaration=lower_statement(declaration, doc), doc=doc)
    return OtherStatement(kind="export_statement")


# ---------------------------
# Parameters
# ---------------------------

def lower_params(node):
    if node is None:
        return ()
    params = []
    for child in named_children(node):
        if child.type in ("required_parameter", "optional_parameter"):
            params.append(_lower_param(child))
        else:
            params.append(UnsupportedParam(kind=child.type))
    return tuple(params)


def annotation_type(node):
    """The type inside a ``: T`` annotation node."""
    if node is None:
        return None
    if node.type in ANNOTATION_TYPES:
        return lower_type(first_named(node))
    return lower_type(node)


def _lower_param(node):
    pattern = child_field(node, "pattern", "identifier", "object_pattern")
    type_annotation = annotation_type(child_field(node, "type", "type_annotation"))
    value = node.child_by_field_name("value")
    if pattern is None:
        return UnsupportedParam(kind=node.type, type_annotation=type_annotation)
    if pattern.type == "identifier":
        return IdentifierParam(
            name=get_text(pattern),
            type_annotation=type_annotation,
            optional=node.type == "optional_parameter",
            default=lower_value(value) if value is not None else None,
        )
    if pattern.type == "object_pattern":
        properties, has_rest = _lower_pattern_properties(pattern)
        return ObjectPattern(properties=properties, type_annotation=type_annotation, has_rest=has_rest)
    return UnsupportedParam(kind=pattern.type, type_annotation=type_annotation)


def _lower_pattern_properties(pattern):
    properties = []
    has_rest = False
    for child in named_children(pattern):
        t = child.type
        if t == "shorthand_property_identifier_pattern":
            properties.append(PatternProperty(key=get_text(child)))
        elif t == "object_assignment_pattern":
            left = child.child_by_field_name("left")
            right = child.child_by_field_name("right")
            if left is not None and left.type == "shorthand_property_identifier_pattern":
                properties.append(PatternProperty(
                    key=get_text(left),
                    default=lower_value(right) if right is not None else None,
                ))
        elif t == "pair_pattern":
            key = property_name(child.child_by_field_name("key"))
            value = child.child_by_field_name("value")
            default = None
            if value is not None and value.type == "assignment_pattern":
                right = value.child_by_field_name("right")
                default = lower_value(right) if right is not None else None
            if key:
                properties.append(PatternProperty(key=key, default=default))
        elif t == "rest_pattern":
            has_rest = True
    return tuple(properties), has_rest


def property_name(node):
    if node is None:
        return None
    if node.type in ("property_identifier", "identifier", "number", "private_property_identifier"):
        return get_text(node)
    if node.type == "string":
        return get_text(node)[1:-1]
    return None


# ---------------------------
# Types
# ---------------------------

def _flatten(node, kind):
    members = []
    for child in named_children(node):
        if child.type == kind:
            members.extend(_flatten(child, kind))
        else:
            members.append(lower_type(child))
    return members


def lower_members(node):
    members = []
    for child in named_children(node):
        if child.type == "property_signature":
            members.append(PropertySignature(
                name=property_name(child.child_by_field_name("name")),
                type_annotation=annotation_type(child_field(child, "type", "type_annotation")),
                optional=has_token(child, "?"),
                doc=doc_comment(child),
            ))
        else:
            members.append(OtherSignature(kind=child.type))
    return tuple(members)


def _mapped_type(node):
    children = named_children(node)
    if len(children) != 1 or children[0].type != "index_signature":
        return None
    signature = children[0]
    clause = next((c for c in signature.named_children if c.type == "mapped_type_clause"), None)
    if clause is None:
        return None
    name = child_field(clause, "name", "type_identifier")
    annotation = next((c for c in signature.named_children if c.type in ANNOTATION_TYPES), None)
    return MappedType(type_parameter=get_text(name) or None, type_annotation=annotation_type(annotation))


def _lower_function_type(node):
    params = []
    for param in lower_params(child_field(node, "parameters", "formal_parameters")):
        if isinstance(param, IdentifierParam):
            params.append(param)
        else:
            params.append(IdentifierParam(name="arg", type_annotation=param.type_annotation))
    return_node = node.child_by_field_name("return_type")
    if return_node is None:
        children = named_children(node)
        return_node = children[-1] if children and children[-1].type != "formal_parameters" else None
    return FunctionType(params=tuple(params), return_type=lower_type(return_node) if return_node is not None else None)


def lower_type(node):
    if node is None:
        return None
    t = node.type
    if t == "predefined_type":
        keyword = get_text(node).strip()
        return KeywordType(keyword) if keyword in PRIMITIVE_KEYWORDS else UnsupportedType(kind=keyword)
    if t == "type_identifier":
        name = get_text(node)
        return KeywordType(name) if name in PRIMITIVE_KEYWORDS else TypeReference(name=name)
    if t == "nested_type_identifier":
        return TypeReference(name="".join(get_text(node).split()))
    if t == "generic_type":
        name = child_field(node, "name", "type_identifier", "nested_type_identifier")
        arguments = child_field(node, "type_arguments", "type_arguments")
        return TypeReference(
            name="".join(get_text(name).split()),
            type_arguments=tuple(lower_type(a) for a in named_children(arguments)),
        )
    if t == "literal_type":
        literal = first_named(node)
        if literal is None:
            return UnsupportedType(kind=t)
        if literal.type in ("null", "undefined"):
            return KeywordType(literal.type)
        return LiteralType(literal=lower_value(literal))
    if t == "array_type":
        return ArrayType(element=lower_type(first_named(node)))
    if t == "union_type":
        return UnionType(members=tuple(_flatten(node, "union_type")))
    if t == "intersection_type":
        return IntersectionType(members=tuple(_flatten(node, "intersection_type")))
    if t == "tuple_type":
        return TupleType(elements=tuple(_lower_tuple_element(c) for c in named_children(node)))
    if t in ("object_type", "interface_body"):
        mapped = _mapped_type(node)
        if mapped is not None:
            return mapped
        return TypeLiteral(members=lower_members(node))
    if t == "function_type":
        return _lower_function_type(node)
    if t == "parenthesized_type":
        return ParenthesizedType(type_annotation=lower_type(first_named(node)))
    if t == "type_query":
        target = first_named(node)
        return TypeQuery(name=get_text(target) or None)
    if t == "lookup_type":
        children = named_children(node)
        if len(children) < 2:
            return UnsupportedType(kind=t)
        return IndexedAccessType(object_type=lower_type(children[0]), index_type=lower_type(children[1]))
    if t == "conditional_type":
        children = named_children(node)
        fields = [node.child_by_field_name(f) for f in ("left", "right", "consequence", "alternative")]
        if any(f is None for f in fields):
            fields = (children + [None] * 4)[:4]
        return ConditionalType(*(lower_type(f) for f in fields))
    if t == "rest_type":
        return RestType(type_annotation=lower_type(first_named(node)))
    if t == "optional_type":
        return OptionalType(type_annotation=lower_type(first_named(node)))
    if t in ANNOTATION_TYPES:
        return annotation_type(node)
    return UnsupportedType(kind=t)


def _lower_tuple_element(node):
    if node.type == "tuple_parameter":
        return annotation_type(child_field(node, "type", "type_annotation"))
    if node.type == "optional_tuple_parameter":
        return OptionalType(type_annotation=annotation_type(child_field(node, "type", "type_annotation")))
    return lower_type(node)


# ---------------------------
# Values
# ---------------------------

def _lower_function_body(node):
    body = node.child_by_field_name("body")
    if body is None:
        return None
    if body.type == "statement_block":
        return lower_statement(body)
    return lower_value(body)


def _arrow_params(node):
    single = node.child_by_field_name("parameter")
    if single is not None:
        return (IdentifierParam(name=get_text(single)),)
    return lower_params(child_field(node, "parameters", "formal_parameters"))


def _arguments(node):
    if node is None or node.type != "arguments":
        return ()
    return tuple(lower_value(a) for a in named_children(node))


def _object_key(node):
    if node is None:
        return None
    if node.type == "string":
        return '"' + get_text(node)[1:-1] + '"'
    if node.type in ("property_identifier", "identifier", "number", "private_property_identifier"):
        return get_text(node)
    return None


def _lower_object(node):
    properties = []
    for child in named_children(node):
        if child.type == "pair":
            value = child.child_by_field_name("value")
            properties.append(ObjectProperty(
                key=_object_key(child.child_by_field_name("key")),
                value=lower_value(value) if value is not None else None,
            ))
        elif child.type == "shorthand_property_identifier":
            name = get_text(child)
            properties.append(ObjectProperty(key=name, value=Identifier(name)))
        else:
            properties.append(OtherMember(kind=child.type))
    return ObjectExpression(properties=tuple(properties))


def lower_value(node):
    if node is None:
        return None
    t = node.type
    if t == "string":
        return StringLiteral(value=get_text(node)[1:-1])
    if t == "number":
        return NumberLiteral(raw=get_text(node))
    if t in ("true", "false"):
        return BooleanLiteral(value=t == "true")
    if t == "null":
        return NullLiteral()
    if t in ("identifier", "shorthand_property_identifier", "undefined", "this", "super"):
        return Identifier(name=get_text(node))
    if t == "template_string":
        if any(c.type == "template_substitution" for c in node.named_children):
            return TemplateLiteral(raw=None, has_expressions=True)
        return TemplateLiteral(raw=get_text(node)[1:-1])
    if t == "regex":
        pattern = node.child_by_field_name("pattern")
        flags = node.child_by_field_name("flags")
        return RegExpLiteral(pattern=get_text(pattern), flags=get_text(flags))
    if t == "array":
        return ArrayExpression(elements=tuple(lower_value(c) for c in named_children(node)))
    if t == "object":
        return _lower_object(node)
    if t == "arrow_function":
        return ArrowFunction(params=_arrow_params(node), body=_lower_function_body(node))
    if t in FUNCTION_EXPRESSION_TYPES or t == "function_declaration":
        name = node.child_by_field_name("name")
        body = _lower_function_body(node)
        return FunctionExpression(
            name=get_text(name) if name is not None else None,
            params=lower_params(child_field(node, "parameters", "formal_parameters")),
            body=body if isinstance(body, Block) else None,
        )
    if t == "binary_expression":
        return BinaryExpression(
            operator=get_text(node.child_by_field_name("operator")),
            left=lower_value(node.child_by_field_name("left")),
            right=lower_value(node.child_by_field_name("right")),
        )
    if t == "unary_expression":
        return UnaryExpression(
            operator=get_text(node.child_by_field_name("operator")),
            argument=lower_value(node.child_by_field_name("argument")),
        )
    if t == "ternary_expression":
        return ConditionalExpression(
            test=lower_value(node.child_by_field_name("condition")),
            consequent=lower_value(node.child_by_field_name("consequence")),
            alternate=lower_value(node.child_by_field_name("alternative")),
        )
    if t == "member_expression":
        return MemberExpression(
            object=lower_value(node.child_by_field_name("object")),
            property=get_text(node.child_by_field_name("property")),
            optional=any(c.type == "optional_chain" for c in node.children),
        )
    if t == "subscript_expression":
        return MemberExpression(
            object=lower_value(node.child_by_field_name("object")),
            property=lower_value(node.child_by_field_name("index")),
            computed=True,
            optional=any(c.type == "optional_chain" for c in node.children),
        )
    if t == "call_expression":
        return CallExpression(
            callee=lower_value(node.child_by_field_name("function")),
            arguments=_arguments(node.child_by_field_name("arguments")),
            optional=any(c.type == "optional_chain" for c in node.children),
        )
    if t == "new_expression":
        return NewExpression(
            callee=lower_value(node.child_by_field_name("constructor")),
            arguments=_arguments(node.child_by_field_name("arguments")),
        )
    if t == "spread_element":
        return SpreadElement(argument=lower_value(first_named(node)))
    if t == "parenthesized_expression":
        return ParenthesizedExpression(expression=lower_value(first_named(node)))
    if t in JSX_ELEMENT_TYPES:
        if t == "jsx_fragment":
            return JSXElement(fragment=True)
        if t == "jsx_element":
            opening = child_field(node, "open_tag", "jsx_opening_element")
            is_fragment = opening is not None and opening.child_by_field_name("name") is None
            return JSXElement(fragment=is_fragment)
        return JSXElement()
    return UnsupportedExpression(kind=t)
