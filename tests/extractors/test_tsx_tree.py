import pytest

from propdoc.base.nodes import (
    ArrowFunction,
    BinaryExpression,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    FunctionDeclaration,
    FunctionType,
    Identifier,
    IdentifierParam,
    InterfaceDeclaration,
    IntersectionType,
    JSXElement,
    KeywordType,
    LiteralType,
    MappedType,
    NumberLiteral,
    ObjectExpression,
    ObjectPattern,
    OtherStatement,
    ParenthesizedExpression,
    PatternProperty,
    StringLiteral,
    TemplateLiteral,
    TypeAliasDeclaration,
    TypeReference,
    UnionType,
    VariableDeclaration,
)
from propdoc.extractors.tsx_tree import create_parser, first_error, lower_program
from propdoc.utils.serialize import serialize_type, serialize_value


@pytest.fixture(scope="module")
def parser():
    return create_parser()


@pytest.fixture
def lower(parser):
    def _lower(source):
        tree = parser.parse(source.encode("utf-8"))
        assert first_error(tree.root_node) is None
        return lower_program(tree.root_node).statements
    return _lower


def alias_type(lower, source):
    (alias,) = lower(source)
    assert isinstance(alias, TypeAliasDeclaration)
    return alias.type_annotation


def test_union_is_flattened(lower):
    node = alias_type(lower, 'type Variant = "primary" | "secondary" | "ghost";')
    assert isinstance(node, UnionType)
    assert node.members == tuple(LiteralType(StringLiteral(v)) for v in ("primary", "secondary", "ghost"))


def test_null_and_undefined_are_keywords(lower):
    node = alias_type(lower, "type Maybe = string | null | undefined;")
    assert node.members == (KeywordType("string"), KeywordType("null"), KeywordType("undefined"))


def test_intersection_is_flattened(lower):
    node = alias_type(lower, "type P = A & B<string> & { x: number };")
    assert isinstance(node, IntersectionType)
    assert serialize_type(node) == "A & B<string> & { x: number }"


def test_mapped_type(lower):
    node = alias_type(lower, "type Flags = { [K in Keys]: boolean };")
    assert node == MappedType("K", KeywordType("boolean"))


def test_function_type(lower):
    node = alias_type(lower, "type Handler = (event: MouseEvent, extra?: string) => void;")
    assert isinstance(node, FunctionType)
    assert serialize_type(node) == "(event: MouseEvent, extra?: string) => void"


def test_other_types_serialize(lower):
    assert serialize_type(alias_type(lower, "type T = [string, number?];")) == "[string, number?]"
    assert serialize_type(alias_type(lower, "type T = Array<string[]>;")) == "Array<string[]>"
    assert serialize_type(alias_type(lower, "type T = React.ReactNode;")) == "React.ReactNode"
    assert serialize_type(alias_type(lower, "type T = typeof config;")) == "typeof config"
    assert serialize_type(alias_type(lower, "type T = Props['size'];")) == "Props[size]"
    assert serialize_type(alias_type(lower, "type T = object;")) == "object"


def test_interface_members_with_docs(lower):
    (decl,) = lower("interface CardProps {\n  /** Card heading */\n  title: string;\n  footer?: React.ReactNode;\n}")
    assert isinstance(decl, InterfaceDeclaration)
    title, footer = decl.body.members
    assert title.name == "title"
    assert title.doc == "/** Card heading */"
    assert footer.optional is True
    assert footer.type_annotation == TypeReference("React.ReactNode")


def test_function_declaration_params(lower):
    (decl,) = lower("function Panel({ a = 1, b: renamed = 2, c, ...rest }: PanelProps, ref) { return null; }")
    assert isinstance(decl, FunctionDeclaration)
    pattern, ref = decl.params
    assert isinstance(pattern, ObjectPattern)
    assert pattern.properties == (
        PatternProperty("a", NumberLiteral("1")),
        PatternProperty("b", NumberLiteral("2")),
        PatternProperty("c"),
    )
    assert pattern.has_rest is True
    assert pattern.type_annotation == TypeReference("PanelProps")
    assert ref == IdentifierParam("ref")


def test_doc_comment_attached_to_export(lower):
    (export,) = lower("// banner\n/** Shows a card. */\nexport const Card = () => <div />;")
    assert isinstance(export, ExportNamedDeclaration)
    assert export.doc == "/** Shows a card. */"
    assert isinstance(export.declaration, VariableDeclaration)
    assert export.declaration.doc == "/** Shows a card. */"
    (declarator,) = export.declaration.declarators
    assert declarator.name == "Card"
    assert isinstance(declarator.init, ArrowFunction)
    assert declarator.init.body == JSXElement()


def test_default_exports(lower):
    arrow, named_function, identifier = lower(
        "export default () => <></>;\nexport default function App() { return <div />; }\nexport default App;"
    )
    assert isinstance(arrow, ExportDefaultDeclaration)
    assert arrow.declaration.body == JSXElement(fragment=True)
    assert isinstance(named_function.declaration, FunctionDeclaration)
    assert named_function.declaration.name == "App"
    assert identifier.declaration == Identifier("App")


def test_values(lower):
    (decl,) = lower('const v = { "data-id": `x${y}`, n: -1, s: a ?? (b), t: `plain` };')
    obj = decl.declarators[0].init
    assert isinstance(obj, ObjectExpression)
    assert obj.properties[0].key == '"data-id"'
    assert obj.properties[0].value == TemplateLiteral(None, has_expressions=True)
    assert isinstance(obj.properties[2].value, BinaryExpression)
    assert isinstance(obj.properties[2].value.right, ParenthesizedExpression)
    assert serialize_value(obj) == '{ "data-id": `${...}`, n: -1, s: a ?? (b), t: `plain` }'


def test_optional_calls_keep_their_chain(lower):
    (decl,) = lower("const v = [o.m?.(1), o?.m(), f()];")
    first, second, third = decl.declarators[0].init.elements
    assert first.optional is True
    assert second.optional is False
    assert third.optional is False
    assert serialize_value(decl.declarators[0].init) == "[o.m?.(1), o?.m(), f()]"


def test_unmodelled_statements(lower):
    (stmt,) = lower('import React from "react";')
    assert isinstance(stmt, OtherStatement)


def test_first_error_reports_broken_source(parser):
    tree = parser.parse(b"const ok = 1;\nconst = ;\n")
    error = first_error(tree.root_node)
    assert error is not None
    assert error.start_point[0] == 1
