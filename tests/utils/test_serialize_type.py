import pytest

from propdoc.base.nodes import (
    PRIMITIVE_KEYWORDS,
    ArrayType,
    ConditionalType,
    FunctionType,
    IdentifierParam,
    IndexedAccessType,
    IntersectionType,
    KeywordType,
    LiteralType,
    MappedType,
    NumberLiteral,
    OtherSignature,
    ParenthesizedType,
    PropertySignature,
    RestType,
    StringLiteral,
    TupleType,
    TypeLiteral,
    TypeQuery,
    TypeReference,
    UnionType,
    UnsupportedType,
)
from propdoc.utils.serialize import serialize_type

STRING = KeywordType("string")
NUMBER = KeywordType("number")


@pytest.mark.parametrize("keyword", sorted(PRIMITIVE_KEYWORDS))
def test_keywords_map_to_themselves(keyword):
    assert serialize_type(KeywordType(keyword)) == keyword


def test_missing_node_is_any():
    assert serialize_type(None) == "any"


def test_unsupported_node_is_unknown():
    assert serialize_type(UnsupportedType("template_literal_type")) == "unknown"
    assert serialize_type(object()) == "unknown"


def test_nested_arrays():
    assert serialize_type(ArrayType(ArrayType(STRING))) == "string[][]"


def test_union_keeps_source_order():
    node = UnionType((LiteralType(StringLiteral("primary")), LiteralType(StringLiteral("secondary")), KeywordType("undefined")))
    assert serialize_type(node) == "primary | secondary | undefined"


def test_empty_union_and_intersection_are_unknown():
    assert serialize_type(UnionType(())) == "unknown"
    assert serialize_type(IntersectionType(())) == "unknown"


def test_intersection():
    node = IntersectionType((TypeReference("BaseProps"), TypeLiteral((PropertySignature("size", NUMBER),))))
    assert serialize_type(node) == "BaseProps & { size: number }"


def test_tuples():
    assert serialize_type(TupleType((STRING, NUMBER))) == "[string, number]"
    assert serialize_type(TupleType(())) == "[]"


def test_generic_and_qualified_references():
    assert serialize_type(TypeReference("Array", (STRING,))) == "Array<string>"
    assert serialize_type(TypeReference("Record", (STRING, NUMBER))) == "Record<string, number>"
    assert serialize_type(TypeReference("React.ReactNode")) == "React.ReactNode"


def test_object_type_members():
    node = TypeLiteral((
        PropertySignature("label", STRING),
        PropertySignature("count", NUMBER, optional=True),
        PropertySignature("raw"),
        OtherSignature("method_signature"),
    ))
    assert serialize_type(node) == "{ label: string; count?: number; raw: any }"
    assert serialize_type(TypeLiteral((OtherSignature("call_signature"),))) == "{}"


def test_function_types():
    handler = FunctionType(
        params=(IdentifierParam("event", TypeReference("MouseEvent")), IdentifierParam("extra", optional=True)),
        return_type=KeywordType("void"),
    )
    assert serialize_type(handler) == "(event: MouseEvent, extra?: any) => void"
    assert serialize_type(FunctionType()) == "() => void"


def test_other_shapes():
    assert serialize_type(ParenthesizedType(UnionType((STRING, NUMBER)))) == "(string | number)"
    assert serialize_type(TypeQuery("config")) == "typeof config"
    assert serialize_type(IndexedAccessType(TypeReference("Props"), LiteralType(StringLiteral("size")))) == "Props[size]"
    assert serialize_type(
        ConditionalType(TypeReference("T"), STRING, LiteralType(NumberLiteral("1")), NUMBER)
    ) == "T extends string ? 1 : number"
    assert serialize_type(MappedType("K", NUMBER)) == "{ [K]: number }"
    assert serialize_type(RestType(ArrayType(STRING))) == "...string[]"
