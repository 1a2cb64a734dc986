import pytest

from propdoc.extractors.components import extract_components
from propdoc.extractors.tsx_tree import create_parser, lower_program


@pytest.fixture(scope="module")
def parser():
    return create_parser()


@pytest.fixture
def extract(parser):
    def _extract(source, **kwargs):
        tree = parser.parse(source.encode("utf-8"))
        return extract_components(lower_program(tree.root_node), "Component.tsx", **kwargs)
    return _extract


def test_inline_typed_function_component(extract):
    (button,) = extract(
        "function Button({label, onClick}: {label: string; onClick?: () => void}) {\n"
        "  return <button onClick={onClick}>{label}</button>;\n"
        "}"
    )
    assert button.name == "Button"
    assert button.export_kind == "named"
    assert [(p.name, p.type, p.required) for p in button.props] == [
        ("label", "string", True),
        ("onClick", "() => void", False),
    ]


def test_plain_functions_are_not_components(extract):
    assert extract("function calculateSum(a, b) { return a + b; }") == []
    assert extract("function card() { return <div />; }") == []
    assert extract("const Empty = () => null;") == []


def test_anonymous_default_arrow(extract):
    (component,) = extract("export default () => <div/>;")
    assert component.name == "default"
    assert component.export_kind == "default"
    assert component.props == ()


def test_anonymous_default_function_expression(extract):
    (component,) = extract("export default function () { return <main />; }")
    assert component.name == "default"
    assert component.export_kind == "default"


def test_named_default_function(extract):
    (component,) = extract("export default function App() { return <main />; }")
    assert component.name == "App"
    assert component.export_kind == "default"


def test_default_identifier_upgrades_existing_component(extract):
    components = extract(
        "export default Card;\n"
        "const Card = () => <div />;\n"
        "export const Title = () => <h1 />;"
    )
    assert [(c.name, c.export_kind) for c in components] == [("Card", "default"), ("Title", "named")]


def test_default_value_for_inferred_number(extract):
    (counter,) = extract("const Counter = ({ count = 0 }: { count?: number }) => <span>{count}</span>;")
    (prop,) = counter.props
    assert prop.to_dict() == {
        "name": "count",
        "type": "number",
        "required": False,
        "defaultValue": "0",
        "examples": ["0"],
    }


def test_union_examples(extract):
    (badge,) = extract("function Badge({ tone }: { tone: \"primary\" | \"secondary\" }) { return <b />; }")
    assert badge.props[0].examples == ("primary", "secondary")


def test_conditional_and_logical_returns(extract):
    components = extract(
        "const A = ({ open }) => open ? <div /> : null;\n"
        "const B = ({ open }) => open && (<div />);\n"
        "function C({ items }) {\n"
        "  switch (items.length) {\n"
        "    case 0:\n"
        "      return null;\n"
        "    default:\n"
        "      return <ul />;\n"
        "  }\n"
        "}\n"
        "function D() {\n"
        "  try {\n"
        "    return <p />;\n"
        "  } catch (e) {\n"
        "    return null;\n"
        "  }\n"
        "}"
    )
    assert [c.name for c in components] == ["A", "B", "C", "D"]


def test_nested_components_follow_their_parent(extract):
    components = extract(
        "function Outer() {\n"
        "  const Inner = () => <span />;\n"
        "  return <Inner />;\n"
        "}"
    )
    assert [c.name for c in components] == ["Outer", "Inner"]


def test_jsx_only_in_nested_function_is_rejected(extract):
    assert extract("function List() { const render = () => <li />; return null; }") == []


def test_duplicate_names_keep_first(extract):
    components = extract(
        "function Box({ a }: { a: string }) { return <div />; }\n"
        "namespace legacy {\n"
        "  function Box({ b }: { b: string }) { return <div />; }\n"
        "}"
    )
    assert len(components) == 1
    assert components[0].props[0].name == "a"


def test_docs_attached(extract):
    (card,) = extract(
        "/**\n"
        " * Shows a card.\n"
        " * @param title - Heading text\n"
        " * @deprecated\n"
        " * @see Panel\n"
        " */\n"
        "export function Card({ title, body }: CardProps) { return <section />; }\n"
        "interface CardProps {\n"
        "  title: string;\n"
        "  /** Main content */\n"
        "  body?: string;\n"
        "}"
    )
    assert card.description == "Shows a card."
    assert card.deprecated is True
    assert card.links == ("Panel",)
    assert [p.description for p in card.props] == ["Heading text", "Main content"]


def test_member_description_wins_over_param_tag(extract):
    (card,) = extract(
        "/** @param title - from tag */\n"
        "function Card(props: { /** from member */ title: string }) { return <div />; }"
    )
    assert card.props[0].description == "from member"


def test_unresolved_intersection_member_goes_to_extends(extract):
    (field,) = extract(
        "type Base = { id: string };\n"
        "export const Field = (props: Base & InputHTMLAttributes<HTMLInputElement>) => <input />;"
    )
    assert [p.name for p in field.props] == ["id"]
    assert field.extends == ("InputHTMLAttributes<HTMLInputElement>",)
    assert field.to_dict()["extends"] == ["InputHTMLAttributes<HTMLInputElement>"]


def test_no_extends_when_everything_resolves(extract):
    (field,) = extract(
        "type A = { a: string };\ntype B = { b: string };\n"
        "const Field = (props: A & B) => <input />;"
    )
    assert field.extends is None
    assert "extends" not in field.to_dict()


def test_cyclic_alias_does_not_hang(extract):
    (loop,) = extract("type A = A;\nconst Loop = ({ x }: A) => <div />;")
    assert loop.props == ()


def test_usage_examples(extract):
    (button,) = extract(
        "const Button = ({ label, disabled }: { label: string; disabled?: boolean }) => <button />;",
        usage_examples=True,
    )
    label, disabled = button.props
    assert label.examples == ('<Button label="Click me" />',)
    assert disabled.examples == ("<Button disabled />", "<Button disabled={false} />")


def test_extraction_is_idempotent(extract):
    source = "export const A = ({ x = 1 }: { x?: number }) => <div />;\nexport default A;"
    first = [c.to_dict() for c in extract(source)]
    second = [c.to_dict() for c in extract(source)]
    assert first == second
