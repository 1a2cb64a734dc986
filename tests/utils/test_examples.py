import pytest

from propdoc.utils.examples import format_usage_example, generate_examples


def test_default_value_comes_first():
    assert generate_examples("count", "number", "0") == ("0",)
    assert generate_examples("disabled", "boolean", "false") == ("false", "true")


def test_union_members():
    assert generate_examples("variant", "primary | secondary") == ("primary", "secondary")
    assert generate_examples("variant", "'primary' | \"secondary\" | undefined") == ("primary", "secondary")
    assert generate_examples("size", "sm | md", "md") == ("md", "sm")


def test_union_skips_functions_objects_and_nullish():
    assert generate_examples("value", "string | null | (() => void) | { a: number }") == ("string",)


def test_union_with_nothing_usable_falls_through():
    assert generate_examples("onChange", "(() => void) | null") == ("(() => void) | null",)


@pytest.mark.parametrize("name, expected", [
    ("userName", "John Doe"),
    ("title", "Click me"),
    ("buttonLabel", "Click me"),
    ("helperText", "Click me"),
    ("id", "user-123"),
    ("url", "https://example.com"),
    ("linkTarget", "https://example.com"),
    ("email", "user@example.com"),
    ("cssClass", "btn-primary"),
    ("placeholder", "Example value"),
])
def test_string_heuristics(name, expected):
    assert generate_examples(name, "string") == (expected,)


def test_heuristic_order_is_significant():
    # "className" hits the name rule before the class rule
    assert generate_examples("className", "string") == ("John Doe",)


def test_number_and_boolean():
    assert generate_examples("count", "number") == ("42",)
    assert generate_examples("open", "boolean") == ("true", "false")


def test_function_types():
    assert generate_examples("onClick", "() => void") == ("() => void",)
    long_type = "(event: React.MouseEvent<HTMLButtonElement>, extra: string) => void"
    assert generate_examples("onClick", long_type) == ("() => void",)


def test_nothing_collected():
    assert generate_examples("style", "CSSProperties") is None
    assert generate_examples("label", "string", "") == ("Click me",)


def test_usage_snippets():
    assert format_usage_example("Button", "label", "string", "Save") == '<Button label="Save" />'
    assert format_usage_example("Button", "disabled", "boolean", "true") == "<Button disabled />"
    assert format_usage_example("Button", "disabled", "boolean", "false") == "<Button disabled={false} />"
    assert format_usage_example("Button", "count", "number", "42") == "<Button count={42} />"
    assert format_usage_example("Button", "onClick", "() => void", "() => void") == "<Button onClick={() => void} />"
