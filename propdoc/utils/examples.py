"""Example values for props, derived from the prop name and its type string."""
from typing import Optional, Tuple

FALLBACK_STRING_EXAMPLE = "Example value"
NUMBER_EXAMPLE = "42"
FUNCTION_EXAMPLE = "() => void"
MAX_INLINE_FUNCTION_LENGTH = 50

# checked in order against the lower-cased prop name; first hit wins
STRING_EXAMPLE_HEURISTICS = (
    (("name",), "John Doe"),
    (("title", "label", "text"), "Click me"),
    (("id",), "user-123"),
    (("url", "link"), "https://example.com"),
    (("email",), "user@example.com"),
    (("class",), "btn-primary"),
)


def _strip_quotes(member: str) -> str:
    if member[:1] in ("'", '"'):
        member = member[1:]
    if member[-1:] in ("'", '"'):
        member = member[:-1]
    return member


def _string_example(prop_name: str) -> str:
    name = prop_name.lower()
    for keywords, value in STRING_EXAMPLE_HEURISTICS:
        if any(keyword in name for keyword in keywords):
            return value
    return FALLBACK_STRING_EXAMPLE


def is_function_type(type_string: str) -> bool:
    return "=>" in type_string or "function" in type_string


def generate_examples(prop_name: str, type_string: str, default_value: Optional[str] = None) -> Optional[Tuple[str, ...]]:
    examples = []

    def add(value):
        if value not in examples:
            examples.append(value)

    if default_value:
        add(default_value)

    if "|" in type_string:
        for member in type_string.split("|"):
            member = member.strip()
            if not member or member in ("undefined", "null"):
                continue
            if "(" in member or "{" in member:
                continue
            add(_strip_quotes(member))
        if examples:
            return tuple(examples)

    lower_type = type_string.lower()
    if lower_type == "string" and not default_value:
        add(_string_example(prop_name))
    elif lower_type == "number" and not default_value:
        add(NUMBER_EXAMPLE)
    elif lower_type == "boolean":
        add("true")
        add("false")
    elif is_function_type(type_string):
        add(type_string if len(type_string) < MAX_INLINE_FUNCTION_LENGTH else FUNCTION_EXAMPLE)

    return tuple(examples) if examples else None


def format_usage_example(component: str, prop_name: str, prop_type: str, value: str) -> str:
    """Render ``value`` as a JSX usage snippet of ``component``."""
    if is_function_type(prop_type):
        return f"<{component} {prop_name}={{{value}}} />"
    if prop_type.lower() == "boolean":
        if value == "true":
            return f"<{component} {prop_name} />"
        return f"<{component} {prop_name}={{false}} />"
    if prop_type.lower() == "string":
        return f'<{component} {prop_name}="{value}" />'
    return f"<{component} {prop_name}={{{value}}} />"
