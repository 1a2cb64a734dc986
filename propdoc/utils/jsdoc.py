"""
JSDoc comment parsing.

Turns the raw text of a ``/** ... */`` block into a ``ParsedComment``. The
parser is line based: lines before the first tag form the description, every
``@tag`` line opens a tag, and plain lines after a tag continue it.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

_TAG_RE = re.compile(r"^@(\w+)(?:\s+(.*))?$")
_PARAM_RE = re.compile(r"^(?:\{([^}]*)\}\s*)?\[?([\w$.]+)(?:=[^\]]*)?\]?(?:\s+-?\s*(.*))?$")
_LINK_RE = re.compile(r"\{@link\s+([^}]+)\}")
_DECORATION_RE = re.compile(r"^\s*\*\s?")
_TYPE_PREFIX_RE = re.compile(r"^\{[^}]*\}\s*")

_PARAM_TAGS = ("param", "property", "prop", "arg", "argument")
_RETURN_TAGS = ("returns", "return")


@dataclass
class ParsedComment:
    description: Optional[str] = None
    deprecated: Union[bool, str, None] = None
    returns: Optional[str] = None
    see: List[str] = field(default_factory=list)
    since: Optional[str] = None
    examples: List[str] = field(default_factory=list)
    param_descriptions: Dict[str, str] = field(default_factory=dict)

    def param_description(self, name: str) -> Optional[str]:
        """Description for ``name``, also accepting dotted keys such as ``props.name``."""
        if name in self.param_descriptions:
            return self.param_descriptions[name]
        suffix = "." + name
        for key, value in self.param_descriptions.items():
            if key.endswith(suffix):
                return value
        return None


def _comment_lines(raw: str) -> List[str]:
    text = raw.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]
    lines = []
    for line in text.split("\n"):
        line = _DECORATION_RE.sub("", line).strip()
        if line:
            lines.append(line)
    return lines


def parse_jsdoc(raw: Optional[str]) -> Optional[ParsedComment]:
    if not raw:
        return None
    lines = _comment_lines(raw)
    if not lines:
        return None

    result = ParsedComment()
    description_lines: List[str] = []
    example_lines: List[str] = []
    current_tag: Optional[str] = None
    current_param: Optional[str] = None

    def flush_example():
        if current_tag == "example" and example_lines:
            result.examples.append("\n".join(example_lines).strip())
            example_lines.clear()

    for line in lines:
        match = _TAG_RE.match(line)
        if match:
            tag, content = match.group(1), (match.group(2) or "").strip()
            flush_example()
            current_tag = tag
            current_param = None

            if tag in _PARAM_TAGS:
                param_match = _PARAM_RE.match(content)
                if param_match:
                    current_param = param_match.group(2)
                    text = (param_match.group(3) or "").strip()
                    if text:
                        result.param_descriptions[current_param] = text
            elif tag in _RETURN_TAGS:
                result.returns = _TYPE_PREFIX_RE.sub("", content) or None
            elif tag == "deprecated":
                result.deprecated = content or True
            elif tag == "see" and content:
                link = _LINK_RE.search(content) or re.match(r"^(\S+)", content)
                result.see.append(link.group(1).strip() if link else content)
            elif tag == "since":
                result.since = content or None
            elif tag == "example":
                if content:
                    example_lines.append(content)
            continue

        if current_tag is None:
            description_lines.append(line)
        elif current_tag == "example":
            example_lines.append(line)
        elif current_tag in _RETURN_TAGS:
            result.returns = f"{result.returns} {line}" if result.returns else line
        elif current_tag in _PARAM_TAGS and current_param:
            existing = result.param_descriptions.get(current_param)
            result.param_descriptions[current_param] = f"{existing} {line}" if existing else line

    flush_example()

    if description_lines:
        result.description = " ".join(description_lines).strip() or None
    return result
