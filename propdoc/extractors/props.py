"""
Props extraction.

Derives the ordered prop list of a component from its first parameter. Only
the first parameter matters: React passes a single props object, anything
after it (a forwarded ref, legacy context) is ignored.
"""
import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from propdoc.base.models import PropMetadata
from propdoc.base.nodes import (
    IdentifierParam,
    InterfaceBody,
    IntersectionType,
    ObjectPattern,
    ParenthesizedType,
    PropertySignature,
    TypeLiteral,
    TypeReference,
)
from propdoc.utils.examples import generate_examples
from propdoc.utils.jsdoc import parse_jsdoc
from propdoc.utils.serialize import serialize_type, serialize_value
from propdoc.utils.type_registry import TypeRegistry, resolve_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropsResult:
    props: Tuple[PropMetadata, ...] = ()
    # serialized intersection members that could not be expanded inline
    extends: Optional[Tuple[str, ...]] = None


def extract_props(params, registry: Optional[TypeRegistry] = None) -> PropsResult:
    if not params:
        return PropsResult()
    first = params[0]

    if isinstance(first, ObjectPattern):
        annotation = first.type_annotation
        if annotation is None:
            return PropsResult(props=tuple(_prop_from_pattern(p) for p in first.properties))
        if isinstance(annotation, TypeReference):
            resolved = resolve_type(annotation, registry) if registry is not None else None
            if resolved is None or resolved is annotation:
                logger.debug("Could not resolve props type %s", annotation.name)
                return PropsResult()
            result = props_from_annotation(resolved, registry)
        else:
            result = props_from_annotation(annotation, registry)
        return replace(result, props=_apply_defaults(result.props, first))

    if isinstance(first, IdentifierParam) and first.type_annotation is not None:
        return props_from_annotation(first.type_annotation, registry)

    return PropsResult()


def props_from_annotation(annotation, registry: Optional[TypeRegistry] = None) -> PropsResult:
    if annotation is None:
        return PropsResult()

    if isinstance(annotation, TypeReference):
        if registry is not None:
            resolved = resolve_type(annotation, registry)
            if resolved is not None and resolved is not annotation:
                return props_from_annotation(resolved, registry)
        return PropsResult()

    if isinstance(annotation, IntersectionType):
        return _props_from_intersection(annotation, registry)

    if isinstance(annotation, (TypeLiteral, InterfaceBody)):
        return PropsResult(props=props_from_members(annotation.members))

    if isinstance(annotation, ParenthesizedType):
        return props_from_annotation(annotation.type_annotation, registry)

    return PropsResult()


def _props_from_intersection(annotation: IntersectionType, registry: Optional[TypeRegistry]) -> PropsResult:
    props: List[PropMetadata] = []
    extends: List[str] = []

    for member in annotation.members:
        if isinstance(member, TypeReference):
            resolved = resolve_type(member, registry) if registry is not None else None
            # an alias chain ending at an unregistered reference counts as unresolved
            if resolved is None or isinstance(resolved, TypeReference):
                extends.append(serialize_type(resolved or member))
                continue
            result = props_from_annotation(resolved, registry)
        else:
            result = props_from_annotation(member, registry)
        props.extend(result.props)
        if result.extends:
            extends.extend(result.extends)

    return PropsResult(props=tuple(props), extends=tuple(extends) if extends else None)


def props_from_members(members) -> Tuple[PropMetadata, ...]:
    props = []
    for member in members:
        if not isinstance(member, PropertySignature) or not member.name:
            continue
        type_string = serialize_type(member.type_annotation)
        parsed = parse_jsdoc(member.doc)
        props.append(PropMetadata(
            name=member.name,
            type=type_string,
            required=not member.optional,
            description=parsed.description if parsed else None,
            examples=generate_examples(member.name, type_string),
        ))
    return tuple(props)


def _pattern_defaults(pattern: ObjectPattern) -> Dict[str, str]:
    return {p.key: serialize_value(p.default) for p in pattern.properties if p.default is not None}


def _apply_defaults(props, pattern: ObjectPattern) -> Tuple[PropMetadata, ...]:
    defaults = _pattern_defaults(pattern)
    if not defaults:
        return tuple(props)
    merged = []
    for prop in props:
        if prop.name not in defaults:
            merged.append(prop)
            continue
        default_value = defaults[prop.name] or None
        merged.append(replace(
            prop,
            required=False,
            default_value=default_value,
            examples=generate_examples(prop.name, prop.type, default_value) or prop.examples,
        ))
    return tuple(merged)


def _prop_from_pattern(prop) -> PropMetadata:
    type_string = serialize_type(prop.type_annotation) if prop.type_annotation is not None else "any"
    has_default = prop.default is not None
    default_value = (serialize_value(prop.default) or None) if has_default else None
    return PropMetadata(
        name=prop.key,
        type=type_string,
        required=not has_default and not prop.optional,
        default_value=default_value,
        examples=generate_examples(prop.key, type_string, default_value),
    )
