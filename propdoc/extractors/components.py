"""
Component detection.

Walks a lowered ``Program`` in source order, picks out declarations that are
React components and assembles one ``ComponentMetadata`` per component.
"""
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Set

from propdoc.base.models import DEFAULT_EXPORT, NAMED_EXPORT, ComponentMetadata
from propdoc.base.nodes import (
    ArrowFunction,
    Block,
    CompoundStatement,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    IfStatement,
    Program,
    VariableDeclaration,
)
from propdoc.extractors.props import extract_props
from propdoc.utils.examples import format_usage_example
from propdoc.utils.jsdoc import parse_jsdoc
from propdoc.utils.type_guards import has_jsx_return, is_function_like, is_react_component
from propdoc.utils.type_registry import TypeRegistry

logger = logging.getLogger(__name__)

ANONYMOUS_DEFAULT_NAME = "default"


class ComponentCollector:
    """Accumulates accepted components for one file."""

    def __init__(self, file_path: str, registry: TypeRegistry, usage_examples: bool = False):
        self.file_path = file_path
        self.registry = registry
        self.usage_examples = usage_examples
        self.components: List[ComponentMetadata] = []
        self.seen: Set[str] = set()
        self.default_exports: List[str] = []

    def add(self, name, func, doc=None, export_kind=NAMED_EXPORT):
        if name in self.seen:
            logger.debug("Skipping duplicate component %s in %s", name, self.file_path)
            return
        self.seen.add(name)
        self.components.append(build_component(
            name, func, self.file_path, self.registry,
            doc=doc, export_kind=export_kind, usage_examples=self.usage_examples,
        ))

    def consider(self, name, func, doc=None, export_kind=NAMED_EXPORT):
        if is_react_component(name, func):
            self.add(name, func, doc, export_kind)
        elif name:
            logger.debug("Rejected candidate %s in %s", name, self.file_path)

    # ---------------------------
    # Walk
    # ---------------------------

    def walk(self, statements):
        for stmt in statements:
            self.visit(stmt)

    def visit(self, stmt, export_kind=NAMED_EXPORT, doc=None):
        if isinstance(stmt, FunctionDeclaration):
            self.consider(stmt.name, stmt, doc or stmt.doc, export_kind)
            self.visit_body(stmt.body)
        elif isinstance(stmt, VariableDeclaration):
            for declarator in stmt.declarators:
                if not is_function_like(declarator.init):
                    continue
                self.consider(declarator.name, declarator.init, doc or stmt.doc, export_kind)
                self.visit_body(declarator.init.body)
        elif isinstance(stmt, ExportNamedDeclaration):
            self.visit(stmt.declaration, NAMED_EXPORT, stmt.doc)
        elif isinstance(stmt, ExportDefaultDeclaration):
            self.visit_default(stmt)
        elif isinstance(stmt, (Block, CompoundStatement)):
            self.walk(stmt.statements)
        elif isinstance(stmt, IfStatement):
            self.walk((stmt.consequent, stmt.alternate))

    def visit_body(self, body):
        if isinstance(body, Block):
            self.walk(body.statements)

    def visit_default(self, stmt: ExportDefaultDeclaration):
        declaration = stmt.declaration
        if isinstance(declaration, FunctionDeclaration):
            self.visit(declaration, DEFAULT_EXPORT, stmt.doc)
        elif isinstance(declaration, Identifier):
            self.default_exports.append(declaration.name)
        elif isinstance(declaration, (ArrowFunction, FunctionExpression)):
            if has_jsx_return(declaration):
                self.add(ANONYMOUS_DEFAULT_NAME, declaration, stmt.doc, DEFAULT_EXPORT)
            self.visit_body(declaration.body)

    def finish(self) -> List[ComponentMetadata]:
        upgrades = set(self.default_exports)
        result = []
        for component in self.components:
            if component.name in upgrades and component.export_kind != DEFAULT_EXPORT:
                logger.debug("Upgrading %s to default export", component.name)
                component = replace(component, export_kind=DEFAULT_EXPORT)
            result.append(component)
        return result


def build_component(name, func, file_path, registry, doc=None, export_kind=NAMED_EXPORT, usage_examples=False):
    props_result = extract_props(func.params, registry)
    parsed = parse_jsdoc(doc)

    props = []
    for prop in props_result.props:
        if parsed is not None and not prop.description:
            description = parsed.param_description(prop.name)
            if description:
                prop = replace(prop, description=description)
        if usage_examples and prop.examples:
            prop = replace(prop, examples=tuple(
                format_usage_example(name, prop.name, prop.type, value) for value in prop.examples
            ))
        props.append(prop)

    fields: Dict[str, object] = {}
    if parsed is not None:
        fields = dict(
            description=parsed.description or None,
            deprecated=parsed.deprecated,
            returns=parsed.returns or None,
            links=tuple(parsed.see) or None,
            since=parsed.since or None,
            examples=tuple(parsed.examples) or None,
        )

    return ComponentMetadata(
        name=name,
        file_path=file_path,
        export_kind=export_kind,
        props=tuple(props),
        extends=props_result.extends or None,
        **fields,
    )


def extract_components(program: Program, file_path: str, usage_examples: bool = False,
                       registry: Optional[TypeRegistry] = None) -> List[ComponentMetadata]:
    if registry is None:
        registry = TypeRegistry.build(program)
    collector = ComponentCollector(file_path, registry, usage_examples)
    collector.walk(program.statements)
    return collector.finish()
