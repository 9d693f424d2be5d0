from collections.abc import Callable, Iterable
from typing import Any

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    Node,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    Source,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
)

from gqlmodules import log
from gqlmodules.utils.graphql_type import is_graphql_primitive
from gqlmodules.utils.schema_loader import parse_sources


class _UsedTypes:
    """Insertion-ordered set of type names collected during a single traversal."""

    def __init__(self) -> None:
        self._names: dict[str, None] = {}

    def mark(self, type_name: str) -> None:
        self._names.setdefault(type_name, None)

    def mark_unless_primitive(self, type_name: str) -> None:
        if not is_graphql_primitive(type_name):
            self.mark(type_name)

    def to_list(self) -> list[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)


def resolve_type_node(node: TypeNode) -> NamedTypeNode:
    """
    Strip list and non-null wrappers from a type reference.

    Args:
        node: Any type reference, e.g. ``[[Foo!]!]!``.
    Returns:
        NamedTypeNode: The innermost named type, e.g. ``Foo``.
    """
    while isinstance(node, ListTypeNode | NonNullTypeNode):
        node = node.type
    return node  # type: ignore[return-value]


def _visit_all(nodes: Iterable[Node] | None, used: _UsedTypes) -> None:
    for node in nodes or ():
        _visit(node, used)


def _visit_object(node: ObjectTypeDefinitionNode | ObjectTypeExtensionNode, used: _UsedTypes) -> None:
    used.mark(node.name.value)
    _visit_all(node.fields, used)
    _visit_all(node.interfaces, used)


def _visit_input_object(node: InputObjectTypeDefinitionNode | InputObjectTypeExtensionNode, used: _UsedTypes) -> None:
    used.mark(node.name.value)
    _visit_all(node.fields, used)


def _visit_interface(node: InterfaceTypeDefinitionNode | InterfaceTypeExtensionNode, used: _UsedTypes) -> None:
    used.mark(node.name.value)
    _visit_all(node.fields, used)
    _visit_all(node.interfaces, used)


def _visit_union(node: UnionTypeDefinitionNode | UnionTypeExtensionNode, used: _UsedTypes) -> None:
    used.mark(node.name.value)
    _visit_all(node.types, used)


def _visit_enum(node: EnumTypeDefinitionNode | EnumTypeExtensionNode, used: _UsedTypes) -> None:
    # Enum values carry no type references
    used.mark(node.name.value)


def _visit_scalar(node: ScalarTypeDefinitionNode | ScalarTypeExtensionNode, used: _UsedTypes) -> None:
    used.mark_unless_primitive(node.name.value)


def _visit_argument(node: InputValueDefinitionNode, used: _UsedTypes) -> None:
    _visit(resolve_type_node(node.type), used)


def _visit_field(node: FieldDefinitionNode, used: _UsedTypes) -> None:
    _visit(resolve_type_node(node.type), used)
    _visit_all(node.arguments, used)


def _visit_named_type(node: NamedTypeNode, used: _UsedTypes) -> None:
    used.mark_unless_primitive(node.name.value)


_VISITORS: dict[type[Node], Callable[[Any, _UsedTypes], None]] = {
    ObjectTypeDefinitionNode: _visit_object,
    ObjectTypeExtensionNode: _visit_object,
    InputObjectTypeDefinitionNode: _visit_input_object,
    InputObjectTypeExtensionNode: _visit_input_object,
    InterfaceTypeDefinitionNode: _visit_interface,
    InterfaceTypeExtensionNode: _visit_interface,
    UnionTypeDefinitionNode: _visit_union,
    UnionTypeExtensionNode: _visit_union,
    EnumTypeDefinitionNode: _visit_enum,
    EnumTypeExtensionNode: _visit_enum,
    ScalarTypeDefinitionNode: _visit_scalar,
    ScalarTypeExtensionNode: _visit_scalar,
    InputValueDefinitionNode: _visit_argument,
    FieldDefinitionNode: _visit_field,
    NamedTypeNode: _visit_named_type,
}


def _visit(node: Node | None, used: _UsedTypes) -> None:
    if node is None:
        return
    for node_class in type(node).__mro__:
        visitor = _VISITORS.get(node_class)
        if visitor is not None:
            visitor(node, used)
            return
    # Directive, schema and executable definitions contribute nothing


def collect_used_types(document: DocumentNode) -> list[str]:
    """
    Collect every named type referenced by the definitions of a document.

    Type definitions and extensions register their own name, fields and arguments
    register their (unwrapped) type, and implemented interfaces and union members
    register themselves. Built-in scalars are never included.

    Args:
        document (DocumentNode): A parsed schema document.
    Returns:
        list[str]: Distinct type names in order of first appearance.
    """
    used = _UsedTypes()
    _visit_all(document.definitions, used)
    log.debug(f"Collected {len(used)} used type(s) from {len(document.definitions or ())} definition(s)")
    return used.to_list()


def collect_used_types_from_sources(sources: list[Source]) -> list[str]:
    """Parse the given sources as one document and collect the types it uses."""
    return collect_used_types(parse_sources(sources))
