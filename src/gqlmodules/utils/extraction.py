from graphql import DocumentNode, TypeDefinitionNode, TypeExtensionNode

from gqlmodules.tools.string import unique


def get_all_type_names(document: DocumentNode) -> list[str]:
    """
    Extracts the names of all types defined or extended in the provided document.

    Args:
        document (DocumentNode): The parsed schema document.
    Returns:
        list[str]: Type names in order of first declaration, each listed once.
    """
    return unique(
        definition.name.value
        for definition in document.definitions
        if isinstance(definition, TypeDefinitionNode | TypeExtensionNode)
    )
