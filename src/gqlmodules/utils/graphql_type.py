BUILTIN_SCALAR_TYPES = frozenset(
    {
        "String",
        "Boolean",
        "ID",
        "Float",
        "Int",
    }
)


def is_builtin_scalar_type(type_name: str) -> bool:
    return type_name in BUILTIN_SCALAR_TYPES


def is_graphql_primitive(type_name: str) -> bool:
    """Built-in scalars are never recorded as used, even when redeclared."""
    return is_builtin_scalar_type(type_name)
