from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from hypothesis import strategies as st
from hypothesis.strategies import composite

BUILTIN_SCALARS = ["String", "Boolean", "ID", "Float", "Int"]


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    SCHEMA1: Path = TESTS_DATA_DIR / "schema1.graphql"
    INVALID_SCHEMA: Path = TESTS_DATA_DIR / "invalid.graphql"
    MODULES_DIR: Path = TESTS_DATA_DIR / "modules"
    MODULES_CONFIG: Path = TESTS_DATA_DIR / "modules.yaml"

    # Used types of SCHEMA1, in order of first appearance
    SCHEMA1_USED_TYPES = [
        "DateTime",
        "Node",
        "Query",
        "SearchResult",
        "SearchFilter",
        "Post",
        "User",
        "PostStatus",
        "Cursor",
        "Role",
    ]


@pytest.fixture(scope="module")
def schema_path() -> list[Path]:
    assert TestSchemaData.SCHEMA1.exists(), f"Missing test file: {TestSchemaData.SCHEMA1}"
    return [TestSchemaData.SCHEMA1]


@pytest.fixture(scope="module")
def modules_dir() -> Path:
    assert TestSchemaData.MODULES_DIR.is_dir(), f"Missing modules folder: {TestSchemaData.MODULES_DIR}"
    return TestSchemaData.MODULES_DIR


def wrap_type(type_name: str, modifiers: list[str]) -> str:
    """Wrap a type name in list/non-null modifiers, innermost first.

    A non-null modifier directly on another non-null is skipped since SDL forbids ``Foo!!``.
    """
    type_str = type_name
    for modifier in modifiers:
        if modifier == "list":
            type_str = f"[{type_str}]"
        elif not type_str.endswith("!"):
            type_str = f"{type_str}!"
    return type_str


type_names = st.from_regex(r"[A-Z][A-Za-z0-9]{0,7}", fullmatch=True).filter(lambda name: name not in BUILTIN_SCALARS)
wrappers = st.lists(st.sampled_from(["list", "non_null"]), max_size=6)


@composite
def sdl_document_strategy(draw: Callable[[st.SearchStrategy[Any]], Any]) -> str:
    """Generate SDL with object, input, interface, union, enum and scalar definitions referencing each other."""
    names = draw(st.lists(type_names, min_size=3, max_size=8, unique=True))
    referenced = st.one_of(st.sampled_from(names), st.sampled_from(BUILTIN_SCALARS))

    definitions: list[str] = []
    for index, name in enumerate(names):
        kind = draw(st.sampled_from(["type", "input", "interface", "union", "enum", "scalar"]))
        if kind in ("type", "input", "interface"):
            num_fields = draw(st.integers(min_value=1, max_value=3))
            fields = []
            for field_index in range(num_fields):
                field_type = wrap_type(draw(referenced), draw(wrappers))
                if kind != "input" and draw(st.booleans()):
                    arg_type = wrap_type(draw(referenced), draw(wrappers))
                    fields.append(f"f{field_index}(a: {arg_type}): {field_type}")
                else:
                    fields.append(f"f{field_index}: {field_type}")
            definitions.append(f"{kind} {name} {{ {' '.join(fields)} }}")
        elif kind == "union":
            members = draw(st.lists(st.sampled_from(names), min_size=1, max_size=3))
            definitions.append(f"union {name} = {' | '.join(members)}")
        elif kind == "enum":
            definitions.append(f"enum {name} {{ V{index} }}")
        else:
            definitions.append(f"scalar {name}")

    if draw(st.booleans()):
        definitions.append(f"scalar {draw(st.sampled_from(BUILTIN_SCALARS))}")

    return "\n".join(definitions)
