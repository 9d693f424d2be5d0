from pathlib import Path

from ariadne import load_schema_from_path
from graphql import DocumentNode, Source, concat_ast, parse

from gqlmodules import log

GRAPHQL_FILE_SUFFIXES = (".graphql", ".graphqls", ".gql")


def resolve_graphql_files(paths: list[Path]) -> list[Path]:
    """Resolve a list of paths (files and directories) into a flat list of unique GraphQL files.

    Args:
        paths: List of file or directory paths

    Returns:
        Flat list of unique GraphQL file paths (deduplicated and sorted)
    """
    resolved_files: set[Path] = set()

    for path in paths:
        if path.is_file():
            resolved_files.add(path)
        elif path.is_dir():
            for file in path.rglob("*"):
                if file.is_file() and file.suffix in GRAPHQL_FILE_SUFFIXES:
                    resolved_files.add(file)

    return sorted(resolved_files)


def load_sources(graphql_schema_paths: list[Path]) -> list[Source]:
    """Read each schema file into a ``Source`` named after its POSIX path.

    Raises:
        OSError: If a file cannot be read.
        GraphQLFileSyntaxError: If a file does not contain valid SDL.
    """
    sources: list[Source] = []
    for graphql_file in graphql_schema_paths:
        content = load_schema_from_path(graphql_file)
        sources.append(Source(content, graphql_file.as_posix()))
        log.debug(f"Loaded schema source {graphql_file}")
    return sources


def parse_sources(sources: list[Source]) -> DocumentNode:
    """Parse every source and concatenate the results into a single document, keeping source order."""
    return concat_ast([parse(source) for source in sources])


def load_document(graphql_schema_paths: list[Path]) -> DocumentNode:
    """Load and parse a GraphQL document from files or folders."""
    sources = load_sources(resolve_graphql_files(graphql_schema_paths))
    document = parse_sources(sources)
    log.info(f"Parsed {len(sources)} schema file(s) with {len(document.definitions)} definition(s).")
    return document
